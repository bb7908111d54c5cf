"""
"Learn" section API endpoints.

Responsibility: Public educational topics and lessons, and their admin CRUD
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import UserModel
from src.db.repositories import EducationalRepository
from src.db.session import get_db
from api.dependencies import require_admin
from api.v1.schemas.educational import (
    EducationalTopicResponse,
    EducationalTopicCreateRequest,
    EducationalContentResponse,
    EducationalContentListResponse,
    EducationalContentCreateRequest,
    EducationalContentUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(prefix="/admin")


def content_list(lessons) -> dict:
    return {
        "content": [EducationalContentResponse.model_validate(lesson) for lesson in lessons],
        "total": len(lessons),
    }


# MARK: Public

@router.get("/educational-topics", response_model=list[EducationalTopicResponse])
async def list_topics(db: AsyncSession = Depends(get_db)):
    return await EducationalRepository(db).list_topics()


@router.get("/educational-topics/{slug}", response_model=EducationalTopicResponse)
async def get_topic(slug: str, db: AsyncSession = Depends(get_db)):
    topic = await EducationalRepository(db).get_topic_by_slug(slug)
    if not topic:
        raise HTTPException(status_code=404, detail=f"Educational topic '{slug}' not found")
    return topic


@router.get("/educational-content", response_model=EducationalContentListResponse)
async def list_content(
    category_id: Optional[int] = Query(None, alias="categoryId", description="Filter by site category"),
    topic_id: Optional[int] = Query(None, alias="topicId", description="Filter by topic"),
    db: AsyncSession = Depends(get_db)
):
    """
    List published lessons, newest first.

    Args:
        category_id: Keep lessons filed under this category
        topic_id: Keep lessons of this topic
        db: Database session

    Returns:
        EducationalContentListResponse
    """
    lessons = await EducationalRepository(db).list_content(
        category_id=category_id, topic_id=topic_id
    )
    return content_list(lessons)


@router.get("/educational-content/{content_id}", response_model=EducationalContentResponse)
async def get_content(content_id: int, db: AsyncSession = Depends(get_db)):
    lesson = await EducationalRepository(db).get_content_by_id(content_id)
    if not lesson or not lesson.published:
        raise HTTPException(status_code=404, detail=f"Educational content {content_id} not found")
    return lesson


# MARK: Admin

@admin_router.post(
    "/educational-topics",
    response_model=EducationalTopicResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_topic(
    request: EducationalTopicCreateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    data = request.model_dump()
    data["author_id"] = user.id
    topic = await EducationalRepository(db).create_topic(data)
    await db.commit()
    return topic


@admin_router.delete("/educational-topics/{topic_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_topic(
    topic_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete an empty topic; 409 while lessons still belong to it."""
    deleted = await EducationalRepository(db).delete_topic(topic_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Educational topic {topic_id} not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.get("/educational-content", response_model=EducationalContentListResponse)
async def admin_list_content(
    published: Optional[bool] = Query(None, description="Publication flag; any when omitted"),
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    lessons = await EducationalRepository(db).list_content(published=published)
    return content_list(lessons)


@admin_router.post(
    "/educational-content",
    response_model=EducationalContentResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_content(
    request: EducationalContentCreateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    repo = EducationalRepository(db)
    if not await repo.get_topic_by_id(request.topic_id):
        raise HTTPException(status_code=404, detail=f"Educational topic {request.topic_id} not found")

    data = request.model_dump()
    data["author_id"] = user.id
    lesson = await repo.create_content(data)
    await db.commit()

    logger.info(f"{user.username} created educational content {lesson.slug}")
    return lesson


@admin_router.put("/educational-content/{content_id}", response_model=EducationalContentResponse)
async def update_content(
    content_id: int,
    request: EducationalContentUpdateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    lesson = await EducationalRepository(db).update_content(
        content_id, request.model_dump(exclude_unset=True)
    )
    if not lesson:
        raise HTTPException(status_code=404, detail=f"Educational content {content_id} not found")
    await db.commit()
    return lesson


@admin_router.delete("/educational-content/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_content(
    content_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    deleted = await EducationalRepository(db).delete_content(content_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Educational content {content_id} not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
