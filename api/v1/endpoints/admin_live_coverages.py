"""
Admin live coverage endpoints.

Coverage CRUD, feed posting, question moderation and editor assignment
for logged-in staff. Engine errors (unknown coverage or question, active
coverage cap, invalid status) and duplicate slugs are translated by the
application-level exception handlers in api.main.

Responsibility: Back-office live coverage endpoints
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.db.models import UserModel
from src.db.session import get_db
from src.models.live_coverage import NewUpdate, QuestionStatus
from src.services import LiveCoverageService
from api.dependencies import require_admin, require_editor
from api.v1.endpoints.live_coverages import feed_response, to_editor_response
from api.v1.schemas.live_coverage import (
    CoverageCreateRequest,
    CoverageUpdateRequest,
    CoverageResponse,
    CoverageListResponse,
    UpdateCreateRequest,
    UpdateResponse,
    UpdateListResponse,
    QuestionModerateRequest,
    QuestionAnswerRequest,
    QuestionResponse,
    QuestionListResponse,
    EditorAddRequest,
    EditorResponse,
    EditorListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/live-coverages")


# MARK: Coverages

@router.get("", response_model=CoverageListResponse)
async def list_coverages(
    active: Optional[bool] = Query(None, description="Only active coverages when true"),
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    coverages = await LiveCoverageService(db).list_coverages(active_only=bool(active))
    return {
        "coverages": [CoverageResponse.model_validate(c) for c in coverages],
        "total": len(coverages),
    }


@router.post("", response_model=CoverageResponse, status_code=status.HTTP_201_CREATED)
async def create_coverage(
    request: CoverageCreateRequest,
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a coverage.

    Raises:
        HTTPException: 409 on duplicate slug or when the active coverage cap is reached
    """
    coverage = await LiveCoverageService(db).create_coverage(request.model_dump())
    logger.info(f"{user.username} created live coverage {coverage.slug}")
    return coverage


@router.get("/{coverage_id}", response_model=CoverageResponse)
async def get_coverage(
    coverage_id: int,
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    coverage = await LiveCoverageService(db).get_coverage(coverage_id)
    if not coverage:
        raise HTTPException(status_code=404, detail=f"Live coverage {coverage_id} not found")
    return coverage


@router.put("/{coverage_id}", response_model=CoverageResponse)
async def update_coverage(
    coverage_id: int,
    request: CoverageUpdateRequest,
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    coverage = await LiveCoverageService(db).update_coverage(
        coverage_id, request.model_dump(exclude_unset=True)
    )
    if not coverage:
        raise HTTPException(status_code=404, detail=f"Live coverage {coverage_id} not found")
    return coverage


@router.delete("/{coverage_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_coverage(
    coverage_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete a coverage with its updates, questions and editor links."""
    deleted = await LiveCoverageService(db).delete_coverage(coverage_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Live coverage {coverage_id} not found")
    logger.info(f"{user.username} deleted live coverage {coverage_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# MARK: Updates

@router.get("/{coverage_id}/updates", response_model=UpdateListResponse)
async def list_updates(
    coverage_id: int,
    response: Response,
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    """Admin feed view; advertises the shorter back-office polling interval."""
    service = LiveCoverageService(db)
    if await service.get_coverage(coverage_id) is None:
        raise HTTPException(status_code=404, detail=f"Live coverage {coverage_id} not found")

    rows = await service.list_updates(coverage_id)
    return feed_response(response, coverage_id, rows, settings.live.poll_interval_seconds)


@router.post(
    "/{coverage_id}/updates",
    response_model=UpdateResponse,
    status_code=status.HTTP_201_CREATED
)
async def append_update(
    coverage_id: int,
    request: UpdateCreateRequest,
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    """
    Append an update authored by the logged-in user.

    Raises:
        HTTPException: 404 for an unknown coverage or referenced article
    """
    update = await LiveCoverageService(db).append_update(
        NewUpdate(
            coverage_id=coverage_id,
            author_id=user.id,
            content=request.content,
            important=request.important,
            image_url=request.image_url,
            payload=request.payload,
        )
    )
    return update


@router.delete("/updates/{update_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_update(
    update_id: int,
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    deleted = await LiveCoverageService(db).delete_update(update_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Update {update_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# MARK: Questions

@router.get("/{coverage_id}/questions", response_model=QuestionListResponse)
async def list_questions(
    coverage_id: int,
    status_filter: Optional[QuestionStatus] = Query(None, alias="status"),
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    questions = await LiveCoverageService(db).list_questions(coverage_id, status=status_filter)
    return {
        "questions": [QuestionResponse.model_validate(q) for q in questions],
        "total": len(questions),
    }


@router.patch("/questions/{question_id}", response_model=QuestionResponse)
async def moderate_question(
    question_id: int,
    request: QuestionModerateRequest,
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    question = await LiveCoverageService(db).moderate_question(
        question_id, request.status, answered=request.answered
    )
    if not question:
        raise HTTPException(status_code=404, detail=f"Question {question_id} not found")
    return question


@router.post(
    "/questions/{question_id}/answer",
    response_model=UpdateResponse,
    status_code=status.HTTP_201_CREATED
)
async def answer_question(
    question_id: int,
    request: QuestionAnswerRequest,
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    """
    Publish an answer update and mark the question approved and answered.

    Raises:
        HTTPException: 404 if the question does not exist in that coverage
    """
    return await LiveCoverageService(db).answer_question(
        question_id=question_id,
        coverage_id=request.coverage_id,
        content=request.content,
        author_id=user.id,
        important=request.important,
    )


# MARK: Editors

@router.get("/{coverage_id}/editors", response_model=EditorListResponse)
async def list_editors(
    coverage_id: int,
    user: UserModel = Depends(require_editor),
    db: AsyncSession = Depends(get_db)
):
    rows = await LiveCoverageService(db).list_editors(coverage_id)
    editors = [to_editor_response(row) for row in rows]
    return {"editors": editors, "total": len(editors)}


@router.post(
    "/{coverage_id}/editors",
    response_model=EditorResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_editor(
    coverage_id: int,
    request: EditorAddRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await LiveCoverageService(db).add_editor(
        coverage_id, request.editor_id, role=request.role
    )


@router.delete("/{coverage_id}/editors/{editor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_editor(
    coverage_id: int,
    editor_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    removed = await LiveCoverageService(db).remove_editor(coverage_id, editor_id)
    if not removed:
        raise HTTPException(
            status_code=404,
            detail=f"User {editor_id} is not an editor of live coverage {coverage_id}"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
