"""
Flash info and video API endpoints.

Responsibility: Public breaking-news items and short videos, and their admin CRUD
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import UserModel
from src.db.repositories import FlashInfoRepository, VideoRepository
from src.db.session import get_db
from api.dependencies import require_admin
from api.v1.schemas.media import (
    FlashInfoResponse,
    FlashInfoCreateRequest,
    FlashInfoUpdateRequest,
    VideoResponse,
    VideoCreateRequest,
)

router = APIRouter()
admin_router = APIRouter(prefix="/admin")


# MARK: Flash infos

@router.get("/flash-infos", response_model=list[FlashInfoResponse])
async def list_active_flash_infos(db: AsyncSession = Depends(get_db)):
    """Active flash infos, highest priority first."""
    return await FlashInfoRepository(db).list_active()


@router.get("/flash-infos/{flash_info_id}", response_model=FlashInfoResponse)
async def get_flash_info(flash_info_id: int, db: AsyncSession = Depends(get_db)):
    flash_info = await FlashInfoRepository(db).get_by_id(flash_info_id)
    if not flash_info:
        raise HTTPException(status_code=404, detail=f"Flash info {flash_info_id} not found")
    return flash_info


@admin_router.get("/flash-infos", response_model=list[FlashInfoResponse])
async def list_flash_infos(
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await FlashInfoRepository(db).list_all()


@admin_router.post("/flash-infos", response_model=FlashInfoResponse, status_code=status.HTTP_201_CREATED)
async def create_flash_info(
    request: FlashInfoCreateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    flash_info = await FlashInfoRepository(db).create(request.model_dump())
    await db.commit()
    return flash_info


@admin_router.put("/flash-infos/{flash_info_id}", response_model=FlashInfoResponse)
async def update_flash_info(
    flash_info_id: int,
    request: FlashInfoUpdateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    flash_info = await FlashInfoRepository(db).update(
        flash_info_id, request.model_dump(exclude_unset=True)
    )
    if not flash_info:
        raise HTTPException(status_code=404, detail=f"Flash info {flash_info_id} not found")
    await db.commit()
    return flash_info


@admin_router.delete("/flash-infos/{flash_info_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_flash_info(
    flash_info_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    deleted = await FlashInfoRepository(db).delete(flash_info_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Flash info {flash_info_id} not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# MARK: Videos

@router.get("/videos", response_model=list[VideoResponse])
async def list_videos(
    limit: int = Query(8, ge=1, le=50, description="Number of videos"),
    db: AsyncSession = Depends(get_db)
):
    return await VideoRepository(db).list_latest(limit=limit)


@router.get("/videos/{video_id}", response_model=VideoResponse)
async def get_video(video_id: int, db: AsyncSession = Depends(get_db)):
    """Get a video and count the view."""
    repo = VideoRepository(db)
    video = await repo.get_by_id(video_id)
    if not video:
        raise HTTPException(status_code=404, detail=f"Video {video_id} not found")

    await repo.increment_views(video.id)
    await db.commit()
    await db.refresh(video)
    return video


@admin_router.post("/videos", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video(
    request: VideoCreateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    video = await VideoRepository(db).create(request.model_dump())
    await db.commit()
    return video


@admin_router.delete("/videos/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video(
    video_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    deleted = await VideoRepository(db).delete(video_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Video {video_id} not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
