"""
Repository for short videos.

Responsibility: Data access layer for the videos table
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import select, update, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import VideoModel, utcnow

VIDEO_FIELDS = ("title", "video_id", "published_at")


class VideoRepository:
    """Repository for video persistence."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_latest(self, limit: int = 8) -> List[VideoModel]:
        """Most recently published videos first."""
        result = await self.session.execute(
            select(VideoModel)
            .order_by(desc(VideoModel.published_at), desc(VideoModel.id))
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_by_id(self, video_id: int) -> Optional[VideoModel]:
        result = await self.session.execute(
            select(VideoModel).where(VideoModel.id == video_id)
        )
        return result.scalar_one_or_none()

    async def create(self, data: Dict[str, Any]) -> VideoModel:
        now = utcnow()
        fields = {key: value for key, value in data.items() if key in VIDEO_FIELDS and value is not None}
        fields.setdefault("published_at", now)
        video = VideoModel(**fields, views=0, created_at=now, updated_at=now)
        self.session.add(video)
        await self.session.flush()
        return video

    async def increment_views(self, video_id: int) -> None:
        await self.session.execute(
            update(VideoModel)
            .where(VideoModel.id == video_id)
            .values(views=VideoModel.views + 1)
            .execution_options(synchronize_session=False)
        )

    async def delete(self, video_id: int) -> bool:
        result = await self.session.execute(
            delete(VideoModel).where(VideoModel.id == video_id)
        )
        return result.rowcount > 0
