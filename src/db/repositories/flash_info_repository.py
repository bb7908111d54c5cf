"""
Repository for flash infos (breaking-news items).

Responsibility: Data access layer for the flash_infos table
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import FlashInfoModel, utcnow

FLASH_INFO_FIELDS = ("title", "content", "image_url", "url", "active", "priority", "category_id")


class FlashInfoRepository:
    """Repository for flash info persistence."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_active(self) -> List[FlashInfoModel]:
        """Active flash infos, highest priority first, then newest."""
        result = await self.session.execute(
            select(FlashInfoModel)
            .where(FlashInfoModel.active == True)  # noqa: E712
            .order_by(
                desc(FlashInfoModel.priority),
                desc(FlashInfoModel.created_at),
                desc(FlashInfoModel.id)
            )
        )
        return list(result.scalars().all())

    async def list_all(self) -> List[FlashInfoModel]:
        result = await self.session.execute(
            select(FlashInfoModel).order_by(desc(FlashInfoModel.created_at), desc(FlashInfoModel.id))
        )
        return list(result.scalars().all())

    async def get_by_id(self, flash_info_id: int) -> Optional[FlashInfoModel]:
        result = await self.session.execute(
            select(FlashInfoModel).where(FlashInfoModel.id == flash_info_id)
        )
        return result.scalar_one_or_none()

    async def create(self, data: Dict[str, Any]) -> FlashInfoModel:
        now = utcnow()
        flash_info = FlashInfoModel(
            **{key: value for key, value in data.items() if key in FLASH_INFO_FIELDS and value is not None},
            created_at=now,
            updated_at=now,
        )
        self.session.add(flash_info)
        await self.session.flush()
        return flash_info

    async def update(self, flash_info_id: int, data: Dict[str, Any]) -> Optional[FlashInfoModel]:
        flash_info = await self.get_by_id(flash_info_id)
        if flash_info is None:
            return None

        for key, value in data.items():
            if key in FLASH_INFO_FIELDS:
                setattr(flash_info, key, value)
        flash_info.updated_at = utcnow()
        await self.session.flush()
        return flash_info

    async def delete(self, flash_info_id: int) -> bool:
        result = await self.session.execute(
            delete(FlashInfoModel).where(FlashInfoModel.id == flash_info_id)
        )
        return result.rowcount > 0
