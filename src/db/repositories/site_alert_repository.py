"""
Repository for site-wide banner alerts.

Responsibility: Data access layer for the site_alerts table
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import SiteAlertModel, utcnow

ALERT_FIELDS = ("message", "active", "priority", "background_color", "text_color", "url")


class SiteAlertRepository:
    """Repository for site alert persistence."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_active(self) -> List[SiteAlertModel]:
        """Active alerts, highest priority first, then newest."""
        result = await self.session.execute(
            select(SiteAlertModel)
            .where(SiteAlertModel.active == True)  # noqa: E712
            .order_by(desc(SiteAlertModel.priority), desc(SiteAlertModel.created_at))
        )
        return list(result.scalars().all())

    async def list_all(self) -> List[SiteAlertModel]:
        result = await self.session.execute(
            select(SiteAlertModel).order_by(desc(SiteAlertModel.created_at), desc(SiteAlertModel.id))
        )
        return list(result.scalars().all())

    async def get_by_id(self, alert_id: int) -> Optional[SiteAlertModel]:
        result = await self.session.execute(
            select(SiteAlertModel).where(SiteAlertModel.id == alert_id)
        )
        return result.scalar_one_or_none()

    async def create(self, data: Dict[str, Any], created_by: Optional[int] = None) -> SiteAlertModel:
        alert = SiteAlertModel(
            **{key: value for key, value in data.items() if key in ALERT_FIELDS and value is not None},
            created_by=created_by,
            created_at=utcnow(),
        )
        self.session.add(alert)
        await self.session.flush()
        return alert

    async def update(self, alert_id: int, data: Dict[str, Any]) -> Optional[SiteAlertModel]:
        alert = await self.get_by_id(alert_id)
        if alert is None:
            return None

        for key, value in data.items():
            if key in ALERT_FIELDS:
                setattr(alert, key, value)
        await self.session.flush()
        return alert

    async def toggle(self, alert_id: int) -> Optional[SiteAlertModel]:
        alert = await self.get_by_id(alert_id)
        if alert is None:
            return None

        alert.active = not alert.active
        await self.session.flush()
        return alert

    async def delete(self, alert_id: int) -> bool:
        result = await self.session.execute(
            delete(SiteAlertModel).where(SiteAlertModel.id == alert_id)
        )
        return result.rowcount > 0
