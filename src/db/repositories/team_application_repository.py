"""
Repository for team applications.

Responsibility: Data access layer for the team_applications table
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import TeamApplicationModel, utcnow

logger = logging.getLogger(__name__)


class TeamApplicationRepository:
    """Repository for team application persistence."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def submit(self, data: Dict[str, Any]) -> TeamApplicationModel:
        """
        Store a new application in pending state.

        Args:
            data: full_name, email, phone, position, message, cv_url

        Returns:
            Created TeamApplicationModel
        """
        application = TeamApplicationModel(
            full_name=data["full_name"],
            email=data["email"],
            phone=data.get("phone"),
            position=data["position"],
            message=data["message"],
            cv_url=data.get("cv_url"),
            status="pending",
            submission_date=utcnow(),
        )
        self.session.add(application)
        await self.session.flush()
        return application

    async def list_applications(self, status: Optional[str] = None) -> List[TeamApplicationModel]:
        stmt = select(TeamApplicationModel)
        if status:
            stmt = stmt.where(TeamApplicationModel.status == status)
        stmt = stmt.order_by(
            desc(TeamApplicationModel.submission_date), desc(TeamApplicationModel.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, application_id: int) -> Optional[TeamApplicationModel]:
        result = await self.session.execute(
            select(TeamApplicationModel).where(TeamApplicationModel.id == application_id)
        )
        return result.scalar_one_or_none()

    async def review(
        self,
        application_id: int,
        status: str,
        reviewer_id: Optional[int],
        notes: Optional[str] = None
    ) -> Optional[TeamApplicationModel]:
        """
        Record a review decision.

        Args:
            application_id: Application ID
            status: pending, approved or rejected
            reviewer_id: Reviewing user's ID
            notes: Optional reviewer notes

        Returns:
            Updated application, or None if not found
        """
        application = await self.get_by_id(application_id)
        if application is None:
            return None

        application.status = status
        application.reviewed_at = utcnow()
        application.reviewed_by = reviewer_id
        if notes is not None:
            application.notes = notes
        await self.session.flush()
        logger.info(f"Application {application_id} marked {status}")
        return application

    async def delete(self, application_id: int) -> bool:
        result = await self.session.execute(
            delete(TeamApplicationModel).where(TeamApplicationModel.id == application_id)
        )
        return result.rowcount > 0
