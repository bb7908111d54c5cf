"""
Repository for elections and their results.

Responsibility: Data access layer for the elections table
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete, desc, asc
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ElectionModel, utcnow

logger = logging.getLogger(__name__)

ELECTION_FIELDS = (
    "country", "country_code", "title", "date", "type", "round", "location",
    "total_votes", "display_type", "results", "description", "upcoming",
)


class ElectionRepository:
    """
    Repository for election persistence.

    results is stored as given (a JSON list); the percentage-sum warning is
    computed by the caller with src.models.election.check_percentage_total.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[ElectionModel]:
        result = await self.session.execute(
            select(ElectionModel).order_by(desc(ElectionModel.date), desc(ElectionModel.id))
        )
        return list(result.scalars().all())

    async def list_upcoming(self, limit: Optional[int] = None) -> List[ElectionModel]:
        """Upcoming elections, soonest first."""
        stmt = (
            select(ElectionModel)
            .where(ElectionModel.upcoming == True)  # noqa: E712
            .order_by(asc(ElectionModel.date), asc(ElectionModel.id))
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_recent(self, limit: Optional[int] = None) -> List[ElectionModel]:
        """Past elections, most recent first."""
        stmt = (
            select(ElectionModel)
            .where(ElectionModel.upcoming == False)  # noqa: E712
            .order_by(desc(ElectionModel.date), desc(ElectionModel.id))
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, election_id: int) -> Optional[ElectionModel]:
        result = await self.session.execute(
            select(ElectionModel).where(ElectionModel.id == election_id)
        )
        return result.scalar_one_or_none()

    async def create(self, data: Dict[str, Any]) -> ElectionModel:
        election = ElectionModel(
            **{key: value for key, value in data.items() if key in ELECTION_FIELDS},
            created_at=utcnow(),
        )
        self.session.add(election)
        await self.session.flush()
        return election

    async def update(self, election_id: int, data: Dict[str, Any]) -> Optional[ElectionModel]:
        election = await self.get_by_id(election_id)
        if election is None:
            return None

        for key, value in data.items():
            if key in ELECTION_FIELDS:
                setattr(election, key, value)
        await self.session.flush()
        return election

    async def delete(self, election_id: int) -> bool:
        result = await self.session.execute(
            delete(ElectionModel).where(ElectionModel.id == election_id)
        )
        return result.rowcount > 0
