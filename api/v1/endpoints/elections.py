"""
Elections API endpoints.

Responsibility: Public election listings and their admin CRUD
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import UserModel
from src.db.repositories import ElectionRepository
from src.db.session import get_db
from src.models.election import ElectionResult, check_percentage_total
from api.dependencies import require_admin
from api.v1.schemas.elections import (
    ElectionResponse,
    ElectionWriteResponse,
    ElectionCreateRequest,
    ElectionUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(prefix="/admin/elections")


def results_warning(results) -> Optional[str]:
    """Percentage-sum warning for stored results; never blocks the write"""
    if not results:
        return None
    warning = check_percentage_total([ElectionResult.model_validate(r) for r in results])
    if warning:
        logger.warning(warning)
    return warning


@router.get("/elections", response_model=list[ElectionResponse])
async def list_elections(db: AsyncSession = Depends(get_db)):
    return await ElectionRepository(db).list_all()


@router.get("/elections/upcoming", response_model=list[ElectionResponse])
async def list_upcoming_elections(
    limit: Optional[int] = Query(None, ge=1, le=50),
    db: AsyncSession = Depends(get_db)
):
    return await ElectionRepository(db).list_upcoming(limit=limit)


@router.get("/elections/recent", response_model=list[ElectionResponse])
async def list_recent_elections(
    limit: Optional[int] = Query(None, ge=1, le=50),
    db: AsyncSession = Depends(get_db)
):
    return await ElectionRepository(db).list_recent(limit=limit)


@router.get("/elections/{election_id}", response_model=ElectionResponse)
async def get_election(election_id: int, db: AsyncSession = Depends(get_db)):
    election = await ElectionRepository(db).get_by_id(election_id)
    if not election:
        raise HTTPException(status_code=404, detail=f"Election {election_id} not found")
    return election


@admin_router.post("", response_model=ElectionWriteResponse, status_code=status.HTTP_201_CREATED)
async def create_election(
    request: ElectionCreateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Create an election.

    Returns:
        The election and a warning when result percentages stray more
        than 5 points from 100
    """
    data = request.model_dump()
    election = await ElectionRepository(db).create(data)
    await db.commit()
    return {
        "election": ElectionResponse.model_validate(election),
        "warning": results_warning(data["results"]),
    }


@admin_router.put("/{election_id}", response_model=ElectionWriteResponse)
async def update_election(
    election_id: int,
    request: ElectionUpdateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    election = await ElectionRepository(db).update(
        election_id, request.model_dump(exclude_unset=True)
    )
    if not election:
        raise HTTPException(status_code=404, detail=f"Election {election_id} not found")
    await db.commit()
    return {
        "election": ElectionResponse.model_validate(election),
        "warning": results_warning(election.results),
    }


@admin_router.delete("/{election_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_election(
    election_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    deleted = await ElectionRepository(db).delete(election_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Election {election_id} not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
