"""
Live coverage API endpoints.

Public read access to coverages and their feeds, plus visitor question
submission. Feed responses advertise a polling interval and forbid
caching; there is no push channel.

Responsibility: Public live coverage endpoints
"""

import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.db.models import LiveCoverageEditorModel, LiveCoverageUpdateModel
from src.db.session import get_db
from src.models.live_coverage import AuthorSummary, QuestionStatus
from src.services import LiveCoverageService
from api.v1.schemas.live_coverage import (
    CoverageResponse,
    CoverageListResponse,
    UpdateResponse,
    UpdateListResponse,
    QuestionSubmitRequest,
    QuestionResponse,
    QuestionListResponse,
    EditorResponse,
    EditorListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def to_update_response(
    row: Tuple[LiveCoverageUpdateModel, Optional[AuthorSummary]]
) -> UpdateResponse:
    update, author = row
    response = UpdateResponse.model_validate(update)
    response.author = author
    return response


def to_editor_response(
    row: Tuple[LiveCoverageEditorModel, Optional[AuthorSummary]]
) -> EditorResponse:
    editor, summary = row
    response = EditorResponse.model_validate(editor)
    response.editor = summary
    return response


def feed_response(
    response: Response,
    coverage_id: int,
    rows: List[Tuple[LiveCoverageUpdateModel, Optional[AuthorSummary]]],
    poll_interval: int
) -> UpdateListResponse:
    """Build a feed snapshot and mark it as a polled, uncacheable resource"""
    response.headers["X-Poll-Interval"] = str(poll_interval)
    response.headers["Cache-Control"] = "no-store"
    updates = [to_update_response(row) for row in rows]
    return UpdateListResponse(
        coverage_id=coverage_id,
        updates=updates,
        total=len(updates),
        poll_interval_seconds=poll_interval,
    )


@router.get("/live-coverages", response_model=CoverageListResponse)
async def list_active_coverages(db: AsyncSession = Depends(get_db)):
    """Active coverages, newest first."""
    coverages = await LiveCoverageService(db).list_coverages(active_only=True)
    return {
        "coverages": [CoverageResponse.model_validate(c) for c in coverages],
        "total": len(coverages),
    }


@router.get("/live-coverages/current", response_model=CoverageResponse)
async def get_current_coverage(db: AsyncSession = Depends(get_db)):
    """
    The featured live event.

    Raises:
        HTTPException: 404 if no coverage is active
    """
    coverage = await LiveCoverageService(db).get_primary_active_coverage()
    if not coverage:
        raise HTTPException(status_code=404, detail="No active live coverage")
    return coverage


@router.get("/live-coverages/{slug}", response_model=CoverageResponse)
async def get_coverage_by_slug(slug: str, db: AsyncSession = Depends(get_db)):
    coverage = await LiveCoverageService(db).get_coverage_by_slug(slug)
    if not coverage:
        raise HTTPException(status_code=404, detail=f"Live coverage '{slug}' not found")
    return coverage


@router.get("/live-coverages/{coverage_id}/updates", response_model=UpdateListResponse)
async def list_updates(
    coverage_id: int,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """
    Feed of a coverage, newest first, with author summaries.

    Args:
        coverage_id: Coverage database ID
        response: Outgoing response (polling headers are set on it)
        db: Database session

    Returns:
        UpdateListResponse snapshot; clients re-poll for new entries
    """
    service = LiveCoverageService(db)
    if await service.get_coverage(coverage_id) is None:
        raise HTTPException(status_code=404, detail=f"Live coverage {coverage_id} not found")

    rows = await service.list_updates(coverage_id)
    return feed_response(
        response, coverage_id, rows, settings.live.public_poll_interval_seconds
    )


@router.get("/live-coverages/{coverage_id}/editors", response_model=EditorListResponse)
async def list_editors(coverage_id: int, db: AsyncSession = Depends(get_db)):
    rows = await LiveCoverageService(db).list_editors(coverage_id)
    editors = [to_editor_response(row) for row in rows]
    return {"editors": editors, "total": len(editors)}


@router.get("/live-coverages/{coverage_id}/questions", response_model=QuestionListResponse)
async def list_approved_questions(coverage_id: int, db: AsyncSession = Depends(get_db)):
    """Only approved questions are public."""
    questions = await LiveCoverageService(db).list_questions(
        coverage_id, status=QuestionStatus.APPROVED
    )
    return {
        "questions": [QuestionResponse.model_validate(q) for q in questions],
        "total": len(questions),
    }


@router.post(
    "/live-coverages/{coverage_id}/questions",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED
)
async def submit_question(
    coverage_id: int,
    request: QuestionSubmitRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Submit a visitor question; it waits in pending state for moderation.

    Raises:
        HTTPException: 404 for an unknown coverage, 422 if the question is too long
    """
    max_length = settings.live.question_max_length
    if len(request.content) > max_length:
        raise HTTPException(
            status_code=422,
            detail=f"Question exceeds {max_length} characters"
        )

    return await LiveCoverageService(db).submit_question(
        coverage_id=coverage_id,
        username=request.username,
        content=request.content,
        status=QuestionStatus.PENDING,
    )
