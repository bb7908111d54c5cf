"""
Repository for live coverage database operations.

Covers the four live coverage tables: coverages, editor assignments,
feed updates and visitor questions. Methods flush but never commit;
transaction boundaries belong to the caller (LiveCoverageService).

Responsibility: Data access layer for live_coverage_* tables
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import select, delete, desc, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import (
    LiveCoverageModel,
    LiveCoverageEditorModel,
    LiveCoverageQuestionModel,
    LiveCoverageUpdateModel,
    UserModel,
    utcnow,
)
from ...models.live_coverage import AuthorSummary

logger = logging.getLogger(__name__)

# Columns a partial coverage update may touch
COVERAGE_MUTABLE_FIELDS = ("title", "slug", "subject", "context", "image_url", "active")


def _author_summary(
    display_name: Optional[str],
    title: Optional[str],
    avatar_url: Optional[str]
) -> Optional[AuthorSummary]:
    """Summary only when the joined user has a display name."""
    if not display_name:
        return None
    return AuthorSummary(display_name=display_name, title=title, avatar_url=avatar_url)


class LiveCoverageRepository:
    """
    Repository for live coverage database operations.

    Provides methods for creating, reading, updating, and deleting
    coverages and their editors, updates and questions.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    # MARK: Coverages

    async def list_coverages(self, active_only: bool = False) -> List[LiveCoverageModel]:
        """
        List coverages, newest first.

        Args:
            active_only: Only return coverages flagged active

        Returns:
            List of LiveCoverageModel objects
        """
        stmt = select(LiveCoverageModel)
        if active_only:
            stmt = stmt.where(LiveCoverageModel.active == True)  # noqa: E712
        stmt = stmt.order_by(desc(LiveCoverageModel.created_at), desc(LiveCoverageModel.id))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_coverage(self, coverage_id: int) -> Optional[LiveCoverageModel]:
        stmt = select(LiveCoverageModel).where(LiveCoverageModel.id == coverage_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_coverage_by_slug(self, slug: str) -> Optional[LiveCoverageModel]:
        stmt = select(LiveCoverageModel).where(LiveCoverageModel.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_primary_active_coverage(self) -> Optional[LiveCoverageModel]:
        """Most recently created active coverage, if any."""
        stmt = (
            select(LiveCoverageModel)
            .where(LiveCoverageModel.active == True)  # noqa: E712
            .order_by(desc(LiveCoverageModel.created_at), desc(LiveCoverageModel.id))
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_active_coverages(self) -> int:
        stmt = select(func.count()).select_from(LiveCoverageModel).where(
            LiveCoverageModel.active == True  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def create_coverage(self, data: Dict[str, Any]) -> LiveCoverageModel:
        """
        Insert a coverage.

        A duplicate slug raises sqlalchemy.exc.IntegrityError on flush.

        Args:
            data: Coverage fields (title, slug, subject, context, image_url, active)

        Returns:
            The persisted LiveCoverageModel with id and timestamps
        """
        now = utcnow()
        coverage = LiveCoverageModel(
            title=data["title"],
            slug=data["slug"],
            subject=data["subject"],
            context=data.get("context") or "",
            image_url=data.get("image_url") or None,
            active=data.get("active", True),
            created_at=now,
            updated_at=now,
        )
        self.session.add(coverage)
        await self.session.flush()
        return coverage

    async def update_coverage(
        self,
        coverage_id: int,
        data: Dict[str, Any]
    ) -> Optional[LiveCoverageModel]:
        """
        Apply a partial patch and refresh updated_at.

        Returns:
            Updated LiveCoverageModel, or None if not found
        """
        coverage = await self.get_coverage(coverage_id)
        if coverage is None:
            return None

        for key, value in data.items():
            if key in COVERAGE_MUTABLE_FIELDS:
                setattr(coverage, key, value)
        coverage.updated_at = utcnow()
        await self.session.flush()
        return coverage

    async def delete_coverage_row(self, coverage_id: int) -> bool:
        """Delete the coverage row only; children must already be gone."""
        result = await self.session.execute(
            delete(LiveCoverageModel).where(LiveCoverageModel.id == coverage_id)
        )
        return result.rowcount > 0

    async def delete_updates_for_coverage(self, coverage_id: int) -> int:
        result = await self.session.execute(
            delete(LiveCoverageUpdateModel).where(
                LiveCoverageUpdateModel.coverage_id == coverage_id
            )
        )
        return result.rowcount

    async def delete_questions_for_coverage(self, coverage_id: int) -> int:
        result = await self.session.execute(
            delete(LiveCoverageQuestionModel).where(
                LiveCoverageQuestionModel.coverage_id == coverage_id
            )
        )
        return result.rowcount

    async def delete_editors_for_coverage(self, coverage_id: int) -> int:
        result = await self.session.execute(
            delete(LiveCoverageEditorModel).where(
                LiveCoverageEditorModel.coverage_id == coverage_id
            )
        )
        return result.rowcount

    # MARK: Editors

    async def list_editors(
        self,
        coverage_id: int
    ) -> List[Tuple[LiveCoverageEditorModel, Optional[AuthorSummary]]]:
        """
        List editor assignments of a coverage with the editor's summary.

        Returns:
            List of (assignment, summary) pairs; summary is None when the
            user has no display name (or no longer exists)
        """
        stmt = (
            select(
                LiveCoverageEditorModel,
                UserModel.display_name,
                UserModel.title,
                UserModel.avatar_url,
            )
            .outerjoin(UserModel, LiveCoverageEditorModel.editor_id == UserModel.id)
            .where(LiveCoverageEditorModel.coverage_id == coverage_id)
            .order_by(LiveCoverageEditorModel.created_at, LiveCoverageEditorModel.id)
        )
        result = await self.session.execute(stmt)
        return [
            (editor, _author_summary(display_name, title, avatar_url))
            for editor, display_name, title, avatar_url in result.all()
        ]

    async def add_editor(
        self,
        coverage_id: int,
        editor_id: int,
        role: Optional[str] = None
    ) -> LiveCoverageEditorModel:
        editor = LiveCoverageEditorModel(
            coverage_id=coverage_id,
            editor_id=editor_id,
            role=role,
            created_at=utcnow(),
        )
        self.session.add(editor)
        await self.session.flush()
        return editor

    async def remove_editor(self, coverage_id: int, editor_id: int) -> bool:
        """
        Remove an editor assignment.

        Returns:
            True if a row was deleted, False if none matched
        """
        result = await self.session.execute(
            delete(LiveCoverageEditorModel).where(
                and_(
                    LiveCoverageEditorModel.coverage_id == coverage_id,
                    LiveCoverageEditorModel.editor_id == editor_id
                )
            )
        )
        return result.rowcount > 0

    # MARK: Updates

    async def list_updates(
        self,
        coverage_id: int
    ) -> List[Tuple[LiveCoverageUpdateModel, Optional[AuthorSummary]]]:
        """
        Feed of a coverage, newest first, joined with author summaries.

        Ties on timestamp are broken by id so the order is stable.
        """
        stmt = (
            select(
                LiveCoverageUpdateModel,
                UserModel.display_name,
                UserModel.title,
                UserModel.avatar_url,
            )
            .outerjoin(UserModel, LiveCoverageUpdateModel.author_id == UserModel.id)
            .where(LiveCoverageUpdateModel.coverage_id == coverage_id)
            .order_by(desc(LiveCoverageUpdateModel.timestamp), desc(LiveCoverageUpdateModel.id))
        )
        result = await self.session.execute(stmt)
        return [
            (update, _author_summary(display_name, title, avatar_url))
            for update, display_name, title, avatar_url in result.all()
        ]

    async def get_update(self, update_id: int) -> Optional[LiveCoverageUpdateModel]:
        stmt = select(LiveCoverageUpdateModel).where(LiveCoverageUpdateModel.id == update_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_update(self, **fields: Any) -> LiveCoverageUpdateModel:
        """
        Append a feed entry.

        Args:
            **fields: LiveCoverageUpdateModel column values

        Returns:
            The persisted LiveCoverageUpdateModel
        """
        fields.setdefault("timestamp", utcnow())
        fields["important"] = bool(fields.get("important") or False)
        fields["image_url"] = fields.get("image_url") or None
        update = LiveCoverageUpdateModel(**fields)
        self.session.add(update)
        await self.session.flush()
        return update

    async def delete_update(self, update_id: int) -> bool:
        result = await self.session.execute(
            delete(LiveCoverageUpdateModel).where(LiveCoverageUpdateModel.id == update_id)
        )
        return result.rowcount > 0

    # MARK: Questions

    async def list_questions(
        self,
        coverage_id: int,
        status: Optional[str] = None
    ) -> List[LiveCoverageQuestionModel]:
        """
        Questions of a coverage, newest first.

        Args:
            coverage_id: Coverage ID
            status: Optional status filter
        """
        stmt = select(LiveCoverageQuestionModel).where(
            LiveCoverageQuestionModel.coverage_id == coverage_id
        )
        if status:
            stmt = stmt.where(LiveCoverageQuestionModel.status == status)
        stmt = stmt.order_by(
            desc(LiveCoverageQuestionModel.timestamp), desc(LiveCoverageQuestionModel.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_question(self, question_id: int) -> Optional[LiveCoverageQuestionModel]:
        stmt = select(LiveCoverageQuestionModel).where(
            LiveCoverageQuestionModel.id == question_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_question(
        self,
        coverage_id: int,
        username: str,
        content: str,
        status: str
    ) -> LiveCoverageQuestionModel:
        now = utcnow()
        question = LiveCoverageQuestionModel(
            coverage_id=coverage_id,
            username=username,
            content=content,
            status=status,
            answered=False,
            timestamp=now,
            updated_at=now,
        )
        self.session.add(question)
        await self.session.flush()
        return question

    async def set_question_status(
        self,
        question_id: int,
        status: str,
        answered: Optional[bool] = None
    ) -> Optional[LiveCoverageQuestionModel]:
        """
        Set status and, when given, the answered flag; refreshes updated_at.

        answered only ever goes from False to True: None or False leave a
        question that is already answered as it is.

        Returns:
            Updated question, or None if not found
        """
        question = await self.get_question(question_id)
        if question is None:
            return None

        question.status = status
        if answered:
            question.answered = True
        question.updated_at = utcnow()
        await self.session.flush()
        return question
