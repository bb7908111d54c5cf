"""
Live coverage engine.

Coordinates the live coverage repository into the operations editors
and visitors perform: coverage lifecycle, feed appends, question
moderation and answering, and editor assignment.

Every write runs as one unit of work on the caller's session: committed
when the operation completes, rolled back and re-raised on any error.
Cascading coverage deletion and question answering are therefore atomic.

Responsibility: Business rules of the live coverage feed
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple, Union
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..db.models import (
    LiveCoverageModel,
    LiveCoverageEditorModel,
    LiveCoverageQuestionModel,
    LiveCoverageUpdateModel,
)
from ..db.repositories import ArticleRepository, LiveCoverageRepository
from ..models.election import check_percentage_total
from ..models.live_coverage import (
    AuthorSummary,
    NewUpdate,
    QuestionStatus,
    UpdateKind,
)

logger = logging.getLogger(__name__)


class LiveCoverageError(Exception):
    """Base error of the live coverage engine"""


class CoverageNotFoundError(LiveCoverageError):
    def __init__(self, coverage_id: int):
        super().__init__(f"Live coverage {coverage_id} not found")
        self.coverage_id = coverage_id


class QuestionNotFoundError(LiveCoverageError):
    def __init__(self, question_id: int, coverage_id: Optional[int] = None):
        if coverage_id is None:
            message = f"Question {question_id} not found"
        else:
            message = f"Question {question_id} not found in live coverage {coverage_id}"
        super().__init__(message)
        self.question_id = question_id
        self.coverage_id = coverage_id


class ArticleNotFoundError(LiveCoverageError):
    def __init__(self, article_id: int):
        super().__init__(f"Article {article_id} not found")
        self.article_id = article_id


class ActiveCoverageLimitError(LiveCoverageError):
    def __init__(self, limit: int):
        super().__init__(f"At most {limit} live coverages can be active at once")
        self.limit = limit


class InvalidQuestionStatusError(LiveCoverageError, ValueError):
    def __init__(self, status: Any):
        allowed = ", ".join(s.value for s in QuestionStatus)
        super().__init__(f"Invalid question status {status!r} (expected one of: {allowed})")
        self.status = status


def coerce_question_status(status: Union[str, QuestionStatus]) -> QuestionStatus:
    """Validate a status against the closed QuestionStatus set."""
    try:
        return QuestionStatus(status)
    except ValueError:
        raise InvalidQuestionStatusError(status) from None


class LiveCoverageService:
    """
    Live coverage engine bound to one database session.

    Example:
        async with db.session() as session:
            service = LiveCoverageService(session)
            coverage = await service.create_coverage({
                "title": "Débat budgétaire",
                "slug": "debat-budgetaire",
                "subject": "Budget 2025",
            })
            await service.append_update(NewUpdate(
                coverage_id=coverage.id,
                author_id=editor.id,
                content="Ouverture de la séance",
            ))
    """

    def __init__(
        self,
        session: AsyncSession,
        max_active_coverages: Optional[int] = None
    ):
        """
        Initialize the engine.

        Args:
            session: SQLAlchemy async session owned by the caller
            max_active_coverages: Cap on simultaneously active coverages
                (defaults to settings.live.max_active_coverages, 0 disables)
        """
        self.session = session
        self.repo = LiveCoverageRepository(session)
        self.articles = ArticleRepository(session)
        if max_active_coverages is None:
            max_active_coverages = settings.live.max_active_coverages
        self.max_active_coverages = max_active_coverages

    @asynccontextmanager
    async def _unit_of_work(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
            await self.session.commit()
        except Exception as e:
            logger.error(f"{operation} failed, rolling back: {e}")
            await self.session.rollback()
            raise

    async def _check_active_cap(self) -> None:
        """Raise when one more active coverage would exceed the cap."""
        active_count = await self.repo.count_active_coverages()
        if active_count >= self.max_active_coverages:
            raise ActiveCoverageLimitError(self.max_active_coverages)

    # MARK: Coverages

    async def list_coverages(self, active_only: bool = False) -> List[LiveCoverageModel]:
        return await self.repo.list_coverages(active_only=active_only)

    async def get_coverage(self, coverage_id: int) -> Optional[LiveCoverageModel]:
        return await self.repo.get_coverage(coverage_id)

    async def get_coverage_by_slug(self, slug: str) -> Optional[LiveCoverageModel]:
        return await self.repo.get_coverage_by_slug(slug)

    async def get_primary_active_coverage(self) -> Optional[LiveCoverageModel]:
        """The featured live event: most recently created active coverage."""
        return await self.repo.get_primary_active_coverage()

    async def create_coverage(self, data: Dict[str, Any]) -> LiveCoverageModel:
        """
        Create a coverage.

        Args:
            data: title, slug, subject, optional context, image_url, active

        Returns:
            Persisted coverage with id and timestamps

        Raises:
            ActiveCoverageLimitError: Creating an active coverage would
                exceed max_active_coverages
            sqlalchemy.exc.IntegrityError: Slug already in use
        """
        async with self._unit_of_work("create_coverage"):
            if data.get("active", True) and self.max_active_coverages > 0:
                await self._check_active_cap()

            coverage = await self.repo.create_coverage(data)

        logger.info(f"Created live coverage {coverage.id} ({coverage.slug})")
        return coverage

    async def update_coverage(
        self,
        coverage_id: int,
        data: Dict[str, Any]
    ) -> Optional[LiveCoverageModel]:
        """
        Apply a partial patch; updated_at is always refreshed.

        Returns:
            Updated coverage, or None if not found

        Raises:
            ActiveCoverageLimitError: Reactivating an inactive coverage would
                exceed max_active_coverages
            sqlalchemy.exc.IntegrityError: Slug already in use
        """
        async with self._unit_of_work("update_coverage"):
            if data.get("active") and self.max_active_coverages > 0:
                current = await self.repo.get_coverage(coverage_id)
                if current is not None and not current.active:
                    await self._check_active_cap()

            coverage = await self.repo.update_coverage(coverage_id, data)

        if coverage is not None:
            logger.info(f"Updated live coverage {coverage_id}: {sorted(data)}")
        return coverage

    async def delete_coverage(self, coverage_id: int) -> bool:
        """
        Delete a coverage with its updates, questions and editor links.

        Children are removed in that order, then the coverage row, all in
        one transaction.

        Returns:
            False if the coverage did not exist
        """
        async with self._unit_of_work("delete_coverage"):
            updates = await self.repo.delete_updates_for_coverage(coverage_id)
            questions = await self.repo.delete_questions_for_coverage(coverage_id)
            editors = await self.repo.delete_editors_for_coverage(coverage_id)
            deleted = await self.repo.delete_coverage_row(coverage_id)

        if deleted:
            logger.info(
                f"Deleted live coverage {coverage_id} "
                f"({updates} updates, {questions} questions, {editors} editors)"
            )
        return deleted

    # MARK: Updates

    async def append_update(self, new_update: NewUpdate) -> LiveCoverageUpdateModel:
        """
        Append an entry to a coverage's feed.

        The payload kind is persisted in update_type together with the
        single field that kind carries.

        Raises:
            CoverageNotFoundError: Unknown coverage
            ArticleNotFoundError: Article payload references a missing article
        """
        payload = new_update.payload
        fields: Dict[str, Any] = {"update_type": payload.kind.value}

        async with self._unit_of_work("append_update"):
            if await self.repo.get_coverage(new_update.coverage_id) is None:
                raise CoverageNotFoundError(new_update.coverage_id)

            if payload.kind == UpdateKind.YOUTUBE:
                fields["youtube_url"] = str(payload.youtube_url)
            elif payload.kind == UpdateKind.ARTICLE:
                if await self.articles.get_by_id(payload.article_id) is None:
                    raise ArticleNotFoundError(payload.article_id)
                fields["article_id"] = payload.article_id
            elif payload.kind == UpdateKind.ELECTION:
                warning = check_percentage_total(payload.election_results.results)
                if warning:
                    logger.warning(f"Election update for coverage {new_update.coverage_id}: {warning}")
                fields["election_results"] = payload.election_results.to_json()

            update = await self.repo.create_update(
                coverage_id=new_update.coverage_id,
                author_id=new_update.author_id,
                content=new_update.content,
                important=new_update.important,
                image_url=new_update.image_url,
                **fields,
            )

        logger.info(
            f"Appended {payload.kind.value} update {update.id} to coverage {update.coverage_id}"
        )
        return update

    async def list_updates(
        self,
        coverage_id: int
    ) -> List[Tuple[LiveCoverageUpdateModel, Optional[AuthorSummary]]]:
        """Feed snapshot, newest first; callers re-poll for fresh entries."""
        return await self.repo.list_updates(coverage_id)

    async def delete_update(self, update_id: int) -> bool:
        """
        Hard-delete a feed entry.

        A question answered by this entry keeps answered=True.

        Returns:
            False if the update did not exist
        """
        async with self._unit_of_work("delete_update"):
            update = await self.repo.get_update(update_id)
            if update is None:
                return False
            await self.repo.delete_update(update_id)

        if update.is_answer and update.question_id is not None:
            logger.warning(
                f"Deleted update {update_id} answered question {update.question_id}; "
                f"the question stays marked answered"
            )
        logger.info(f"Deleted update {update_id} from coverage {update.coverage_id}")
        return True

    # MARK: Questions

    async def list_questions(
        self,
        coverage_id: int,
        status: Optional[Union[str, QuestionStatus]] = None
    ) -> List[LiveCoverageQuestionModel]:
        status_value = coerce_question_status(status).value if status else None
        return await self.repo.list_questions(coverage_id, status=status_value)

    async def submit_question(
        self,
        coverage_id: int,
        username: str,
        content: str,
        status: Union[str, QuestionStatus] = QuestionStatus.PENDING
    ) -> LiveCoverageQuestionModel:
        """
        Store a visitor question with answered=False.

        Raises:
            CoverageNotFoundError: Unknown coverage
            InvalidQuestionStatusError: Status outside QuestionStatus
        """
        status = coerce_question_status(status)

        async with self._unit_of_work("submit_question"):
            if await self.repo.get_coverage(coverage_id) is None:
                raise CoverageNotFoundError(coverage_id)
            question = await self.repo.create_question(
                coverage_id=coverage_id,
                username=username,
                content=content,
                status=status.value,
            )

        logger.info(f"Question {question.id} submitted to coverage {coverage_id} ({status.value})")
        return question

    async def moderate_question(
        self,
        question_id: int,
        status: Union[str, QuestionStatus],
        answered: Optional[bool] = None
    ) -> Optional[LiveCoverageQuestionModel]:
        """
        Set a question's status, optionally marking it answered.

        Moderation never clears answered: an answered question that is
        re-moderated keeps answered=True whatever the request says.

        Returns:
            Updated question, or None if not found

        Raises:
            InvalidQuestionStatusError: Status outside QuestionStatus
        """
        status = coerce_question_status(status)

        async with self._unit_of_work("moderate_question"):
            question = await self.repo.set_question_status(
                question_id, status.value, answered=answered
            )

        if question is not None:
            logger.info(
                f"Question {question_id} moderated: {status.value} (answered={question.answered})"
            )
        return question

    async def answer_question(
        self,
        question_id: int,
        coverage_id: int,
        content: str,
        author_id: Optional[int],
        important: bool = False
    ) -> LiveCoverageUpdateModel:
        """
        Publish an answer to a question.

        Inserts an update with is_answer=True linked to the question and
        marks the question approved and answered, in one transaction.

        Raises:
            QuestionNotFoundError: Question missing or in another coverage
        """
        async with self._unit_of_work("answer_question"):
            question = await self.repo.get_question(question_id)
            if question is None or question.coverage_id != coverage_id:
                raise QuestionNotFoundError(question_id, coverage_id)

            update = await self.repo.create_update(
                coverage_id=coverage_id,
                author_id=author_id,
                content=content,
                important=important,
                is_answer=True,
                question_id=question_id,
                update_type=UpdateKind.NORMAL.value,
            )
            await self.repo.set_question_status(
                question_id, QuestionStatus.APPROVED.value, answered=True
            )

        logger.info(f"Question {question_id} answered by update {update.id}")
        return update

    # MARK: Editors

    async def list_editors(
        self,
        coverage_id: int
    ) -> List[Tuple[LiveCoverageEditorModel, Optional[AuthorSummary]]]:
        return await self.repo.list_editors(coverage_id)

    async def add_editor(
        self,
        coverage_id: int,
        editor_id: int,
        role: Optional[str] = None
    ) -> LiveCoverageEditorModel:
        """
        Assign a user to a coverage.

        Raises:
            CoverageNotFoundError: Unknown coverage
            sqlalchemy.exc.IntegrityError: User already assigned
        """
        async with self._unit_of_work("add_editor"):
            if await self.repo.get_coverage(coverage_id) is None:
                raise CoverageNotFoundError(coverage_id)
            editor = await self.repo.add_editor(coverage_id, editor_id, role=role)

        logger.info(f"User {editor_id} added as editor of coverage {coverage_id}")
        return editor

    async def remove_editor(self, coverage_id: int, editor_id: int) -> bool:
        """Idempotent; True only if an assignment was actually removed."""
        async with self._unit_of_work("remove_editor"):
            removed = await self.repo.remove_editor(coverage_id, editor_id)

        if removed:
            logger.info(f"User {editor_id} removed from coverage {coverage_id}")
        return removed
