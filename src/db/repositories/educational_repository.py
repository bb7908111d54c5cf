"""
Repository for the "Learn" section: educational topics and their lessons.

Responsibility: Data access layer for educational_topics and educational_content
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete, desc, asc, and_
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import EducationalTopicModel, EducationalContentModel, utcnow

logger = logging.getLogger(__name__)

TOPIC_FIELDS = (
    "title", "slug", "description", "image_url", "icon", "color", "display_order", "author_id",
)
CONTENT_FIELDS = (
    "title", "slug", "content", "summary", "image_url", "topic_id", "category_id",
    "author_id", "published",
)


class EducationalRepository:
    """
    Repository for educational topics and content.

    Example:
        repo = EducationalRepository(session)
        lessons = await repo.list_content(category_id=3)
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    # MARK: Topics

    async def list_topics(self) -> List[EducationalTopicModel]:
        """Topics in display order."""
        result = await self.session.execute(
            select(EducationalTopicModel).order_by(
                asc(EducationalTopicModel.display_order), asc(EducationalTopicModel.id)
            )
        )
        return list(result.scalars().all())

    async def get_topic_by_id(self, topic_id: int) -> Optional[EducationalTopicModel]:
        result = await self.session.execute(
            select(EducationalTopicModel).where(EducationalTopicModel.id == topic_id)
        )
        return result.scalar_one_or_none()

    async def get_topic_by_slug(self, slug: str) -> Optional[EducationalTopicModel]:
        result = await self.session.execute(
            select(EducationalTopicModel).where(EducationalTopicModel.slug == slug)
        )
        return result.scalar_one_or_none()

    async def create_topic(self, data: Dict[str, Any]) -> EducationalTopicModel:
        now = utcnow()
        topic = EducationalTopicModel(
            **{key: value for key, value in data.items() if key in TOPIC_FIELDS and value is not None},
            created_at=now,
            updated_at=now,
        )
        self.session.add(topic)
        await self.session.flush()

        logger.info(f"Created educational topic {topic.id} ({topic.slug})")
        return topic

    async def delete_topic(self, topic_id: int) -> bool:
        """Delete a topic; fails with IntegrityError while lessons still reference it."""
        result = await self.session.execute(
            delete(EducationalTopicModel).where(EducationalTopicModel.id == topic_id)
        )
        return result.rowcount > 0

    # MARK: Content

    async def list_content(
        self,
        category_id: Optional[int] = None,
        topic_id: Optional[int] = None,
        published: Optional[bool] = True
    ) -> List[EducationalContentModel]:
        """
        List lessons, newest first.

        Args:
            category_id: Keep lessons filed under this site category
            topic_id: Keep lessons of this topic
            published: Publication flag; any when None

        Returns:
            List of EducationalContentModel objects
        """
        conditions = []
        if published is not None:
            conditions.append(EducationalContentModel.published == published)
        if category_id is not None:
            conditions.append(EducationalContentModel.category_id == category_id)
        if topic_id is not None:
            conditions.append(EducationalContentModel.topic_id == topic_id)

        stmt = select(EducationalContentModel)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = stmt.order_by(desc(EducationalContentModel.created_at), desc(EducationalContentModel.id))

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_content_by_id(self, content_id: int) -> Optional[EducationalContentModel]:
        result = await self.session.execute(
            select(EducationalContentModel).where(EducationalContentModel.id == content_id)
        )
        return result.scalar_one_or_none()

    async def create_content(self, data: Dict[str, Any]) -> EducationalContentModel:
        now = utcnow()
        lesson = EducationalContentModel(
            **{key: value for key, value in data.items() if key in CONTENT_FIELDS and value is not None},
            created_at=now,
            updated_at=now,
        )
        self.session.add(lesson)
        await self.session.flush()

        logger.info(f"Created educational content {lesson.id} in topic {lesson.topic_id}")
        return lesson

    async def update_content(
        self,
        content_id: int,
        data: Dict[str, Any]
    ) -> Optional[EducationalContentModel]:
        lesson = await self.get_content_by_id(content_id)
        if lesson is None:
            return None

        for key, value in data.items():
            if key in CONTENT_FIELDS:
                setattr(lesson, key, value)
        lesson.updated_at = utcnow()
        await self.session.flush()
        return lesson

    async def delete_content(self, content_id: int) -> bool:
        result = await self.session.execute(
            delete(EducationalContentModel).where(EducationalContentModel.id == content_id)
        )
        return result.rowcount > 0
