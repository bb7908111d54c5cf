"""
Repository for articles.

Implements filtered listings and the single-featured-article rule:
whenever an article is saved with featured=True, the flag is cleared on
every other article in the same unit of work.

Responsibility: Data access layer for the articles table
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import select, update, delete, desc, asc, and_
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ArticleModel, utcnow
from ...models.article import ArticleFilters, ArticleSort

logger = logging.getLogger(__name__)

ARTICLE_FIELDS = (
    "title", "slug", "content", "excerpt", "image_url", "author_id",
    "category_id", "published", "featured", "sources",
)

# Sort enum -> (column, direction)
SORT_COLUMNS = {
    ArticleSort.NEWEST: (ArticleModel.created_at, desc),
    ArticleSort.OLDEST: (ArticleModel.created_at, asc),
    ArticleSort.VIEWS: (ArticleModel.view_count, desc),
    ArticleSort.TITLE: (ArticleModel.title, asc),
}


class ArticleRepository:
    """
    Repository for article persistence.

    Example:
        repo = ArticleRepository(session)
        articles = await repo.list_articles(ArticleFilters(search="budget", year=2025))
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def list_articles(self, filters: Optional[ArticleFilters] = None) -> List[ArticleModel]:
        """
        List articles matching every provided filter.

        Args:
            filters: Conjunctive filters, sort order and paging

        Returns:
            List of ArticleModel objects
        """
        filters = filters or ArticleFilters()
        conditions = []

        if filters.published is not None:
            conditions.append(ArticleModel.published == filters.published)
        if filters.category_id is not None:
            conditions.append(ArticleModel.category_id == filters.category_id)
        if filters.author_id is not None:
            conditions.append(ArticleModel.author_id == filters.author_id)
        if filters.search:
            conditions.append(ArticleModel.title.ilike(f"%{filters.search}%"))
        if filters.year is not None:
            conditions.append(ArticleModel.created_at >= datetime(filters.year, 1, 1))
            conditions.append(ArticleModel.created_at < datetime(filters.year + 1, 1, 1))

        stmt = select(ArticleModel)
        if conditions:
            stmt = stmt.where(and_(*conditions))

        column, direction = SORT_COLUMNS[filters.sort]
        stmt = stmt.order_by(direction(column), direction(ArticleModel.id))

        if filters.offset:
            stmt = stmt.offset(filters.offset)
        if filters.limit:
            stmt = stmt.limit(filters.limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_featured(self) -> List[ArticleModel]:
        result = await self.session.execute(
            select(ArticleModel)
            .where(
                and_(
                    ArticleModel.featured == True,  # noqa: E712
                    ArticleModel.published == True  # noqa: E712
                )
            )
            .order_by(desc(ArticleModel.created_at))
        )
        return list(result.scalars().all())

    async def list_recent(self, limit: int = 5) -> List[ArticleModel]:
        return await self.list_articles(ArticleFilters(limit=limit))

    async def list_by_category(self, category_id: int, limit: Optional[int] = None) -> List[ArticleModel]:
        return await self.list_articles(ArticleFilters(category_id=category_id, limit=limit))

    async def get_by_id(self, article_id: int) -> Optional[ArticleModel]:
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.id == article_id)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[ArticleModel]:
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.slug == slug)
        )
        return result.scalar_one_or_none()

    async def create(self, data: Dict[str, Any]) -> ArticleModel:
        """
        Create an article.

        Args:
            data: Article fields; unknown keys are ignored

        Returns:
            Created ArticleModel
        """
        now = utcnow()
        article = ArticleModel(
            **{key: value for key, value in data.items() if key in ARTICLE_FIELDS},
            created_at=now,
            updated_at=now,
        )
        self.session.add(article)
        await self.session.flush()

        if article.featured:
            await self._clear_other_featured(article.id)
        return article

    async def update(self, article_id: int, data: Dict[str, Any]) -> Optional[ArticleModel]:
        """
        Apply a partial patch.

        Returns:
            Updated ArticleModel, or None if not found
        """
        article = await self.get_by_id(article_id)
        if article is None:
            return None

        for key, value in data.items():
            if key in ARTICLE_FIELDS:
                setattr(article, key, value)
        article.updated_at = utcnow()
        await self.session.flush()

        if data.get("featured"):
            await self._clear_other_featured(article.id)
        return article

    async def delete(self, article_id: int) -> bool:
        result = await self.session.execute(
            delete(ArticleModel).where(ArticleModel.id == article_id)
        )
        return result.rowcount > 0

    async def increment_views(self, article_id: int) -> None:
        await self.session.execute(
            update(ArticleModel)
            .where(ArticleModel.id == article_id)
            .values(view_count=ArticleModel.view_count + 1)
            .execution_options(synchronize_session=False)
        )

    async def _clear_other_featured(self, article_id: int) -> None:
        result = await self.session.execute(
            update(ArticleModel)
            .where(
                and_(
                    ArticleModel.id != article_id,
                    ArticleModel.featured == True  # noqa: E712
                )
            )
            .values(featured=False)
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount:
            logger.info(f"Article {article_id} is now featured; cleared {result.rowcount} other(s)")
