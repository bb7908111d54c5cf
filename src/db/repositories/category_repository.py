"""
Repository for article categories.

Responsibility: Data access layer for the categories table
"""

from typing import List, Optional
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import CategoryModel


class CategoryRepository:
    """Repository for category persistence."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_categories(self) -> List[CategoryModel]:
        result = await self.session.execute(select(CategoryModel).order_by(CategoryModel.name))
        return list(result.scalars().all())

    async def get_by_id(self, category_id: int) -> Optional[CategoryModel]:
        result = await self.session.execute(
            select(CategoryModel).where(CategoryModel.id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[CategoryModel]:
        result = await self.session.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        )
        return result.scalar_one_or_none()

    async def create(self, name: str, slug: str, color: Optional[str] = None) -> CategoryModel:
        category = CategoryModel(name=name, slug=slug, color=color or "#FF4D4D")
        self.session.add(category)
        await self.session.flush()
        return category

    async def delete(self, category_id: int) -> bool:
        result = await self.session.execute(
            delete(CategoryModel).where(CategoryModel.id == category_id)
        )
        return result.rowcount > 0
