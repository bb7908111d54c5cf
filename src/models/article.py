"""
Article listing models.

Responsibility: Filter and sort vocabulary of the article access layer
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ArticleSort(str, Enum):
    """Fixed sort orders for article listings"""
    NEWEST = "newest"
    OLDEST = "oldest"
    VIEWS = "views"
    TITLE = "title"


class ArticleFilters(BaseModel):
    """
    Conjunctive filters for article listings.

    Every provided filter narrows the result; None means "any".
    """

    category_id: Optional[int] = None
    search: Optional[str] = Field(default=None, description="Substring of the title")
    year: Optional[int] = Field(default=None, ge=1900, le=2999)
    published: Optional[bool] = True
    author_id: Optional[int] = None
    sort: ArticleSort = ArticleSort.NEWEST
    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)
