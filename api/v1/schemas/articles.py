"""
Pydantic schemas for article and category API requests and responses.

Responsibility: Article and category schemas
"""

from typing import Any, Dict, Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.live_coverage import SLUG_PATTERN


class ArticleResponse(BaseModel):
    """Article as listed (without the body)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    excerpt: str
    image_url: Optional[str] = None
    author_id: Optional[int] = None
    category_id: Optional[int] = None
    published: bool
    featured: bool
    view_count: int
    created_at: datetime
    updated_at: datetime


class ArticleDetailResponse(ArticleResponse):
    """Full article."""

    content: str
    sources: Optional[List[Dict[str, Any]]] = None


class ArticleListResponse(BaseModel):
    articles: List[ArticleResponse]
    total: int
    limit: Optional[int] = None
    offset: int


class ArticleCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    content: str = Field(..., min_length=1)
    excerpt: str = ""
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    published: bool = True
    featured: bool = False
    sources: Optional[List[Dict[str, Any]]] = None


class ArticleUpdateRequest(BaseModel):
    """Partial patch; only fields present in the body are applied."""

    title: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    content: Optional[str] = Field(default=None, min_length=1)
    excerpt: Optional[str] = None
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    published: Optional[bool] = None
    featured: Optional[bool] = None
    sources: Optional[List[Dict[str, Any]]] = None

    @field_validator("title", "slug", "content", "excerpt", "published", "featured", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    color: str


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=120, pattern=SLUG_PATTERN)
    color: Optional[str] = Field(default=None, max_length=20)
