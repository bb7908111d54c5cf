"""
Pydantic schemas for the "Learn" section API.

Responsibility: Educational topic and content schemas
"""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.live_coverage import SLUG_PATTERN


class EducationalTopicResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    description: str
    image_url: str
    icon: Optional[str] = None
    color: str
    display_order: int
    author_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class EducationalTopicCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    description: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    icon: Optional[str] = Field(default=None, max_length=100)
    color: Optional[str] = Field(default=None, max_length=20)
    display_order: int = 0


class EducationalContentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    content: str
    summary: str
    image_url: str
    topic_id: int
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    published: bool
    likes: int
    views: int
    created_at: datetime
    updated_at: datetime


class EducationalContentListResponse(BaseModel):
    content: List[EducationalContentResponse]
    total: int


class EducationalContentCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    content: str = Field(..., min_length=1)
    summary: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    topic_id: int
    category_id: Optional[int] = None
    published: bool = True


class EducationalContentUpdateRequest(BaseModel):
    """Partial patch; only fields present in the body are applied."""

    title: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    content: Optional[str] = Field(default=None, min_length=1)
    summary: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = Field(default=None, min_length=1)
    topic_id: Optional[int] = None
    category_id: Optional[int] = None
    published: Optional[bool] = None

    @field_validator(
        "title", "slug", "content", "summary", "image_url", "topic_id", "published",
        mode="before"
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value
