"""
Pydantic schemas for flash info and video API requests and responses.

Responsibility: Flash info (breaking news) and short video schemas
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


# MARK: Flash infos

class FlashInfoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    image_url: Optional[str] = None
    url: Optional[str] = None
    active: bool
    priority: int
    category_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class FlashInfoCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    url: Optional[str] = None
    active: bool = True
    priority: int = Field(default=1, ge=1)
    category_id: Optional[int] = None


class FlashInfoUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = None
    url: Optional[str] = None
    active: Optional[bool] = None
    priority: Optional[int] = Field(default=None, ge=1)
    category_id: Optional[int] = None

    @field_validator("title", "content", "active", "priority", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


# MARK: Videos

class VideoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    video_id: str = Field(..., description="YouTube video id")
    views: int
    published_at: datetime


class VideoCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    video_id: str = Field(..., min_length=1, max_length=50, pattern=r"^[A-Za-z0-9_-]+$")
    published_at: Optional[datetime] = None
