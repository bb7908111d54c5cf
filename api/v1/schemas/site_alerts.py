"""
Pydantic schemas for site alert API requests and responses.

Responsibility: Site alert schemas
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SiteAlertResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    message: str
    active: bool
    priority: int
    background_color: str
    text_color: str
    url: Optional[str] = None
    created_at: datetime
    created_by: Optional[int] = None


class SiteAlertCreateRequest(BaseModel):
    message: str = Field(..., min_length=1)
    active: bool = True
    priority: int = Field(default=1, ge=1, le=10)
    background_color: Optional[str] = Field(default=None, max_length=20)
    text_color: Optional[str] = Field(default=None, max_length=20)
    url: Optional[str] = None


class SiteAlertUpdateRequest(BaseModel):
    message: Optional[str] = Field(default=None, min_length=1)
    active: Optional[bool] = None
    priority: Optional[int] = Field(default=None, ge=1, le=10)
    background_color: Optional[str] = Field(default=None, max_length=20)
    text_color: Optional[str] = Field(default=None, max_length=20)
    url: Optional[str] = None

    @field_validator("message", "active", "priority", "background_color", "text_color", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value
