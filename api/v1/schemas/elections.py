"""
Pydantic schemas for election API requests and responses.

Responsibility: Election schemas
"""

from typing import Optional, List, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.election import ElectionResult


class ElectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    country: str
    country_code: str
    title: str
    date: datetime
    type: str
    round: Optional[int] = None
    location: Optional[str] = None
    total_votes: Optional[int] = None
    display_type: str
    results: List[ElectionResult]
    description: Optional[str] = None
    upcoming: bool
    created_at: datetime


class ElectionWriteResponse(BaseModel):
    """Admin write result; warning is set when percentages do not sum to ~100."""

    election: ElectionResponse
    warning: Optional[str] = None


class ElectionCreateRequest(BaseModel):
    country: str = Field(..., min_length=1, max_length=100)
    country_code: str = Field(..., min_length=2, max_length=10)
    title: str = Field(..., min_length=1)
    date: datetime
    type: str = Field(..., min_length=1, max_length=50)
    round: Optional[int] = Field(default=None, ge=1)
    location: Optional[str] = None
    total_votes: Optional[int] = Field(default=None, ge=0)
    display_type: Literal["bar", "pie"] = "bar"
    results: List[ElectionResult] = Field(default_factory=list)
    description: Optional[str] = None
    upcoming: bool = False


class ElectionUpdateRequest(BaseModel):
    country: Optional[str] = Field(default=None, min_length=1, max_length=100)
    country_code: Optional[str] = Field(default=None, min_length=2, max_length=10)
    title: Optional[str] = Field(default=None, min_length=1)
    date: Optional[datetime] = None
    type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    round: Optional[int] = Field(default=None, ge=1)
    location: Optional[str] = None
    total_votes: Optional[int] = Field(default=None, ge=0)
    display_type: Optional[Literal["bar", "pie"]] = None
    results: Optional[List[ElectionResult]] = None
    description: Optional[str] = None
    upcoming: Optional[bool] = None

    @field_validator(
        "country", "country_code", "title", "date", "type", "display_type", "results", "upcoming",
        mode="before"
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value
