"""
Pydantic schemas for live coverage API requests and responses.

Responsibility: Live coverage, feed update, question and editor schemas
"""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.live_coverage import AuthorSummary, NormalPayload, QuestionStatus, UpdatePayload

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


# MARK: Coverages

class CoverageCreateRequest(BaseModel):
    """Request schema for creating a coverage."""

    title: str = Field(..., min_length=1, max_length=300)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    subject: str = Field(..., min_length=1)
    context: str = ""
    image_url: Optional[str] = None
    active: bool = True


class CoverageUpdateRequest(BaseModel):
    """Partial patch; only fields present in the body are applied."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    subject: Optional[str] = Field(default=None, min_length=1)
    context: Optional[str] = None
    image_url: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("title", "slug", "subject", "context", "active", mode="before")
    @classmethod
    def reject_null(cls, value):
        """Required columns may be left out of the patch but never cleared."""
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class CoverageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    subject: str
    context: str
    image_url: Optional[str] = None
    active: bool
    created_at: datetime
    updated_at: datetime


class CoverageListResponse(BaseModel):
    coverages: List[CoverageResponse]
    total: int


# MARK: Updates

class UpdateCreateRequest(BaseModel):
    """
    Request schema for appending a feed update.

    payload.kind selects the content kind; youtube, article and election
    kinds require their own field, normal and recap carry none.
    """

    content: str = Field(..., min_length=1)
    important: bool = False
    image_url: Optional[str] = None
    payload: UpdatePayload = Field(default_factory=NormalPayload)


class UpdateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    coverage_id: int
    author_id: Optional[int] = None
    content: str
    timestamp: datetime
    image_url: Optional[str] = None
    important: bool
    is_answer: bool
    question_id: Optional[int] = None
    update_type: str
    youtube_url: Optional[str] = None
    article_id: Optional[int] = None
    election_results: Optional[str] = Field(
        default=None, description="JSON-encoded election results"
    )
    author: Optional[AuthorSummary] = None


class UpdateListResponse(BaseModel):
    coverage_id: int
    updates: List[UpdateResponse]
    total: int
    poll_interval_seconds: int


# MARK: Questions

class QuestionSubmitRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1)


class QuestionModerateRequest(BaseModel):
    """answered=true marks the question answered; omitted or false leaves the flag as is."""

    status: QuestionStatus
    answered: Optional[bool] = None


class QuestionAnswerRequest(BaseModel):
    coverage_id: int
    content: str = Field(..., min_length=1)
    important: bool = False


class QuestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    coverage_id: int
    username: str
    content: str
    timestamp: datetime
    status: str
    answered: bool
    updated_at: datetime


class QuestionListResponse(BaseModel):
    questions: List[QuestionResponse]
    total: int


# MARK: Editors

class EditorAddRequest(BaseModel):
    editor_id: int
    role: Optional[str] = Field(default=None, max_length=100)


class EditorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    coverage_id: int
    editor_id: int
    role: Optional[str] = None
    created_at: datetime
    editor: Optional[AuthorSummary] = None


class EditorListResponse(BaseModel):
    editors: List[EditorResponse]
    total: int
