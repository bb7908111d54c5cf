"""
Pydantic schemas for users, the public team page and team applications.

Responsibility: User, team member and application schemas
"""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.team import ApplicationStatus, UserRole


class UserResponse(BaseModel):
    """User as seen by admins and by the user themself (no hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    display_name: str
    role: str
    title: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    is_team_member: bool
    created_at: datetime


class TeamMemberResponse(BaseModel):
    """Public profile shown on the team page."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    display_name: str
    title: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class UserCreateRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=100, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(..., min_length=8, max_length=72)
    display_name: str = Field(..., min_length=1, max_length=200)
    role: UserRole = UserRole.EDITOR
    title: Optional[str] = Field(default=None, max_length=200)
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    is_team_member: bool = False


class UserProfileUpdateRequest(BaseModel):
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    role: Optional[UserRole] = None
    title: Optional[str] = Field(default=None, max_length=200)
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    is_team_member: Optional[bool] = None

    @field_validator("display_name", "role", "is_team_member", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class PasswordUpdateRequest(BaseModel):
    password: str = Field(..., min_length=8, max_length=72)


class TeamApplicationRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = Field(default=None, max_length=50)
    position: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    cv_url: Optional[str] = None


class TeamApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    position: str
    message: str
    cv_url: Optional[str] = None
    status: str
    submission_date: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    notes: Optional[str] = None


class TeamApplicationListResponse(BaseModel):
    applications: List[TeamApplicationResponse]
    total: int


class ApplicationReviewRequest(BaseModel):
    status: ApplicationStatus
    notes: Optional[str] = None
