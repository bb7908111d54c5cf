"""
Models package for Newsdesk.

This package contains the Pydantic domain models and closed enums
shared by repositories, services and the API layer.
"""

from .article import ArticleFilters, ArticleSort
from .election import ElectionResult, ElectionResultsData, check_percentage_total
from .live_coverage import (
    QuestionStatus,
    UpdateKind,
    UpdatePayload,
    NormalPayload,
    RecapPayload,
    YoutubePayload,
    ArticlePayload,
    ElectionPayload,
    NewUpdate,
    AuthorSummary,
)
from .team import ApplicationStatus, UserRole

__all__ = [
    "ArticleFilters",
    "ArticleSort",
    "ElectionResult",
    "ElectionResultsData",
    "check_percentage_total",
    "QuestionStatus",
    "UpdateKind",
    "UpdatePayload",
    "NormalPayload",
    "RecapPayload",
    "YoutubePayload",
    "ArticlePayload",
    "ElectionPayload",
    "NewUpdate",
    "AuthorSummary",
    "ApplicationStatus",
    "UserRole",
]
