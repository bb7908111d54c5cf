"""
Database package for Newsdesk.

Provides ORM models, session management, and repository pattern
for data persistence.
"""

from .models import (
    Base,
    UserModel,
    CategoryModel,
    ArticleModel,
    ElectionModel,
    LiveCoverageModel,
    LiveCoverageEditorModel,
    LiveCoverageQuestionModel,
    LiveCoverageUpdateModel,
    TeamApplicationModel,
    SiteAlertModel,
    FlashInfoModel,
    VideoModel,
    EducationalTopicModel,
    EducationalContentModel,
)
from .session import Database, db, get_db

__all__ = [
    "Base",
    "UserModel",
    "CategoryModel",
    "ArticleModel",
    "ElectionModel",
    "LiveCoverageModel",
    "LiveCoverageEditorModel",
    "LiveCoverageQuestionModel",
    "LiveCoverageUpdateModel",
    "TeamApplicationModel",
    "SiteAlertModel",
    "FlashInfoModel",
    "VideoModel",
    "EducationalTopicModel",
    "EducationalContentModel",
    "Database",
    "db",
    "get_db",
]
