"""
Repository package for data access operations.

Implements repository pattern for abstracting database operations.
"""

from .article_repository import ArticleRepository
from .category_repository import CategoryRepository
from .educational_repository import EducationalRepository
from .election_repository import ElectionRepository
from .flash_info_repository import FlashInfoRepository
from .live_coverage_repository import LiveCoverageRepository
from .site_alert_repository import SiteAlertRepository
from .team_application_repository import TeamApplicationRepository
from .user_repository import UserRepository
from .video_repository import VideoRepository

__all__ = [
    "ArticleRepository",
    "CategoryRepository",
    "EducationalRepository",
    "ElectionRepository",
    "FlashInfoRepository",
    "LiveCoverageRepository",
    "SiteAlertRepository",
    "TeamApplicationRepository",
    "UserRepository",
    "VideoRepository",
]
