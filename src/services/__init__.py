"""Services package for business logic"""

from .live_coverage_service import (
    LiveCoverageService,
    LiveCoverageError,
    CoverageNotFoundError,
    QuestionNotFoundError,
    ArticleNotFoundError,
    ActiveCoverageLimitError,
    InvalidQuestionStatusError,
)

__all__ = [
    "LiveCoverageService",
    "LiveCoverageError",
    "CoverageNotFoundError",
    "QuestionNotFoundError",
    "ArticleNotFoundError",
    "ActiveCoverageLimitError",
    "InvalidQuestionStatusError",
]
