"""API v1 request and response schemas."""

from api.v1.schemas.live_coverage import (
    CoverageCreateRequest,
    CoverageUpdateRequest,
    CoverageResponse,
    CoverageListResponse,
    UpdateCreateRequest,
    UpdateResponse,
    UpdateListResponse,
    QuestionSubmitRequest,
    QuestionModerateRequest,
    QuestionAnswerRequest,
    QuestionResponse,
    QuestionListResponse,
    EditorAddRequest,
    EditorResponse,
    EditorListResponse,
)
from api.v1.schemas.articles import (
    ArticleResponse,
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleCreateRequest,
    ArticleUpdateRequest,
    CategoryResponse,
    CategoryCreateRequest,
)
from api.v1.schemas.elections import (
    ElectionResponse,
    ElectionWriteResponse,
    ElectionCreateRequest,
    ElectionUpdateRequest,
)
from api.v1.schemas.site_alerts import (
    SiteAlertResponse,
    SiteAlertCreateRequest,
    SiteAlertUpdateRequest,
)
from api.v1.schemas.team import (
    UserResponse,
    TeamMemberResponse,
    LoginRequest,
    UserCreateRequest,
    UserProfileUpdateRequest,
    PasswordUpdateRequest,
    TeamApplicationRequest,
    TeamApplicationResponse,
    TeamApplicationListResponse,
    ApplicationReviewRequest,
)
from api.v1.schemas.educational import (
    EducationalTopicResponse,
    EducationalTopicCreateRequest,
    EducationalContentResponse,
    EducationalContentListResponse,
    EducationalContentCreateRequest,
    EducationalContentUpdateRequest,
)
from api.v1.schemas.media import (
    FlashInfoResponse,
    FlashInfoCreateRequest,
    FlashInfoUpdateRequest,
    VideoResponse,
    VideoCreateRequest,
)

__all__ = [
    "CoverageCreateRequest",
    "CoverageUpdateRequest",
    "CoverageResponse",
    "CoverageListResponse",
    "UpdateCreateRequest",
    "UpdateResponse",
    "UpdateListResponse",
    "QuestionSubmitRequest",
    "QuestionModerateRequest",
    "QuestionAnswerRequest",
    "QuestionResponse",
    "QuestionListResponse",
    "EditorAddRequest",
    "EditorResponse",
    "EditorListResponse",
    "ArticleResponse",
    "ArticleDetailResponse",
    "ArticleListResponse",
    "ArticleCreateRequest",
    "ArticleUpdateRequest",
    "CategoryResponse",
    "CategoryCreateRequest",
    "ElectionResponse",
    "ElectionWriteResponse",
    "ElectionCreateRequest",
    "ElectionUpdateRequest",
    "SiteAlertResponse",
    "SiteAlertCreateRequest",
    "SiteAlertUpdateRequest",
    "UserResponse",
    "TeamMemberResponse",
    "LoginRequest",
    "UserCreateRequest",
    "UserProfileUpdateRequest",
    "PasswordUpdateRequest",
    "TeamApplicationRequest",
    "TeamApplicationResponse",
    "TeamApplicationListResponse",
    "ApplicationReviewRequest",
    "EducationalTopicResponse",
    "EducationalTopicCreateRequest",
    "EducationalContentResponse",
    "EducationalContentListResponse",
    "EducationalContentCreateRequest",
    "EducationalContentUpdateRequest",
    "FlashInfoResponse",
    "FlashInfoCreateRequest",
    "FlashInfoUpdateRequest",
    "VideoResponse",
    "VideoCreateRequest",
]
