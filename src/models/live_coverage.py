"""
Live coverage domain models.

Closed enums and the tagged update payload used by the live coverage
engine. Each update kind carries exactly the fields it needs, so a
"youtube" update cannot be stored without a URL and a "normal" one cannot
smuggle an article reference.

Responsibility: Typed vocabulary of the live coverage feed
"""

from enum import Enum
from typing import Optional, Union, Literal, Annotated
from pydantic import BaseModel, Field, HttpUrl

from .election import ElectionResultsData


class QuestionStatus(str, Enum):
    """Moderation state of a visitor question"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UpdateKind(str, Enum):
    """Kind of rich content attached to a feed update"""
    NORMAL = "normal"
    YOUTUBE = "youtube"
    ARTICLE = "article"
    ELECTION = "election"
    RECAP = "recap"


class NormalPayload(BaseModel):
    kind: Literal[UpdateKind.NORMAL] = UpdateKind.NORMAL


class RecapPayload(BaseModel):
    """Summary of the coverage so far; the content itself is the recap."""
    kind: Literal[UpdateKind.RECAP] = UpdateKind.RECAP


class YoutubePayload(BaseModel):
    kind: Literal[UpdateKind.YOUTUBE] = UpdateKind.YOUTUBE
    youtube_url: HttpUrl


class ArticlePayload(BaseModel):
    kind: Literal[UpdateKind.ARTICLE] = UpdateKind.ARTICLE
    article_id: int = Field(ge=1)


class ElectionPayload(BaseModel):
    kind: Literal[UpdateKind.ELECTION] = UpdateKind.ELECTION
    election_results: ElectionResultsData


UpdatePayload = Annotated[
    Union[NormalPayload, RecapPayload, YoutubePayload, ArticlePayload, ElectionPayload],
    Field(discriminator="kind"),
]


class NewUpdate(BaseModel):
    """Input of the feed-append operation"""

    coverage_id: int
    author_id: Optional[int] = None
    content: str = Field(min_length=1)
    important: bool = False
    image_url: Optional[str] = None
    payload: UpdatePayload = Field(default_factory=NormalPayload)


class AuthorSummary(BaseModel):
    """Denormalized author (or editor) fields joined onto feed rows"""

    display_name: str
    title: Optional[str] = None
    avatar_url: Optional[str] = None
