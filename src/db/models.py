"""
SQLAlchemy database models for Newsdesk.

ORM models that map to database tables with proper indexing,
constraints, and relationships.

Responsibility: Define database schema and ORM mappings
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from sqlalchemy import (
    String, Integer, DateTime, Boolean, Text, JSON,
    ForeignKey, Index, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Naive UTC timestamp used for every stored datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all ORM models"""
    pass


class UserModel(Base):
    """
    Database model for back-office users (admins, editors).

    Display fields (display_name, title, avatar_url) are denormalized into
    the live coverage feed as the author summary.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="editor")
    avatar_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_team_member: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'editor', 'user')",
            name="ck_user_role"
        ),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"


class CategoryModel(Base):
    """Article category (rubrique)."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default="#FF4D4D")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, slug='{self.slug}')>"


class ArticleModel(Base):
    """
    Database model for published articles.

    At most one article carries featured=True; the article repository
    clears the flag on the others whenever one is set.
    """

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    author_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True, index=True
    )
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=True, index=True
    )
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sources: Mapped[Optional[List[Dict[str, Any]]]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        Index("idx_article_published_created", "published", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, slug='{self.slug}', featured={self.featured})>"


class ElectionModel(Base):
    """
    Election with its results.

    results is a JSON list of {candidate, party, votes?, percentage, color}.
    """

    __tablename__ = "elections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    country_code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    round: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    total_votes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    display_type: Mapped[str] = mapped_column(String(10), nullable=False, default="bar")
    results: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    upcoming: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Election(id={self.id}, title='{self.title}')>"


class LiveCoverageModel(Base):
    """
    A named liveblog session ("suivi en direct").

    Several coverages may be active at once; the most recently created
    active one is treated as the primary live event.
    """

    __tablename__ = "live_coverages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    context: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<LiveCoverage(id={self.id}, slug='{self.slug}', active={self.active})>"


class LiveCoverageEditorModel(Base):
    """Assignment of a user to a coverage, granting posting rights."""

    __tablename__ = "live_coverage_editors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    coverage_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("live_coverages.id"), nullable=False, index=True
    )
    editor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    role: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("coverage_id", "editor_id", name="uq_live_coverage_editor"),
    )


class LiveCoverageQuestionModel(Base):
    """Visitor question awaiting moderation."""

    __tablename__ = "live_coverage_questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    coverage_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("live_coverages.id"), nullable=False, index=True
    )
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    answered: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_question_status"
        ),
        Index("idx_question_coverage_status", "coverage_id", "status"),
    )


class LiveCoverageUpdateModel(Base):
    """
    Append-only feed entry of a coverage.

    update_type selects which optional payload column is meaningful:
    youtube -> youtube_url, article -> article_id, election ->
    election_results (JSON-encoded string); normal and recap carry
    content only.
    """

    __tablename__ = "live_coverage_updates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    coverage_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("live_coverages.id"), nullable=False, index=True
    )
    author_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    important: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Answers to visitor questions
    is_answer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    question_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("live_coverage_questions.id"), nullable=True
    )

    # Rich payloads
    update_type: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")
    youtube_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    article_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("articles.id"), nullable=True
    )
    election_results: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_update_coverage_timestamp", "coverage_id", "timestamp"),
    )


class TeamApplicationModel(Base):
    """Application to join the editorial team."""

    __tablename__ = "team_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    position: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    cv_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)
    submission_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    reviewed_by: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class SiteAlertModel(Base):
    """Banner alert displayed across the public site."""

    __tablename__ = "site_alerts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    background_color: Mapped[str] = mapped_column(String(20), nullable=False, default="#dc2626")
    text_color: Mapped[str] = mapped_column(String(20), nullable=False, default="#ffffff")
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    created_by: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )

    __table_args__ = (
        CheckConstraint("priority BETWEEN 1 AND 10", name="ck_site_alert_priority"),
    )


class FlashInfoModel(Base):
    """Breaking-news item (flash info); higher priority is shown first."""

    __tablename__ = "flash_infos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # "En savoir plus" link
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    __table_args__ = (
        Index("idx_flash_info_active_priority", "active", "priority"),
    )

    def __repr__(self) -> str:
        return f"<FlashInfo(id={self.id}, active={self.active}, priority={self.priority})>"


class VideoModel(Base):
    """Short YouTube video shown in the video strip."""

    __tablename__ = "videos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    # YouTube video id, not a URL
    video_id: Mapped[str] = mapped_column(String(50), nullable=False)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    published_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )


class EducationalTopicModel(Base):
    """Topic of the "Learn" section; groups educational content."""

    __tablename__ = "educational_topics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    # lucide-react icon name
    icon: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default="#3B82F6")
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    author_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<EducationalTopic(id={self.id}, slug='{self.slug}')>"


class EducationalContentModel(Base):
    """
    Lesson inside an educational topic.

    category_id optionally files the lesson under a site category so it
    can be listed next to that category's articles.
    """

    __tablename__ = "educational_content"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    topic_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("educational_topics.id"), nullable=False, index=True
    )
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=True, index=True
    )
    author_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<EducationalContent(id={self.id}, slug='{self.slug}', topic_id={self.topic_id})>"
