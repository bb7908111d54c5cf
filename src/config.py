"""
Configuration management for Newsdesk.

Settings come from environment variables (and .env), grouped by concern:
APP_* for the web application and back-office sessions, DB_* or
DATABASE_URL for the store, REDIS_* for the rate limiter backend and
LIVE_* for live coverage behaviour.

Responsibility: Centralized configuration and environment management
"""

from enum import Enum
from typing import Optional, List
import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment"""
    LOCAL = "local"
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class DatabaseConfig(BaseSettings):
    """
    Relational store settings.

    DATABASE_URL, when present, wins over the individual DB_* fields.
    Any PostgreSQL URL is rewritten to use the asyncpg driver.
    """

    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")
    driver: str = Field(default="postgresql+asyncpg")
    host: Optional[str] = Field(default="localhost")
    port: Optional[int] = Field(default=5432)
    database: str = Field(default="newsdesk")
    username: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)

    # asyncpg pool (ignored for SQLite)
    pool_size: int = Field(default=5)
    max_overflow: int = Field(default=10)
    pool_timeout: int = Field(default=30)
    pool_recycle: int = Field(default=3600)

    echo: bool = Field(default=False)
    echo_pool: bool = Field(default=False)

    # Local/dev convenience; deployed databases are migrated with Alembic
    create_tables_on_startup: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    @staticmethod
    def _async_url(url: str) -> str:
        for prefix in ("postgres://", "postgresql://"):
            if url.startswith(prefix):
                return "postgresql+asyncpg://" + url[len(prefix):]
        return url

    @property
    def connection_string(self) -> str:
        """
        SQLAlchemy async URL for the configured store.

        Returns:
            e.g. postgresql+asyncpg://user:pw@host:5432/newsdesk or
            sqlite+aiosqlite:///newsdesk.db
        """
        if self.database_url:
            return self._async_url(self.database_url)

        if self.driver.startswith("sqlite"):
            return f"{self.driver}:///{self.database}"

        credentials = ""
        if self.username:
            credentials = self.username
            if self.password:
                credentials += f":{self.password}"
            credentials += "@"

        location = self.host or "localhost"
        if self.port:
            location += f":{self.port}"

        return f"{self.driver}://{credentials}{location}/{self.database}"


class RedisConfig(BaseSettings):
    """Redis settings; only used as the shared rate limiter store"""

    enabled: bool = Field(default=False)
    host: str = Field(default="localhost")
    port: int = Field(default=6379)
    db: int = Field(default=0)
    password: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def connection_string(self) -> str:
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


class LiveConfig(BaseSettings):
    """Live coverage (liveblog) behaviour"""

    # Refresh interval advertised to the back-office feed view (seconds)
    poll_interval_seconds: int = Field(default=10, ge=1)
    # Refresh interval advertised to public readers (seconds)
    public_poll_interval_seconds: int = Field(default=60, ge=1)
    # Active coverages allowed when creating a new active one (0 = no cap)
    max_active_coverages: int = Field(default=3, ge=0)
    question_max_length: int = Field(default=1000, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="LIVE_",
        case_sensitive=False,
        extra="ignore"
    )


class AppConfig(BaseSettings):
    """Web application, back-office session and security settings"""

    environment: Environment = Field(default=Environment.LOCAL)
    debug: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    app_name: str = Field(default="Newsdesk")
    app_version: str = Field(default="1.0.0")

    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    # Front-end origins allowed to call the API with credentials
    cors_origins: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:5000"],
        description="JSON list, or comma-separated when passed directly"
    )

    # Signed session cookie holding the logged-in user id
    session_secret: str = Field(default="dev-change-this-secret")
    session_cookie: str = Field(default="newsdesk_session")
    session_max_age: int = Field(default=7 * 24 * 3600)
    session_https_only: bool = Field(default=False)

    # bcrypt cost factor for stored passwords
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    rate_limit_enabled: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        """Accept a list, a JSON list string or a comma-separated string"""
        if not isinstance(value, str):
            return value

        text = value.strip().strip("'\"")
        if text.startswith("["):
            try:
                return json.loads(text)
            except json.JSONDecodeError:
                text = text.strip("[]")
        return [origin.strip().strip("'\"") for origin in text.split(",") if origin.strip()]


class Settings(BaseSettings):
    """
    Global settings container.

    Example:
        # Local development against a SQLite file
        settings = Settings(
            db=DatabaseConfig(driver="sqlite+aiosqlite", database="newsdesk.db")
        )

        # Deployed
        settings = Settings.for_production()
    """

    app: AppConfig = Field(default_factory=AppConfig)
    db: DatabaseConfig = Field(default_factory=DatabaseConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    live: LiveConfig = Field(default_factory=LiveConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def redis_url(self) -> Optional[str]:
        """Rate limiter backend URL, None when Redis is disabled"""
        return self.redis.connection_string if self.redis.enabled else None

    @classmethod
    def for_production(cls) -> "Settings":
        """
        Production defaults: no debug output, HTTPS-only session cookie,
        Redis-backed rate limiting.

        Still reads DATABASE_URL (or DB_*), REDIS_* and APP_SESSION_SECRET
        from the environment.
        """
        return cls(
            app=AppConfig(
                environment=Environment.PRODUCTION,
                debug=False,
                session_https_only=True
            ),
            redis=RedisConfig(enabled=True),
        )


# Global settings instance
settings = Settings()
