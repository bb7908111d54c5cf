"""Tests for settings parsing."""

from src.config import AppConfig, DatabaseConfig, Environment, RedisConfig, Settings


def test_database_url_is_normalized_to_asyncpg(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)

    config = DatabaseConfig(database_url="postgres://news:pw@db.internal:5432/newsdesk")

    assert config.connection_string == "postgresql+asyncpg://news:pw@db.internal:5432/newsdesk"


def test_sqlite_connection_string(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)

    config = DatabaseConfig(driver="sqlite+aiosqlite", database="/tmp/newsdesk.db")

    assert config.connection_string == "sqlite+aiosqlite:////tmp/newsdesk.db"


def test_postgres_connection_string_from_parts(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)

    config = DatabaseConfig(host="db", port=5433, database="news", username="u", password="p")

    assert config.connection_string == "postgresql+asyncpg://u:p@db:5433/news"


def test_cors_origins_accept_json_and_comma_lists() -> None:
    assert AppConfig(cors_origins='["https://a.fr", "https://b.fr"]').cors_origins == [
        "https://a.fr", "https://b.fr"
    ]
    assert AppConfig(cors_origins="https://a.fr, https://b.fr").cors_origins == [
        "https://a.fr", "https://b.fr"
    ]


def test_redis_url_only_when_enabled() -> None:
    disabled = Settings(redis=RedisConfig(enabled=False))
    enabled = Settings(redis=RedisConfig(enabled=True, host="cache", password="secret"))

    assert disabled.redis_url is None
    assert enabled.redis_url == "redis://:secret@cache:6379/0"


def test_production_settings() -> None:
    production = Settings.for_production()

    assert production.app.environment == Environment.PRODUCTION
    assert production.app.debug is False
    assert production.app.session_https_only is True
    assert production.redis.enabled is True
