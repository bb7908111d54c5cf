"""Tests for the rate limiting middleware."""

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.middleware import RateLimitConfig, RateLimiterMiddleware
from api.middleware.rate_limiter import (
    InMemoryRateLimiter,
    RedisRateLimiter,
    _redis_backends,
    close_backends,
    endpoint_limits,
)
from src.config import settings


def _make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimiterMiddleware, redis_url=None)

    @app.post("/api/live-coverages/{coverage_id}/questions")
    async def submit_question(coverage_id: int):
        return {"coverage_id": coverage_id}

    @app.get("/api/live-coverages/{coverage_id}/updates")
    async def list_updates(coverage_id: int):
        return {"updates": []}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.fixture
def limited_client(monkeypatch) -> TestClient:
    monkeypatch.setattr(settings.app, "rate_limit_enabled", True)
    monkeypatch.setattr(RateLimitConfig, "QUESTIONS_PER_MINUTE", 2)
    return TestClient(_make_app())


def test_question_submission_is_limited(limited_client) -> None:
    url = "/api/live-coverages/1/questions"

    assert limited_client.post(url).status_code == 200
    assert limited_client.post(url).status_code == 200
    response = limited_client.post(url)

    assert response.status_code == 429
    assert int(response.headers["Retry-After"]) > 0
    assert response.headers["X-RateLimit-Limit"] == "2"
    assert response.json()["error"] == "rate_limit_exceeded"


def test_limits_are_per_client_ip(limited_client) -> None:
    url = "/api/live-coverages/1/questions"
    for _ in range(2):
        limited_client.post(url, headers={"X-Forwarded-For": "203.0.113.7"})

    blocked = limited_client.post(url, headers={"X-Forwarded-For": "203.0.113.7"})
    other = limited_client.post(url, headers={"X-Forwarded-For": "198.51.100.2"})

    assert blocked.status_code == 429
    assert other.status_code == 200


def test_feed_polling_only_counts_against_burst(limited_client) -> None:
    for _ in range(5):
        response = limited_client.get("/api/live-coverages/1/updates")
        assert response.status_code == 200

    assert response.headers["X-RateLimit-Burst-Limit"] == str(RateLimitConfig.BURST)
    assert response.headers["X-RateLimit-Burst-Remaining"] == str(RateLimitConfig.BURST - 5)


def test_paths_outside_api_are_not_limited(limited_client) -> None:
    response = limited_client.get("/health")

    assert response.status_code == 200
    assert "X-RateLimit-Burst-Limit" not in response.headers


def test_disabled_limiter_lets_everything_through() -> None:
    client = TestClient(_make_app())

    for _ in range(RateLimitConfig.QUESTIONS_PER_MINUTE + 3):
        assert client.post("/api/live-coverages/1/questions").status_code == 200


def test_endpoint_limits() -> None:
    assert endpoint_limits("questions") == [
        (RateLimitConfig.QUESTIONS_PER_MINUTE, RateLimitConfig.MINUTE_WINDOW),
        (RateLimitConfig.QUESTIONS_HOURLY, RateLimitConfig.HOURLY_WINDOW),
    ]
    assert endpoint_limits("unknown") == []


async def test_in_memory_window() -> None:
    limiter = InMemoryRateLimiter()

    assert await limiter.increment("key", 60) == 1
    assert await limiter.increment("key", 60) == 2
    assert 0 < await limiter.get_ttl("key") <= 60
    assert await limiter.get_ttl("missing") == 0

    limiter.reset()
    assert await limiter.increment("key", 60) == 1


async def test_expired_window_restarts(monkeypatch) -> None:
    limiter = InMemoryRateLimiter()
    clock = [1000.0]
    monkeypatch.setattr("api.middleware.rate_limiter.time.time", lambda: clock[0])

    await limiter.increment("key", 60)
    await limiter.increment("key", 60)
    clock[0] += 61

    assert await limiter.increment("key", 60) == 1


class _FakeRedis:
    def __init__(self):
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True


def test_close_backends_disconnects_redis(monkeypatch) -> None:
    fake = _FakeRedis()

    async def connect(self) -> None:
        self.redis = fake

    monkeypatch.setattr(RedisRateLimiter, "connect", connect)
    monkeypatch.setattr(settings.app, "rate_limit_enabled", True)

    app = FastAPI()
    app.add_middleware(RateLimiterMiddleware, redis_url="redis://localhost:6379/0")

    @app.get("/api/articles")
    async def list_articles():
        return {"articles": []}

    # The fake client has no pipeline, so counting fails open
    assert TestClient(app).get("/api/articles").status_code == 200
    assert len(_redis_backends) == 1

    asyncio.run(close_backends())

    assert fake.closed
    assert _redis_backends == []
