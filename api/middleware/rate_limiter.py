"""
Rate Limiting Middleware
=========================
Fixed-window request counters keyed by a hash of the client IP.

Every /api request counts against a per-minute burst budget. Anonymous
writes (reader questions on a live coverage, team applications, login
attempts) also count against their own, much smaller, budgets. Counters
live in Redis when it is configured and reachable, otherwise in process
memory.

Limits:
    - Burst: 300 req/min per IP (live feeds are polled)
    - Questions: 5 req/min and 30 req/hour per IP
    - Team applications: 5 req/hour per IP
    - Login: 10 req/min per IP
"""

import re
from typing import Dict, List, Optional, Tuple
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import redis.asyncio as aioredis
import hashlib
import time
import logging

from src.config import settings

logger = logging.getLogger(__name__)


class RateLimitConfig:
    """Request budgets, read at request time so they can be tuned at runtime"""

    BURST = 300

    QUESTIONS_PER_MINUTE = 5
    QUESTIONS_HOURLY = 30
    TEAM_APPLICATIONS_HOURLY = 5
    LOGIN_PER_MINUTE = 10

    MINUTE_WINDOW = 60
    HOURLY_WINDOW = 3600


# Anonymous write endpoints with their own budgets
LIMITED_ROUTES = {
    "questions": ("POST", re.compile(r"^/api/live-coverages/\d+/questions/?$")),
    "team_applications": ("POST", re.compile(r"^/api/team/applications/?$")),
    "login": ("POST", re.compile(r"^/api/auth/login/?$")),
}


def endpoint_limits(endpoint_type: str) -> List[Tuple[int, int]]:
    """
    Budgets for a limited route.

    Args:
        endpoint_type: Key of LIMITED_ROUTES

    Returns:
        (limit, window_seconds) pairs, empty for unknown types
    """
    config = RateLimitConfig
    budgets = {
        "questions": [
            (config.QUESTIONS_PER_MINUTE, config.MINUTE_WINDOW),
            (config.QUESTIONS_HOURLY, config.HOURLY_WINDOW),
        ],
        "team_applications": [(config.TEAM_APPLICATIONS_HOURLY, config.HOURLY_WINDOW)],
        "login": [(config.LOGIN_PER_MINUTE, config.MINUTE_WINDOW)],
    }
    return budgets.get(endpoint_type, [])


def classify_route(method: str, path: str) -> Optional[str]:
    for endpoint_type, (route_method, pattern) in LIMITED_ROUTES.items():
        if method == route_method and pattern.match(path):
            return endpoint_type
    return None


class InMemoryRateLimiter:
    """
    Per-process counters: {key: [count, window_end]}.

    Each worker keeps its own counts, so effective limits multiply with
    the number of workers. Deployments should enable Redis.
    """

    SWEEP_EVERY = 300

    def __init__(self):
        self.windows: Dict[str, List[float]] = {}
        self.next_sweep = time.time() + self.SWEEP_EVERY

    async def increment(self, key: str, window: int) -> int:
        now = time.time()
        if now >= self.next_sweep:
            self._sweep(now)

        current = self.windows.get(key)
        if current is None or now > current[1]:
            current = [0, now + window]
            self.windows[key] = current

        current[0] += 1
        return int(current[0])

    async def get_ttl(self, key: str) -> int:
        current = self.windows.get(key)
        if current is None:
            return 0
        return max(0, int(current[1] - time.time()))

    def reset(self) -> None:
        self.windows.clear()

    def _sweep(self, now: float) -> None:
        stale = [key for key, (_, window_end) in self.windows.items() if now > window_end]
        for key in stale:
            del self.windows[key]
        self.next_sweep = now + self.SWEEP_EVERY
        logger.debug(f"Dropped {len(stale)} expired rate limit windows")


class RedisRateLimiter:
    """Counters shared by every worker; the window opens on the first hit"""

    def __init__(self, redis_url: str):
        self.redis_url = redis_url
        self.redis: Optional[aioredis.Redis] = None

    async def connect(self) -> None:
        client = aioredis.from_url(
            self.redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5
        )
        await client.ping()
        self.redis = client

    async def disconnect(self) -> None:
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    def _client(self) -> aioredis.Redis:
        if not self.redis:
            raise RuntimeError("Redis not connected")
        return self.redis

    async def increment(self, key: str, window: int) -> int:
        async with self._client().pipeline(transaction=True) as pipe:
            pipe.incr(key)
            pipe.expire(key, window, nx=True)
            count, _ = await pipe.execute()
        return count

    async def get_ttl(self, key: str) -> int:
        return max(0, await self._client().ttl(key))


# Redis backends opened by middleware instances; closed on app shutdown
_redis_backends: List[RedisRateLimiter] = []


async def close_backends() -> None:
    """Close every Redis connection the rate limiter opened."""
    while _redis_backends:
        await _redis_backends.pop().disconnect()


class RateLimiterMiddleware(BaseHTTPMiddleware):
    """
    Enforces the burst budget on /api and the per-route budgets on
    anonymous writes.

    Over budget requests get 429 with a Retry-After header. The backend is
    chosen on the first counted request; when Redis cannot be reached the
    in-memory counters take over.
    """

    def __init__(self, app, redis_url: Optional[str] = None):
        super().__init__(app)
        self.redis_url = redis_url
        self.backend = None

    async def _get_backend(self):
        if self.backend is not None:
            return self.backend

        if self.redis_url:
            candidate = RedisRateLimiter(self.redis_url)
            try:
                await candidate.connect()
                logger.info("Rate limiter using Redis backend")
                _redis_backends.append(candidate)
                self.backend = candidate
                return self.backend
            except Exception as e:
                logger.warning(f"Redis unavailable for rate limiting, counting in memory: {e}")
        else:
            logger.info("Rate limiter counting in memory (single worker only)")

        self.backend = InMemoryRateLimiter()
        return self.backend

    @staticmethod
    def client_key(request: Request) -> str:
        """Hashed client address; the first X-Forwarded-For hop wins"""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            ip = forwarded.split(",")[0].strip()
        else:
            ip = request.headers.get("X-Real-IP", "").strip()
            if not ip:
                ip = request.client.host if request.client else "unknown"
        return hashlib.sha256(ip.encode()).hexdigest()[:16]

    async def _hit(self, key: str, window: int) -> Tuple[int, int]:
        """
        Count one request.

        Returns:
            (count, seconds_left); (0, 0) when the backend fails, so the
            request is let through
        """
        try:
            backend = await self._get_backend()
            count = await backend.increment(key, window)
            return count, await backend.get_ttl(key)
        except Exception as e:
            logger.error(f"Rate limit check failed: {e}")
            return 0, 0

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not settings.app.rate_limit_enabled or not path.startswith("/api/"):
            return await call_next(request)

        client = self.client_key(request)

        burst = RateLimitConfig.BURST
        burst_count, burst_ttl = await self._hit(f"rl:burst:{client}", RateLimitConfig.MINUTE_WINDOW)
        if burst_count > burst:
            return self._too_many_requests(
                "Too many requests per minute", burst, burst_count, burst_ttl
            )

        endpoint_type = classify_route(request.method, path)
        for limit, window in endpoint_limits(endpoint_type or ""):
            count, ttl = await self._hit(f"rl:{endpoint_type}:{window}:{client}", window)
            if count > limit:
                logger.warning(f"Rate limit hit on {endpoint_type} ({count}/{limit} in {window}s)")
                label = endpoint_type.replace("_", " ").capitalize()
                return self._too_many_requests(f"{label} limit exceeded", limit, count, ttl)

        response = await call_next(request)
        response.headers["X-RateLimit-Burst-Limit"] = str(burst)
        response.headers["X-RateLimit-Burst-Remaining"] = str(max(0, burst - burst_count))
        return response

    @staticmethod
    def _too_many_requests(message: str, limit: int, current: int, retry_after: int) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "error": "rate_limit_exceeded",
                "message": message,
                "limit": limit,
                "current": current,
                "retry_after_seconds": retry_after
            },
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(limit),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(int(time.time()) + retry_after)
            }
        )
