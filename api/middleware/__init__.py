"""
Request middleware for the Newsdesk API.
"""

from .rate_limiter import RateLimiterMiddleware, RateLimitConfig, close_backends

__all__ = ["RateLimiterMiddleware", "RateLimitConfig", "close_backends"]
