"""
FastAPI application for the Newsdesk API.

Provides the public site API (live coverage feeds, articles, elections,
alerts, team) and the session-authenticated back office under /api/admin.

Responsibility: Main API application setup and configuration
"""

# Load .env BEFORE importing settings (critical for pydantic-settings)
from dotenv import load_dotenv
load_dotenv('.env')

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.middleware.sessions import SessionMiddleware
import logging

from src.config import settings
from src.db.session import db
from src.services import (
    ActiveCoverageLimitError,
    ArticleNotFoundError,
    CoverageNotFoundError,
    InvalidQuestionStatusError,
    QuestionNotFoundError,
)
from api.middleware import RateLimiterMiddleware, close_backends

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.app.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database on startup; close it and the rate limiter backends on shutdown"""
    logger.info(f"Starting {settings.app.app_name} API...")
    logger.info(f"Environment: {settings.app.environment}")
    logger.info(f"Debug mode: {settings.app.debug}")
    logger.info(f"CORS Origins: {settings.app.cors_origins}")

    if not db.is_initialized:
        await db.initialize()
    if settings.db.create_tables_on_startup:
        await db.create_tables()

    yield

    logger.info(f"Shutting down {settings.app.app_name} API...")
    await db.close()
    await close_backends()


# Create FastAPI app
app = FastAPI(
    title=f"{settings.app.app_name} API",
    description="Political news site API with live coverage feeds",
    version=settings.app.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Signed cookie carrying the logged-in user id
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.app.session_secret,
    session_cookie=settings.app.session_cookie,
    max_age=settings.app.session_max_age,
    same_site="lax",
    https_only=settings.app.session_https_only,
)

# Configure rate limiting (public write endpoints)
app.add_middleware(RateLimiterMiddleware, redis_url=settings.redis_url)

# CORS is added last so it wraps every other middleware, 429s included
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.app.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["X-Poll-Interval", "Retry-After"],
    max_age=3600,  # Cache preflight for 1 hour
)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": f"{settings.app.app_name} API",
        "version": settings.app.app_version,
        "status": "operational",
        "endpoints": {
            "live_coverages": "/api/live-coverages",
            "current_live_coverage": "/api/live-coverages/current",
            "articles": "/api/articles",
            "categories": "/api/categories",
            "elections": "/api/elections",
            "site_alerts": "/api/site-alerts",
            "team": "/api/team",
            "auth": "/api/auth/login",
            "admin": "/api/admin",
            "docs": "/docs",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "newsdesk-api"
    }


# MARK: Exception handlers

def error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "detail": detail})


@app.exception_handler(CoverageNotFoundError)
@app.exception_handler(QuestionNotFoundError)
@app.exception_handler(ArticleNotFoundError)
async def not_found_handler(request: Request, exc: Exception):
    return error_response(404, "not_found", str(exc))


@app.exception_handler(ActiveCoverageLimitError)
async def active_limit_handler(request: Request, exc: ActiveCoverageLimitError):
    return error_response(409, "active_coverage_limit", str(exc))


@app.exception_handler(InvalidQuestionStatusError)
async def invalid_status_handler(request: Request, exc: InvalidQuestionStatusError):
    return error_response(422, "invalid_status", str(exc))


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Unique constraint violations (slug, username, editor assignment)"""
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return error_response(409, "conflict", "Resource conflicts with an existing record")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.app.debug else "An unexpected error occurred"
        }
    )


# Import and include routers
from api.v1.endpoints import (  # noqa: E402
    admin_live_coverages,
    articles,
    auth,
    educational,
    elections,
    live_coverages,
    media,
    site_alerts,
    team,
)

app.include_router(auth.router, prefix="/api")

app.include_router(live_coverages.router, prefix="/api", tags=["live-coverages"])
app.include_router(articles.router, prefix="/api", tags=["articles"])
app.include_router(elections.router, prefix="/api", tags=["elections"])
app.include_router(site_alerts.router, prefix="/api", tags=["site-alerts"])
app.include_router(team.router, prefix="/api", tags=["team"])
app.include_router(educational.router, prefix="/api", tags=["educational"])
app.include_router(media.router, prefix="/api", tags=["media"])

app.include_router(admin_live_coverages.router, prefix="/api", tags=["admin"])
app.include_router(articles.admin_router, prefix="/api", tags=["admin"])
app.include_router(elections.admin_router, prefix="/api", tags=["admin"])
app.include_router(site_alerts.admin_router, prefix="/api", tags=["admin"])
app.include_router(team.admin_router, prefix="/api", tags=["admin"])
app.include_router(educational.admin_router, prefix="/api", tags=["admin"])
app.include_router(media.admin_router, prefix="/api", tags=["admin"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.app.api_host,
        port=settings.app.api_port,
        reload=settings.app.debug
    )
