"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from reading_tracker.api.v1.router import api_router
from reading_tracker.cache.redis_client import RedisCache
from reading_tracker.config import settings
from reading_tracker.core.exceptions import APIError, StorageError
from reading_tracker.db.session import close_db, init_db
from reading_tracker.rate_limiter import limiter

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer() if settings.is_production else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

# OpenAPI tag descriptions
OPENAPI_TAGS = [
    {
        "name": "Health",
        "description": "Load balancer probes and dependency status.",
    },
    {
        "name": "Authentication",
        "description": """
**Register, log in, refresh and log out.**

Log in with your email address or your username. Access tokens are JWTs sent
as `Authorization: Bearer <token>`; refresh tokens rotate on each use.
        """,
    },
    {
        "name": "Users",
        "description": "Your profile.",
    },
    {
        "name": "Custom Documents",
        "description": """
**Private documents**

Documents you author yourself. Only you can see them or start a reading on them.
        """,
    },
    {
        "name": "Books",
        "description": "Book catalog. Listing and lookup for everyone, editing for admins.",
    },
    {
        "name": "Manga",
        "description": "Manga catalog. Listing and lookup for everyone, editing for admins.",
    },
    {
        "name": "Readings",
        "description": """
**Reading tracking**

A reading is your engagement with one document (book, manga or custom
document). You can have at most one reading per document. Progress is
logged as records appended to the reading.

**Statuses:** `ongoing`, `paused`, `completed`
        """,
    },
    {
        "name": "Reading Lists",
        "description": """
**Curated sets of readings**

Adding a reading that is already in the list changes nothing. Deleting a
reading removes it from all of your lists.
        """,
    },
    {
        "name": "Admin",
        "description": "Reading inspection and record correction. **Requires:** Admin role.",
    },
]

API_DESCRIPTION = """
# Reading Tracker API

Track what you read across books, manga and your own documents.

---

## Quick Start

1. `POST /v1/auth/register` - Create an account
2. `GET /v1/books?name=Dune` - Find a book
3. `POST /v1/readings` - Start reading it
4. `POST /v1/readings/{id}/records` - Log progress (`"progress": "ch.3"`)

---

## Paging

List endpoints take `page` (default 1), `limit` (default 10) and `sort`
(`asc` or `desc`). Missing or non-positive values fall back to the defaults.
An empty page is an empty `data` array, never an error.

---

## Error Responses

All errors follow this format:
```json
{
  "error": {
    "code": "NOT_FOUND",
    "message": "Reading with id '...' not found",
    "details": null,
    "requestId": "req_abc123"
  }
}
```

| Status | Code | Description |
|--------|------|-------------|
| 400 | INVALID_ARGUMENT | Unknown reading type or unchangeable field |
| 401 | UNAUTHORIZED | Missing or invalid token |
| 403 | FORBIDDEN | You do not own the resource |
| 404 | NOT_FOUND | Resource doesn't exist |
| 409 | DUPLICATE | A reading for this document already exists |
| 409 | CONFLICT | Email, username or ISBN already taken |
| 429 | RATE_LIMITED | Too many authentication attempts |
| 503 | STORAGE_ERROR | Database unavailable |
| 500 | INTERNAL_ERROR | Server error |
"""


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Reading Tracker API", version=settings.app_version, env=settings.environment)
    await init_db()

    # Redis is optional; the catalog falls back to the database
    if settings.cache_enabled:
        try:
            await RedisCache.get_client()
            logger.info("Redis cache initialized")
        except RedisError as e:
            logger.warning("Redis unavailable, caching disabled", error=str(e))

    yield

    logger.info("Shutting down Reading Tracker API")
    await RedisCache.close()
    await close_db()


def _error_response(request: Request, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details,
                "requestId": getattr(request.state, "request_id", None),
            }
        },
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=API_DESCRIPTION,
        openapi_tags=OPENAPI_TAGS,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Rate limiter state and exception handler
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next) -> Response:
        """Log all incoming requests."""
        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        response = await call_next(request)

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response

    # Request ID middleware; registered last so it wraps the logger above
    @app.middleware("http")
    async def add_request_id(request: Request, call_next) -> Response:
        """Add unique request ID to each request for tracing."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        """Render typed service errors as the standard error envelope."""
        return _error_response(request, exc.status_code, exc.code, exc.error_message, exc.details)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Report persistence failures as STORAGE_ERROR."""
        logger.error("Storage failure", error=str(exc))
        error = StorageError()
        return _error_response(request, error.status_code, error.code, error.error_message)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions."""
        logger.exception("Unhandled exception", exc_info=exc)
        return _error_response(request, 500, "INTERNAL_ERROR", "An unexpected error occurred")

    # Include API router
    app.include_router(api_router, prefix="/v1")

    return app


app = create_app()
