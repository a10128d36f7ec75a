"""Health check endpoint."""

from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import APIRouter
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from reading_tracker.api.v1.deps import DBSession
from reading_tracker.cache.redis_client import get_redis_client
from reading_tracker.config import settings

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get(
    "/health",
    summary="Health check",
    description="""
System health check for monitoring and load balancers.

**Checks:**
- Database connectivity
- Redis cache (only when caching is enabled)

**Status Values:**
- `healthy` - All systems operational
- `degraded` - A dependency is failing

**No authentication required.**
    """,
)
async def health_check(db: DBSession) -> dict[str, Any]:
    """Health check endpoint for monitoring and load balancer probes."""
    health_status = {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {},
    }

    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        health_status["checks"]["database"] = "healthy"
    except SQLAlchemyError as e:
        logger.warning("Database health check failed", error=str(e))
        health_status["status"] = "degraded"
        health_status["checks"]["database"] = "unhealthy"

    if settings.cache_enabled:
        redis_client = await get_redis_client()
        try:
            if redis_client is None:
                raise RedisError("not connected")
            await redis_client.ping()
            health_status["checks"]["cache"] = "healthy"
        except RedisError as e:
            logger.warning("Cache health check failed", error=str(e))
            health_status["status"] = "degraded"
            health_status["checks"]["cache"] = "unhealthy"
    else:
        health_status["checks"]["cache"] = "disabled"

    return health_status
