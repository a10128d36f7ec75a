"""Redis client for the catalog read-through cache.

Provides an async Redis client with connection pooling and graceful
degradation: when caching is disabled or Redis is unreachable every call
behaves like a cache miss.
"""

import redis.asyncio as redis
import structlog

from reading_tracker.config import settings

logger = structlog.get_logger(__name__)


class RedisCache:
    """Async Redis client singleton with connection management."""

    _client: redis.Redis | None = None
    _pool: redis.ConnectionPool | None = None

    @classmethod
    async def get_client(cls) -> redis.Redis:
        """Get or create the Redis client.

        Lazy initialization: only connects when first used.
        """
        if cls._client is None:
            cls._pool = redis.ConnectionPool.from_url(
                str(settings.redis_url),
                encoding="utf-8",
                decode_responses=True,
                max_connections=10,
            )
            client = redis.Redis(connection_pool=cls._pool)
            try:
                await client.ping()
            except redis.RedisError as e:
                logger.error("redis_connection_failed", error=str(e))
                await cls._pool.disconnect()
                cls._pool = None
                raise
            cls._client = client
            logger.info("redis_connected", host=settings.redis_url.host)

        return cls._client

    @classmethod
    async def close(cls) -> None:
        """Close Redis connection and cleanup."""
        if cls._client:
            await cls._client.aclose()
            cls._client = None
            logger.info("redis_disconnected")

        if cls._pool:
            await cls._pool.disconnect()
            cls._pool = None


async def get_redis_client() -> redis.Redis | None:
    """Return the Redis client, or None if caching is off or Redis is down."""
    if not settings.cache_enabled:
        return None
    try:
        return await RedisCache.get_client()
    except redis.RedisError:
        return None


class CacheService:
    """Thin string cache over Redis; errors are logged and read as misses."""

    def __init__(self, redis_client: redis.Redis | None):
        self.redis = redis_client

    async def get(self, key: str) -> str | None:
        if self.redis is None:
            return None
        try:
            return await self.redis.get(key)
        except redis.RedisError as e:
            logger.warning("cache_get_error", key=key, error=str(e))
            return None

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Set value with a TTL (defaults to ``settings.cache_ttl_seconds``)."""
        if self.redis is None:
            return False
        try:
            await self.redis.setex(key, ttl or settings.cache_ttl_seconds, value)
            return True
        except redis.RedisError as e:
            logger.warning("cache_set_error", key=key, error=str(e))
            return False

    async def delete(self, key: str) -> bool:
        if self.redis is None:
            return False
        try:
            return await self.redis.delete(key) > 0
        except redis.RedisError as e:
            logger.warning("cache_delete_error", key=key, error=str(e))
            return False
