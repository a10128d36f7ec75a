"""Caching package."""

from reading_tracker.cache.redis_client import CacheService, RedisCache, get_redis_client

__all__ = ["CacheService", "RedisCache", "get_redis_client"]
