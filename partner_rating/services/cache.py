"""
Cache Service Singleton - Partner Rating Platform
partner_rating/services/cache.py

Provides a singleton Redis cache instance with TTL constants.
Gracefully handles Redis unavailability.
"""
import logging

import redis
from typing import Optional, Type, TypeVar

from pydantic import BaseModel
from partner_rating.services.redis_cache import RedisCache
from partner_rating.config import settings

logger = logging.getLogger(__name__)

TTL_PARTNER = settings.CACHE_TTL_PARTNER
TTL_PARTNER_LIST = settings.CACHE_TTL_PARTNER_LIST
TTL_QUESTIONS = settings.CACHE_TTL_QUESTIONS

CACHE_KEY_PARTNER_PREFIX = "partner:"
CACHE_KEY_PARTNERS_PREFIX = "partners:"
CACHE_KEY_QUESTIONS = "questions:catalog"

T = TypeVar("T", bound=BaseModel)

# Singleton instance
_cache: Optional[RedisCache] = None


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if Redis is available, None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing the application
        to continue functioning without caching (graceful degradation).
    """
    global _cache
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.client.ping()  # Test connection
        except (redis.RedisError, ConnectionError) as e:
            logger.debug("Redis unavailable, caching disabled: %s", e)
            _cache = None
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None


def partner_cache_key(partner_id) -> str:
    return f"{CACHE_KEY_PARTNER_PREFIX}{partner_id}"


def invalidate_partner_cache(partner_id=None) -> None:
    """Drop a cached partner and every cached partner listing."""
    cache = get_cache()
    if cache is None:
        return
    try:
        if partner_id is not None:
            cache.delete(partner_cache_key(partner_id))
        cache.delete_pattern(f"{CACHE_KEY_PARTNERS_PREFIX}*")
    except redis.RedisError as e:
        logger.warning("Failed to invalidate partner cache: %s", e)


def cache_get(key: str, model: Type[T]) -> Optional[T]:
    """Read-through helper: None on miss, when Redis is down, or on a Redis error."""
    cache = get_cache()
    if cache is None:
        return None
    try:
        return cache.get(key, model)
    except redis.RedisError as e:
        logger.warning("Cache read failed for %s: %s", key, e)
        return None


def cache_set(key: str, value: BaseModel, ttl_seconds: int) -> None:
    cache = get_cache()
    if cache is None:
        return
    try:
        cache.set(key, value, ttl_seconds)
    except redis.RedisError as e:
        logger.warning("Cache write failed for %s: %s", key, e)
