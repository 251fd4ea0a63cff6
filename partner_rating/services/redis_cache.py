"""
Redis Cache Client - Partner Rating Platform
partner_rating/services/redis_cache.py

Thin wrapper that stores Pydantic response models as JSON. Every key is
namespaced with REDIS_KEY_PREFIX so several deployments can share one Redis.
"""
from typing import List, Optional, Type, TypeVar

import redis
from pydantic import BaseModel

from partner_rating.config import settings

T = TypeVar("T", bound=BaseModel)

_DELETE_BATCH = 500


class RedisCache:
    def __init__(self, prefix: Optional[str] = None):
        self.prefix = settings.REDIS_KEY_PREFIX if prefix is None else prefix
        self.client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str, model: Type[T]) -> Optional[T]:
        """Get cached item and deserialize to Pydantic model."""
        data = self.client.get(self._key(key))
        if data:
            return model.model_validate_json(data)
        return None

    def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Cache Pydantic model with TTL. A TTL of 0 disables caching."""
        if ttl_seconds <= 0:
            return
        self.client.setex(self._key(key), ttl_seconds, value.model_dump_json())

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))

    def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching `pattern`. Returns the number removed."""
        removed = 0
        batch: List[str] = []
        for key in self.client.scan_iter(match=self._key(pattern)):
            batch.append(key)
            if len(batch) >= _DELETE_BATCH:
                removed += self.client.delete(*batch)
                batch = []
        if batch:
            removed += self.client.delete(*batch)
        return removed
