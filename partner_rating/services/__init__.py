"""
Services module for the Partner Rating Platform.
"""

from partner_rating.services.cache import get_cache
from partner_rating.services.redis_cache import RedisCache
from partner_rating.services.snowflake import get_snowflake_connection

__all__ = [
    "get_cache",
    "RedisCache",
    "get_snowflake_connection",
]
