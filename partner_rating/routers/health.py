"""
Health Check Router - Partner Rating Platform
partner_rating/routers/health.py

Returns health status of Snowflake and Redis with real connection checks.
Only Snowflake decides the overall status; Redis is reported for information.
"""
from datetime import datetime, timezone
from typing import Dict, Optional

import redis
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from snowflake.connector.errors import Error as SnowflakeError

from partner_rating.config import settings
from partner_rating.services.cache import get_cache
from partner_rating.services.snowflake import get_snowflake_connection

router = APIRouter(tags=["Health"])



#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


class CacheStatsResponse(BaseModel):
    redis_connected: bool
    keys_count: Optional[int] = None
    memory_used: Optional[str] = None
    uptime_seconds: Optional[int] = None
    error: Optional[str] = None


def _short(error: Exception) -> str:
    msg = str(error)
    return msg[:100] + "..." if len(msg) > 100 else msg



#  Dependency Health Checks


async def check_snowflake() -> str:
    """Check Snowflake connection health."""
    if not all([settings.SNOWFLAKE_ACCOUNT, settings.SNOWFLAKE_USER, settings.SNOWFLAKE_PASSWORD]):
        missing = [
            name
            for name in ("SNOWFLAKE_ACCOUNT", "SNOWFLAKE_USER", "SNOWFLAKE_PASSWORD")
            if not getattr(settings, name)
        ]
        return f"unhealthy: Missing env vars: {', '.join(missing)}"

    try:
        conn = get_snowflake_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT CURRENT_USER()")
            result = cursor.fetchone()
            cursor.close()
        finally:
            conn.close()
        return f"healthy (User: {result[0]})"
    except (SnowflakeError, OSError) as e:
        return f"unhealthy: {_short(e)}"


async def check_redis() -> str:
    """Check Redis connection health."""
    cache = get_cache()
    if cache is None:
        return "unhealthy: Redis not configured or unreachable"
    try:
        cache.client.ping()
        return "healthy"
    except redis.RedisError as e:
        return f"unhealthy: {_short(e)}"



#  Routes


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Snowflake healthy"},
        503: {"description": "Snowflake unhealthy"},
    },
    summary="Health check",
    description="Check health of all dependencies. Redis is optional and never fails the check.",
)
async def health_check():
    dependencies = {
        "snowflake": await check_snowflake(),
        "redis": await check_redis(),
    }

    healthy = dependencies["snowflake"].startswith("healthy")

    response = HealthResponse(
        status="healthy" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )

    if healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/health/cache/stats",
    response_model=CacheStatsResponse,
    summary="Redis cache statistics",
)
async def cache_stats() -> CacheStatsResponse:
    cache = get_cache()
    if not cache:
        return CacheStatsResponse(redis_connected=False, error="Redis not configured or unreachable")
    try:
        info = cache.client.info()
        keyspace = cache.client.info("keyspace")
    except redis.RedisError as e:
        return CacheStatsResponse(redis_connected=False, error=str(e))

    return CacheStatsResponse(
        redis_connected=True,
        keys_count=keyspace.get("db0", {}).get("keys", 0),
        memory_used=info.get("used_memory_human"),
        uptime_seconds=info.get("uptime_in_seconds"),
    )
