"""
Redis caching service for per-event booth listings.

CACHING STRATEGY
================

What we cache:
  - The booth listing of an event (JSON-serialized)
  - Cache key pattern: "booths:event:{event_id}"

Why:
  - Renters browse an event's booths far more often than they reserve
  - The listing only changes when a booth is created, approved, or a
    reservation changes a booth's availability

Invalidation strategy:
  - On any reservation create/approve/decline/cancel: delete the key of the
    booth's event (the availability column in the listing changed)
  - On booth creation or approval change: delete the key of its event
  - Deletes run after the request transaction commits, so a concurrent
    listing read cannot re-cache the pre-commit state
  - TTL-based expiry as safety net (5 minutes)

Why NOT cache single-booth availability:
  - GET /booths/{id}/availability must reflect the last committed write
  - The reservation service is the only writer and reads the DB anyway

Redis is advisory. Any Redis error is logged and the request falls back
to the database.
"""

import json
from typing import Optional

import redis.asyncio as redis
from boothbook.core.config import get_settings
from boothbook.core.logging import get_logger
from boothbook.core.metrics import record_cache_operation, redis_connection_errors

logger = get_logger(__name__)
settings = get_settings()

BOOTH_LIST_PREFIX = "booths:event:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            # Test connection
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            redis_connection_errors.inc()
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def make_booth_list_key(event_id: int) -> str:
    return f"{BOOTH_LIST_PREFIX}{event_id}"


async def get_cached_booths(event_id: int) -> Optional[list[dict]]:
    """Retrieve a cached booth listing."""
    client = await get_redis()
    if not client:
        return None

    key = make_booth_list_key(event_id)
    try:
        data = await client.get(key)
        if data:
            record_cache_operation("get", hit=True)
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        record_cache_operation("get", hit=False)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_booths(event_id: int, data: list[dict]) -> None:
    """Cache a booth listing with TTL."""
    client = await get_redis()
    if not client:
        return

    key = make_booth_list_key(event_id)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_booth_cache(event_id: int) -> None:
    """Drop the booth listing of one event. Call only after the change has committed."""
    client = await get_redis()
    if not client:
        return

    try:
        deleted = await client.delete(make_booth_list_key(event_id))
        logger.info("cache_invalidated", event_id=event_id, keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", event_id=event_id, error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
