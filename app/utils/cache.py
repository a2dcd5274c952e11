import json
import logging
from typing import Any

import redis.asyncio as aioredis

logger = logging.getLogger("astra.cache")

KEY_PREFIX = "astra"


def _key(key: str) -> str:
    return f"{KEY_PREFIX}:{key}"


async def cache_get(redis: aioredis.Redis, key: str) -> Any | None:
    """Get a JSON value. Returns None on miss, read error or undecodable data."""
    try:
        raw = await redis.get(_key(key))
        if raw is None:
            return None
        return json.loads(raw)
    except Exception as e:
        logger.warning("Cache get error for key=%s: %s", key, e)
        return None


async def cache_set(redis: aioredis.Redis, key: str, value: Any, ttl: int = 0) -> None:
    """Store a JSON value. A ttl of 0 means no expiry."""
    try:
        await redis.set(_key(key), json.dumps(value), ex=ttl or None)
    except Exception as e:
        logger.warning("Cache set error for key=%s: %s", key, e)


async def cache_delete(redis: aioredis.Redis, key: str) -> None:
    try:
        await redis.delete(_key(key))
    except Exception as e:
        logger.warning("Cache delete error for key=%s: %s", key, e)
