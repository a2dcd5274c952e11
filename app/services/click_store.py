"""Per-client persistence of click history and recent searches.

The suggestion functions never touch storage; routes load state from here,
run the pure transforms and save the returned value back.
"""

import logging

import redis.asyncio as aioredis

from app.config import settings
from app.services.suggestions import ClickHistory, migrate_click_data
from app.utils.cache import cache_delete, cache_get, cache_set

logger = logging.getLogger("astra.click_store")


def _clicks_key(client_id: str) -> str:
    return f"clicks:{client_id}"


def _recent_key(client_id: str) -> str:
    return f"recent:{client_id}"


async def load_clicks(redis: aioredis.Redis, client_id: str) -> ClickHistory:
    raw = await cache_get(redis, _clicks_key(client_id))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("Discarding malformed click history for client=%s", client_id)
        return {}
    return migrate_click_data(raw)


async def save_clicks(redis: aioredis.Redis, client_id: str, clicks: ClickHistory) -> None:
    await cache_set(redis, _clicks_key(client_id), clicks, ttl=settings.client_state_ttl)


async def load_recent(redis: aioredis.Redis, client_id: str) -> list[str]:
    raw = await cache_get(redis, _recent_key(client_id))
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning("Discarding malformed recent searches for client=%s", client_id)
        return []
    return [term for term in raw if isinstance(term, str)]


async def save_recent(redis: aioredis.Redis, client_id: str, terms: list[str]) -> None:
    await cache_set(redis, _recent_key(client_id), terms, ttl=settings.client_state_ttl)


async def clear_recent(redis: aioredis.Redis, client_id: str) -> None:
    await cache_delete(redis, _recent_key(client_id))
