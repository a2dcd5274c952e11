import logging

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_redis, rate_limit_client
from app.config import settings
from app.database import get_db
from app.services.click_store import (
    clear_recent,
    load_clicks,
    load_recent,
    save_clicks,
    save_recent,
)
from app.services.geography import load_taxonomy
from app.services.suggestions import (
    flatten_suggestions,
    get_display_count,
    get_filtered_suggestions,
    remember_search,
    sort_by_popularity,
    track_suggestion_click,
)
from app.services.terms import get_smart_terms, get_trending_terms

logger = logging.getLogger("astra.suggestions")

router = APIRouter()


@router.get("/suggestions")
async def suggestions(
    q: str = Query("", max_length=200, description="Text typed in the search box"),
    state: str | None = Query(None, max_length=10, description="Selected province code"),
    city: str | None = Query(None, max_length=10, description="Selected city code"),
    db: AsyncSession = Depends(get_db),
    redis: aioredis.Redis = Depends(get_redis),
    client_id: str = Depends(rate_limit_client),
):
    """Suggestions for the search dropdown.

    An empty query returns the default view (recent, smart and trending heads
    plus category shortcuts). Otherwise each source is filtered by substring
    and location breadcrumbs are added. Trending terms are ranked by the
    client's own time-decayed click history.
    """
    clicks = await load_clicks(redis, client_id)
    recent = await load_recent(redis, client_id)
    trending = sort_by_popularity(await get_trending_terms(db), clicks)
    smart = await get_smart_terms(db)
    provinces, cities, areas = await load_taxonomy(db, state, city)

    filtered = get_filtered_suggestions(
        q, recent, trending, smart, provinces, cities, areas, state, city
    )
    categories = settings.popular_categories if not q else []

    shown = {s for group in filtered.values() for s in group}
    return {
        "query": q,
        **filtered,
        "counts": {s: get_display_count(s, clicks) for s in sorted(shown)},
        "items": flatten_suggestions(filtered, categories),
    }


@router.post("/suggestions/click")
async def track_click(
    request: dict,
    redis: aioredis.Redis = Depends(get_redis),
    client_id: str = Depends(rate_limit_client),
):
    """Record that the client picked a suggestion.

    Body:
      - suggestion (str): the label that was clicked
    """
    suggestion = request.get("suggestion")
    if not isinstance(suggestion, str) or not suggestion.strip():
        raise HTTPException(status_code=400, detail="suggestion is required")

    clicks = await load_clicks(redis, client_id)
    updated = track_suggestion_click(suggestion, clicks)
    await save_clicks(redis, client_id, updated)

    count = get_display_count(suggestion, updated)
    logger.debug("client=%s clicked suggestion=%r count=%d", client_id, suggestion, count)
    return {"suggestion": suggestion, "count": count}


@router.get("/suggestions/count")
async def click_count(
    suggestion: str = Query(..., min_length=1, max_length=255),
    redis: aioredis.Redis = Depends(get_redis),
    client_id: str = Depends(rate_limit_client),
):
    clicks = await load_clicks(redis, client_id)
    return {"suggestion": suggestion, "count": get_display_count(suggestion, clicks)}


@router.post("/suggestions/recent")
async def add_recent_search(
    request: dict,
    redis: aioredis.Redis = Depends(get_redis),
    client_id: str = Depends(rate_limit_client),
):
    """Remember a submitted search. Body: {"query": str}."""
    query = request.get("query")
    if not isinstance(query, str):
        raise HTTPException(status_code=400, detail="query must be a string")

    recent = remember_search(query, await load_recent(redis, client_id))
    await save_recent(redis, client_id, recent)
    return {"recent": recent}


@router.delete("/suggestions/recent")
async def clear_recent_searches(
    redis: aioredis.Redis = Depends(get_redis),
    client_id: str = Depends(rate_limit_client),
):
    await clear_recent(redis, client_id)
    return {"recent": []}
