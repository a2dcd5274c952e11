"""Search suggestion ranking.

Pure functions over caller-owned state. Click history is a plain
``{suggestion: {"count": int, "timestamps": [epoch_ms, ...]}}`` mapping that
the caller loads and saves; nothing here performs I/O, and every function that
"updates" history returns a new mapping instead of touching the one passed in.
"""

import math
import time
from collections.abc import Iterable, Mapping, Sequence
from typing import TypedDict

from app.config import settings
from app.services.geography import Area, City, Province

DECAY_RATE = settings.decay_rate
MAX_TIMESTAMPS = settings.max_click_timestamps
MS_PER_DAY = 86_400_000

RECENT_CAP = settings.recent_cap
SMART_CAP = settings.smart_cap
TRENDING_CAP = settings.trending_cap
LOCATION_CAP = settings.location_cap
MIN_LOCATION_QUERY = settings.location_min_query_length
MAX_RECENT_SEARCHES = settings.max_recent_searches


class ClickRecord(TypedDict):
    count: int
    timestamps: list[int]


ClickHistory = dict[str, ClickRecord]


class FilteredSuggestions(TypedDict):
    recent: list[str]
    smart: list[str]
    trending: list[str]
    locations: list[str]


def _now_ms() -> int:
    return int(time.time() * 1000)


def calculate_time_weighted_score(
    suggestion: str,
    click_data: Mapping[str, ClickRecord],
    now: int | None = None,
) -> float:
    """Popularity of a suggestion with exponential decay per day of age.

    Each retained click contributes ``exp(-DECAY_RATE * age_days)``, so a
    click made right now is worth 1.0 and older clicks fade towards 0.
    """
    record = click_data.get(suggestion)
    if not record or not record["timestamps"]:
        return 0

    if now is None:
        now = _now_ms()
    return sum(
        math.exp(-DECAY_RATE * ((now - ts) / MS_PER_DAY))
        for ts in record["timestamps"]
    )


def sort_by_popularity(
    items: Sequence[str],
    click_data: Mapping[str, ClickRecord],
    now: int | None = None,
) -> list[str]:
    """Return a new list ordered by descending time-weighted score.

    Python's sort is stable, so equal scores (including items that were never
    clicked) keep their input order.
    """
    if now is None:
        now = _now_ms()
    return sorted(
        items,
        key=lambda item: calculate_time_weighted_score(item, click_data, now),
        reverse=True,
    )


def _name_for(code: str | None, entries: Iterable[Province | City]) -> str:
    if not code:
        return ""
    for entry in entries:
        if entry.code == code:
            return entry.name
    return ""


def get_location_suggestions(
    query: str,
    provinces: Sequence[Province],
    cities: Sequence[City],
    areas: Sequence[Area],
    current_state: str | None = None,
    current_city: str | None = None,
) -> list[str]:
    """Match a query against provinces, cities and areas as breadcrumbs.

    Cities and areas are labelled with the currently selected province/city
    (``current_state``/``current_city``), not with their own parents. A city
    matched outside the selected province therefore carries the selected
    province's name.
    """
    if not query or len(query.strip()) < MIN_LOCATION_QUERY:
        return []

    needle = query.lower().strip()
    province_name = _name_for(current_state, provinces)
    city_name = _name_for(current_city, cities)

    matches = [p.name for p in provinces if needle in p.name.lower()]
    matches.extend(
        f"{c.name}, {province_name}" for c in cities if needle in c.name.lower()
    )
    matches.extend(
        f"{a.name}, {city_name}, {province_name}"
        for a in areas
        if needle in a.name.lower()
    )
    return matches[:LOCATION_CAP]


def filter_by_query(items: Sequence[str], query: str, cap: int) -> list[str]:
    """Case-insensitive substring filter, source order kept, capped."""
    needle = query.lower().strip()
    return [item for item in items if needle in item.lower()][:cap]


def get_filtered_suggestions(
    query: str,
    recent_terms: Sequence[str],
    trending: Sequence[str],
    smart: Sequence[str],
    provinces: Sequence[Province],
    cities: Sequence[City],
    areas: Sequence[Area],
    current_state: str | None = None,
    current_city: str | None = None,
) -> FilteredSuggestions:
    """Merge recent, smart, trending and location suggestions for a query.

    An empty query gives the default dropdown: the head of each list with no
    filtering and no locations.
    """
    if not query:
        return {
            "recent": list(recent_terms[:RECENT_CAP]),
            "smart": list(smart[:SMART_CAP]),
            "trending": list(trending[:TRENDING_CAP]),
            "locations": [],
        }

    return {
        "recent": filter_by_query(recent_terms, query, RECENT_CAP),
        "smart": filter_by_query(smart, query, SMART_CAP),
        "trending": filter_by_query(trending, query, TRENDING_CAP),
        "locations": get_location_suggestions(
            query, provinces, cities, areas, current_state, current_city
        ),
    }


def track_suggestion_click(
    suggestion: str,
    current_clicks: Mapping[str, ClickRecord],
    now: int | None = None,
) -> ClickHistory:
    """Record a click, returning a new history.

    The lifetime ``count`` always grows; only the last ``MAX_TIMESTAMPS``
    timestamps are retained.
    """
    if now is None:
        now = _now_ms()

    previous = current_clicks.get(suggestion) or {"count": 0, "timestamps": []}
    timestamps = [*previous["timestamps"], now][-MAX_TIMESTAMPS:]

    updated: ClickHistory = {
        key: {"count": record["count"], "timestamps": list(record["timestamps"])}
        for key, record in current_clicks.items()
    }
    updated[suggestion] = {"count": previous["count"] + 1, "timestamps": timestamps}
    return updated


def get_display_count(suggestion: str, click_data: Mapping[str, ClickRecord]) -> int:
    record = click_data.get(suggestion)
    return record["count"] if record else 0


def migrate_click_data(raw: Mapping[str, object]) -> ClickHistory:
    """Upgrade stored click data where values may still be bare counts."""
    migrated: ClickHistory = {}
    for key, value in raw.items():
        if isinstance(value, int) and not isinstance(value, bool):
            migrated[key] = {"count": value, "timestamps": []}
        else:
            migrated[key] = value  # type: ignore[assignment]
    return migrated


def remember_search(
    query: str,
    recent_terms: Sequence[str],
    limit: int = MAX_RECENT_SEARCHES,
) -> list[str]:
    """Put a submitted query at the front of the recent list."""
    term = query.strip()
    if not term:
        return list(recent_terms)
    return [term, *(t for t in recent_terms if t != term)][:limit]


def flatten_suggestions(
    filtered: FilteredSuggestions,
    categories: Iterable[str] = (),
) -> list[dict]:
    """Flat list used for keyboard navigation through the dropdown.

    Order is recent, location, trending, then any category shortcuts.
    """
    items = [{"type": "recent", "value": t} for t in filtered["recent"]]
    items += [{"type": "location", "value": loc} for loc in filtered["locations"]]
    items += [{"type": "trending", "value": t} for t in filtered["trending"]]
    items += [{"type": "category", "value": c} for c in categories]
    return items
