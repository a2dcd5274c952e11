"""Tests for popularity scoring, sorting, click tracking and suggestion merging."""

import copy
import math

import pytest

from app.services.suggestions import (
    MS_PER_DAY,
    calculate_time_weighted_score,
    filter_by_query,
    flatten_suggestions,
    get_display_count,
    get_filtered_suggestions,
    migrate_click_data,
    remember_search,
    sort_by_popularity,
    track_suggestion_click,
)


def test_score_zero_without_history():
    assert calculate_time_weighted_score("villa", {}) == 0
    assert calculate_time_weighted_score("villa", {"villa": {"count": 0, "timestamps": []}}) == 0


def test_score_fresh_click_is_one(now):
    data = {"villa": {"count": 1, "timestamps": [now]}}
    assert calculate_time_weighted_score("villa", data, now=now) == pytest.approx(1.0)


def test_score_decays_per_day(now):
    data = {"villa": {"count": 1, "timestamps": [now - 10 * MS_PER_DAY]}}
    score = calculate_time_weighted_score("villa", data, now=now)
    assert score == pytest.approx(math.exp(-1.0))


def test_score_monotonic_in_recency(now):
    older = {"x": {"count": 1, "timestamps": [now - 3 * MS_PER_DAY]}}
    newer = {"x": {"count": 1, "timestamps": [now - 1 * MS_PER_DAY]}}
    assert calculate_time_weighted_score("x", newer, now=now) > calculate_time_weighted_score(
        "x", older, now=now
    )


def test_score_additive(now):
    one = {"x": {"count": 1, "timestamps": [now - MS_PER_DAY]}}
    two = {"x": {"count": 2, "timestamps": [now - MS_PER_DAY, now - 2 * MS_PER_DAY]}}
    assert calculate_time_weighted_score("x", two, now=now) > calculate_time_weighted_score(
        "x", one, now=now
    )


def test_score_uses_wall_clock_by_default(now):
    data = {"x": {"count": 1, "timestamps": [now]}}
    score = calculate_time_weighted_score("x", data)
    assert 0.99 < score <= 1.0


def test_sort_returns_new_list():
    items = ["a", "b", "c"]
    result = sort_by_popularity(items, {})
    assert result == ["a", "b", "c"]
    assert result is not items
    assert items == ["a", "b", "c"]


def test_sort_by_popularity_scenario(now):
    click_data = {
        "popular": {"count": 5, "timestamps": [now - 1000, now - 2000, now - 3000]},
        "medium": {"count": 2, "timestamps": [now - 86400000]},
        "unpopular": {"count": 1, "timestamps": [now - 172800000]},
    }
    result = sort_by_popularity(["unpopular", "medium", "popular"], click_data)
    assert result == ["popular", "medium", "unpopular"]


def test_sort_keeps_input_order_for_ties(now):
    click_data = {"hot": {"count": 1, "timestamps": [now]}}
    result = sort_by_popularity(["b", "a", "hot", "c"], click_data, now=now)
    assert result == ["hot", "b", "a", "c"]


def test_track_first_click(now):
    result = track_suggestion_click("x", {}, now=now)
    assert result == {"x": {"count": 1, "timestamps": [now]}}


def test_track_increments(now):
    result = track_suggestion_click("x", {"x": {"count": 2, "timestamps": [now - 5]}}, now=now)
    assert result["x"]["count"] == 3
    assert result["x"]["timestamps"] == [now - 5, now]


def test_track_caps_timestamps_at_fifty(now):
    timestamps = [now - (50 - i) * 1000 for i in range(50)]
    clicks = {"x": {"count": 50, "timestamps": timestamps}}
    result = track_suggestion_click("x", clicks, now=now)

    assert len(result["x"]["timestamps"]) == 50
    assert result["x"]["timestamps"][0] == timestamps[1]
    assert result["x"]["timestamps"][-1] == now
    assert result["x"]["count"] == 51


def test_track_does_not_mutate_input(now):
    clicks = {
        "x": {"count": 1, "timestamps": [now - 10]},
        "y": {"count": 4, "timestamps": [now - 20, now - 30]},
    }
    before = copy.deepcopy(clicks)
    result = track_suggestion_click("x", clicks, now=now)

    assert clicks == before
    assert result is not clicks
    assert result["y"] == clicks["y"]
    assert result["y"]["timestamps"] is not clicks["y"]["timestamps"]


def test_display_count():
    assert get_display_count("missing", {}) == 0
    assert get_display_count("x", {"x": {"count": 7, "timestamps": []}}) == 7


def test_filter_by_query_case_insensitive_and_capped():
    items = ["Villa Bali", "villa seminyak", "House Menteng", "VILLA Ubud"]
    assert filter_by_query(items, "  Villa ", 2) == ["Villa Bali", "villa seminyak"]


def test_filtered_default_view(provinces, cities, areas):
    recent = ["r1", "r2", "r3", "r4", "r5"]
    trending = ["t1", "t2", "t3", "t4", "t5", "t6"]
    smart = ["s1", "s2", "s3", "s4"]
    result = get_filtered_suggestions("", recent, trending, smart, provinces, cities, areas)

    assert result == {
        "recent": ["r1", "r2", "r3"],
        "smart": ["s1", "s2", "s3"],
        "trending": ["t1", "t2", "t3", "t4"],
        "locations": [],
    }


def test_filtered_substring_match():
    recent = ["Recent Search 1", "Recent Search 2", "Test Recent"]
    result = get_filtered_suggestions("test", recent, [], [], [], [], [])
    assert result["recent"] == ["Test Recent"]
    assert result["locations"] == []


def test_filtered_caps_each_category():
    trending = [f"villa {i}" for i in range(10)]
    smart = [f"villa smart {i}" for i in range(10)]
    recent = [f"villa recent {i}" for i in range(10)]
    result = get_filtered_suggestions("villa", recent, trending, smart, [], [], [])
    assert len(result["recent"]) == 3
    assert len(result["smart"]) == 3
    assert len(result["trending"]) == 4


def test_filtered_includes_locations(provinces, cities, areas):
    result = get_filtered_suggestions(
        "Kebayoran", [], [], [], provinces, cities, areas, "31", "3171"
    )
    assert result["locations"] == [
        "Kebayoran Baru, Jakarta Selatan, DKI Jakarta",
        "Kebayoran Lama, Jakarta Selatan, DKI Jakarta",
    ]


def test_migrate_legacy_counts():
    raw = {"old": 4, "new": {"count": 2, "timestamps": [1, 2]}}
    assert migrate_click_data(raw) == {
        "old": {"count": 4, "timestamps": []},
        "new": {"count": 2, "timestamps": [1, 2]},
    }


def test_remember_search_moves_to_front():
    recent = ["villa bali", "rumah bandung", "apartment"]
    assert remember_search("  rumah bandung ", recent) == [
        "rumah bandung",
        "villa bali",
        "apartment",
    ]
    assert recent == ["villa bali", "rumah bandung", "apartment"]


def test_remember_search_caps_and_ignores_blank():
    recent = ["a", "b", "c", "d", "e"]
    assert remember_search("f", recent) == ["f", "a", "b", "c", "d"]
    assert remember_search("   ", recent) == recent


def test_flatten_order():
    filtered = {
        "recent": ["r"],
        "smart": ["s"],
        "trending": ["t"],
        "locations": ["l"],
    }
    items = flatten_suggestions(filtered, ["Villa"])
    assert items == [
        {"type": "recent", "value": "r"},
        {"type": "location", "value": "l"},
        {"type": "trending", "value": "t"},
        {"type": "category", "value": "Villa"},
    ]
