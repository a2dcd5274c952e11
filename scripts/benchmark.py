"""Suggestion ranking benchmark.

Usage:
    python -m scripts.benchmark

Builds a synthetic click history and location taxonomy, then measures
latency (p50, p95, p99) of the ranking and aggregation functions the
dropdown calls on every keystroke.
"""

import random
import statistics
import sys
import time

sys.path.insert(0, ".")

from app.services.geography import Area, City, Province
from app.services.suggestions import (
    MS_PER_DAY,
    get_filtered_suggestions,
    sort_by_popularity,
    track_suggestion_click,
)

TEST_QUERIES = [
    "",
    "ja",
    "jakarta",
    "villa",
    "bali",
    "kebayoran",
    "apartment kemang",
    "xyz",
]
ROUNDS = 200


def _report(name: str, latencies: list[float]):
    sorted_lat = sorted(latencies)
    print(f"{name}:")
    print(f"  p50:  {sorted_lat[len(sorted_lat)//2]:8.3f} ms")
    print(f"  p95:  {sorted_lat[int(len(sorted_lat)*0.95)]:8.3f} ms")
    print(f"  p99:  {sorted_lat[int(len(sorted_lat)*0.99)]:8.3f} ms")
    print(f"  mean: {statistics.mean(latencies):8.3f} ms")


def main():
    print("=== Astra Suggest Benchmark ===\n")
    rng = random.Random(42)

    terms = [f"Property {i} Jakarta" for i in range(200)] + [f"Villa {i} Bali" for i in range(200)]
    provinces = [Province(code=str(i), name=f"Province {i}") for i in range(38)]
    provinces.append(Province(code="31", name="DKI Jakarta"))
    cities = [City(code=f"31{i:02d}", name=f"Jakarta Area {i}", type="KOTA") for i in range(50)]
    areas = [Area(code=f"3171{i:02d}", name=f"Kebayoran {i}") for i in range(100)]

    now = int(time.time() * 1000)
    clicks: dict = {}
    for _ in range(1000):
        clicks = track_suggestion_click(
            rng.choice(terms), clicks, now=now - rng.randint(0, 60 * MS_PER_DAY)
        )
    print(f"Click history: {len(clicks)} suggestions, 1000 clicks\n")

    sort_latencies = []
    for _ in range(ROUNDS):
        start = time.perf_counter()
        sort_by_popularity(terms, clicks)
        sort_latencies.append((time.perf_counter() - start) * 1000)

    filter_latencies = []
    for _ in range(ROUNDS // len(TEST_QUERIES)):
        for query in TEST_QUERIES:
            start = time.perf_counter()
            get_filtered_suggestions(
                query, terms[:5], terms, terms[:20], provinces, cities, areas, "31", "3100"
            )
            filter_latencies.append((time.perf_counter() - start) * 1000)

    print("=== Results ===\n")
    _report("sort_by_popularity (400 terms)", sort_latencies)
    _report("get_filtered_suggestions", filter_latencies)
    print("Done.")


if __name__ == "__main__":
    main()
