"""Seed reference data for suggestions.

Usage:
    python -m scripts.seed_data

This script:
1. Inserts a starter set of Indonesian provinces, cities and districts
2. Upserts trending and smart suggestion terms
"""

import asyncio
import sys

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

sys.path.insert(0, ".")

from app.config import settings
from app.models.location import Location
from app.services.terms import upsert_terms

# (province_code, province_name, city_code, city_name, city_type, district_code, district_name)
LOCATIONS = [
    ("31", "DKI Jakarta", "3171", "Jakarta Selatan", "KOTA", "317101", "Kebayoran Baru"),
    ("31", "DKI Jakarta", "3171", "Jakarta Selatan", "KOTA", "317102", "Kebayoran Lama"),
    ("31", "DKI Jakarta", "3171", "Jakarta Selatan", "KOTA", "317103", "Mampang Prapatan"),
    ("31", "DKI Jakarta", "3173", "Jakarta Pusat", "KOTA", "317301", "Menteng"),
    ("31", "DKI Jakarta", "3173", "Jakarta Pusat", "KOTA", "317302", "Tanah Abang"),
    ("32", "Jawa Barat", "3273", "Bandung", "KOTA", "327301", "Coblong"),
    ("32", "Jawa Barat", "3273", "Bandung", "KOTA", "327302", "Sukajadi"),
    ("32", "Jawa Barat", "3204", "Bandung", "KABUPATEN", "320401", "Soreang"),
    ("51", "Bali", "5103", "Badung", "KABUPATEN", "510301", "Kuta"),
    ("51", "Bali", "5103", "Badung", "KABUPATEN", "510302", "Kuta Utara"),
    ("51", "Bali", "5104", "Gianyar", "KABUPATEN", "510401", "Ubud"),
    ("51", "Bali", "5171", "Denpasar", "KOTA", "517101", "Denpasar Selatan"),
]

SMART_TERMS = [
    "Apartment near MRT",
    "Villa with private pool",
    "Rumah dekat sekolah",
    "Pet friendly apartment",
]


async def main():
    print("=== Astra Suggest Seeder ===\n")

    engine = create_async_engine(settings.database_url, pool_size=5)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with session_factory() as db:
        print("[1/2] Inserting locations...")
        for province_code, province_name, city_code, city_name, city_type, district_code, district_name in LOCATIONS:
            stmt = pg_insert(Location).values(
                province_code=province_code,
                province_name=province_name,
                city_code=city_code,
                city_name=city_name,
                city_type=city_type,
                district_code=district_code,
                district_name=district_name,
            )
            await db.execute(stmt.on_conflict_do_nothing(index_elements=["district_code"]))
        await db.commit()
        total = await db.execute(select(Location.id))
        print(f"  {len(total.all())} locations in database")

        print("\n[2/2] Upserting suggestion terms...")
        await upsert_terms(settings.default_trending_terms, "trending", db, frequency=5)
        await upsert_terms(SMART_TERMS, "smart", db)
        print(f"  {len(settings.default_trending_terms)} trending, {len(SMART_TERMS)} smart")

        print("\n=== Seed Complete ===")
        print("API base URL: http://localhost:8000/api/v1")
        print("OpenAPI docs: http://localhost:8000/docs")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
