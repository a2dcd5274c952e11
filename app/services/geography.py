import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.location import Location

logger = logging.getLogger("astra.geography")


@dataclass(frozen=True)
class Province:
    code: str
    name: str


@dataclass(frozen=True)
class City:
    code: str
    name: str
    type: str = ""


@dataclass(frozen=True)
class Area:
    code: str
    name: str


async def get_provinces(db: AsyncSession) -> list[Province]:
    """Distinct active provinces ordered by name."""
    result = await db.execute(
        select(Location.province_code, Location.province_name)
        .where(Location.is_active.is_(True))
        .distinct()
        .order_by(Location.province_name)
    )
    return [Province(code=row.province_code, name=row.province_name) for row in result]


async def get_cities(province_code: str, db: AsyncSession) -> list[City]:
    """Active cities of a province, one entry per city code."""
    result = await db.execute(
        select(Location.city_code, Location.city_name, Location.city_type)
        .where(Location.province_code == province_code, Location.is_active.is_(True))
        .order_by(Location.city_name)
    )
    cities: dict[str, City] = {}
    for row in result:
        if row.city_code not in cities:
            cities[row.city_code] = City(
                code=row.city_code, name=row.city_name, type=row.city_type or ""
            )
    logger.debug("Loaded %d cities for province=%s", len(cities), province_code)
    return list(cities.values())


async def get_areas(province_code: str, city_code: str, db: AsyncSession) -> list[Area]:
    """Active districts of a city, one entry per district code."""
    result = await db.execute(
        select(Location.district_code, Location.district_name)
        .where(
            Location.province_code == province_code,
            Location.city_code == city_code,
            Location.is_active.is_(True),
        )
        .order_by(Location.district_name)
    )
    areas: dict[str, Area] = {}
    for row in result:
        areas.setdefault(row.district_code, Area(code=row.district_code, name=row.district_name))
    return list(areas.values())


async def load_taxonomy(
    db: AsyncSession,
    current_state: str | None = None,
    current_city: str | None = None,
) -> tuple[list[Province], list[City], list[Area]]:
    """Load the reference lists the location matcher works on.

    Cities are only loaded once a province is selected and areas once a city
    is selected as well.
    """
    provinces = await get_provinces(db)
    cities = await get_cities(current_state, db) if current_state else []
    areas = (
        await get_areas(current_state, current_city, db)
        if current_state and current_city
        else []
    )
    return provinces, cities, areas
