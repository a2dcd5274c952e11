from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import rate_limit_client
from app.database import get_db
from app.services.geography import get_areas, get_cities, get_provinces

router = APIRouter()


@router.get("/locations/provinces")
async def list_provinces(
    db: AsyncSession = Depends(get_db),
    client_id: str = Depends(rate_limit_client),
):
    provinces = await get_provinces(db)
    return {"provinces": [{"code": p.code, "name": p.name} for p in provinces]}


@router.get("/locations/cities")
async def list_cities(
    province_code: str = Query(..., min_length=1, max_length=10),
    db: AsyncSession = Depends(get_db),
    client_id: str = Depends(rate_limit_client),
):
    cities = await get_cities(province_code, db)
    return {
        "province_code": province_code,
        "cities": [{"code": c.code, "name": c.name, "type": c.type} for c in cities],
    }


@router.get("/locations/areas")
async def list_areas(
    province_code: str = Query(..., min_length=1, max_length=10),
    city_code: str = Query(..., min_length=1, max_length=10),
    db: AsyncSession = Depends(get_db),
    client_id: str = Depends(rate_limit_client),
):
    areas = await get_areas(province_code, city_code, db)
    return {
        "province_code": province_code,
        "city_code": city_code,
        "areas": [{"code": a.code, "name": a.name} for a in areas],
    }
