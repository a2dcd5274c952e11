import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI

from app.config import settings
from app.middleware.request_logging import RequestLoggingMiddleware

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.redis = aioredis.from_url(
        settings.redis_url,
        decode_responses=True,
    )
    yield
    await app.state.redis.close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Search suggestions for the property marketplace: recent, trending, smart and location matches ranked by click popularity.",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# --- Routers ---
from app.api.v1 import locations, suggestions  # noqa: E402

app.include_router(suggestions.router, prefix="/api/v1", tags=["Suggestions"])
app.include_router(locations.router, prefix="/api/v1", tags=["Locations"])


@app.get("/api/v1/health", tags=["Health"])
async def health_check():
    redis_ok = False
    try:
        redis_ok = await app.state.redis.ping()
    except Exception:
        pass

    return {
        "status": "healthy" if redis_ok else "degraded",
        "version": settings.app_version,
        "services": {
            "redis": "up" if redis_ok else "down",
        },
    }
