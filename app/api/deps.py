import redis.asyncio as aioredis
from fastapi import Depends, Header, Request

from app.config import settings
from app.middleware.rate_limiter import check_rate_limit


def get_redis(request: Request) -> aioredis.Redis:
    return request.app.state.redis


def get_client_id(
    request: Request,
    x_client_id: str | None = Header(None, max_length=128),
) -> str:
    """Identify whose click history and recent searches a request uses.

    Browsers send a stable ``X-Client-ID``; without one the remote address is
    used so anonymous visitors still get their own history.
    """
    if x_client_id and x_client_id.strip():
        return x_client_id.strip()
    if request.client:
        return f"ip:{request.client.host}"
    return "anonymous"


async def rate_limit_client(
    request: Request,
    client_id: str = Depends(get_client_id),
) -> str:
    """Apply the per-client request budget and pass the client id through."""
    await check_rate_limit(request, key=client_id, limit=settings.suggest_rate_limit)
    return client_id
