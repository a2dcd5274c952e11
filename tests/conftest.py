import time

import pytest

from app.services.geography import Area, City, Province


class FakeRedis:
    """In-memory stand-in for the few redis.asyncio calls the store makes."""

    def __init__(self):
        self.data: dict[str, str] = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value
        return True

    async def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0


@pytest.fixture
def now():
    return int(time.time() * 1000)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def provinces():
    return [
        Province(code="31", name="DKI Jakarta"),
        Province(code="32", name="Jawa Barat"),
        Province(code="51", name="Bali"),
    ]


@pytest.fixture
def cities():
    return [
        City(code="3171", name="Jakarta Selatan", type="KOTA"),
        City(code="3173", name="Jakarta Pusat", type="KOTA"),
    ]


@pytest.fixture
def areas():
    return [
        Area(code="317101", name="Kebayoran Baru"),
        Area(code="317102", name="Kebayoran Lama"),
    ]
