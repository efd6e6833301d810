"""
Tests for the redis-backed stats cache (redis client is an AsyncMock).
"""

import json
from unittest.mock import AsyncMock

import pytest

from expathub_api.schemas.place import PlaceAggregate
from expathub_api.services.cache import CacheService, PlaceStatsCache


@pytest.fixture
def redis_client():
    return AsyncMock()


@pytest.mark.asyncio
async def test_get_many_returns_only_hits(redis_client):
    stored = PlaceAggregate(place_id="p1", average_rating=4.5, review_count=2, short_excerpt="좋아요")
    redis_client.mget.return_value = [json.dumps(stored.model_dump()), None]
    cache = PlaceStatsCache(CacheService(client=redis_client))

    result = await cache.get_many(["p1", "p2"])

    assert result == {"p1": stored}
    redis_client.mget.assert_awaited_once_with(["stats:place:p1", "stats:place:p2"])


@pytest.mark.asyncio
async def test_store_uses_ttl(redis_client):
    cache = PlaceStatsCache(CacheService(client=redis_client), ttl=60)
    stats = PlaceAggregate(place_id="p1", average_rating=0.0, review_count=0, short_excerpt="")

    await cache.store({"p1": stats})

    key, ttl, payload = redis_client.setex.await_args.args
    assert key == "stats:place:p1"
    assert ttl == 60
    assert json.loads(payload)["review_count"] == 0


@pytest.mark.asyncio
async def test_invalidate_deletes_key(redis_client):
    cache = PlaceStatsCache(CacheService(client=redis_client))

    await cache.invalidate("p7")

    redis_client.delete.assert_awaited_once_with("stats:place:p7")


@pytest.mark.asyncio
async def test_redis_errors_are_treated_as_miss(redis_client):
    redis_client.mget.side_effect = ConnectionError("redis down")
    cache = PlaceStatsCache(CacheService(client=redis_client))

    assert await cache.get_many(["p1"]) == {}


@pytest.mark.asyncio
async def test_get_many_with_no_keys(redis_client):
    assert await CacheService(client=redis_client).get_many([]) == []
    redis_client.mget.assert_not_awaited()
