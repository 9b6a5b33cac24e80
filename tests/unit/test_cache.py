"""
Unit tests for the Redis-backed search result cache.
"""

import fnmatch
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import RedisError

from morphsearch.core.models import Document, ScoredDocument, SearchResult
from morphsearch.search.cache import RedisSearchCache


class FakeRedis:
    """Minimal async subset of the redis client used by the cache"""

    def __init__(self):
        self.data = {}
        self.expiry = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value
        self.expiry[key] = ex

    async def scan(self, cursor, match=None, count=None):
        keys = [k for k in self.data if fnmatch.fnmatch(k, match)]
        return 0, keys

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed


def make_result() -> SearchResult:
    item = ScoredDocument(
        document=Document(id="d1", title="Документы", body="Текст", metadata={"category": "finance"}),
        score=400,
        title_highlighted='<mark class="new-term">Документы</mark>',
        snippets=['<p class="my-2 text-break">Текст</p>'],
    )
    return SearchResult(query="документы", total=1, items=[item], corrected_query="документы", took_ms=3)


class TestRedisSearchCache:

    @pytest.mark.asyncio
    async def test_round_trip(self):
        client = FakeRedis()
        cache = RedisSearchCache(client, ttl=600)

        await cache.set_search_result("abc", make_result())
        restored = await cache.get_search_result("abc")

        assert "search:abc" in client.data
        assert client.expiry["search:abc"] == 600
        assert restored == make_result()

    @pytest.mark.asyncio
    async def test_miss(self):
        cache = RedisSearchCache(FakeRedis())
        assert await cache.get_search_result("missing") is None

    @pytest.mark.asyncio
    async def test_custom_ttl(self):
        client = FakeRedis()
        cache = RedisSearchCache(client)

        await cache.set_search_result("abc", make_result(), ttl=30)

        assert client.expiry["search:abc"] == 30

    @pytest.mark.asyncio
    async def test_broken_entry_is_a_miss(self):
        client = FakeRedis()
        client.data["search:abc"] = "{not json"
        cache = RedisSearchCache(client)

        assert await cache.get_search_result("abc") is None

    @pytest.mark.asyncio
    async def test_redis_errors_are_misses(self):
        client = AsyncMock()
        client.get.side_effect = RedisError("connection refused")
        client.set.side_effect = RedisError("connection refused")
        cache = RedisSearchCache(client)

        assert await cache.get_search_result("abc") is None
        await cache.set_search_result("abc", make_result())

    @pytest.mark.asyncio
    async def test_invalidate_only_touches_prefix(self):
        client = FakeRedis()
        client.data["other:key"] = "1"
        cache = RedisSearchCache(client)
        await cache.set_search_result("a", make_result())
        await cache.set_search_result("b", make_result())

        deleted = await cache.invalidate()

        assert deleted == 2
        assert list(client.data) == ["other:key"]
