"""Tests for the cache stores."""

import asyncio

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from conftest import FakeClock
from weathercard.errors import CacheError
from weathercard.services.kv_store import MemoryStore, RedisStore, build_store


class TestMemoryStore:
    def test_round_trips_json_values(self):
        store = MemoryStore()
        value = {"svg": "<svg/>", "generated_at": 1.5, "days": [1, 2]}
        asyncio.run(store.put("k", value, 60))
        assert asyncio.run(store.get("k")) == value

    def test_absent_key(self):
        assert asyncio.run(MemoryStore().get("nope")) is None

    def test_entry_expires_after_ttl(self):
        clock = FakeClock(1000.0)
        store = MemoryStore(clock=clock)
        asyncio.run(store.put("k", {"a": 1}, 3600))

        clock.now = 1000.0 + 3599
        assert asyncio.run(store.get("k")) == {"a": 1}

        clock.now = 1000.0 + 3600
        assert asyncio.run(store.get("k")) is None

    def test_last_writer_wins(self):
        store = MemoryStore()
        asyncio.run(store.put("k", {"n": 1}, 60))
        asyncio.run(store.put("k", {"n": 2}, 60))
        assert asyncio.run(store.get("k")) == {"n": 2}

    def test_returns_copies(self):
        store = MemoryStore()
        asyncio.run(store.put("k", {"n": [1]}, 60))
        first = asyncio.run(store.get("k"))
        first["n"].append(2)
        assert asyncio.run(store.get("k")) == {"n": [1]}

    def test_clear(self):
        store = MemoryStore()
        asyncio.run(store.put("k", 1, 60))
        store.clear()
        assert asyncio.run(store.get("k")) is None


class FakeRedis:
    """Stand-in for ``redis.asyncio.Redis`` covering get/set."""

    def __init__(self, fail=False):
        self.fail = fail
        self.data: dict[str, str] = {}
        self.expiry: dict[str, int] = {}

    async def get(self, key):
        if self.fail:
            raise RedisConnectionError("Connection refused")
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        if self.fail:
            raise RedisConnectionError("Connection refused")
        self.data[key] = value
        self.expiry[key] = ex


class TestRedisStore:
    def test_put_sets_ttl_and_encodes_json(self):
        client = FakeRedis()
        store = RedisStore(client)
        asyncio.run(store.put("forecast:78666:2024-01-07:", {"svg": "<svg/>"}, 3600))
        assert client.data["forecast:78666:2024-01-07:"] == '{"svg":"<svg/>"}'
        assert client.expiry["forecast:78666:2024-01-07:"] == 3600

    def test_get_decodes(self):
        client = FakeRedis()
        client.data["k"] = '{"a": [1, 2]}'
        assert asyncio.run(RedisStore(client).get("k")) == {"a": [1, 2]}

    def test_missing_key(self):
        assert asyncio.run(RedisStore(FakeRedis()).get("k")) is None

    def test_malformed_value_raises_cache_error(self):
        client = FakeRedis()
        client.data["k"] = "{not json"
        with pytest.raises(CacheError):
            asyncio.run(RedisStore(client).get("k"))

    def test_connection_failure_raises_cache_error(self):
        store = RedisStore(FakeRedis(fail=True))
        with pytest.raises(CacheError):
            asyncio.run(store.get("k"))
        with pytest.raises(CacheError):
            asyncio.run(store.put("k", 1, 60))


class TestBuildStore:
    def test_memory_without_url(self):
        assert isinstance(build_store(""), MemoryStore)

    def test_redis_with_url(self):
        # from_url does not connect until the first command.
        assert isinstance(build_store("redis://localhost:6379/0"), RedisStore)
