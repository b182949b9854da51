"""Key-value stores holding cached forecast cards.

Values are JSON-encoded on ``put`` and decoded on ``get``. Every entry has
a TTL; an expired entry reads as absent. ``put`` is last-writer-wins.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..errors import CacheError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[Any]:
        ...

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        ...


@dataclass
class _CacheEntry:
    """Internal cache entry holding an encoded value."""
    payload: str
    expires_at: float


class MemoryStore:
    """In-process TTL store, used when no Redis URL is configured."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return _decode(key, entry.payload)

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._entries[key] = _CacheEntry(
            payload=json.dumps(value, separators=(",", ":")),
            expires_at=self._clock() + ttl_seconds,
        )

    def clear(self) -> None:
        self._entries.clear()


class RedisStore:
    """Redis-backed store; expiry is delegated to Redis ``EX``."""

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[Any]:
        try:
            payload = await self._client.get(key)
        except RedisError as exc:
            raise CacheError(f"Redis get failed for {key}: {exc}") from exc
        if not payload:
            return None
        return _decode(key, payload)

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        payload = json.dumps(value, separators=(",", ":"))
        try:
            await self._client.set(key, payload, ex=ttl_seconds)
        except RedisError as exc:
            raise CacheError(f"Redis set failed for {key}: {exc}") from exc

    async def close(self) -> None:
        await self._client.aclose()


def _decode(key: str, payload: str) -> Any:
    try:
        return json.loads(payload)
    except ValueError as exc:
        raise CacheError(f"Malformed cache value for {key}") from exc


def build_store(redis_url: str) -> KeyValueStore:
    """Pick the store implementation for the configured URL."""
    if redis_url:
        logger.info("Using Redis cache store")
        return RedisStore.from_url(redis_url)
    logger.info("Using in-process memory cache store")
    return MemoryStore()
