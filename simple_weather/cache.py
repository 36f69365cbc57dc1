"""In-memory TTL cache for weather icon images.

Only icon bytes are cached; current-weather lookups always go to the network.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from typing import Generic, TypeVar

from simple_weather.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

T = TypeVar("T")


class CacheEntry(Generic[T]):
    """A cached value with expiration time."""

    def __init__(self, value: T, expires_at: datetime):
        self.value = value
        self.expires_at = expires_at

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now()) >= self.expires_at


class IconCache:
    """TTL cache keyed by icon code, safe for concurrent coroutines."""

    def __init__(self):
        self._entries: dict[str, CacheEntry[bytes]] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> bytes | None:
        """Return cached bytes, or None when missing or expired."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired():
                del self._entries[key]
                log_with_context(logger, "debug", "Icon cache expired", cache_key=key, event_type="cache_expired")
                return None
            log_with_context(logger, "debug", "Icon cache hit", cache_key=key, event_type="cache_hit")
            return entry.value

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        """Store ``value`` for ``ttl_seconds``; a TTL of 0 disables caching."""
        if ttl_seconds <= 0:
            return
        async with self._lock:
            self._entries[key] = CacheEntry(value, datetime.now() + timedelta(seconds=ttl_seconds))

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()


async def cached_icon(
    cache: IconCache,
    icon_code: str,
    ttl_seconds: int,
    fetch_func: Callable[[], Awaitable[bytes]],
) -> bytes:
    """Return the icon from ``cache`` or fetch and store it.

    Args:
        cache: Cache instance
        icon_code: OpenWeatherMap icon code, used as the key
        ttl_seconds: Time to live in seconds
        fetch_func: Coroutine function returning the image bytes

    Returns:
        Cached or freshly fetched image bytes
    """
    hit = await cache.get(icon_code)
    if hit is not None:
        return hit

    log_with_context(logger, "debug", "Icon cache miss", cache_key=icon_code, event_type="cache_miss")
    value = await fetch_func()
    await cache.set(icon_code, value, ttl_seconds)
    return value
