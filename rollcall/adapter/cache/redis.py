"""Redis cache invalidation."""

import logfire
import redis.asyncio as redis

from rollcall.domain.service.cache import CacheInvalidator


class RedisCacheInvalidator(CacheInvalidator):
    """Flushes the Redis database that holds cached pages and fragments."""

    def __init__(self, url: str) -> None:
        """Initialize Redis invalidator.

        Args:
            url: Redis URL (e.g. "redis://localhost:6379/0")
        """
        self.url = url
        self._client: redis.Redis | None = None

    async def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(self.url)
        return self._client

    async def flush_all(self) -> None:
        client = await self._get_client()
        await client.flushdb()
        logfire.info("Cache flushed", url=self.url)

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class RecordingCacheInvalidator(CacheInvalidator):
    """Counts flushes instead of talking to Redis, for testing.

    Set ``fail`` to make every flush raise.
    """

    def __init__(self) -> None:
        self.flushes = 0
        self.fail = False

    async def flush_all(self) -> None:
        if self.fail:
            raise ConnectionError("Cache unavailable")
        self.flushes += 1
