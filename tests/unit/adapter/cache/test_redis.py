"""Tests for Redis cache invalidation."""

from unittest.mock import AsyncMock, patch

import pytest

from rollcall.adapter.cache import RecordingCacheInvalidator, RedisCacheInvalidator
from rollcall.domain.service import flush_on_save
from tests.conftest import make_identity


class TestRedisCacheInvalidator:
    """Tests for RedisCacheInvalidator."""

    @pytest.mark.asyncio
    async def test_flush_all_flushes_database(self):
        client = AsyncMock()
        with patch(
            "rollcall.adapter.cache.redis.redis.from_url", return_value=client
        ) as from_url:
            cache = RedisCacheInvalidator("redis://localhost:6379/3")
            await cache.flush_all()
            await cache.flush_all()

        # One connection, reused
        from_url.assert_called_once_with("redis://localhost:6379/3")
        assert client.flushdb.await_count == 2

    @pytest.mark.asyncio
    async def test_close(self):
        client = AsyncMock()
        with patch("rollcall.adapter.cache.redis.redis.from_url", return_value=client):
            cache = RedisCacheInvalidator("redis://localhost:6379/0")
            await cache.flush_all()
            await cache.close()
            await cache.close()

        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_without_connecting(self):
        cache = RedisCacheInvalidator("redis://localhost:6379/0")

        await cache.close()


class TestFlushOnSave:
    """Tests for the flush_on_save hook."""

    @pytest.mark.asyncio
    async def test_hook_flushes_for_any_user(self):
        cache = RecordingCacheInvalidator()
        hook = flush_on_save(cache)

        await hook(make_identity())
        await hook(make_identity(uid="u-other"))

        assert cache.flushes == 2

    @pytest.mark.asyncio
    async def test_hook_propagates_cache_failure(self):
        """Test the hook itself raises; swallowing is up to the hook runner."""
        cache = RecordingCacheInvalidator()
        cache.fail = True

        with pytest.raises(ConnectionError):
            await flush_on_save(cache)(make_identity())
