"""Cache infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from rollcall.adapter.cache import RedisCacheInvalidator
from rollcall.config import Settings
from rollcall.domain.service import IdentitySaveHooks, flush_on_save
from rollcall.util.di.base import ProviderBase


class CacheProvider(ProviderBase):
    """Cache component base."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider flushing Redis after directory user saves."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_identity_save_hooks(
        self, settings: Settings
    ) -> AsyncIterator[IdentitySaveHooks]:
        """Provide post-save hooks, with a cache flush when a cache is configured."""
        if not settings.cache.url:
            yield IdentitySaveHooks()
            return

        cache = RedisCacheInvalidator(settings.cache.url)
        yield IdentitySaveHooks([flush_on_save(cache)])
        await cache.close()
