"""Cache invalidation port."""

from collections.abc import Awaitable, Callable

from rollcall.domain.model.identity import Identity


class CacheInvalidator:
    """Flushes a shared cache that may hold stale copies of directory users."""

    async def flush_all(self) -> None:
        """Drop everything from the cache."""
        raise NotImplementedError


def flush_on_save(cache: CacheInvalidator) -> Callable[[Identity], Awaitable[None]]:
    """Build a post-save hook that flushes the cache whenever a user is saved."""

    async def _flush(identity: Identity) -> None:
        _ = identity  # Every save invalidates the whole cache
        await cache.flush_all()

    return _flush
