"""Cache adapter."""

from .redis import RecordingCacheInvalidator, RedisCacheInvalidator

__all__ = ["RecordingCacheInvalidator", "RedisCacheInvalidator"]
