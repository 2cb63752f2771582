"""Mock providers for testing."""

from .cache import MockCacheProvider
from .directory import MockDirectoryProvider
from .mail import MockMailProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockCacheProvider",
    "MockDirectoryProvider",
    "MockMailProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
