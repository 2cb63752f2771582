"""Infrastructure providers."""

# Import bases
from .cache import CacheProvider
from .directory import DirectoryProvider
from .mail import MailProvider
from .persistence import PersistenceProvider
from .session import ProdSessionProvider

# Import implementations (needed for __subclasses__())
from .cache import ProdCacheProvider  # noqa: F401
from .directory import ProdDirectoryProvider  # noqa: F401
from .mail import ProdMailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "CacheProvider",
    "DirectoryProvider",
    "MailProvider",
    "PersistenceProvider",
    "ProdCacheProvider",
    "ProdDirectoryProvider",
    "ProdMailProvider",
    "ProdPersistenceProvider",
    "ProdSessionProvider",
]
