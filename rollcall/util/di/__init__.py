"""Dependency injection module."""

from typing import Type

from rollcall.util.di.application import ProdApplicationProvider
from rollcall.util.di.base import Component, ProviderBase
from rollcall.util.di.core import ProdConfigProvider
from rollcall.util.di.domain import ProdDomainProvider
from rollcall.util.di.infrastructure import (
    CacheProvider,
    DirectoryProvider,
    MailProvider,
    PersistenceProvider,
    ProdCacheProvider,
    ProdDirectoryProvider,
    ProdMailProvider,
    ProdPersistenceProvider,
    ProdSessionProvider,
)
from rollcall.util.error import DependencyInjectionError

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ProdSessionProvider,
    # Infrastructure components (mockable)
    DirectoryProvider,
    PersistenceProvider,
    MailProvider,
    CacheProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get appropriate provider class.

    Automatically determines if provider is mockable by checking for subclasses.

    - No subclasses: Concrete provider, use directly
    - Has subclasses: Mockable component, select by __is_mock__ flag

    Args:
        base: Provider base class
        use_mock: Whether to use mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise DependencyInjectionError(
            f"No {kind} implementation for {component_name}"
        )

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "ProdSessionProvider",
    # Infrastructure base classes
    "CacheProvider",
    "DirectoryProvider",
    "MailProvider",
    "PersistenceProvider",
    # Infrastructure implementations
    "ProdCacheProvider",
    "ProdDirectoryProvider",
    "ProdMailProvider",
    "ProdPersistenceProvider",
]
