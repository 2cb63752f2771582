"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container

from rollcall.util.di import PROVIDERS, Component, ProviderBase, get_provider


def _mockable() -> list[type[ProviderBase]]:
    return [base for base in PROVIDERS if base.__subclasses__()]


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every mockable component is mocked unless unmocked.

    Settings come from the environment, as in production. Unmocked components
    need their service running (Postgres for "persistence", Redis for "cache",
    an SMTP server for "mail", the directory service for "directory").

    Args:
        unmock: Components to use production implementations for

    Returns:
        Configured test container

    Raises:
        ValueError: If an unknown component is named

    Examples:
        # Unit tests - all mocks
        container = build_test_container()

        # Integration tests - real persistence
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    known = {base.__mock_component__ for base in _mockable()}
    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = bool(base.__subclasses__()) and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers)
