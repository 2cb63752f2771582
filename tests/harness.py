"""Test harness for unit and integration tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import pytest_asyncio

from rollcall.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    The fixture builds a fresh container per test and yields a request-scoped
    container, so repositories and mock services never leak between tests.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no services needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes Postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_save(integration_env):
            repo = await integration_env.get(RecordRepository)
            record = await repo.save(Interviewer(email="a@example.org"))
            assert record.persisted
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())
        async with container() as request_container:
            yield request_container
        await container.close()

    return _test_environment
