"""Mock persistence providers for testing."""

from dishka import Scope, provide

from rollcall.domain.repository import RecordRepository
from rollcall.persistence.repository.inmemory import InMemoryRecordRepository
from rollcall.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_record_repository(self) -> RecordRepository:
        """Provide in-memory linked record repository."""
        return InMemoryRecordRepository()
