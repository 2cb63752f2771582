"""In-memory repository implementations for testing."""

from .record import InMemoryRecordRepository

__all__ = ["InMemoryRecordRepository"]
