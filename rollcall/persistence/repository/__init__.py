"""PostgreSQL repository implementations."""

from rollcall.persistence.repository.record import PostgresRecordRepository

__all__ = ["PostgresRecordRepository"]
