"""In-memory linked record repository for testing."""

from datetime import datetime, timezone
from typing import Any, Optional

from rollcall.domain.model.record import LinkedRecord
from rollcall.domain.repository.record import (
    RecordRepository,
    ensure_storable,
    matches_scope,
)
from rollcall.domain.value import RecordId, RecordScope, UserUid
from rollcall.persistence.mappers import record_to_dict, row_to_record


class InMemoryRecordRepository(RecordRepository):
    """In-memory implementation of RecordRepository for testing.

    Rows are stored as dicts, like the database would hold them, so every
    lookup returns a fresh record instance.
    """

    def __init__(self) -> None:
        self._rows: dict[RecordId, dict[str, Any]] = {}
        self.saves = 0

    async def find_by_id(self, record_id: RecordId) -> Optional[LinkedRecord]:
        row = self._rows.get(record_id)
        return row_to_record(dict(row)) if row else None

    async def find_by_user(self, user_uid: UserUid) -> list[LinkedRecord]:
        rows = [row for row in self._rows.values() if row["user_uid"] == user_uid]
        rows.sort(key=lambda row: row["created_at"])
        return [row_to_record(dict(row)) for row in rows]

    async def find_in_scope(
        self,
        record_type: str,
        scope: RecordScope,
        limit: int = 100,
        offset: int = 0,
    ) -> list[LinkedRecord]:
        records = [
            row_to_record(dict(row))
            for row in sorted(self._rows.values(), key=lambda row: row["created_at"])
            if row["record_type"] == record_type
        ]
        matching = [record for record in records if matches_scope(record, scope)]
        return matching[offset : offset + limit]

    async def save(self, record: LinkedRecord) -> LinkedRecord:
        ensure_storable(record)
        if record.persisted:
            record.updated_at = datetime.now(timezone.utc)
        self._rows[record.id] = record_to_dict(record)
        self.saves += 1
        record.mark_persisted()
        return record

    async def update_columns(
        self, record_id: RecordId, values: dict[str, Any]
    ) -> None:
        row = self._rows.get(record_id)
        if row is not None:
            row.update(values)
