"""PostgreSQL implementation of the linked record repository."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import ColumnElement, insert, select, true, update
from sqlalchemy.ext.asyncio import AsyncSession

from rollcall.domain.model import LinkedRecord
from rollcall.domain.repository import RecordRepository, ensure_storable
from rollcall.domain.value import RecordId, RecordScope, UserUid
from rollcall.persistence.mappers import record_to_dict, row_to_record
from rollcall.persistence.tables import linked_records_table

_c = linked_records_table.c


def scope_clause(scope: RecordScope) -> ColumnElement[bool]:
    """SQL condition for a named scope."""
    if scope is RecordScope.ACCEPTED:
        return _c.accepted_at.is_not(None)
    if scope is RecordScope.UNACCEPTED:
        return _c.accepted_at.is_(None)
    if scope is RecordScope.INVITED:
        return _c.invited_at.is_not(None)
    if scope is RecordScope.UNINVITED:
        return _c.invited_at.is_(None)
    if scope is RecordScope.INVITABLE:
        return _c.user_uid.is_not(None)
    if scope is RecordScope.UNINVITABLE:
        return _c.user_uid.is_(None)
    return true()


class PostgresRecordRepository(RecordRepository):
    """PostgreSQL implementation of RecordRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, record_id: RecordId) -> Optional[LinkedRecord]:
        stmt = select(linked_records_table).where(_c.id == record_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_record(dict(row)) if row else None

    async def find_by_user(self, user_uid: UserUid) -> list[LinkedRecord]:
        stmt = (
            select(linked_records_table)
            .where(_c.user_uid == user_uid)
            .order_by(_c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_record(dict(row)) for row in result.mappings()]

    async def find_in_scope(
        self,
        record_type: str,
        scope: RecordScope,
        limit: int = 100,
        offset: int = 0,
    ) -> list[LinkedRecord]:
        stmt = (
            select(linked_records_table)
            .where(_c.record_type == record_type, scope_clause(scope))
            .order_by(_c.created_at)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_record(dict(row)) for row in result.mappings()]

    async def save(self, record: LinkedRecord) -> LinkedRecord:
        """Save a record (create or update).

        Args:
            record: Record to save

        Returns:
            Saved record, marked persisted
        """
        ensure_storable(record)
        if record.persisted:
            record.updated_at = datetime.now(timezone.utc)
        record_dict = record_to_dict(record)

        # Check if record exists
        exists = await self.session.execute(
            select(_c.id).where(_c.id == record.id)
        )

        if exists.first() is not None:
            stmt = (
                update(linked_records_table)
                .where(_c.id == record.id)
                .values(**record_dict)
            )
        else:
            stmt = insert(linked_records_table).values(**record_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        record.mark_persisted()
        return record

    async def update_columns(
        self, record_id: RecordId, values: dict[str, Any]
    ) -> None:
        stmt = (
            update(linked_records_table)
            .where(_c.id == record_id)
            .values(**values)
        )
        await self.session.execute(stmt)
        await self.session.flush()
