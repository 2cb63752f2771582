"""Linked record repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from rollcall.domain.error import ValidationError
from rollcall.domain.model.record import LinkedRecord, record_class_for
from rollcall.domain.value import RecordId, RecordScope, UserUid


class RecordRepository(ABC):
    """Repository for linked records of every record type.

    Implementations mark records persisted when they load or save them so
    that change tracking reflects the stored state.
    """

    @abstractmethod
    async def find_by_id(self, record_id: RecordId) -> Optional[LinkedRecord]:
        """Find a record by ID.

        Args:
            record_id: The record's unique identifier

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_uid: UserUid) -> list[LinkedRecord]:
        """Find every record that refers to a directory user.

        Args:
            user_uid: The directory user's uid

        Returns:
            List of records (may be empty)
        """
        pass

    @abstractmethod
    async def find_in_scope(
        self,
        record_type: str,
        scope: RecordScope,
        limit: int = 100,
        offset: int = 0,
    ) -> list[LinkedRecord]:
        """Find records of one type matching a named scope.

        Args:
            record_type: Record type name (e.g. "interviewer")
            scope: Named scope (accepted, invited, invitable, ...)
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of records ordered by creation time
        """
        pass

    @abstractmethod
    async def save(self, record: LinkedRecord) -> LinkedRecord:
        """Save a record (create or update) and mark it persisted.

        Args:
            record: The record to save

        Returns:
            The saved record

        Raises:
            ValidationError: If the record type is not registered
        """
        pass

    @abstractmethod
    async def update_columns(
        self, record_id: RecordId, values: dict[str, Any]
    ) -> None:
        """Write individual columns of a stored record.

        Used for timestamp stamps, which must not carry along any other
        pending changes of the in-memory record.

        Args:
            record_id: The record to update
            values: Column names and values to write
        """
        pass


def matches_scope(record: LinkedRecord, scope: RecordScope) -> bool:
    """Whether an in-memory record falls within a named scope."""
    if scope is RecordScope.ACCEPTED:
        return record.accepted_at is not None
    if scope is RecordScope.UNACCEPTED:
        return record.accepted_at is None
    if scope is RecordScope.INVITED:
        return record.invited_at is not None
    if scope is RecordScope.UNINVITED:
        return record.invited_at is None
    if scope is RecordScope.INVITABLE:
        return record.user_uid is not None
    return record.user_uid is None



def ensure_storable(record: LinkedRecord) -> None:
    """Refuse records whose type could not be loaded back from storage.

    Raises:
        ValidationError: If the record's type is not a registered record type
    """
    try:
        record_class_for(record.record_type)
    except ValueError as e:
        raise ValidationError(f"Cannot store record: {e}") from e
