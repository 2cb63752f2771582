"""Mappers for converting between database rows and domain models.

Linked records are mutable pydantic models with change tracking, so every
record built from a row is marked persisted before it is handed out.
"""

from typing import Any, Dict
from uuid import UUID

from rollcall.domain.model import LinkedRecord, record_class_for
from rollcall.domain.value import RecordId, UserUid


def row_to_record(row: Dict[str, Any]) -> LinkedRecord:
    """Convert database row to the linked record type it was stored as.

    Args:
        row: Database row as dict

    Returns:
        Linked record, marked persisted
    """
    record_class = record_class_for(row["record_type"])
    record = record_class(
        id=RecordId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        user_uid=UserUid(row["user_uid"]) if row.get("user_uid") else None,
        email=row.get("email"),
        given_name=row.get("given_name"),
        family_name=row.get("family_name"),
        chinese_name=row.get("chinese_name"),
        invited_at=row.get("invited_at"),
        reminded_at=row.get("reminded_at"),
        accepted_at=row.get("accepted_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
    record.mark_persisted()
    return record


def record_to_dict(record: LinkedRecord) -> Dict[str, Any]:
    """Convert linked record to database dict.

    Transient fields are left out.

    Args:
        record: Linked record

    Returns:
        Dict suitable for database insertion/update
    """
    return {**record.model_dump(), "record_type": record.record_type}
