"""Domain value objects for rollcall."""

from rollcall.domain.value.identifiers import RecordId, UserUid
from rollcall.domain.value.types import (
    ConfirmationToken,
    ImageSize,
    InvitationStatus,
    MessageKind,
    RecordScope,
)

__all__ = [
    # Identifiers
    "RecordId",
    "UserUid",
    # Types
    "ConfirmationToken",
    "ImageSize",
    "InvitationStatus",
    "MessageKind",
    "RecordScope",
]
