"""Domain model entities for rollcall."""

from rollcall.domain.model.identity import Identity, with_defaults
from rollcall.domain.model.record import (
    RECORD_TYPES,
    Applicant,
    Interviewer,
    LinkedRecord,
    record_class_for,
)

__all__ = [
    "Applicant",
    "Identity",
    "Interviewer",
    "LinkedRecord",
    "RECORD_TYPES",
    "record_class_for",
    "with_defaults",
]
