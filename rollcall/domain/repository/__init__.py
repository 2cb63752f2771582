"""Repository interfaces for the rollcall domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from rollcall.domain.repository.record import (
    RecordRepository,
    ensure_storable,
    matches_scope,
)

__all__ = [
    "RecordRepository",
    "ensure_storable",
    "matches_scope",
]
