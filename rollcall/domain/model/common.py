"""Base models for domain entities."""

from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr


class DomainModel(BaseModel):
    """Base class for immutable domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # Immutable; use model_copy(update=...) to change
        arbitrary_types_allowed=True,  # Allow custom value objects
    )


class TrackedModel(BaseModel):
    """Base class for mutable local records with change tracking.

    A repository marks the record persisted whenever it loads or saves it; the
    snapshot taken at that moment is what ``has_changes`` compares against.
    Fields declared with ``exclude=True`` are transient: they are neither
    persisted nor tracked.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )

    _snapshot: dict[str, Any] | None = PrivateAttr(default=None)

    @property
    def persisted(self) -> bool:
        """Whether this record has been loaded from or saved to storage."""
        return self._snapshot is not None

    @property
    def has_changes(self) -> bool:
        """Whether any persistent field differs from the stored state."""
        if self._snapshot is None:
            return True
        return self.model_dump() != self._snapshot

    def changed_fields(self) -> set[str]:
        """Names of persistent fields that differ from the stored state."""
        current = self.model_dump()
        if self._snapshot is None:
            return set(current)
        return {name for name, value in current.items() if self._snapshot.get(name) != value}

    def mark_persisted(self) -> None:
        """Record the current state as the stored state."""
        self._snapshot = self.model_dump()

    def write_column(self, name: str, value: Any) -> None:
        """Set one field as if it had been written straight to storage.

        Other pending changes stay pending.
        """
        setattr(self, name, value)
        if self._snapshot is not None:
            self._snapshot[name] = self.model_dump(include={name})[name]
