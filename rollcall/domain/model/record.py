"""Linked record entities.

A linked record is any local entity that refers to a directory user by uid.
The reference is a lookup key, not an ownership edge: the directory user can
disappear at any time and the local record has to keep working.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Optional
from uuid import uuid4

from pydantic import Field, PrivateAttr, field_validator

from rollcall.domain.model.common import TrackedModel
from rollcall.domain.model.identity import Identity
from rollcall.domain.value import InvitationStatus, RecordId, UserUid


def _now() -> datetime:
    return datetime.now(timezone.utc)


class LinkedRecord(TrackedModel):
    """Local record associated with a remote directory user.

    ``user_uid`` is the persisted reference. The resolved ``Identity`` is kept
    in memory for the life of this instance only and is never stored.

    Business rules:
    - Assigning an empty uid leaves the reference alone; None clears it
    - Acceptance does not require a prior invitation
    - ``send_invitation`` and ``newly_accepted`` are transient
    """

    record_type: ClassVar[str] = "record"

    id: RecordId = Field(default_factory=lambda: RecordId(uuid4()))
    user_uid: Optional[UserUid] = None

    # Local overrides and hints used to seed a new directory user
    email: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    chinese_name: Optional[str] = None

    invited_at: Optional[datetime] = None
    reminded_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    # Transient
    send_invitation: Any = Field(default=None, exclude=True)
    newly_accepted: bool = Field(default=False, exclude=True)

    _user: Optional[Identity] = PrivateAttr(default=None)

    # Identity reference

    @field_validator("user_uid", mode="before")
    @classmethod
    def blank_uid_is_none(cls, v: Any) -> Any:
        """An empty uid refers to nobody."""
        return None if v == "" else v

    def __setattr__(self, name: str, value: Any) -> None:
        # Every write of the uid follows the assign_uid rules
        if name == "user_uid":
            if value == "":
                return
            if value != self.user_uid:
                self._user = None
        super().__setattr__(name, value)

    def assign_uid(self, uid: Optional[str]) -> None:
        """Point this record at a directory user.

        An empty string means no value was given and is ignored; None clears.
        Plain assignment to ``user_uid`` behaves the same way.
        """
        self.user_uid = uid

    @property
    def cached_user(self) -> Optional[Identity]:
        """The directory user already resolved for this instance, if any."""
        return self._user

    def cache_user(self, identity: Identity) -> None:
        """Remember a resolved directory user for the life of this instance."""
        self._user = identity

    def confirmation_usually_deferred(self) -> bool:
        """Whether new directory users created for this record skip the
        directory's own confirmation message.

        The invitation carries its own confirmation step, so by default the
        directory's message is suppressed. Record types may override this.
        """
        return True

    # Invitation state

    @property
    def is_invited(self) -> bool:
        return self.invited_at is not None

    @property
    def is_uninvited(self) -> bool:
        return not self.is_invited

    @property
    def is_accepted(self) -> bool:
        return self.accepted_at is not None

    @property
    def is_unaccepted(self) -> bool:
        return not self.is_accepted

    @property
    def is_reminded(self) -> bool:
        return self.reminded_at is not None

    @property
    def status(self) -> InvitationStatus:
        """Accepted, else invited, else uninvited."""
        if self.is_accepted:
            return InvitationStatus.ACCEPTED
        if self.is_invited:
            return InvitationStatus.INVITED
        return InvitationStatus.UNINVITED

    @property
    def is_newly_accepted(self) -> bool:
        """Whether acceptance happened during the current operation."""
        return bool(self.newly_accepted)

    @property
    def is_inviting(self) -> bool:
        """Whether the owner asked for an invitation to go out on save.

        Form values arrive as strings, so "0" means no.
        """
        flag = self.send_invitation
        return self.is_unaccepted and bool(flag) and str(flag) != "0"


class Interviewer(LinkedRecord):
    """Someone invited to interview applicants."""

    record_type: ClassVar[str] = "interviewer"


class Applicant(LinkedRecord):
    """Someone applying, who is invited to follow their application."""

    record_type: ClassVar[str] = "applicant"


RECORD_TYPES: dict[str, type[LinkedRecord]] = {
    Interviewer.record_type: Interviewer,
    Applicant.record_type: Applicant,
}


def record_class_for(record_type: str) -> type[LinkedRecord]:
    """Look up the record class stored under a record type name.

    Raises:
        ValueError: If the record type is unknown
    """
    try:
        return RECORD_TYPES[record_type]
    except KeyError:
        raise ValueError(f"Unknown record type: {record_type}") from None
