"""Domain value objects for rollcall."""

from enum import Enum

from pydantic import field_validator

from rollcall.domain.value.common import RootValueObject


class InvitationStatus(str, Enum):
    """Summary of where a linked record is in the invitation lifecycle."""

    UNINVITED = "uninvited"
    INVITED = "invited"
    ACCEPTED = "accepted"


class MessageKind(str, Enum):
    """Outbound messages the invitation lifecycle can send."""

    INVITATION = "invitation"
    REMINDER = "reminder"


class RecordScope(str, Enum):
    """Named queries over linked records."""

    ACCEPTED = "accepted"
    UNACCEPTED = "unaccepted"
    INVITED = "invited"
    UNINVITED = "uninvited"
    INVITABLE = "invitable"
    UNINVITABLE = "uninvitable"


class ImageSize(str, Enum):
    """Size variants of a directory user's picture."""

    STANDARD = "standard"
    ICON = "icon"
    THUMBNAIL = "thumbnail"


class ConfirmationToken(RootValueObject[str]):
    """One-time token exchanged with the directory to confirm an account."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty and has no path separators."""
        v = v.strip()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        if "/" in v:
            raise ValueError("Token must not contain '/'")
        return v

    def masked(self) -> str:
        """Short form that is safe to log."""
        return self.root[:8] + "..."
