"""Identity entity.

An identity is a user account held by the remote directory service. Local
records only ever hold its uid; the directory owns its whole lifecycle.
"""

from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator

from rollcall.domain.model.common import DomainModel
from rollcall.domain.value import ImageSize, UserUid

# Honorifics that carry no information worth showing on their own
PLAIN_HONORIFICS = frozenset({"mr", "mrs", "ms", "miss", "mx"})

# Values the directory expects on a freshly created user
IDENTITY_DEFAULTS: dict[str, Any] = {
    "uid": None,
    "title": "",
    "given_name": "",
    "family_name": "",
    "chinese_name": "",
    "email": "",
    "phone": "",
    "password": "",
    "permission_codes": "",
    "remember_me": False,
    "confirmed": False,
    "defer_confirmation": True,
}


def with_defaults(attributes: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a creation payload from the directory defaults and overrides."""
    return {**IDENTITY_DEFAULTS, **(attributes or {})}


class Identity(DomainModel):
    """A user account in the remote directory.

    Name fields follow the Hong Kong convention of a western given/family
    name pair plus an optional Chinese name.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    uid: UserUid
    title: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    chinese_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    confirmed: bool = False
    unconfirmed_email: Optional[str] = None
    permission_codes: list[str] = Field(default_factory=list)
    images: dict[str, Optional[str]] = Field(default_factory=dict)
    defer_confirmation: bool = False
    authentication_token: Optional[str] = None

    @field_validator("permission_codes", mode="before")
    @classmethod
    def split_permission_codes(cls, v: Any) -> Any:
        """Accept the directory's comma-separated form as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [code.strip() for code in v.split(",") if code.strip()]
        return v

    @field_validator("images", mode="before")
    @classmethod
    def default_images(cls, v: Any) -> Any:
        """Treat a missing images hash as empty."""
        return v or {}

    # Names

    @property
    def name(self) -> str:
        """Given and family name, falling back to the Chinese name."""
        western = " ".join(part for part in (self.given_name, self.family_name) if part)
        return western or (self.chinese_name or "")

    @property
    def formal_name(self) -> str:
        """Name with title, e.g. "Dr Mary Chan"."""
        return " ".join(part for part in (self.title, self.name) if part)

    @property
    def informal_name(self) -> str:
        """Given name alone where there is one."""
        return self.given_name or self.name

    @property
    def colloquial_name(self) -> str:
        """Name with the Chinese name alongside, e.g. "Mary Chan (陳美麗)"."""
        western = " ".join(part for part in (self.given_name, self.family_name) if part)
        if western and self.chinese_name:
            return f"{western} ({self.chinese_name})"
        return self.name

    @property
    def title_if_it_matters(self) -> Optional[str]:
        """Title unless it is a plain honorific like Mr or Ms."""
        if not self.title:
            return None
        if self.title.strip(". ").lower() in PLAIN_HONORIFICS:
            return None
        return self.title

    # Images

    def image_url(self, size: ImageSize) -> Optional[str]:
        """URL of the picture in the given size, if the directory has one."""
        return self.images.get(size.value)

    @property
    def image(self) -> Optional[str]:
        return self.image_url(ImageSize.STANDARD)

    @property
    def icon(self) -> Optional[str]:
        return self.image_url(ImageSize.ICON)

    @property
    def thumbnail(self) -> Optional[str]:
        return self.image_url(ImageSize.THUMBNAIL)

    # Permissions

    def is_permitted(self, code: str) -> bool:
        """Whether the directory grants this user the permission code."""
        return code in self.permission_codes

    def is_allowed_here(self, service_name: str) -> bool:
        return self.is_permitted(f"{service_name}.login")

    def is_admin(self, service_name: str) -> bool:
        return self.is_permitted(f"{service_name}.admin")

    # Confirmation

    @property
    def is_unconfirmed(self) -> bool:
        return not self.confirmed

    @property
    def has_unconfirmed_email(self) -> bool:
        """Whether an email change is waiting for confirmation."""
        return bool(self.unconfirmed_email)

    def summary(self) -> dict[str, Any]:
        """Public view of the user for lists and pickers."""
        return {
            "uid": self.uid,
            "title": self.title,
            "name": self.name,
            "given_name": self.given_name,
            "family_name": self.family_name,
            "chinese_name": self.chinese_name,
            "email": self.email,
            "phone": self.phone,
        }
