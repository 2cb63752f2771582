"""Test configuration and fixtures."""

from datetime import datetime, timezone
from typing import Any

from rollcall.adapter.directory import MockDirectoryClient
from rollcall.domain.model import Identity, Interviewer


def make_identity(**overrides: Any) -> Identity:
    """Helper function to build a directory user for tests.

    Args:
        **overrides: Fields to set instead of the defaults

    Returns:
        Identity with a fixed uid unless one is given
    """
    fields: dict[str, Any] = {
        "uid": "u-mary",
        "title": "Dr",
        "given_name": "Mary",
        "family_name": "Chan",
        "chinese_name": "陳美麗",
        "email": "mary@example.org",
        "confirmed": False,
    }
    fields.update(overrides)
    return Identity.model_validate(fields)


def seed_user(directory: MockDirectoryClient, **overrides: Any) -> Identity:
    """Put a user into the mock directory and return it."""
    identity = make_identity(**overrides)
    directory.users[identity.uid] = identity
    return identity


def make_interviewer(**overrides: Any) -> Interviewer:
    """Helper function to build an unsaved interviewer record."""
    return Interviewer(**overrides)


def stamp() -> datetime:
    """A timestamp for records that are already invited or accepted."""
    return datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
