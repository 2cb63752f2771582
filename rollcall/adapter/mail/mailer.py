"""Invitation mailer.

Each ``<kind>_to_<record type>`` method composes one message. The registry is
built from these method names at startup, so adding a method is all it takes
to make invitations or reminders available for another record type.
"""

import importlib
from typing import Any

import logfire

from rollcall.config import MailSettings
from rollcall.domain.model.identity import Identity
from rollcall.domain.model.record import LinkedRecord
from rollcall.util.error import ConfigurationError

from .transport import MailMessage, MailTransport


class InvitationMailer:
    """Composes invitation and reminder emails."""

    def __init__(self, transport: MailTransport, settings: MailSettings) -> None:
        """Initialize mailer.

        Args:
            transport: Where composed messages are sent
            settings: Mail configuration (sender and site URL)
        """
        self.transport = transport
        self.settings = settings

    def acceptance_url(self, record: LinkedRecord) -> str:
        """Link the recipient follows to accept."""
        site = self.settings.site_url.rstrip("/")
        return f"{site}/{record.record_type}s/{record.id}/accept"

    def _message(
        self, identity: Identity, subject: str, paragraphs: list[str]
    ) -> MailMessage:
        greeting = f"Dear {identity.informal_name or 'colleague'},"
        body = "\n\n".join([greeting, *paragraphs])
        return MailMessage(self.transport, identity.email or "", subject, body)

    def invitation_to_interviewer(
        self, record: LinkedRecord, identity: Identity
    ) -> MailMessage:
        return self._message(
            identity,
            "Invitation to join the interview panel",
            [
                "You have been invited to interview applicants this year.",
                f"Please accept the invitation here: {self.acceptance_url(record)}",
            ],
        )

    def reminder_to_interviewer(
        self, record: LinkedRecord, identity: Identity
    ) -> MailMessage:
        return self._message(
            identity,
            "Reminder: invitation to join the interview panel",
            [
                "We have not yet heard back about your invitation to interview.",
                f"You can still accept it here: {self.acceptance_url(record)}",
            ],
        )

    def invitation_to_applicant(
        self, record: LinkedRecord, identity: Identity
    ) -> MailMessage:
        return self._message(
            identity,
            "Your application account",
            [
                "An account has been set up so you can follow your application.",
                f"Please confirm it here: {self.acceptance_url(record)}",
            ],
        )


def load_mailer(
    path: str | None, transport: MailTransport, settings: MailSettings
) -> Any | None:
    """Instantiate the configured mailer class.

    Args:
        path: Mailer class as "module:Class", or None for no mailer
        transport: Mail transport handed to the mailer
        settings: Mail configuration handed to the mailer

    Returns:
        Mailer instance, or None when none is configured

    Raises:
        ConfigurationError: If the class cannot be imported
    """
    if not path:
        return None

    module_name, _, class_name = path.partition(":")
    if not module_name or not class_name:
        raise ConfigurationError(f"Mailer must be given as 'module:Class', got {path!r}")

    try:
        mailer_class = getattr(importlib.import_module(module_name), class_name)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot load mailer {path!r}: {e}") from e

    logfire.info("Mailer loaded", mailer=path)
    return mailer_class(transport, settings)
