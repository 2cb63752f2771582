"""Mailer registry.

Invitation and reminder messages are looked up by message kind and record
type. A missing entry means the message is not available for that record
type, which is a normal state rather than an error.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import logfire

from rollcall.domain.model.identity import Identity
from rollcall.domain.model.record import LinkedRecord
from rollcall.domain.value import MessageKind


class Message(ABC):
    """A composed message ready to send."""

    @abstractmethod
    async def deliver(self) -> bool:
        """Send the message.

        Returns:
            True if the message was handed over for delivery
        """
        pass


MessageFactory = Callable[[LinkedRecord, Identity], Message]


class MailerRegistry:
    """Message factories keyed by (message kind, record type)."""

    def __init__(self) -> None:
        self._factories: dict[tuple[MessageKind, str], MessageFactory] = {}

    def register(
        self, kind: MessageKind, record_type: str, factory: MessageFactory
    ) -> None:
        """Make a message available for one record type.

        Args:
            kind: Invitation or reminder
            record_type: Record type name (e.g. "interviewer")
            factory: Builds the message for a record and its directory user
        """
        self._factories[(kind, record_type)] = factory

    def supports(self, kind: MessageKind, record_type: str) -> bool:
        """Whether a message of this kind exists for the record type."""
        return (kind, record_type) in self._factories

    def message_for(
        self,
        kind: MessageKind,
        record_type: str,
        record: LinkedRecord,
        identity: Identity,
    ) -> Message | None:
        """Build the message for a record, or None if unsupported.

        Args:
            kind: Invitation or reminder
            record_type: Record type name
            record: The record being invited or reminded
            identity: The record's directory user

        Returns:
            Message ready to deliver, or None
        """
        factory = self._factories.get((kind, record_type))
        if factory is None:
            return None
        return factory(record, identity)

    def registered(self) -> list[tuple[MessageKind, str]]:
        """Every (kind, record type) pair with a message."""
        return sorted(self._factories, key=lambda key: (key[0].value, key[1]))

    def __len__(self) -> int:
        return len(self._factories)


def build_mailer_registry(mailer: Any | None) -> MailerRegistry:
    """Build a registry from a mailer object's methods, once at startup.

    A method named ``invitation_to_<record type>`` or
    ``reminder_to_<record type>`` registers that message for that type.

    Args:
        mailer: Mailer instance, or None when no mailer is configured

    Returns:
        Populated registry (empty when there is no mailer)
    """
    registry = MailerRegistry()
    if mailer is None:
        logfire.info("No mailer configured; invitations unavailable")
        return registry

    for attribute in dir(mailer):
        for kind in MessageKind:
            prefix = f"{kind.value}_to_"
            if not attribute.startswith(prefix):
                continue
            method = getattr(mailer, attribute)
            if callable(method):
                registry.register(kind, attribute[len(prefix) :], method)

    logfire.info(
        "Mailer registry built",
        mailer=type(mailer).__name__,
        messages=[f"{kind.value}:{rt}" for kind, rt in registry.registered()],
    )
    return registry
