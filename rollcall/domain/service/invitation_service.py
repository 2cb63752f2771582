"""Invitation domain service."""

from datetime import datetime, timezone
from typing import Any

import logfire

from rollcall.domain.model.record import LinkedRecord
from rollcall.domain.repository import RecordRepository
from rollcall.domain.service.identity_resolver import IdentityResolver
from rollcall.domain.service.mailer import MailerRegistry
from rollcall.domain.value import InvitationStatus, MessageKind

from .base import Service


class InvitationService(Service):
    """Domain service for the invite, remind and accept lifecycle.

    Invitation timestamps are stamped only after the message went out, and
    each stamp is written on its own so that a record's other unsaved edits
    are never persisted as a side effect.
    """

    def __init__(
        self,
        identity_resolver: IdentityResolver,
        mailers: MailerRegistry,
        record_repository: RecordRepository,
    ) -> None:
        """Initialize invitation service.

        Args:
            identity_resolver: Resolves the directory user behind a record
            mailers: Invitation and reminder messages by record type
            record_repository: Linked record repository
        """
        self.identity_resolver = identity_resolver
        self.mailers = mailers
        self.record_repository = record_repository

    async def invite(self, record: LinkedRecord) -> bool:
        """Send the invitation message and stamp ``invited_at``.

        Nothing happens when the record was already invited, has no directory
        user, or its record type has no invitation message.

        Args:
            record: Record to invite

        Returns:
            True if the invitation was delivered
        """
        with logfire.span(
            "invitation_service.invite",
            record_type=record.record_type,
            record_id=str(record.id),
        ):
            if record.is_invited:
                logfire.info(
                    "Record already invited", record_id=str(record.id)
                )
                return False

            return await self._send(record, MessageKind.INVITATION, "invited_at")

    async def remind(self, record: LinkedRecord) -> bool:
        """Send the reminder message and stamp ``reminded_at``.

        Only invited records are reminded.

        Args:
            record: Record to remind

        Returns:
            True if the reminder was delivered
        """
        with logfire.span(
            "invitation_service.remind",
            record_type=record.record_type,
            record_id=str(record.id),
        ):
            if not record.is_invited:
                logfire.info("Record not invited yet", record_id=str(record.id))
                return False

            return await self._send(record, MessageKind.REMINDER, "reminded_at")

    async def accept(self, record: LinkedRecord) -> bool:
        """Stamp ``accepted_at`` and flag the acceptance as new.

        Acceptance does not require an invitation. Accepting twice leaves the
        first timestamp in place.

        Args:
            record: Record being accepted

        Returns:
            True if the record was accepted by this call
        """
        with logfire.span(
            "invitation_service.accept",
            record_type=record.record_type,
            record_id=str(record.id),
        ):
            if record.is_accepted:
                return False

            await self._stamp(record, "accepted_at")
            record.newly_accepted = True
            logfire.info(
                "Invitation accepted",
                record_type=record.record_type,
                record_id=str(record.id),
            )
            return True

    def status(self, record: LinkedRecord) -> InvitationStatus:
        return record.status

    def is_inviting(self, record: LinkedRecord) -> bool:
        return record.is_inviting

    async def invite_if_inviting(self, record: LinkedRecord) -> bool:
        """Invite a record whose owner asked for it on save.

        Args:
            record: Record that was just saved

        Returns:
            True if an invitation was delivered
        """
        if not record.is_inviting:
            return False
        return await self.invite(record)

    async def _send(
        self, record: LinkedRecord, kind: MessageKind, column: str
    ) -> bool:
        if not self.mailers.supports(kind, record.record_type):
            logfire.info(
                "No message for record type",
                kind=kind.value,
                record_type=record.record_type,
            )
            return False

        identity = await self.identity_resolver.resolve(record)
        if identity is None:
            logfire.warn(
                "Cannot message a record without a directory user",
                kind=kind.value,
                record_type=record.record_type,
                record_id=str(record.id),
            )
            return False

        message = self.mailers.message_for(kind, record.record_type, record, identity)
        if message is None:
            return False

        if not await message.deliver():
            logfire.warn(
                "Message delivery failed",
                kind=kind.value,
                record_id=str(record.id),
                uid=identity.uid,
            )
            return False

        await self._stamp(record, column)
        logfire.info(
            "Message delivered",
            kind=kind.value,
            record_type=record.record_type,
            record_id=str(record.id),
            uid=identity.uid,
        )
        return True

    async def _stamp(self, record: LinkedRecord, column: str) -> None:
        now = datetime.now(timezone.utc)
        values: dict[str, Any] = {column: now}
        record.write_column(column, now)
        if record.persisted:
            await self.record_repository.update_columns(record.id, values)
