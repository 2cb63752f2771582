"""Identity resolver domain service.

Associates local records with directory users. Since the user is a remote
resource, the association only partly resembles a database relation: there
is no referential integrity, no transaction spans both stores, and a uid may
point at a user the directory has since deleted.
"""

from typing import Any, Optional

import logfire

from rollcall.domain.model.identity import Identity, with_defaults
from rollcall.domain.model.record import LinkedRecord
from rollcall.domain.repository import RecordRepository
from rollcall.domain.service.identity_service import IdentityService, SaveResult

from .base import Service


class IdentityResolver(Service):
    """Resolves, creates and assigns the directory user behind a record."""

    def __init__(
        self, identity_service: IdentityService, record_repository: RecordRepository
    ) -> None:
        """Initialize identity resolver.

        Args:
            identity_service: Identity domain service
            record_repository: Linked record repository
        """
        self.identity_service = identity_service
        self.record_repository = record_repository

    ## Get

    async def resolve(self, record: LinkedRecord) -> Optional[Identity]:
        """Get the directory user a record refers to.

        Looks up by uid, then by the record's own email address. The result
        is memoized on the record instance. A uid that matches nobody is
        normal (the user may have been deleted remotely), so every lookup
        failure is logged and treated as "no user".

        Args:
            record: Linked record

        Returns:
            The directory user, or None
        """
        if record.cached_user is not None:
            return record.cached_user

        with logfire.span(
            "identity_resolver.resolve",
            record_type=record.record_type,
            record_id=str(record.id),
            user_uid=record.user_uid,
        ):
            identity = None
            try:
                if record.user_uid:
                    identity = await self.identity_service.find_by_uid(record.user_uid)
                    if identity is None:
                        logfire.warn(
                            "Record refers to an unknown directory user; ignoring",
                            record_type=record.record_type,
                            record_id=str(record.id),
                            user_uid=record.user_uid,
                        )
                        return None
                elif record.email:
                    identity = await self.identity_service.find_by_email(record.email)
            except Exception as e:
                logfire.warn(
                    "Directory lookup failed; treating record as having no user",
                    record_type=record.record_type,
                    record_id=str(record.id),
                    user_uid=record.user_uid,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return None

            if identity is not None:
                record.cache_user(identity)
            return identity

    async def find_or_create_user(self, record: LinkedRecord) -> SaveResult:
        """Get the record's directory user, creating one from the record if needed.

        A new user is seeded with the record's names and email, and its uid
        is written back onto the record (the record itself is not saved).
        Without an email nothing can be created.

        Args:
            record: Linked record

        Returns:
            Result holding the user, the directory's errors, or neither when
            there was no email to create a user from
        """
        identity = await self.resolve(record)
        if identity is not None:
            return SaveResult(identity=identity)

        if not record.email:
            logfire.info(
                "No email to create a directory user from",
                record_type=record.record_type,
                record_id=str(record.id),
            )
            return SaveResult()

        result = await self.identity_service.create(
            {
                "given_name": record.given_name,
                "family_name": record.family_name,
                "chinese_name": record.chinese_name,
                "email": record.email,
            }
        )
        if result.saved and result.identity is not None:
            record.assign_uid(result.identity.uid)
            record.cache_user(result.identity)
        return result

    ## Set

    async def assign_user(self, record: LinkedRecord, identity: Identity) -> None:
        """Associate an existing directory user with a record.

        This happens either during a compound save with an existing user, or
        straight after a new user has been created for the record. The record
        is saved here only if nothing else is going on: a new record or one
        with other changes is assumed to be part of a larger save that the
        caller will complete.

        Args:
            record: Linked record
            identity: Directory user
        """
        also_save = record.persisted and not record.has_changes
        record.assign_uid(identity.uid)
        record.cache_user(identity)
        if also_save:
            await self.record_repository.save(record)
            logfire.info(
                "Record saved with new user reference",
                record_type=record.record_type,
                record_id=str(record.id),
                user_uid=identity.uid,
            )

    async def assign_user_attributes(
        self, record: LinkedRecord, attributes: dict[str, Any]
    ) -> Optional[SaveResult]:
        """Create or update the record's directory user from nested attributes.

        Usually called during the nested creation of a new user, but people
        may also update some account settings this way.

        Args:
            record: Linked record
            attributes: Directory user attributes

        Returns:
            Result of the update or creation, or None when there was nothing
            to apply
        """
        if not attributes:
            return None

        identity = await self.resolve(record)
        if identity is not None:
            result = await self.identity_service.update(identity, dict(attributes))
            if result.saved and result.identity is not None:
                record.cache_user(result.identity)
            return result

        attributes = {
            "defer_confirmation": record.confirmation_usually_deferred(),
            **attributes,
        }
        result = await self.identity_service.create(with_defaults(attributes))
        if result.saved and result.identity is not None:
            await self.assign_user(record, result.identity)
        return result

    ## Derived values

    async def has_user(self, record: LinkedRecord) -> bool:
        return await self.resolve(record) is not None

    async def is_confirmed(self, record: LinkedRecord) -> bool:
        identity = await self.resolve(record)
        return bool(identity and identity.confirmed)

    async def name(self, record: LinkedRecord) -> Optional[str]:
        identity = await self.resolve(record)
        return identity.name if identity else None

    async def formal_name(self, record: LinkedRecord) -> Optional[str]:
        identity = await self.resolve(record)
        return identity.formal_name if identity else None

    async def informal_name(self, record: LinkedRecord) -> Optional[str]:
        identity = await self.resolve(record)
        return identity.informal_name if identity else None

    async def colloquial_name(self, record: LinkedRecord) -> Optional[str]:
        identity = await self.resolve(record)
        return identity.colloquial_name if identity else None

    async def title_if_it_matters(self, record: LinkedRecord) -> Optional[str]:
        identity = await self.resolve(record)
        return identity.title_if_it_matters if identity else None

    async def icon(self, record: LinkedRecord) -> Optional[str]:
        identity = await self.resolve(record)
        return identity.icon if identity else None

    async def user_email(self, record: LinkedRecord) -> Optional[str]:
        identity = await self.resolve(record)
        return identity.email if identity else None

    async def email(self, record: LinkedRecord) -> Optional[str]:
        """The record's own email address, else its directory user's."""
        if record.email:
            return record.email
        return await self.user_email(record)
