"""Domain layer DI providers."""

from dishka import Scope, provide

from rollcall.domain.repository import RecordRepository
from rollcall.domain.service import (
    DirectoryClient,
    IdentityResolver,
    IdentitySaveHooks,
    IdentityService,
    InvitationService,
    MailerRegistry,
)
from rollcall.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_identity_service(
        self, directory_client: DirectoryClient, save_hooks: IdentitySaveHooks
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(
            directory_client=directory_client, save_hooks=save_hooks
        )

    @provide
    def get_identity_resolver(
        self, identity_service: IdentityService, record_repository: RecordRepository
    ) -> IdentityResolver:
        """Provide identity resolver domain service."""
        return IdentityResolver(
            identity_service=identity_service, record_repository=record_repository
        )

    @provide
    def get_invitation_service(
        self,
        identity_resolver: IdentityResolver,
        mailers: MailerRegistry,
        record_repository: RecordRepository,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            identity_resolver=identity_resolver,
            mailers=mailers,
            record_repository=record_repository,
        )
