"""Application layer DI providers."""

from dishka import Scope, provide

from rollcall.application.usecase.confirmation import CompleteConfirmationUseCase
from rollcall.application.usecase.invitation import (
    AcceptInvitationUseCase,
    RemindPendingUseCase,
)
from rollcall.application.usecase.record import SaveRecordUseCase
from rollcall.domain.repository import RecordRepository
from rollcall.domain.service import (
    IdentityResolver,
    IdentityService,
    InvitationService,
    SessionManager,
)
from rollcall.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Confirmation use cases
    @provide(scope=Scope.REQUEST)
    def get_complete_confirmation_use_case(
        self, identity_service: IdentityService, session_manager: SessionManager
    ) -> CompleteConfirmationUseCase:
        """Provide complete confirmation use case."""
        return CompleteConfirmationUseCase(
            identity_service=identity_service, session_manager=session_manager
        )

    # Record use cases
    @provide(scope=Scope.REQUEST)
    def get_save_record_use_case(
        self,
        identity_resolver: IdentityResolver,
        invitation_service: InvitationService,
        record_repository: RecordRepository,
    ) -> SaveRecordUseCase:
        """Provide save record use case."""
        return SaveRecordUseCase(
            identity_resolver=identity_resolver,
            invitation_service=invitation_service,
            record_repository=record_repository,
        )

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_accept_invitation_use_case(
        self,
        record_repository: RecordRepository,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(
            record_repository=record_repository,
            invitation_service=invitation_service,
            identity_resolver=identity_resolver,
        )

    @provide(scope=Scope.REQUEST)
    def get_remind_pending_use_case(
        self,
        record_repository: RecordRepository,
        invitation_service: InvitationService,
    ) -> RemindPendingUseCase:
        """Provide remind pending use case."""
        return RemindPendingUseCase(
            record_repository=record_repository,
            invitation_service=invitation_service,
        )
