"""Accept invitation use case."""

import logfire
from pydantic import BaseModel

from rollcall.application.usecase.base import BaseUseCase
from rollcall.domain.error import NotFoundError
from rollcall.domain.repository import RecordRepository
from rollcall.domain.service import IdentityResolver, InvitationService
from rollcall.domain.value import InvitationStatus, RecordId


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    record_id: RecordId


class AcceptInvitationResponse(BaseModel):
    """Accept invitation response."""

    record_id: RecordId
    status: InvitationStatus
    newly_accepted: bool
    needs_confirmation: bool
    user_uid: str | None = None


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for accepting an invitation.

    After accepting, a person whose directory account is still unconfirmed
    goes on to the confirmation step to set a password.
    """

    def __init__(
        self,
        record_repository: RecordRepository,
        invitation_service: InvitationService,
        identity_resolver: IdentityResolver,
    ) -> None:
        """Initialize accept invitation use case.

        Args:
            record_repository: Linked record repository
            invitation_service: Invitation domain service
            identity_resolver: Identity resolver domain service
        """
        self.record_repository = record_repository
        self.invitation_service = invitation_service
        self.identity_resolver = identity_resolver

    async def execute(self, request: AcceptInvitationRequest) -> AcceptInvitationResponse:
        """Accept the invitation behind a record.

        Args:
            request: ID of the invited record

        Returns:
            New status, and whether confirmation is still needed

        Raises:
            NotFoundError: If the record does not exist
        """
        with logfire.span(
            "accept_invitation.execute", record_id=str(request.record_id)
        ):
            record = await self.record_repository.find_by_id(request.record_id)
            if record is None:
                raise NotFoundError("Record", str(request.record_id))

            await self.invitation_service.accept(record)
            identity = await self.identity_resolver.resolve(record)

            return AcceptInvitationResponse(
                record_id=record.id,
                status=self.invitation_service.status(record),
                newly_accepted=record.is_newly_accepted,
                needs_confirmation=identity is not None and identity.is_unconfirmed,
                user_uid=record.user_uid,
            )
