"""Remind pending invitations use case."""

import logfire
from pydantic import BaseModel, Field

from rollcall.application.usecase.base import BaseUseCase
from rollcall.domain.error import ValidationError
from rollcall.domain.model import record_class_for
from rollcall.domain.repository import RecordRepository
from rollcall.domain.service import InvitationService
from rollcall.domain.value import RecordScope


class RemindPendingRequest(BaseModel):
    """Remind pending request."""

    record_type: str
    batch_size: int = Field(default=100, ge=1, le=1000)


class RemindPendingResponse(BaseModel):
    """Remind pending response."""

    reminded: int = 0
    skipped: int = 0


class RemindPendingUseCase(BaseUseCase):
    """Use case for reminding everyone invited who has not yet accepted."""

    def __init__(
        self,
        record_repository: RecordRepository,
        invitation_service: InvitationService,
    ) -> None:
        """Initialize remind pending use case.

        Args:
            record_repository: Linked record repository
            invitation_service: Invitation domain service
        """
        self.record_repository = record_repository
        self.invitation_service = invitation_service

    async def execute(self, request: RemindPendingRequest) -> RemindPendingResponse:
        """Send reminders for one record type.

        Args:
            request: Record type and page size

        Returns:
            How many records were reminded and skipped

        Raises:
            ValidationError: If the record type is unknown
        """
        try:
            record_class_for(request.record_type)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        with logfire.span(
            "remind_pending.execute", record_type=request.record_type
        ):
            response = RemindPendingResponse()
            offset = 0
            while True:
                page = await self.record_repository.find_in_scope(
                    request.record_type,
                    RecordScope.INVITED,
                    limit=request.batch_size,
                    offset=offset,
                )
                for record in page:
                    if record.is_accepted:
                        continue
                    if await self.invitation_service.remind(record):
                        response.reminded += 1
                    else:
                        response.skipped += 1

                if len(page) < request.batch_size:
                    break
                offset += request.batch_size

            logfire.info(
                "Pending invitations reminded",
                record_type=request.record_type,
                reminded=response.reminded,
                skipped=response.skipped,
            )
            return response
