"""Save record use case."""

from typing import Any, Optional

import logfire
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from rollcall.application.usecase.base import BaseUseCase
from rollcall.domain.model.record import LinkedRecord, record_class_for
from rollcall.domain.repository import RecordRepository
from rollcall.domain.service import IdentityResolver, InvitationService


class SaveRecordRequest(BaseModel):
    """Save record request.

    ``record`` may be given as a record or as form values; form values are
    built into the class registered for ``record_type``. ``user_attributes``
    are nested attributes for the record's directory user; they update the
    existing user or create a new one.
    """

    record_type: Optional[str] = None
    record: LinkedRecord
    user_attributes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("record", mode="before")
    @classmethod
    def build_record(cls, v: Any, info: ValidationInfo) -> Any:
        """Build form values into the concrete record type."""
        record_type = info.data.get("record_type")
        if isinstance(v, LinkedRecord):
            if record_type and v.record_type != record_type:
                raise ValueError(
                    f"Record type {v.record_type!r} does not match {record_type!r}"
                )
            record_class_for(v.record_type)
            return v
        if not record_type and isinstance(v, dict):
            record_type = v.get("record_type")
        if not record_type:
            raise ValueError("record_type is required to build a record")
        return record_class_for(record_type).model_validate(v)


class SaveRecordResponse(BaseModel):
    """Save record response."""

    record: LinkedRecord
    saved: bool
    invited: bool = False
    errors: dict[str, list[str]] = Field(default_factory=dict)


class SaveRecordUseCase(BaseUseCase):
    """Use case for saving a record together with its directory user.

    The directory user is saved first, so a new user's uid is in place when
    the record is written. If the owner asked for an invitation, it goes out
    after the record has been saved.
    """

    def __init__(
        self,
        identity_resolver: IdentityResolver,
        invitation_service: InvitationService,
        record_repository: RecordRepository,
    ) -> None:
        """Initialize save record use case.

        Args:
            identity_resolver: Identity resolver domain service
            invitation_service: Invitation domain service
            record_repository: Linked record repository
        """
        self.identity_resolver = identity_resolver
        self.invitation_service = invitation_service
        self.record_repository = record_repository

    async def execute(self, request: SaveRecordRequest) -> SaveRecordResponse:
        """Save the record and its nested directory user.

        Args:
            request: Record and nested user attributes

        Returns:
            Whether the record was saved and invited, or the directory's errors
        """
        record = request.record
        with logfire.span(
            "save_record.execute",
            record_type=record.record_type,
            record_id=str(record.id),
            nested_user=bool(request.user_attributes),
        ):
            if request.user_attributes:
                result = await self.identity_resolver.assign_user_attributes(
                    record, request.user_attributes
                )
                if result is not None and not result.saved:
                    logfire.warn(
                        "Record not saved: directory user rejected",
                        record_id=str(record.id),
                        errors=result.errors,
                    )
                    return SaveRecordResponse(
                        record=record, saved=False, errors=result.errors
                    )

            if not record.persisted or record.has_changes:
                await self.record_repository.save(record)
                logfire.info(
                    "Record saved",
                    record_type=record.record_type,
                    record_id=str(record.id),
                    user_uid=record.user_uid,
                )

            invited = await self.invitation_service.invite_if_inviting(record)
            return SaveRecordResponse(record=record, saved=True, invited=invited)
