"""Invitation use cases."""

from rollcall.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from rollcall.application.usecase.invitation.remind_pending import (
    RemindPendingRequest,
    RemindPendingResponse,
    RemindPendingUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "RemindPendingRequest",
    "RemindPendingResponse",
    "RemindPendingUseCase",
]
