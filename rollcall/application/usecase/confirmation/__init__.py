"""Confirmation use cases."""

from rollcall.application.usecase.confirmation.complete_confirmation import (
    CompleteConfirmationRequest,
    CompleteConfirmationResponse,
    CompleteConfirmationUseCase,
    ConfirmationAttributes,
)

__all__ = [
    "CompleteConfirmationRequest",
    "CompleteConfirmationResponse",
    "CompleteConfirmationUseCase",
    "ConfirmationAttributes",
]
