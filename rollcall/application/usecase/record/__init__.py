"""Record use cases."""

from rollcall.application.usecase.record.save_record import (
    SaveRecordRequest,
    SaveRecordResponse,
    SaveRecordUseCase,
)

__all__ = ["SaveRecordRequest", "SaveRecordResponse", "SaveRecordUseCase"]
