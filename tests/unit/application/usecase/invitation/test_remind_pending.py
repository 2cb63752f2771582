"""Tests for remind pending use case."""

import pytest

from rollcall.adapter.mail import OutboxTransport
from rollcall.application.usecase.invitation import (
    RemindPendingRequest,
    RemindPendingUseCase,
)
from rollcall.domain.error import ValidationError
from rollcall.domain.model import Applicant, Interviewer
from rollcall.domain.repository import RecordRepository
from rollcall.domain.service import DirectoryClient
from tests.conftest import seed_user, stamp
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRemindPendingUseCase:
    """Tests for RemindPendingUseCase."""

    @pytest.mark.asyncio
    async def test_reminds_invited_unaccepted_records(self, unit_env):
        """Test only invited records still waiting on an answer are reminded."""
        # Arrange
        directory = await unit_env.get(DirectoryClient)
        repo = await unit_env.get(RecordRepository)
        outbox = await unit_env.get(OutboxTransport)
        use_case = await unit_env.get(RemindPendingUseCase)
        mary = seed_user(directory)
        pending = await repo.save(Interviewer(user_uid=mary.uid, invited_at=stamp()))
        await repo.save(
            Interviewer(user_uid=mary.uid, invited_at=stamp(), accepted_at=stamp())
        )
        await repo.save(Interviewer(user_uid=mary.uid))
        await repo.save(Applicant(user_uid=mary.uid, invited_at=stamp()))

        # Act
        response = await use_case.execute(
            RemindPendingRequest(record_type="interviewer")
        )

        # Assert
        assert response.reminded == 1
        assert response.skipped == 0
        assert len(outbox.sent) == 1
        stored = await repo.find_by_id(pending.id)
        assert stored.is_reminded

    @pytest.mark.asyncio
    async def test_records_without_user_are_skipped(self, unit_env):
        repo = await unit_env.get(RecordRepository)
        use_case = await unit_env.get(RemindPendingUseCase)
        await repo.save(Interviewer(user_uid="deleted-user", invited_at=stamp()))

        response = await use_case.execute(
            RemindPendingRequest(record_type="interviewer")
        )

        assert response.reminded == 0
        assert response.skipped == 1

    @pytest.mark.asyncio
    async def test_pages_through_all_records(self, unit_env):
        directory = await unit_env.get(DirectoryClient)
        repo = await unit_env.get(RecordRepository)
        use_case = await unit_env.get(RemindPendingUseCase)
        mary = seed_user(directory)
        for _ in range(5):
            await repo.save(Interviewer(user_uid=mary.uid, invited_at=stamp()))

        response = await use_case.execute(
            RemindPendingRequest(record_type="interviewer", batch_size=2)
        )

        assert response.reminded == 5

    @pytest.mark.asyncio
    async def test_type_without_reminder_skips_everyone(self, unit_env):
        directory = await unit_env.get(DirectoryClient)
        repo = await unit_env.get(RecordRepository)
        use_case = await unit_env.get(RemindPendingUseCase)
        mary = seed_user(directory)
        await repo.save(Applicant(user_uid=mary.uid, invited_at=stamp()))

        response = await use_case.execute(RemindPendingRequest(record_type="applicant"))

        assert response.reminded == 0
        assert response.skipped == 1

    @pytest.mark.asyncio
    async def test_unknown_record_type(self, unit_env):
        use_case = await unit_env.get(RemindPendingUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(RemindPendingRequest(record_type="referee"))
