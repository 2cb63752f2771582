"""Tests for the invitation domain service."""

import pytest

from rollcall.adapter.mail import OutboxTransport
from rollcall.domain.model import Applicant, Interviewer
from rollcall.domain.repository import RecordRepository
from rollcall.domain.service import (
    DirectoryClient,
    IdentityResolver,
    InvitationService,
    MailerRegistry,
)
from rollcall.domain.value import InvitationStatus
from tests.conftest import seed_user, stamp
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _invitable(unit_env, record_class=Interviewer, **fields):
    """Save a record that resolves to a directory user."""
    directory = await unit_env.get(DirectoryClient)
    repo = await unit_env.get(RecordRepository)
    mary = seed_user(directory)
    return await repo.save(record_class(user_uid=mary.uid, **fields))


class TestInvite:
    """Tests for InvitationService.invite."""

    @pytest.mark.asyncio
    async def test_invite_sends_and_stamps(self, unit_env):
        service = await unit_env.get(InvitationService)
        outbox = await unit_env.get(OutboxTransport)
        repo = await unit_env.get(RecordRepository)
        record = await _invitable(unit_env)

        assert await service.invite(record)

        assert record.is_invited
        assert len(outbox.sent) == 1
        assert outbox.sent[0]["to"] == "mary@example.org"
        assert f"/interviewers/{record.id}/accept" in outbox.sent[0]["body"]
        stored = await repo.find_by_id(record.id)
        assert stored.invited_at == record.invited_at

    @pytest.mark.asyncio
    async def test_second_invite_is_a_no_op(self, unit_env):
        service = await unit_env.get(InvitationService)
        outbox = await unit_env.get(OutboxTransport)
        record = await _invitable(unit_env)

        assert await service.invite(record)
        first = record.invited_at
        assert not await service.invite(record)

        assert record.invited_at == first
        assert len(outbox.sent) == 1

    @pytest.mark.asyncio
    async def test_failed_delivery_leaves_record_uninvited(self, unit_env):
        service = await unit_env.get(InvitationService)
        outbox = await unit_env.get(OutboxTransport)
        record = await _invitable(unit_env)
        outbox.fail = True

        assert not await service.invite(record)

        assert record.is_uninvited
        assert service.status(record) == InvitationStatus.UNINVITED

    @pytest.mark.asyncio
    async def test_record_without_user_is_not_invitable(self, unit_env):
        service = await unit_env.get(InvitationService)
        outbox = await unit_env.get(OutboxTransport)
        repo = await unit_env.get(RecordRepository)
        record = await repo.save(Interviewer(user_uid="deleted-user"))

        assert not await service.invite(record)

        assert record.is_uninvited
        assert outbox.sent == []

    @pytest.mark.asyncio
    async def test_record_type_without_message_is_not_invited(self, unit_env):
        outbox = await unit_env.get(OutboxTransport)
        resolver = await unit_env.get(IdentityResolver)
        repo = await unit_env.get(RecordRepository)
        record = await _invitable(unit_env)
        service = InvitationService(resolver, MailerRegistry(), repo)

        assert not await service.invite(record)
        assert outbox.sent == []

    @pytest.mark.asyncio
    async def test_stamp_does_not_save_other_changes(self, unit_env):
        service = await unit_env.get(InvitationService)
        repo = await unit_env.get(RecordRepository)
        record = await _invitable(unit_env, given_name="Mary")
        record.given_name = "Maria"

        assert await service.invite(record)

        stored = await repo.find_by_id(record.id)
        assert stored.invited_at is not None
        assert stored.given_name == "Mary"
        assert record.changed_fields() == {"given_name"}

    @pytest.mark.asyncio
    async def test_unsaved_record_is_stamped_in_memory(self, unit_env):
        directory = await unit_env.get(DirectoryClient)
        service = await unit_env.get(InvitationService)
        repo = await unit_env.get(RecordRepository)
        mary = seed_user(directory)
        record = Interviewer(user_uid=mary.uid)

        assert await service.invite(record)

        assert record.is_invited
        assert await repo.find_by_id(record.id) is None


class TestRemind:
    """Tests for InvitationService.remind."""

    @pytest.mark.asyncio
    async def test_remind_invited_record(self, unit_env):
        service = await unit_env.get(InvitationService)
        outbox = await unit_env.get(OutboxTransport)
        record = await _invitable(unit_env, invited_at=stamp())

        assert await service.remind(record)

        assert record.is_reminded
        assert outbox.sent[0]["subject"].startswith("Reminder")

    @pytest.mark.asyncio
    async def test_uninvited_record_is_not_reminded(self, unit_env):
        service = await unit_env.get(InvitationService)
        outbox = await unit_env.get(OutboxTransport)
        record = await _invitable(unit_env)

        assert not await service.remind(record)

        assert not record.is_reminded
        assert outbox.sent == []

    @pytest.mark.asyncio
    async def test_type_without_reminder_is_not_reminded(self, unit_env):
        service = await unit_env.get(InvitationService)
        outbox = await unit_env.get(OutboxTransport)
        record = await _invitable(unit_env, Applicant, invited_at=stamp())

        assert not await service.remind(record)

        assert not record.is_reminded
        assert outbox.sent == []

    @pytest.mark.asyncio
    async def test_failed_reminder_is_not_stamped(self, unit_env):
        service = await unit_env.get(InvitationService)
        outbox = await unit_env.get(OutboxTransport)
        record = await _invitable(unit_env, invited_at=stamp())
        outbox.fail = True

        assert not await service.remind(record)

        assert record.reminded_at is None


class TestAccept:
    """Tests for InvitationService.accept."""

    @pytest.mark.asyncio
    async def test_accept_stamps_and_flags(self, unit_env):
        service = await unit_env.get(InvitationService)
        repo = await unit_env.get(RecordRepository)
        record = await _invitable(unit_env, invited_at=stamp())

        assert await service.accept(record)

        assert record.is_accepted
        assert record.is_newly_accepted
        assert service.status(record) == InvitationStatus.ACCEPTED
        stored = await repo.find_by_id(record.id)
        assert stored.accepted_at == record.accepted_at
        assert not stored.is_newly_accepted

    @pytest.mark.asyncio
    async def test_accept_without_invitation(self, unit_env):
        service = await unit_env.get(InvitationService)
        record = Interviewer()

        assert await service.accept(record)

        assert record.is_accepted
        assert record.is_uninvited

    @pytest.mark.asyncio
    async def test_second_accept_keeps_first_timestamp(self, unit_env):
        service = await unit_env.get(InvitationService)
        record = Interviewer(accepted_at=stamp())

        assert not await service.accept(record)

        assert record.accepted_at == stamp()
        assert not record.is_newly_accepted


class TestInviteIfInviting:
    """Tests for the save hook that sends requested invitations."""

    @pytest.mark.asyncio
    async def test_sends_when_flag_set(self, unit_env):
        service = await unit_env.get(InvitationService)
        record = await _invitable(unit_env)
        record.send_invitation = "1"

        assert service.is_inviting(record)
        assert await service.invite_if_inviting(record)
        assert record.is_invited

    @pytest.mark.asyncio
    async def test_zero_flag_sends_nothing(self, unit_env):
        service = await unit_env.get(InvitationService)
        outbox = await unit_env.get(OutboxTransport)
        record = await _invitable(unit_env)
        record.send_invitation = "0"

        assert not await service.invite_if_inviting(record)
        assert outbox.sent == []
