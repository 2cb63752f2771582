"""Tests for linked record entities."""

import pytest

from rollcall.domain.model import Applicant, Interviewer, record_class_for
from rollcall.domain.repository import matches_scope
from rollcall.domain.value import InvitationStatus, RecordScope
from tests.conftest import make_identity, stamp


class TestAssignUid:
    """Tests for pointing a record at a directory user."""

    def test_empty_string_leaves_reference_alone(self):
        record = Interviewer(user_uid="u-1")
        record.cache_user(make_identity(uid="u-1"))

        record.assign_uid("")

        assert record.user_uid == "u-1"
        assert record.cached_user is not None

    def test_none_clears_reference_and_memo(self):
        record = Interviewer(user_uid="u-1")
        record.cache_user(make_identity(uid="u-1"))

        record.assign_uid(None)

        assert record.user_uid is None
        assert record.cached_user is None

    def test_new_uid_drops_memoized_user(self):
        record = Interviewer(user_uid="u-1")
        record.cache_user(make_identity(uid="u-1"))

        record.assign_uid("u-2")

        assert record.user_uid == "u-2"
        assert record.cached_user is None

    def test_same_uid_keeps_memoized_user(self):
        identity = make_identity(uid="u-1")
        record = Interviewer(user_uid="u-1")
        record.cache_user(identity)

        record.assign_uid("u-1")

        assert record.cached_user is identity


class TestUidWrites:
    """Tests for the uid rules on construction and plain assignment."""

    def test_constructor_treats_empty_uid_as_none(self):
        record = Interviewer(user_uid="")

        assert record.user_uid is None
        assert not matches_scope(record, RecordScope.INVITABLE)
        assert matches_scope(record, RecordScope.UNINVITABLE)

    def test_form_values_with_empty_uid(self):
        record = Interviewer.model_validate({"user_uid": "", "email": "a@example.org"})

        assert record.user_uid is None

    def test_assigning_empty_string_is_ignored(self):
        record = Interviewer(user_uid="u-1")
        record.cache_user(make_identity(uid="u-1"))

        record.user_uid = ""

        assert record.user_uid == "u-1"
        assert record.cached_user is not None
        assert matches_scope(record, RecordScope.INVITABLE)

    def test_assigning_new_uid_drops_memoized_user(self):
        record = Interviewer(user_uid="u-1")
        record.cache_user(make_identity(uid="u-1"))

        record.user_uid = "u-2"

        assert record.user_uid == "u-2"
        assert record.cached_user is None

    def test_assigning_none_clears(self):
        record = Interviewer(user_uid="u-1")
        record.cache_user(make_identity(uid="u-1"))

        record.user_uid = None

        assert record.user_uid is None
        assert record.cached_user is None

    def test_ignored_write_is_not_a_change(self):
        record = Interviewer(user_uid="u-1")
        record.mark_persisted()

        record.user_uid = ""

        assert not record.has_changes


class TestInvitationState:
    """Tests for invitation status predicates."""

    def test_new_record_is_uninvited(self):
        record = Interviewer()

        assert record.status == InvitationStatus.UNINVITED
        assert record.is_uninvited
        assert record.is_unaccepted
        assert not record.is_reminded

    def test_invited_record(self):
        record = Interviewer(invited_at=stamp())

        assert record.status == InvitationStatus.INVITED

    def test_accepted_wins_over_invited(self):
        record = Interviewer(invited_at=stamp(), accepted_at=stamp())

        assert record.status == InvitationStatus.ACCEPTED

    def test_accepted_without_invitation(self):
        record = Interviewer(accepted_at=stamp())

        assert record.status == InvitationStatus.ACCEPTED
        assert record.is_uninvited


class TestInvitingFlag:
    """Tests for the send-invitation form flag."""

    @pytest.mark.parametrize("flag", ["1", "true", True, 1])
    def test_truthy_flag_means_inviting(self, flag):
        record = Interviewer(send_invitation=flag)

        assert record.is_inviting

    @pytest.mark.parametrize("flag", [None, "", "0", False, 0])
    def test_absent_or_zero_flag_means_not_inviting(self, flag):
        record = Interviewer(send_invitation=flag)

        assert not record.is_inviting

    def test_accepted_record_is_never_inviting(self):
        record = Interviewer(send_invitation="1", accepted_at=stamp())

        assert not record.is_inviting

    def test_transient_fields_are_not_persistent(self):
        record = Interviewer(send_invitation="1", newly_accepted=True)

        dumped = record.model_dump()

        assert "send_invitation" not in dumped
        assert "newly_accepted" not in dumped


class TestChangeTracking:
    """Tests for persisted and dirty state."""

    def test_new_record_is_unpersisted_and_dirty(self):
        record = Interviewer(email="a@example.org")

        assert not record.persisted
        assert record.has_changes

    def test_mark_persisted_clears_changes(self):
        record = Interviewer(email="a@example.org")

        record.mark_persisted()

        assert record.persisted
        assert not record.has_changes

    def test_field_change_is_tracked(self):
        record = Interviewer(email="a@example.org")
        record.mark_persisted()

        record.email = "b@example.org"

        assert record.has_changes
        assert record.changed_fields() == {"email"}

    def test_transient_change_is_not_tracked(self):
        record = Interviewer()
        record.mark_persisted()

        record.send_invitation = "1"

        assert not record.has_changes

    def test_write_column_keeps_other_changes_pending(self):
        record = Interviewer(email="a@example.org")
        record.mark_persisted()
        record.email = "b@example.org"

        record.write_column("invited_at", stamp())

        assert record.invited_at == stamp()
        assert record.changed_fields() == {"email"}


class TestRecordTypes:
    """Tests for the record type registry."""

    def test_lookup_by_name(self):
        assert record_class_for("interviewer") is Interviewer
        assert record_class_for("applicant") is Applicant

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="Unknown record type"):
            record_class_for("referee")

    def test_confirmation_deferred_by_default(self):
        assert Applicant().confirmation_usually_deferred() is True
