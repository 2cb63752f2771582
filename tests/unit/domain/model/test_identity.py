"""Tests for the directory user entity."""

from rollcall.domain.model import Identity, with_defaults
from rollcall.domain.value import ImageSize
from tests.conftest import make_identity


class TestNames:
    """Tests for derived names."""

    def test_name_joins_given_and_family(self):
        assert make_identity().name == "Mary Chan"

    def test_name_falls_back_to_chinese_name(self):
        identity = make_identity(given_name=None, family_name=None)

        assert identity.name == "陳美麗"

    def test_formal_name_includes_title(self):
        assert make_identity().formal_name == "Dr Mary Chan"

    def test_informal_name_is_given_name(self):
        assert make_identity().informal_name == "Mary"

    def test_colloquial_name_shows_chinese_name(self):
        assert make_identity().colloquial_name == "Mary Chan (陳美麗)"

    def test_colloquial_name_without_chinese_name(self):
        assert make_identity(chinese_name=None).colloquial_name == "Mary Chan"

    def test_plain_honorific_does_not_matter(self):
        assert make_identity(title="Ms").title_if_it_matters is None
        assert make_identity(title="Mr.").title_if_it_matters is None

    def test_academic_title_matters(self):
        assert make_identity(title="Prof").title_if_it_matters == "Prof"


class TestWireFormat:
    """Tests for reading users as the directory sends them."""

    def test_permission_codes_from_comma_separated_string(self):
        identity = make_identity(permission_codes="rollcall.login, rollcall.admin")

        assert identity.permission_codes == ["rollcall.login", "rollcall.admin"]
        assert identity.is_allowed_here("rollcall")
        assert identity.is_admin("rollcall")
        assert not identity.is_allowed_here("other")

    def test_missing_images_are_empty(self):
        identity = make_identity(images=None)

        assert identity.icon is None
        assert identity.image is None

    def test_image_sizes(self):
        identity = make_identity(
            images={"icon": "https://img.example.org/i.png", "thumbnail": "t.png"}
        )

        assert identity.icon == "https://img.example.org/i.png"
        assert identity.image_url(ImageSize.THUMBNAIL) == "t.png"
        assert identity.thumbnail == "t.png"

    def test_unknown_fields_are_ignored(self):
        identity = Identity.model_validate({"uid": "u-1", "favourite_colour": "red"})

        assert identity.uid == "u-1"

    def test_confirmation_state(self):
        identity = make_identity(confirmed=False, unconfirmed_email="new@example.org")

        assert identity.is_unconfirmed
        assert identity.has_unconfirmed_email

    def test_summary(self):
        summary = make_identity().summary()

        assert summary["uid"] == "u-mary"
        assert summary["name"] == "Mary Chan"
        assert "permission_codes" not in summary


class TestWithDefaults:
    """Tests for creation payload defaults."""

    def test_defaults_defer_confirmation(self):
        payload = with_defaults()

        assert payload["defer_confirmation"] is True
        assert payload["confirmed"] is False
        assert payload["email"] == ""

    def test_overrides_win(self):
        payload = with_defaults({"email": "a@example.org", "defer_confirmation": False})

        assert payload["email"] == "a@example.org"
        assert payload["defer_confirmation"] is False
