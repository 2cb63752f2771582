"""Tests for provider selection."""

import pytest

from rollcall.util.di import (
    DirectoryProvider,
    ProdConfigProvider,
    ProdDirectoryProvider,
    get_provider,
)
from tests.di import MockDirectoryProvider, build_test_container


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_is_used_directly(self):
        assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider

    def test_mockable_component_selects_by_flag(self):
        assert get_provider(DirectoryProvider, use_mock=False) is ProdDirectoryProvider
        assert get_provider(DirectoryProvider, use_mock=True) is MockDirectoryProvider


class TestBuildTestContainer:
    """Tests for build_test_container."""

    def test_unknown_component(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"billing"})
