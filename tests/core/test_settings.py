"""Tests for seqspine.core.settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from seqspine.core.errors import InvalidConfigError
from seqspine.core.settings import SeqSpineSettings, clear_settings_cache, get_settings


class TestDefaults:
    def test_default_categories(self):
        s = SeqSpineSettings()
        assert s.categories == ["product", "portfolio", "event"]
        assert s.storefront_category == "product"
        assert s.publish_status == "publish"

    def test_default_database_is_sqlite(self):
        assert SeqSpineSettings().database_url.startswith("sqlite:///")


class TestValidation:
    def test_empty_categories_rejected(self):
        with pytest.raises(ValidationError):
            SeqSpineSettings(categories=[])

    def test_duplicate_categories_rejected(self):
        with pytest.raises(ValidationError):
            SeqSpineSettings(categories=["product", "product"])

    @pytest.mark.parametrize("name", ["Product", "with space", "x" * 21, ""])
    def test_invalid_category_name_rejected(self, name):
        with pytest.raises(ValidationError):
            SeqSpineSettings(categories=["product", name])

    def test_storefront_category_must_be_configured(self):
        with pytest.raises(ValidationError, match="storefront_category"):
            SeqSpineSettings(categories=["event"])

    def test_storefront_category_override(self):
        s = SeqSpineSettings(categories=["event"], storefront_category="event")
        assert s.storefront_category == "event"

    def test_home_url_trailing_slash_stripped(self):
        s = SeqSpineSettings(home_url="https://shop.example/")
        assert s.home_url == "https://shop.example"


class TestEnvironment:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("SEQSPINE_DATABASE_URL", "sqlite:///env.db")
        monkeypatch.setenv("SEQSPINE_CATEGORIES", '["product", "recipe"]')
        s = SeqSpineSettings()
        assert s.database_url == "sqlite:///env.db"
        assert s.categories == ["product", "recipe"]

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("SEQSPINE_PORT", "9999")
        clear_settings_cache()
        second = get_settings()
        assert first is not second
        assert second.port == 9999

    def test_invalid_env_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("SEQSPINE_CATEGORIES", "[]")
        with pytest.raises(InvalidConfigError) as exc_info:
            get_settings()
        assert exc_info.value.key == "categories"
        assert exc_info.value.value == []
        assert "at least one category" in exc_info.value.message

    def test_cross_field_failure_names_settings(self, monkeypatch):
        monkeypatch.setenv("SEQSPINE_CATEGORIES", '["event"]')
        with pytest.raises(InvalidConfigError, match="storefront_category") as exc_info:
            get_settings()
        assert exc_info.value.key == "settings"
