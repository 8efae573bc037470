"""Tests for category base-path resolution."""

from __future__ import annotations

import pytest

from seqspine.core.settings import SeqSpineSettings
from seqspine.sequencing.base_paths import (
    STOREFRONT_BASE_KEY,
    STOREFRONT_OPTION,
    BasePathResolver,
    SettingsStorefrontOptions,
)


class FakeOptions:
    def __init__(self, values):
        self.values = values

    def get(self, key):
        return self.values.get(key)


class TestBasePathResolver:
    def test_category_name_by_default(self):
        resolver = BasePathResolver()
        assert resolver.base_path("product") == "product"
        assert resolver.base_path("event") == "event"

    def test_storefront_override(self):
        options = FakeOptions({STOREFRONT_OPTION: {STOREFRONT_BASE_KEY: "/shop/"}})
        resolver = BasePathResolver(options=options)
        assert resolver.base_path("product") == "shop"
        assert resolver.base_path("portfolio") == "portfolio"

    def test_nested_override_keeps_inner_slash(self):
        options = FakeOptions({STOREFRONT_OPTION: {STOREFRONT_BASE_KEY: "/store/items/"}})
        assert BasePathResolver(options=options).base_path("product") == "store/items"

    @pytest.mark.parametrize(
        "option",
        [None, "shop", {}, {STOREFRONT_BASE_KEY: ""}, {STOREFRONT_BASE_KEY: " / "}, {STOREFRONT_BASE_KEY: 5}],
    )
    def test_unusable_override_falls_back(self, option):
        resolver = BasePathResolver(options=FakeOptions({STOREFRONT_OPTION: option}))
        assert resolver.base_path("product") == "product"

    def test_override_only_for_storefront_category(self):
        options = FakeOptions({STOREFRONT_OPTION: {STOREFRONT_BASE_KEY: "shop"}})
        resolver = BasePathResolver(storefront_category="event", options=options)
        assert resolver.base_path("product") == "product"
        assert resolver.base_path("event") == "shop"


class TestSettingsStorefrontOptions:
    def test_unset(self):
        options = SettingsStorefrontOptions(SeqSpineSettings())
        assert options.get(STOREFRONT_OPTION) is None

    def test_set(self):
        options = SettingsStorefrontOptions(SeqSpineSettings(storefront_base="shop"))
        assert options.get(STOREFRONT_OPTION) == {STOREFRONT_BASE_KEY: "shop"}
        assert options.get("other_option") is None

    def test_service_uses_settings(self, db_url):
        from seqspine.sequencing.service import SequenceService

        service = SequenceService.from_settings(SeqSpineSettings(database_url=db_url, storefront_base="shop"))
        try:
            assert service.base_path("product") == "shop"
        finally:
            service.dispose()
