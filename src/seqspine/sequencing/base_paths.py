"""Category base-path resolution.

Every category is served under its own name, except the storefront
category whose base may be overridden by the storefront's permalink
options (``woocommerce_permalinks["product_base"]``).
"""

from __future__ import annotations

from typing import Any

from seqspine.core.protocols import StorefrontOptions
from seqspine.core.settings import SeqSpineSettings

STOREFRONT_OPTION = "woocommerce_permalinks"
STOREFRONT_BASE_KEY = "product_base"


class SettingsStorefrontOptions:
    """:class:`StorefrontOptions` backed by ``SEQSPINE_STOREFRONT_BASE``."""

    def __init__(self, settings: SeqSpineSettings) -> None:
        self._settings = settings

    def get(self, key: str) -> Any:
        if key != STOREFRONT_OPTION or self._settings.storefront_base is None:
            return None
        return {STOREFRONT_BASE_KEY: self._settings.storefront_base}


def _override(option: Any) -> str | None:
    if not isinstance(option, dict):
        return None
    value = option.get(STOREFRONT_BASE_KEY)
    if not isinstance(value, str):
        return None
    return value.strip().strip("/") or None


class BasePathResolver:
    """Pure ``category → path segment`` lookup."""

    def __init__(
        self,
        storefront_category: str = "product",
        options: StorefrontOptions | None = None,
    ) -> None:
        self._storefront_category = storefront_category
        self._options = options

    def base_path(self, category: str) -> str:
        if category == self._storefront_category and self._options is not None:
            override = _override(self._options.get(STOREFRONT_OPTION))
            if override:
                return override
        return category


__all__ = [
    "STOREFRONT_OPTION",
    "STOREFRONT_BASE_KEY",
    "SettingsStorefrontOptions",
    "BasePathResolver",
]
