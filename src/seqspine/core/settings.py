"""Settings for seq-spine.

Configuration is explicit, validated and environment-driven.  All fields
can be overridden with ``SEQSPINE_``-prefixed environment variables or a
``.env`` file; list fields accept JSON (``SEQSPINE_CATEGORIES='["product"]'``).

Examples:
    >>> from seqspine.core.settings import SeqSpineSettings
    >>> s = SeqSpineSettings(categories=["product", "event"])
    >>> s.storefront_category
    'product'

Tags:
    settings, configuration, pydantic, environment, seq-spine
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from seqspine.core.errors import InvalidConfigError

_CATEGORY_RE = re.compile(r"^[a-z0-9_-]{1,20}$")


class SeqSpineSettings(BaseSettings):
    """Process-wide configuration.

    Order of precedence (highest → lowest):
        1. Constructor arguments
        2. Environment variables (``SEQSPINE_DATABASE_URL``, ...)
        3. ``.env`` file
        4. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="SEQSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite:///seq_spine.db",
        description="SQLAlchemy connection URL (sqlite:/// or postgresql+psycopg://)",
    )
    sqlite_busy_timeout_s: float = Field(
        default=30.0,
        description="Seconds a SQLite writer waits for the database lock",
    )

    # ── Sequencing ───────────────────────────────────────────────
    categories: list[str] = Field(
        default_factory=lambda: ["product", "portfolio", "event"],
        description="Record categories eligible for sequential ids",
    )
    publish_status: str = Field(
        default="publish",
        description="Record status that makes a top-level record eligible",
    )
    storefront_category: str = Field(
        default="product",
        description="The one category whose base path the storefront may override",
    )
    storefront_base: str | None = Field(
        default=None,
        description="Storefront base path override for storefront_category",
    )
    home_url: str = Field(
        default="",
        description="Absolute site root prepended to permalinks (no trailing slash)",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None

    # ── API ──────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 12100
    debug: bool = False
    api_prefix: str = "/api/v1"
    api_title: str = "seq-spine API"
    api_version: str = "0.1.0"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("categories")
    @classmethod
    def _check_categories(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one category must be configured")
        if len(set(value)) != len(value):
            raise ValueError(f"duplicate categories: {value}")
        for name in value:
            if not _CATEGORY_RE.match(name):
                raise ValueError(f"invalid category name: {name!r}")
        return value

    @field_validator("home_url")
    @classmethod
    def _strip_home_url(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _check_storefront_category(self) -> SeqSpineSettings:
        if self.storefront_category not in self.categories:
            raise ValueError(
                f"storefront_category {self.storefront_category!r} "
                f"is not one of {self.categories}"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> SeqSpineSettings:
    """Cached settings - loaded once per process.

    Raises:
        InvalidConfigError: an environment or ``.env`` value failed
            validation.  Only the first failure is reported.
    """
    try:
        return SeqSpineSettings()
    except ValidationError as exc:
        first = exc.errors()[0]
        key = ".".join(str(part) for part in first["loc"]) or "settings"
        raise InvalidConfigError(
            key, first.get("input"), f"Invalid setting {key}: {first['msg']}"
        ) from exc


def clear_settings_cache() -> None:
    """Drop the cached settings (tests, config reload)."""
    get_settings.cache_clear()


__all__ = ["SeqSpineSettings", "get_settings", "clear_settings_cache"]
