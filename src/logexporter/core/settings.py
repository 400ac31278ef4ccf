"""
Centralized settings for the log exporter.

Manifesto:
    One validated, cached settings object decides how exported records are
    rendered: how durations and timestamps are serialized and how structlog
    is configured.

All fields can be set via ``LOGEXPORT_*`` environment variables (e.g.
``LOGEXPORT_DURATION_UNIT=s``) or a ``.env`` file.

Tags:
    logexporter, configuration, settings, pydantic, caching, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LEVELS = ("debug", "info", "warning", "error", "critical")

DurationUnit = Literal["ns", "us", "ms", "s"]
TimeFormat = Literal["iso", "unix"]


class ExporterSettings(BaseSettings):
    """Log exporter configuration.

    Fields
    ──────
    log_level      : structlog filtering level for configure_logging()
    log_format     : json | console renderer
    service_name   : service.name stamped on every record
    duration_unit  : unit of duration fields (elapsed)
    time_format    : iso (RFC 3339 string) or unix (float seconds)
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGEXPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="DEBUG", description="structlog filtering level")
    log_format: Literal["json", "console"] = Field(default="json")
    service_name: str = Field(default="logexporter")

    # ── Record rendering ─────────────────────────────────────────
    duration_unit: DurationUnit = Field(default="ms")
    time_format: TimeFormat = Field(default="iso")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper.lower() not in LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LEVELS)}")
        return upper


@lru_cache(maxsize=1)
def get_settings() -> ExporterSettings:
    """Return the cached settings instance."""
    return ExporterSettings()


def clear_settings_cache() -> None:
    """Drop the cached settings (tests, reconfiguration)."""
    get_settings.cache_clear()


__all__ = [
    "DurationUnit",
    "ExporterSettings",
    "LEVELS",
    "TimeFormat",
    "clear_settings_cache",
    "get_settings",
]
