"""Tests for ``logexporter.core.settings`` and ``logexporter.core.errors``."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from logexporter.core.errors import (
    ConfigError,
    ErrorCategory,
    InvalidLevelError,
    LogExporterError,
)
from logexporter.core.settings import ExporterSettings, clear_settings_cache, get_settings


class TestExporterSettings:
    def test_defaults(self):
        s = ExporterSettings()
        assert s.log_level == "DEBUG"
        assert s.log_format == "json"
        assert s.service_name == "logexporter"
        assert s.duration_unit == "ms"
        assert s.time_format == "iso"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("LOGEXPORT_DURATION_UNIT", "us")
        monkeypatch.setenv("LOGEXPORT_TIME_FORMAT", "unix")
        s = ExporterSettings()
        assert s.duration_unit == "us"
        assert s.time_format == "unix"

    def test_log_level_normalized(self):
        assert ExporterSettings(log_level="warning").log_level == "WARNING"

    @pytest.mark.parametrize(
        "field, value",
        [
            ("log_level", "verbose"),
            ("duration_unit", "minutes"),
            ("time_format", "epoch"),
            ("log_format", "xml"),
        ],
    )
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            ExporterSettings(**{field: value})

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_clear_cache_rereads_env(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("LOGEXPORT_TIME_FORMAT", "unix")
        assert get_settings() is first

        clear_settings_cache()
        assert get_settings().time_format == "unix"


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(InvalidLevelError, ConfigError)
        assert issubclass(ConfigError, LogExporterError)

    def test_default_category(self):
        assert LogExporterError("x").category == ErrorCategory.INTERNAL
        assert ConfigError("x").category == ErrorCategory.CONFIG

    def test_to_dict(self):
        cause = ValueError("bad")
        error = ConfigError("invalid sink", cause=cause).with_context(level="loud")

        assert error.to_dict() == {
            "error_type": "ConfigError",
            "message": "invalid sink",
            "category": "CONFIG",
            "context": {"level": "loud"},
            "cause": "bad",
        }
        assert error.__cause__ is cause

    def test_repr(self):
        assert repr(ConfigError("nope")) == "ConfigError('nope', category=CONFIG)"
