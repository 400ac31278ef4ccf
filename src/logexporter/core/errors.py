"""
Structured error types for the log exporter.

Translation itself never raises: a snapshot or span that matches the data
model always produces its records, and anything structurally unexpected
degrades to "no field". Errors only come from wiring, when a sink binding or
settings object is built with values the exporter cannot honor.

Manifesto:
    - **Fail at construction:** Bad severity or units surface when the sink
      is bound, never in the middle of an export call
    - **Rich Context:** Errors carry metadata for logging
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────┐
        │               LogExporterError                │
        │      (category, context, cause)               │
        ├──────────────────────────────────────────────┤
        │  ConfigError (CONFIG)                         │
        │      InvalidLevelError                        │
        │      InvalidUnitError                         │
        └──────────────────────────────────────────────┘

Examples:
    >>> error = InvalidLevelError("Unknown severity 'loud'").with_context(level="loud")
    >>> error.to_dict()["context"]
    {'level': 'loud'}

Tags:
    error-handling, exception-hierarchy, configuration, logexporter

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification."""

    CONFIG = "CONFIG"  # Invalid sink binding or settings
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


class LogExporterError(Exception):
    """Base exception for all log exporter errors.

    Subclasses set ``default_category``; callers may attach free-form
    context with :meth:`with_context`.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> LogExporterError:
        """Add context to this error (fluent API)."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS (Never Retryable)
# =============================================================================


class ConfigError(LogExporterError):
    """Invalid exporter configuration."""

    default_category = ErrorCategory.CONFIG


class InvalidLevelError(ConfigError):
    """Severity name the bound logger does not provide."""


class InvalidUnitError(ConfigError):
    """Unsupported duration unit or time format."""


__all__ = [
    "ErrorCategory",
    "LogExporterError",
    "ConfigError",
    "InvalidLevelError",
    "InvalidUnitError",
]
