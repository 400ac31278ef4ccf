"""
Log Exporter Logging - structlog configuration for the exported records.

The exporter never decides where its records go; it hands fields to a
structlog logger. This module configures that logger for processes that do
not already have structlog set up.

Architecture:
    ::

        configure_logging(level="DEBUG", format="json", service="checkout")
            ↓
        structlog processor chain:
          1. merge_contextvars
          2. add_log_level
          3. TimeStamper (ISO-8601, UTC)
          4. add_service_metadata
          5. EventRenamer("message") + JSONRenderer
             (or ConsoleRenderer for dev)

        Output (JSON format):
        {
          "name": "test/nothing_view",
          "end": "2025-12-26T10:00:00+00:00",
          "count": 2,
          "tags": ["tag1:not1", "tag2:not2"],
          "level": "debug",
          "timestamp": "2025-12-26T10:00:00.123456Z",
          "service.name": "checkout",
          "message": "metric"
        }

Examples:
    >>> from logexporter.logging import configure_logging
    >>> from logexporter import Exporter
    >>> configure_logging(level="DEBUG", format="json", service="checkout")
    >>> exporter = Exporter()  # default sink: logger "logexporter" at debug

Tags:
    logging, structlog, observability, json-logging, logexporter
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from logexporter.core.settings import get_settings

DEFAULT_LOGGER_NAME = "logexporter"

# Store service name for metadata
_SERVICE_NAME = "logexporter"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str | None = None,
    format: str | None = None,
    service: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog for exported records.

    Arguments left as ``None`` fall back to :class:`ExporterSettings`.

    Args:
        level: Minimum level that reaches the output (DEBUG, INFO, ...)
        format: ``json`` for log aggregation, ``console`` for development
        service: Service name stamped on every record
        stream: Where records are printed (default: stdout)
    """
    global _SERVICE_NAME

    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    log_format = (format or settings.log_format).lower()
    _SERVICE_NAME = service or settings.service_name

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_metadata,
    ]

    if log_format == "json":
        processors.append(structlog.processors.EventRenamer("message"))
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream is None))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level, logging.DEBUG)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually for ``__name__``)."""
    return structlog.get_logger(name or DEFAULT_LOGGER_NAME)


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "configure_logging",
    "get_logger",
]
