"""Log Exporter -- metric views and trace spans as structured log records.

For teams without a metrics or tracing backend: every metric row and every
finished span becomes one structlog record.

Example:
    >>> from logexporter import Exporter, configure_logging
    >>> configure_logging(level="DEBUG", format="json")
    >>> exporter = Exporter()
    >>> exporter.export_view(snapshot)   # one "metric" record per row
    >>> exporter.export_span(span)       # one "trace" record

Modules::

    core/models.py     ViewSnapshot, Row, aggregation kinds, SpanRecord
    core/settings.py   ExporterSettings (LOGEXPORT_* environment)
    core/errors.py     LogExporterError hierarchy
    sink.py            LogEvent builder, event_factory, LogSink
    exporter.py        Exporter.export_view / Exporter.export_span
    logging.py         structlog configuration
    otel.py            OpenTelemetry SDK span/metric exporter adapters
"""

from logexporter.core import (
    Annotation,
    ConfigError,
    CountData,
    DistributionData,
    ExporterSettings,
    LastValueData,
    LogExporterError,
    Row,
    SpanRecord,
    SpanStatus,
    SumData,
    ViewSnapshot,
    get_settings,
)
from logexporter.exporter import Exporter, format_tags
from logexporter.logging import configure_logging, get_logger
from logexporter.sink import EventFactory, LogEvent, LogSink, event_factory

__version__ = "0.1.0"

__all__ = [
    # Translators
    "Exporter",
    "format_tags",
    # Sink binding
    "EventFactory",
    "LogEvent",
    "LogSink",
    "event_factory",
    # Records
    "Annotation",
    "CountData",
    "DistributionData",
    "LastValueData",
    "Row",
    "SpanRecord",
    "SpanStatus",
    "SumData",
    "ViewSnapshot",
    # Config / logging
    "ExporterSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Errors
    "LogExporterError",
    "ConfigError",
]
