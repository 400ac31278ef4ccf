"""Log Exporter Core -- records, settings and errors shared by the translators."""

from logexporter.core.errors import (
    ConfigError,
    ErrorCategory,
    InvalidLevelError,
    InvalidUnitError,
    LogExporterError,
)
from logexporter.core.models import (
    AggregationData,
    Annotation,
    CountData,
    DistributionData,
    LastValueData,
    Row,
    SpanRecord,
    SpanStatus,
    SumData,
    ViewSnapshot,
)
from logexporter.core.settings import ExporterSettings, clear_settings_cache, get_settings

__all__ = [
    # Models
    "AggregationData",
    "Annotation",
    "CountData",
    "DistributionData",
    "LastValueData",
    "Row",
    "SpanRecord",
    "SpanStatus",
    "SumData",
    "ViewSnapshot",
    # Settings
    "ExporterSettings",
    "get_settings",
    "clear_settings_cache",
    # Errors
    "ErrorCategory",
    "LogExporterError",
    "ConfigError",
    "InvalidLevelError",
    "InvalidUnitError",
]
