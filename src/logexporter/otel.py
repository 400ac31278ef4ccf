"""OpenTelemetry SDK adapters.

Lets an OpenTelemetry ``TracerProvider`` / ``MeterProvider`` deliver finished
spans and collected metrics to :class:`~logexporter.exporter.Exporter`.
Batching and scheduling stay with the SDK's span processors and metric
readers; these classes only convert and delegate.

Example:
    >>> from opentelemetry.sdk.trace import TracerProvider
    >>> from opentelemetry.sdk.trace.export import SimpleSpanProcessor
    >>> provider = TracerProvider()
    >>> provider.add_span_processor(SimpleSpanProcessor(LogSpanExporter()))
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from opentelemetry.sdk.metrics.export import (
    ExponentialHistogram,
    Gauge,
    Histogram,
    Metric,
    MetricExporter,
    MetricExportResult,
    MetricsData,
    Sum,
)
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult

from logexporter.core.models import (
    SPAN_ID_SIZE,
    TRACE_ID_SIZE,
    ZERO_SPAN_ID,
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
from logexporter.exporter import Exporter

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _from_nanos(nanos: int | None, *, round_up: bool = False) -> datetime:
    # datetime holds microseconds; sub-microsecond digits are floored, or
    # ceiled with round_up.
    nanos = nanos or 0
    micros = -(-nanos // 1000) if round_up else nanos // 1000
    return _EPOCH + timedelta(microseconds=micros)


# =============================================================================
# Traces
# =============================================================================


def span_record_from_otel(span: ReadableSpan) -> SpanRecord:
    """Convert a finished SDK span into a :class:`SpanRecord`."""
    context = span.context
    parent = span.parent
    start = span.start_time or 0
    end = span.end_time if span.end_time is not None else start

    return SpanRecord(
        trace_id=context.trace_id.to_bytes(TRACE_ID_SIZE, "big"),
        span_id=context.span_id.to_bytes(SPAN_ID_SIZE, "big"),
        parent_span_id=(
            parent.span_id.to_bytes(SPAN_ID_SIZE, "big") if parent is not None else ZERO_SPAN_ID
        ),
        name=span.name,
        start_time=_from_nanos(start),
        # Ceiling keeps end > start when both fall in the same microsecond.
        end_time=_from_nanos(end, round_up=end > start),
        status=SpanStatus(
            code=span.status.status_code.value,
            message=span.status.description or "",
        ),
        attributes=dict(span.attributes or {}),
        annotations=[
            Annotation(
                message=event.name,
                attributes=dict(event.attributes or {}),
                time=_from_nanos(event.timestamp),
            )
            for event in span.events
        ],
    )


class LogSpanExporter(SpanExporter):
    """``SpanExporter`` that logs every finished span as a ``trace`` record."""

    def __init__(self, exporter: Exporter | None = None):
        self._exporter = exporter or Exporter()

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        for span in spans:
            self._exporter.export_span(span_record_from_otel(span))
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True


# =============================================================================
# Metrics
# =============================================================================


def _aggregation(data: object, point: object) -> AggregationData | None:
    match data:
        case Sum():
            if isinstance(point.value, int):
                return CountData(value=point.value)
            return SumData(value=point.value)
        case Gauge():
            return LastValueData(value=float(point.value))
        case Histogram() | ExponentialHistogram():
            mean = point.sum / point.count if point.count else 0.0
            return DistributionData(
                min=float(point.min),
                max=float(point.max),
                mean=float(mean),
                count=point.count,
            )
        case _:
            return None


def view_snapshot_from_otel(metric: Metric) -> ViewSnapshot:
    """Convert one SDK metric into a :class:`ViewSnapshot`, one row per point.

    Integer sums become counts, float sums become sums, gauges become last
    values and histograms become distributions. Other data kinds yield rows
    without aggregation data.
    """
    points = list(getattr(metric.data, "data_points", ()) or ())
    rows = [
        Row(
            tags={str(key): str(value) for key, value in (point.attributes or {}).items()},
            data=_aggregation(metric.data, point),
        )
        for point in points
    ]
    end = max((point.time_unix_nano for point in points), default=0)
    return ViewSnapshot(name=metric.name, end=_from_nanos(end), rows=rows)


class LogMetricExporter(MetricExporter):
    """``MetricExporter`` that logs every data point as a ``metric`` record.

    Pair it with a ``PeriodicExportingMetricReader`` to get the periodic
    reporting behavior.
    """

    def __init__(self, exporter: Exporter | None = None, **kwargs):
        super().__init__(**kwargs)
        self._exporter = exporter or Exporter()

    def export(
        self,
        metrics_data: MetricsData,
        timeout_millis: float = 10_000,
        **kwargs,
    ) -> MetricExportResult:
        for resource_metrics in metrics_data.resource_metrics:
            for scope_metrics in resource_metrics.scope_metrics:
                for metric in scope_metrics.metrics:
                    self._exporter.export_view(view_snapshot_from_otel(metric))
        return MetricExportResult.SUCCESS

    def force_flush(self, timeout_millis: float = 10_000) -> bool:
        return True

    def shutdown(self, timeout_millis: float = 30_000, **kwargs) -> None:
        pass


__all__ = [
    "LogMetricExporter",
    "LogSpanExporter",
    "span_record_from_otel",
    "view_snapshot_from_otel",
]
