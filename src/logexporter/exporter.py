"""
Metric view and trace span translation into structured log records.

:class:`Exporter` is handed telemetry by an instrumentation runtime (push
model, on the runtime's own threads) and writes one record per view row and
one record per span. It keeps no state between calls.

Metric record fields::

    name, end, tags                       always
    distributionMin/Max/Mean              DistributionData
    count                                 CountData
    sum                                   SumData
    last                                  LastValueData
    message = "metric"

Span record fields::

    traceId, spanId, [parentSpanId], span, statusMessage, statusCode, elapsed
    annotations.<message>.<key>           per annotation attribute
    attributes.<key>                      per span attribute
    message = "trace"

Tags and attributes are emitted in the iteration order of the mappings they
came from. Synthesized field names can collide (two annotations with the same
message and key); the later value wins.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from logexporter.core.errors import ConfigError
from logexporter.core.models import (
    CountData,
    DistributionData,
    LastValueData,
    Row,
    SpanRecord,
    SpanStatus,
    SumData,
    ViewSnapshot,
)
from logexporter.sink import EventFactory, LogEvent, LogSink

# Matches an encoded identifier made only of zeros.
_ZERO_ID = re.compile(r"^0+$")


def _hex(identifier: bytes | None) -> str:
    return bytes(identifier or b"").hex()


def format_tags(tags: Mapping[str, str] | None) -> list[str]:
    """Render row tags as ``key:value`` strings, dropping empty values."""
    return [f"{key}:{value}" for key, value in (tags or {}).items() if value != ""]


class Exporter:
    """Stats and trace exporter that logs exported data with structlog."""

    def __init__(self, event_fn: EventFactory | None = None, *, sink: LogSink | None = None):
        if event_fn is not None and sink is not None:
            raise ConfigError("Pass either event_fn or sink, not both")
        self._sink = sink or LogSink(event_fn)

    def log(self) -> LogEvent:
        return self._sink.log()

    # ── Metrics ──────────────────────────────────────────────────

    def export_view(self, snapshot: ViewSnapshot) -> None:
        """Log one ``metric`` record per row of ``snapshot``."""
        for row in snapshot.rows or ():
            event = self.log()
            event.field("name", snapshot.name)
            event.timestamp("end", snapshot.end)
            self._set_aggregation(event, row)
            event.strings("tags", format_tags(row.tags))
            event.msg("metric")

    @staticmethod
    def _set_aggregation(event: LogEvent, row: Row) -> None:
        match row.data:
            case DistributionData(min=low, max=high, mean=mean):
                event.field("distributionMin", low)
                event.field("distributionMax", high)
                event.field("distributionMean", mean)
            case CountData(value=value):
                event.field("count", value)
            case SumData(value=value):
                event.field("sum", value)
            case LastValueData(value=value):
                event.field("last", value)
            case _:
                # Unknown kind: record keeps name, end and tags only.
                pass

    def export_views(self, snapshots: Iterable[ViewSnapshot]) -> None:
        for snapshot in snapshots:
            self.export_view(snapshot)

    # ── Traces ───────────────────────────────────────────────────

    def export_span(self, span: SpanRecord) -> None:
        """Log exactly one ``trace`` record for ``span``."""
        parent_span_id = _hex(span.parent_span_id)

        event = self.log()
        event.field("traceId", _hex(span.trace_id))
        event.field("spanId", _hex(span.span_id))
        if parent_span_id and not _ZERO_ID.match(parent_span_id):
            event.field("parentSpanId", parent_span_id)

        event.field("span", span.name)
        status = span.status or SpanStatus()
        event.field("statusMessage", status.message)
        event.field("statusCode", status.code)
        event.duration("elapsed", span.elapsed)

        for annotation in span.annotations or ():
            for key, value in (annotation.attributes or {}).items():
                event.field("annotations." + annotation.message + "." + key, value)

        for key, value in (span.attributes or {}).items():
            event.field("attributes." + key, value)

        event.msg("trace")

    def export_spans(self, spans: Iterable[SpanRecord]) -> None:
        for span in spans:
            self.export_span(span)


__all__ = [
    "Exporter",
    "format_tags",
]
