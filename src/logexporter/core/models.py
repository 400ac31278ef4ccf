"""Telemetry records handed to the exporter by an instrumentation runtime.

Two shapes arrive: a metric view snapshot (one row per tag combination) and a
completed trace span. Both are built by the runtime immediately before an
export call and are never retained afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Union

# Attribute values pass through untouched: bool, str, int or float.
AttributeValue = Union[bool, str, int, float]

TRACE_ID_SIZE = 16
SPAN_ID_SIZE = 8
ZERO_SPAN_ID = bytes(SPAN_ID_SIZE)


# =============================================================================
# Aggregation data
# =============================================================================


@dataclass(frozen=True)
class DistributionData:
    """Distribution aggregate. Only min/max/mean are exported."""

    min: float
    max: float
    mean: float
    count: int = 0
    sum_of_squared_deviation: float = 0.0


@dataclass(frozen=True)
class CountData:
    value: int


@dataclass(frozen=True)
class SumData:
    value: float


@dataclass(frozen=True)
class LastValueData:
    value: float


AggregationData = Union[DistributionData, CountData, SumData, LastValueData]


# =============================================================================
# Metric view snapshot
# =============================================================================


@dataclass(frozen=True)
class Row:
    """One tag combination's aggregated value within a view snapshot.

    ``data`` is expected to hold exactly one of the four aggregation kinds;
    anything else is exported without a numeric field.
    """

    tags: Mapping[str, str] = field(default_factory=dict)
    data: AggregationData | None = None


@dataclass(frozen=True)
class ViewSnapshot:
    """Periodic aggregate of one named metric across all observed tags."""

    name: str
    end: datetime
    rows: Sequence[Row] = ()


# =============================================================================
# Trace span
# =============================================================================


@dataclass(frozen=True)
class SpanStatus:
    code: int = 0
    message: str = ""


@dataclass(frozen=True)
class Annotation:
    """Timestamped sub-event of a span carrying its own attributes."""

    message: str
    attributes: Mapping[str, AttributeValue] = field(default_factory=dict)
    time: datetime | None = None


@dataclass(frozen=True)
class SpanRecord:
    """A completed, timed operation.

    ``parent_span_id`` defaults to the all-zero sentinel, meaning the span
    has no parent.
    """

    trace_id: bytes
    span_id: bytes
    name: str
    start_time: datetime
    end_time: datetime
    parent_span_id: bytes = ZERO_SPAN_ID
    status: SpanStatus = field(default_factory=SpanStatus)
    attributes: Mapping[str, AttributeValue] = field(default_factory=dict)
    annotations: Sequence[Annotation] = ()

    @property
    def elapsed(self) -> timedelta:
        """Duration between start and end, derived on access."""
        return self.end_time - self.start_time


__all__ = [
    "AggregationData",
    "Annotation",
    "AttributeValue",
    "CountData",
    "DistributionData",
    "LastValueData",
    "Row",
    "SPAN_ID_SIZE",
    "SpanRecord",
    "SpanStatus",
    "SumData",
    "TRACE_ID_SIZE",
    "ViewSnapshot",
    "ZERO_SPAN_ID",
]
