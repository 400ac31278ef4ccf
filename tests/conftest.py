"""
Shared pytest fixtures and configuration for logexporter tests.

This module provides:
- A structlog capture fixture that records every emitted event dict
- Exporters bound to that capture
- Deterministic span/snapshot builders
- Settings and structlog cleanup for test isolation
"""

import logging
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Generator

import pytest
import structlog
from structlog.testing import LogCapture

# Ensure logexporter package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from logexporter.core.models import (
    Annotation,
    CountData,
    Row,
    SpanRecord,
    SpanStatus,
    ViewSnapshot,
)
from logexporter.core.settings import clear_settings_cache
from logexporter.exporter import Exporter
from logexporter.sink import event_factory

FIXED_END = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)
TRACE_ID = bytes.fromhex("4bf92f3577b34da6a3ce929d0e0e4736")
SPAN_ID = bytes.fromhex("00f067aa0ba902b7")
PARENT_SPAN_ID = bytes.fromhex("53995c3f42cd8ad8")


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_state(monkeypatch) -> Generator[None, None, None]:
    """Reset cached settings and structlog configuration around each test."""
    for key in (
        "LOGEXPORT_LOG_LEVEL",
        "LOGEXPORT_LOG_FORMAT",
        "LOGEXPORT_SERVICE_NAME",
        "LOGEXPORT_EVENT_LEVEL",
        "LOGEXPORT_DURATION_UNIT",
        "LOGEXPORT_TIME_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    structlog.reset_defaults()
    yield
    clear_settings_cache()
    structlog.reset_defaults()


# =============================================================================
# Capture
# =============================================================================


@pytest.fixture
def capture() -> LogCapture:
    """Processor that stores event dicts instead of rendering them."""
    return LogCapture()


@pytest.fixture
def capture_logger(capture):
    """structlog logger whose only processor is ``capture``."""
    return structlog.wrap_logger(
        None,
        processors=[capture],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
    )


@pytest.fixture
def exporter(capture_logger) -> Exporter:
    """Exporter writing debug records into the capture."""
    return Exporter(event_factory(capture_logger, "debug"))


# =============================================================================
# Sample records
# =============================================================================


@pytest.fixture
def nothing_view() -> ViewSnapshot:
    """Single-row count view with two tags."""
    return ViewSnapshot(
        name="test/nothing_view",
        end=FIXED_END,
        rows=[Row(tags={"tag1": "not1", "tag2": "not2"}, data=CountData(2))],
    )


def make_span(**overrides) -> SpanRecord:
    """Span with fixed identifiers lasting 250ms; ``overrides`` replace fields."""
    start = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)
    values = dict(
        trace_id=TRACE_ID,
        span_id=SPAN_ID,
        name="/foo",
        start_time=start,
        end_time=start + timedelta(milliseconds=250),
        status=SpanStatus(code=0, message=""),
        attributes={},
        annotations=[],
    )
    values.update(overrides)
    return SpanRecord(**values)


@pytest.fixture
def foo_span() -> SpanRecord:
    return make_span(
        attributes={"key1": False, "key2": True, "key3": "hello", "key4": "hello"},
    )


@pytest.fixture
def annotated_span() -> SpanRecord:
    return make_span(
        parent_span_id=PARENT_SPAN_ID,
        status=SpanStatus(code=2, message="upstream failed"),
        annotations=[
            Annotation(message="cache", attributes={"hit": False, "size": 512}),
            Annotation(message="retry", attributes={"attempt": 3, "backoff": 0.5}),
        ],
        attributes={"http.method": "GET"},
    )


@pytest.fixture
def span_factory():
    """Build spans via ``span_factory(parent_span_id=..., attributes=...)``."""
    return make_span
