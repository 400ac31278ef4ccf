"""
Log sink binding: where exported records are written, and at what severity.

The translators never talk to a logger directly. They ask a :class:`LogSink`
for a fresh :class:`LogEvent`, populate it field by field and finish it with
:meth:`LogEvent.msg`. Which logger and which severity the event lands on is
decided once, when the sink is built.

Examples:
    Route records to an application logger at info::

        >>> import structlog
        >>> from logexporter.sink import LogSink, event_factory
        >>> sink = LogSink(event_factory(structlog.get_logger("telemetry"), "info"))

    No factory: records go to the ``logexporter`` logger at debug::

        >>> sink = LogSink()
        >>> sink.log().field("count", 2).msg("metric")
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from typing import Any

from logexporter.core.errors import InvalidLevelError, InvalidUnitError
from logexporter.core.settings import LEVELS, ExporterSettings, get_settings
from logexporter.logging import get_logger

# Multipliers from seconds.
_DURATION_UNITS: dict[str, float] = {
    "ns": 1e9,
    "us": 1e6,
    "ms": 1e3,
    "s": 1.0,
}

_TIME_FORMATS = ("iso", "unix")

DEFAULT_LEVEL = "debug"


def _check_rendering(duration_unit: str, time_format: str) -> None:
    if duration_unit not in _DURATION_UNITS:
        raise InvalidUnitError(
            f"Unsupported duration unit {duration_unit!r}"
        ).with_context(duration_unit=duration_unit)
    if time_format not in _TIME_FORMATS:
        raise InvalidUnitError(
            f"Unsupported time format {time_format!r}"
        ).with_context(time_format=time_format)


class LogEvent:
    """Builder for one structured log record.

    Setters return the event so calls chain; :meth:`msg` writes the record
    through the bound logger method.
    """

    def __init__(
        self,
        emit: Callable[..., Any],
        *,
        duration_unit: str = "ms",
        time_format: str = "iso",
    ):
        _check_rendering(duration_unit, time_format)
        self._emit = emit
        self._duration_unit = duration_unit
        self._time_format = time_format
        self.fields: dict[str, Any] = {}

    def field(self, key: str, value: Any) -> LogEvent:
        """Set ``key`` to ``value`` unchanged."""
        self.fields[key] = value
        return self

    def strings(self, key: str, values: Iterable[str]) -> LogEvent:
        """Set ``key`` to a list of strings (empty list is kept)."""
        self.fields[key] = list(values)
        return self

    def timestamp(self, key: str, value: datetime) -> LogEvent:
        if self._time_format == "unix":
            self.fields[key] = value.timestamp()
        else:
            self.fields[key] = value.isoformat()
        return self

    def duration(self, key: str, value: timedelta) -> LogEvent:
        """Set ``key`` to ``value`` as a float in the configured unit."""
        self.fields[key] = value.total_seconds() * _DURATION_UNITS[self._duration_unit]
        return self

    def msg(self, message: str) -> None:
        """Write the record with ``message`` as its message text."""
        self._emit(message, **self.fields)


EventFactory = Callable[[], LogEvent]


def event_factory(
    logger: Any = None,
    level: str = DEFAULT_LEVEL,
    *,
    settings: ExporterSettings | None = None,
) -> EventFactory:
    """Build a factory producing events on ``logger`` at ``level``.

    Args:
        logger: A structlog bound logger, or any object whose severity
            methods accept ``(message, **fields)``. ``None`` resolves the
            default ``logexporter`` logger each time an event is opened, so
            later ``configure_logging()`` calls are honored.
        level: Severity method used to write records.
        settings: Rendering options; defaults to :func:`get_settings`.

    Raises:
        InvalidLevelError: ``level`` is not a known severity.
        InvalidUnitError: settings carry an unsupported unit or time format.
    """
    settings = settings or get_settings()
    method = level.lower()
    if method not in LEVELS:
        raise InvalidLevelError(f"Unknown severity {level!r}").with_context(level=level)

    duration_unit = settings.duration_unit
    time_format = settings.time_format
    _check_rendering(duration_unit, time_format)

    def factory() -> LogEvent:
        target = logger if logger is not None else get_logger()
        return LogEvent(
            getattr(target, method),
            duration_unit=duration_unit,
            time_format=time_format,
        )

    return factory


class LogSink:
    """Hands out fresh events for the translators.

    Without ``event_fn`` records go to the ``logexporter`` logger at debug.

    Holds no mutable state after construction, so one sink can be shared by
    the metric and span paths across threads.
    """

    def __init__(
        self,
        event_fn: EventFactory | None = None,
        *,
        settings: ExporterSettings | None = None,
    ):
        if event_fn is None:
            settings = settings or get_settings()
            event_fn = event_factory(level=DEFAULT_LEVEL, settings=settings)
        self._event_fn = event_fn

    def log(self) -> LogEvent:
        """Open a new, empty event."""
        return self._event_fn()


__all__ = [
    "EventFactory",
    "LogEvent",
    "LogSink",
    "event_factory",
]
