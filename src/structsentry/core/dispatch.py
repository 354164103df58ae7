"""Dispatch policy: forward, demote to breadcrumb, or drop each record.

Write-path policy: a record that cannot be decoded, carries a mistyped
message or error field, or has an unknown level is dropped without a trace.
A logging pipeline must keep working while the log schema changes, so none
of these conditions is reported to the caller, and none is logged (logging
about a log record could feed back into this same writer).
"""

from structsentry.core.config import WriterConfig
from structsentry.core.errors import LevelParseError
from structsentry.core.levels import lookup_severity
from structsentry.core.models import Breadcrumb, Level, NormalizedEvent, Severity
from structsentry.core.parser import parse_event, parse_level
from structsentry.core.ports import SinkPort
from structsentry.core.stack import LOGGER_MODULE


def make_breadcrumb(event: NormalizedEvent) -> Breadcrumb:
    """Build a breadcrumb from an event, taking its category from ``extra``."""
    category = event.extra.get("category", "")
    return Breadcrumb(
        category=category if isinstance(category, str) else "",
        message=event.message,
        level=event.level,
        data=dict(event.extra),
    )


class DispatchPolicy:
    """Routes parsed log records to a sink.

    Args:
        sink: Sink receiving events, breadcrumbs and flushes.
        config: Writer settings; immutable.
        logger_module: Logging library trimmed from error stack traces.
    """

    def __init__(
        self,
        sink: SinkPort,
        config: WriterConfig,
        logger_module: str = LOGGER_MODULE,
    ) -> None:
        self._sink = sink
        self._config = config
        self._logger_module = logger_module

    def dispatch(self, data: bytes | str) -> None:
        """Handle one record whose level is read from the record itself."""
        try:
            level = parse_level(data, self._config.field_names)
        except LevelParseError:
            return
        self.dispatch_with_level(level, data)

    def dispatch_with_level(
        self,
        level: Level,
        data: bytes | str,
        logger_module: str | None = None,
    ) -> None:
        """Handle one record whose level is already known.

        ``logger_module`` overrides the policy's logging library for this
        record only.
        """
        event = parse_event(
            data,
            self._config.now,
            self._config.field_names,
            logger_module or self._logger_module,
        )
        if event is None:
            return

        event.level = lookup_severity(level)
        if event.level is None:
            return

        if not self._config.is_enabled(level):
            if self._config.breadcrumbs:
                self._sink.add_breadcrumb(make_breadcrumb(event))
            return

        self._sink.capture_event(event)
        # Deliver before a fatal log terminates the process
        if event.level == Severity.FATAL:
            self._sink.flush(self._config.flush_timeout)
