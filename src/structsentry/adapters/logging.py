"""Python logging handler adapter for structsentry.

This adapter bridges Python's standard library logging module to a
SentryWriter: each LogRecord is rendered as one JSON object using the
writer's reserved field names and handed over with its level already known.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from structsentry.core.models import Level
from structsentry.writer import SentryWriter

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class SentryHandler(logging.Handler):
    """Logging handler that forwards log records to a SentryWriter.

    Stack traces attached to errors are trimmed past the :mod:`logging`
    frames, whatever logging library the writer itself was built for, so
    they stop at the code that called the logger.

    Example:
        ```python
        from structsentry import SentryHandler, SentryWriter

        writer = SentryWriter.from_dsn(dsn)
        logging.getLogger().addHandler(SentryHandler(writer))
        ```
    """

    def __init__(
        self,
        writer: SentryWriter,
        level: int = logging.NOTSET,
        logger_module: str = "logging",
    ) -> None:
        """Initialize the handler with a writer.

        Args:
            writer: Writer receiving the rendered records.
            level: Minimum logging level handled.
            logger_module: Logging library trimmed from error stack traces.
        """
        super().__init__(level)
        self._writer = writer
        self._logger_module = logger_module

    @property
    def writer(self) -> SentryWriter:
        return self._writer

    def render(self, record: logging.LogRecord) -> str:
        """Render a log record as one JSON object.

        Args:
            record: The log record to render.

        Returns:
            JSON text keyed by the writer's field names, plus the logger
            name and any scalar ``extra=`` attributes.
        """
        names = self._writer.config.field_names
        payload: dict[str, Any] = {
            names.level: record.levelname.lower(),
            names.timestamp: datetime.fromtimestamp(record.created, UTC).isoformat(),
            names.message: record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info and record.exc_info[1] is not None:
            payload[names.error] = str(record.exc_info[1])

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key in _STANDARD_LOGRECORD_ATTRS or key in payload:
                continue
            if isinstance(value, (str, int, float, bool)):
                payload[key] = value

        return json.dumps(payload)

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record to the writer.

        Args:
            record: The log record to emit.
        """
        try:
            payload = self.render(record)
            self._writer.write_level(
                Level.from_logging(record.levelno), payload, self._logger_module
            )
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)
