"""File-like writer that turns structured JSON log records into Sentry events.

The writer plugs in wherever a logging library writes one JSON object per
call, for example ``structlog.WriteLogger``:

```python
import structlog
from structsentry import STRUCTLOG_FIELD_NAMES, SentryWriter, WriterConfig

writer = SentryWriter.from_dsn(
    "https://key@o0.ingest.sentry.io/0",
    config=WriterConfig(field_names=STRUCTLOG_FIELD_NAMES),
)
structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    logger_factory=structlog.WriteLoggerFactory(file=writer),
)
```
"""

import logging
from types import TracebackType
from typing import Any

from structsentry.adapters.sinks.sentry import SentrySink
from structsentry.core.config import SinkOptions, WriterConfig
from structsentry.core.dispatch import DispatchPolicy
from structsentry.core.errors import FlushTimeoutError, SinkRequiredError
from structsentry.core.models import Level
from structsentry.core.ports import SinkPort
from structsentry.core.stack import LOGGER_MODULE

logger = logging.getLogger(__name__)


class SentryWriter:
    """Writer forwarding structured log records to a sink.

    ``write`` and ``write_level`` always report the whole input as consumed,
    whatever happens to the record, so the writer can be composed with any
    file-based logging setup.

    Args:
        sink: Sink receiving events and breadcrumbs.
        config: Writer settings (default: WriterConfig()).
        logger_module: Logging library trimmed from error stack traces.

    Raises:
        SinkRequiredError: If ``sink`` is None.
    """

    def __init__(
        self,
        sink: SinkPort | None,
        config: WriterConfig | None = None,
        logger_module: str = LOGGER_MODULE,
    ) -> None:
        if sink is None:
            raise SinkRequiredError()
        self._sink = sink
        self._config = config or WriterConfig()
        self._policy = DispatchPolicy(sink, self._config, logger_module)
        self._closed = False

    @classmethod
    def from_options(
        cls,
        options: SinkOptions,
        config: WriterConfig | None = None,
        logger_module: str = LOGGER_MODULE,
    ) -> "SentryWriter":
        """Create a writer with its own Sentry client.

        Raises:
            SinkConfigurationError: If Sentry rejects the options.
        """
        return cls(SentrySink.from_options(options), config, logger_module)

    @classmethod
    def from_dsn(
        cls,
        dsn: str | None,
        config: WriterConfig | None = None,
        logger_module: str = LOGGER_MODULE,
        **sink_options: Any,
    ) -> "SentryWriter":
        """Create a writer for ``dsn``; extra keywords become SinkOptions."""
        return cls.from_options(
            SinkOptions(dsn=dsn, **sink_options), config, logger_module
        )

    @property
    def sink(self) -> SinkPort:
        return self._sink

    @property
    def config(self) -> WriterConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    def writable(self) -> bool:
        return True

    def write(self, data: bytes | str) -> int:
        """Handle one JSON record, reading its level from the record.

        Returns:
            ``len(data)``, always.
        """
        self._policy.dispatch(data)
        return len(data)

    def write_level(
        self,
        level: Level,
        data: bytes | str,
        logger_module: str | None = None,
    ) -> int:
        """Handle one JSON record whose level is supplied by the caller.

        Args:
            level: Level of the record.
            data: One JSON-encoded log record.
            logger_module: Logging library that produced the record, when it
                differs from the writer's.

        Returns:
            ``len(data)``, always.
        """
        self._policy.dispatch_with_level(level, data, logger_module)
        return len(data)

    def flush(self) -> None:
        """No-op: records are dispatched as they are written.

        Loggers call this after every record; delivery is flushed by close().
        """

    def close(self) -> None:
        """Flush pending deliveries.

        Raises:
            FlushTimeoutError: If the sink did not finish within the flush timeout.
        """
        self._closed = True
        timeout = self._config.flush_timeout
        if not self._sink.flush(timeout):
            logger.warning("sentry flush did not complete within %ss", timeout)
            raise FlushTimeoutError(timeout)

    def __enter__(self) -> "SentryWriter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.close()
        except FlushTimeoutError:
            # Never mask the exception already leaving the block
            if exc_type is None:
                raise
