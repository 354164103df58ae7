"""Shared test fixtures for all test modules."""

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from structsentry.adapters.sinks.in_memory import InMemorySink
from structsentry.core.config import WriterConfig
from structsentry.core.models import Level
from structsentry.writer import SentryWriter

LOG_EVENT_JSON = (
    b'{"level":"error","requestId":"bee07485-2485-4f64-99e1-d10165884ca7",'
    b'"error":"dial timeout","time":"2020-06-25T17:19:00+03:00",'
    b'"message":"test message"}'
)

REQUEST_ID = "bee07485-2485-4f64-99e1-d10165884ca7"


@pytest.fixture
def log_event_json() -> bytes:
    """A zerolog-style error record with one extra field."""
    return LOG_EVENT_JSON


@pytest.fixture
def fixed_ts() -> datetime:
    """A fixed, timezone-aware event timestamp."""
    return datetime(2020, 6, 25, 14, 19, tzinfo=UTC)


@pytest.fixture
def sink() -> InMemorySink:
    """Fresh in-memory sink."""
    return InMemorySink()


@pytest.fixture
def make_writer(
    sink: InMemorySink, fixed_ts: datetime
) -> Callable[..., SentryWriter]:
    """Factory fixture building writers on the shared in-memory sink.

    Usage:
        def test_something(make_writer, sink):
            writer = make_writer(levels=[Level.FATAL], breadcrumbs=True)
            writer.write(b"...")
            assert sink.breadcrumbs
    """

    def _make(
        levels: list[Level] | None = None,
        breadcrumbs: bool = False,
        flush_timeout: float = 3.0,
        logger_module: str = "structlog",
        **config: object,
    ) -> SentryWriter:
        writer_config = WriterConfig.create(
            levels=levels,
            breadcrumbs=breadcrumbs,
            flush_timeout=flush_timeout,
            fixed_timestamp=fixed_ts,
            **config,  # type: ignore[arg-type]
        )
        return SentryWriter(sink, writer_config, logger_module=logger_module)

    return _make
