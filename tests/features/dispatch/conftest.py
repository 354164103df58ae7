"""BDD step definitions for dispatch features."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest
from pytest_bdd import given, parsers, then, when

from structsentry.adapters.sinks.in_memory import InMemorySink
from structsentry.core.config import WriterConfig
from structsentry.core.errors import FlushTimeoutError
from structsentry.core.levels import parse_level_name
from structsentry.writer import SentryWriter

REFERENCE_RECORD = (
    b'{"level":"error","requestId":"abc","error":"dial timeout",'
    b'"time":"2020-06-25T17:19:00+03:00","message":"test message"}'
)


@dataclass
class DispatchScenarioContext:
    """Shared state between steps in a dispatch scenario."""

    sink: InMemorySink = field(default_factory=InMemorySink)
    writer: SentryWriter | None = None
    record: bytes = b""
    written: int = -1
    error: Exception | None = None


@pytest.fixture
def ctx() -> DispatchScenarioContext:
    """Fresh scenario context for each test."""
    return DispatchScenarioContext()


def _build_writer(
    ctx: DispatchScenarioContext, levels: str, breadcrumbs: bool = False
) -> None:
    config = WriterConfig.create(
        levels=[parse_level_name(name) for name in levels.split(",")],
        breadcrumbs=breadcrumbs,
        fixed_timestamp=datetime(2020, 6, 25, tzinfo=UTC),
    )
    ctx.writer = SentryWriter(ctx.sink, config)


def _write(ctx: DispatchScenarioContext, record: bytes) -> None:
    assert ctx.writer is not None
    ctx.record = record
    ctx.written = ctx.writer.write(record)


# === Background Steps ===
@given("an in-memory sink")
def step_sink(ctx: DispatchScenarioContext) -> None:
    ctx.sink = InMemorySink()


# === Given ===
@given(parsers.parse('a writer forwarding levels "{levels}"'))
def step_writer(ctx: DispatchScenarioContext, levels: str) -> None:
    _build_writer(ctx, levels)


@given(parsers.parse('a writer forwarding levels "{levels}" with breadcrumbs'))
def step_writer_with_breadcrumbs(ctx: DispatchScenarioContext, levels: str) -> None:
    _build_writer(ctx, levels, breadcrumbs=True)


@given(parsers.parse('a writer forwarding levels "{levels}" on a sink that cannot flush'))
def step_writer_failing_flush(ctx: DispatchScenarioContext, levels: str) -> None:
    ctx.sink.flush_result = False
    _build_writer(ctx, levels)


# === When ===
@when("the reference error record is written")
def step_write_reference(ctx: DispatchScenarioContext) -> None:
    _write(ctx, REFERENCE_RECORD)


@when(parsers.parse("the record '{record}' is written"))
def step_write_record(ctx: DispatchScenarioContext, record: str) -> None:
    _write(ctx, record.encode())


@when("the writer is closed")
def step_close(ctx: DispatchScenarioContext) -> None:
    assert ctx.writer is not None
    try:
        ctx.writer.close()
    except FlushTimeoutError as exc:
        ctx.error = exc


# === Then ===
@then(parsers.parse("{n:d} event is captured"))
@then(parsers.parse("{n:d} events are captured"))
def step_events_captured(ctx: DispatchScenarioContext, n: int) -> None:
    assert len(ctx.sink.events) == n


@then(parsers.parse('the event message is "{message}"'))
def step_event_message(ctx: DispatchScenarioContext, message: str) -> None:
    assert ctx.sink.events[0].message == message


@then(parsers.parse('the event has the exception "{value}"'))
def step_event_exception(ctx: DispatchScenarioContext, value: str) -> None:
    assert [e.value for e in ctx.sink.events[0].exceptions] == [value]


@then(parsers.parse('the event extra is exactly "{pairs}"'))
def step_event_extra(ctx: DispatchScenarioContext, pairs: str) -> None:
    expected = dict(pair.split("=", 1) for pair in pairs.split(","))
    assert ctx.sink.events[0].extra == expected


@then("no breadcrumb is recorded")
def step_no_breadcrumb(ctx: DispatchScenarioContext) -> None:
    assert ctx.sink.breadcrumbs == []


@then(parsers.parse('1 breadcrumb is recorded with message "{message}"'))
def step_breadcrumb(ctx: DispatchScenarioContext, message: str) -> None:
    assert [b.message for b in ctx.sink.breadcrumbs] == [message]


@then(parsers.parse("the sink was flushed {n:d} time"))
def step_flushed(ctx: DispatchScenarioContext, n: int) -> None:
    assert len(ctx.sink.flushes) == n


@then("the write reports the full record length")
def step_full_length(ctx: DispatchScenarioContext) -> None:
    assert ctx.written == len(ctx.record)


@then("a flush timeout error is raised")
def step_flush_timeout(ctx: DispatchScenarioContext) -> None:
    assert isinstance(ctx.error, FlushTimeoutError)
