"""structsentry: forward structured JSON log records to Sentry."""

import logging

from structsentry.adapters.logging import SentryHandler
from structsentry.adapters.sinks import InMemorySink, SentrySink
from structsentry.core.config import SinkOptions, WriterConfig
from structsentry.core.errors import (
    FlushTimeoutError,
    LevelParseError,
    SinkConfigurationError,
    SinkRequiredError,
    StructSentryError,
)
from structsentry.core.levels import lookup_severity, parse_level_name, to_severity
from structsentry.core.models import (
    STRUCTLOG_FIELD_NAMES,
    Breadcrumb,
    ExceptionInfo,
    FieldNames,
    Level,
    NormalizedEvent,
    Severity,
    StackFrame,
)
from structsentry.core.ports import SinkPort
from structsentry.writer import SentryWriter

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "STRUCTLOG_FIELD_NAMES",
    "Breadcrumb",
    "ExceptionInfo",
    "FieldNames",
    "FlushTimeoutError",
    "InMemorySink",
    "Level",
    "LevelParseError",
    "NormalizedEvent",
    "SentryHandler",
    "SentrySink",
    "SentryWriter",
    "Severity",
    "SinkConfigurationError",
    "SinkOptions",
    "SinkPort",
    "SinkRequiredError",
    "StackFrame",
    "StructSentryError",
    "WriterConfig",
    "lookup_severity",
    "parse_level_name",
    "to_severity",
]
