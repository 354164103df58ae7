"""Core domain models for log-to-Sentry event conversion."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum, StrEnum


class Level(IntEnum):
    """Severity levels recognized in structured log records.

    ``NOTSET`` doubles as the disabled/unknown sentinel. ``TRACE`` and
    ``NOTSET`` have no Sentry counterpart, so records carrying them are
    never forwarded.
    """

    NOTSET = 0
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    FATAL = 50
    PANIC = 60

    @classmethod
    def from_logging(cls, levelno: int) -> "Level":
        """Convert a :mod:`logging` numeric level to a Level.

        ``CRITICAL`` (and anything above it) becomes ``FATAL``.
        """
        if levelno >= 50:
            return cls.FATAL
        if levelno >= 40:
            return cls.ERROR
        if levelno >= 30:
            return cls.WARNING
        if levelno >= 20:
            return cls.INFO
        if levelno >= 10:
            return cls.DEBUG
        if levelno > 0:
            return cls.TRACE
        return cls.NOTSET


class Severity(StrEnum):
    """Sentry's severity vocabulary."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


@dataclass(frozen=True)
class FieldNames:
    """Reserved field names routed to dedicated event attributes.

    Attributes:
        level: Field holding the level name.
        timestamp: Field holding the record's own time (always ignored).
        message: Field holding the log message.
        error: Field holding the error string.
    """

    level: str = "level"
    timestamp: str = "time"
    message: str = "message"
    error: str = "error"

    def reserved(self) -> frozenset[str]:
        return frozenset({self.level, self.timestamp, self.message, self.error})


# structlog's JSONRenderer defaults (add_log_level, TimeStamper, format_exc_info)
STRUCTLOG_FIELD_NAMES = FieldNames(
    level="level",
    timestamp="timestamp",
    message="event",
    error="exception",
)


@dataclass(frozen=True)
class StackFrame:
    """A single call-stack frame.

    Attributes:
        module: Dotted module name the frame's code belongs to.
        function: Function name.
        filename: Source file path.
        lineno: Line number currently executing in the frame.
    """

    module: str
    function: str = ""
    filename: str = ""
    lineno: int = 0


@dataclass(frozen=True)
class ExceptionInfo:
    """One exception entry attached to an event.

    Attributes:
        value: The error string read from the record.
        stacktrace: Frames of the write call, outermost first.
        type: Exception type label shown by Sentry.
    """

    value: str
    stacktrace: tuple[StackFrame, ...] = ()
    type: str = "error"


@dataclass
class NormalizedEvent:
    """One parsed log record, ready to be forwarded.

    Attributes:
        timestamp: Capture time from the configured clock.
        logger: Name of the source logging system.
        message: The log message, if the record carried one.
        level: Sentry severity, set once the record's level is known.
        exceptions: Zero or one exception entries.
        extra: Remaining string-valued fields of the record.
    """

    timestamp: datetime
    logger: str = "structlog"
    message: str | None = None
    level: Severity | None = None
    exceptions: list[ExceptionInfo] = field(default_factory=list)
    extra: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Breadcrumb:
    """Context note kept by the sink for a suppressed event.

    Attributes:
        message: Message of the originating event.
        level: Severity of the originating event.
        category: Value of the event's ``category`` field, or empty.
        data: Extra attributes of the originating event.
    """

    message: str | None
    level: Severity | None
    category: str = ""
    data: dict[str, str] = field(default_factory=dict)


Clock = Callable[[], datetime]
