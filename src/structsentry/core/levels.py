"""Level parsing and mapping to Sentry severities."""

from types import MappingProxyType

from structsentry.core.errors import LevelParseError
from structsentry.core.models import Level, Severity

LEVEL_TO_SEVERITY = MappingProxyType(
    {
        Level.DEBUG: Severity.DEBUG,
        Level.INFO: Severity.INFO,
        Level.WARNING: Severity.WARNING,
        Level.ERROR: Severity.ERROR,
        Level.FATAL: Severity.FATAL,
        Level.PANIC: Severity.FATAL,
    }
)

_NAME_TO_LEVEL = MappingProxyType(
    {
        "": Level.NOTSET,
        "notset": Level.NOTSET,
        "trace": Level.TRACE,
        "debug": Level.DEBUG,
        "info": Level.INFO,
        "warn": Level.WARNING,
        "warning": Level.WARNING,
        "error": Level.ERROR,
        "exception": Level.ERROR,
        "fatal": Level.FATAL,
        "critical": Level.FATAL,
        "panic": Level.PANIC,
    }
)


def lookup_severity(level: int) -> Severity | None:
    """Return the Sentry severity for a level, or None if it has no mapping."""
    return LEVEL_TO_SEVERITY.get(level)


def to_severity(level: int) -> Severity:
    """Return the Sentry severity for a level.

    Levels without a mapping (``TRACE``, ``NOTSET``, arbitrary integers)
    fall back to ``Severity.DEBUG``.
    """
    return LEVEL_TO_SEVERITY.get(level, Severity.DEBUG)


def parse_level_name(name: str) -> Level:
    """Parse a level name as emitted by structured loggers.

    Args:
        name: Level name, case-insensitive (e.g. "error", "WARN").

    Returns:
        The matching Level. An empty name yields ``Level.NOTSET``.

    Raises:
        LevelParseError: If the name is not recognized.
    """
    try:
        return _NAME_TO_LEVEL[name.strip().lower()]
    except KeyError:
        raise LevelParseError(f"unknown level name: {name!r}") from None
