"""Parsing of structured JSON log records into NormalizedEvent objects."""

import json
from typing import Any

from structsentry.core.levels import parse_level_name
from structsentry.core.models import (
    Clock,
    ExceptionInfo,
    FieldNames,
    Level,
    NormalizedEvent,
)
from structsentry.core.stack import LOGGER_MODULE, new_stacktrace

DEFAULT_FIELD_NAMES = FieldNames()


def _decode(data: bytes | str) -> dict[str, Any] | None:
    """Decode one record into a dict, or None if it is not a JSON object."""
    try:
        root = json.loads(data)
    except ValueError:
        # Covers JSONDecodeError and UnicodeDecodeError
        return None
    if not isinstance(root, dict):
        return None
    return root


def coerce_str(value: Any) -> tuple[str, bool]:
    """Attempt to read a JSON value as a string.

    Scalars are rendered the way they appear in JSON text: numbers as
    written, booleans as ``true``/``false`` and null as an empty string.

    Returns:
        ``(text, True)`` for scalars, ``("", False)`` for objects and arrays.
    """
    if isinstance(value, str):
        return value, True
    if isinstance(value, bool):
        return ("true" if value else "false"), True
    if isinstance(value, (int, float)):
        return json.dumps(value), True
    if value is None:
        return "", True
    return "", False


def parse_level(
    data: bytes | str, field_names: FieldNames = DEFAULT_FIELD_NAMES
) -> Level:
    """Read only the level field of a record.

    Args:
        data: One JSON-encoded log record.
        field_names: Reserved field names in use.

    Returns:
        The parsed Level, or ``Level.NOTSET`` when the record cannot be
        decoded or has no string level field.

    Raises:
        LevelParseError: If the level field holds an unknown level name.
    """
    root = _decode(data)
    if root is None:
        return Level.NOTSET
    name = root.get(field_names.level)
    if not isinstance(name, str):
        return Level.NOTSET
    return parse_level_name(name)


def parse_event(
    data: bytes | str,
    now: Clock,
    field_names: FieldNames = DEFAULT_FIELD_NAMES,
    logger_module: str = LOGGER_MODULE,
) -> NormalizedEvent | None:
    """Build a NormalizedEvent from one record, leaving its level unset.

    The level and timestamp fields are skipped, the message and error fields
    go to their dedicated attributes and every other scalar field goes to
    ``extra`` as a string (see coerce_str). Nested objects and arrays are
    dropped.

    Args:
        data: One JSON-encoded log record.
        now: Clock providing the event timestamp.
        field_names: Reserved field names in use.
        logger_module: Logging library trimmed from error stack traces,
            also recorded as the event's logger name.

    Returns:
        The parsed event, or None if the record is not a JSON object or its
        message or error field is not a string. Nothing is logged on failure.
    """
    root = _decode(data)
    if root is None:
        return None

    event = NormalizedEvent(timestamp=now(), logger=logger_module)

    for key, value in root.items():
        if key == field_names.message:
            if not isinstance(value, str):
                return None
            event.message = value
        elif key == field_names.error:
            if not isinstance(value, str):
                return None
            event.exceptions.append(
                ExceptionInfo(value=value, stacktrace=new_stacktrace(logger_module))
            )
        elif key in (field_names.level, field_names.timestamp):
            continue
        else:
            content, ok = coerce_str(value)
            if not ok:
                continue
            event.extra[key] = content

    return event
