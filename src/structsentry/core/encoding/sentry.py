"""Sentry payload encoder for events and breadcrumbs."""

import os
from typing import Any

from structsentry.core.models import Breadcrumb, NormalizedEvent, StackFrame


def encode_frame(frame: StackFrame) -> dict[str, Any]:
    """Encode a stack frame in Sentry's frame format."""
    return {
        "module": frame.module,
        "function": frame.function,
        "filename": os.path.basename(frame.filename),
        "abs_path": frame.filename,
        "lineno": frame.lineno,
    }


def encode_event(event: NormalizedEvent) -> dict[str, Any]:
    """Encode a normalized event as a Sentry event payload.

    Args:
        event: The event to encode.

    Returns:
        Dict accepted by ``sentry_sdk.Client.capture_event``. The
        ``exception`` key is present only when the event carries one.
    """
    payload: dict[str, Any] = {
        "timestamp": event.timestamp,
        "logger": event.logger,
        "extra": dict(event.extra),
    }
    if event.level is not None:
        payload["level"] = str(event.level)
    if event.message is not None:
        payload["message"] = event.message

    if event.exceptions:
        payload["exception"] = {
            "values": [
                {
                    "type": exc.type,
                    "value": exc.value,
                    "stacktrace": {
                        "frames": [encode_frame(frame) for frame in exc.stacktrace]
                    },
                }
                for exc in event.exceptions
            ]
        }

    return payload


def encode_breadcrumb(crumb: Breadcrumb) -> dict[str, Any]:
    """Encode a breadcrumb for ``Scope.add_breadcrumb``."""
    payload: dict[str, Any] = {
        "message": crumb.message,
        "data": dict(crumb.data),
    }
    if crumb.level is not None:
        payload["level"] = str(crumb.level)
    if crumb.category:
        payload["category"] = crumb.category
    return payload
