"""In-memory sink adapter."""

import threading
import uuid

from structsentry.core.models import Breadcrumb, NormalizedEvent


class InMemorySink:
    """In-memory implementation of SinkPort.

    Records events, breadcrumbs and flush timeouts in lists. Suitable for
    testing and for local development where nothing should leave the process.

    Args:
        flush_result: Value reported by every flush() call.
    """

    def __init__(self, flush_result: bool = True) -> None:
        self.flush_result = flush_result
        self._lock = threading.Lock()
        self._events: list[NormalizedEvent] = []
        self._breadcrumbs: list[Breadcrumb] = []
        self._flushes: list[float] = []

    def capture_event(self, event: NormalizedEvent) -> str | None:
        """Record an event and return a fresh event id."""
        with self._lock:
            self._events.append(event)
        return uuid.uuid4().hex

    def add_breadcrumb(self, crumb: Breadcrumb) -> None:
        """Record a breadcrumb."""
        with self._lock:
            self._breadcrumbs.append(crumb)

    def flush(self, timeout: float) -> bool:
        """Record the flush timeout and report ``flush_result``."""
        with self._lock:
            self._flushes.append(timeout)
        return self.flush_result

    @property
    def events(self) -> list[NormalizedEvent]:
        with self._lock:
            return list(self._events)

    @property
    def breadcrumbs(self) -> list[Breadcrumb]:
        with self._lock:
            return list(self._breadcrumbs)

    @property
    def flushes(self) -> list[float]:
        """Timeouts passed to flush(), in call order."""
        with self._lock:
            return list(self._flushes)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
            self._breadcrumbs.clear()
            self._flushes.clear()
