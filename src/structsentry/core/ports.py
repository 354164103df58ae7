"""Port interface for event sinks.

The dispatch policy depends only on this protocol, never on a concrete
Sentry client or on process-wide SDK state.
"""

from typing import Protocol, runtime_checkable

from structsentry.core.models import Breadcrumb, NormalizedEvent


@runtime_checkable
class SinkPort(Protocol):
    """Port for delivering events to an error-tracking service.

    Implementations must be safe to call from several threads at once.
    Examples: SentrySink, InMemorySink.
    """

    def capture_event(self, event: NormalizedEvent) -> str | None:
        """Queue an event for delivery.

        Returns:
            The event id assigned by the service, if any.
        """
        ...

    def add_breadcrumb(self, crumb: Breadcrumb) -> None:
        """Record a breadcrumb to attach to later events."""
        ...

    def flush(self, timeout: float) -> bool:
        """Block until pending events are delivered or ``timeout`` seconds pass.

        Returns:
            True if everything was delivered, False on timeout.
        """
        ...
