"""Sentry sink adapter built on sentry-sdk.

The sink owns a ``sentry_sdk.Client`` and a private ``Scope`` instead of
initializing the SDK process-wide, so several writers with different DSNs
can coexist and nothing depends on the globally current scope.
"""

import logging
import time

import sentry_sdk
from sentry_sdk.scope import use_scope
from sentry_sdk.utils import BadDsn

from structsentry.core.config import SinkOptions
from structsentry.core.encoding.sentry import encode_breadcrumb, encode_event
from structsentry.core.errors import SinkConfigurationError, SinkRequiredError
from structsentry.core.models import Breadcrumb, NormalizedEvent

logger = logging.getLogger(__name__)


class SentrySink:
    """SinkPort implementation delivering to Sentry.

    Example:
        ```python
        sink = SentrySink.from_options(SinkOptions(dsn="https://key@o0.ingest.sentry.io/0"))
        writer = SentryWriter(sink)
        ```

    Args:
        client: The Sentry client used for delivery.
        scope: Scope holding breadcrumbs; a new one bound to ``client`` by default.

    Raises:
        SinkRequiredError: If ``client`` is None.
    """

    def __init__(
        self,
        client: sentry_sdk.Client | None,
        scope: sentry_sdk.Scope | None = None,
    ) -> None:
        if client is None:
            raise SinkRequiredError("sentry client")
        self._client = client
        if scope is None:
            scope = sentry_sdk.Scope(client=client)
        self._scope = scope

    @classmethod
    def from_options(cls, options: SinkOptions) -> "SentrySink":
        """Create a sink with a new client built from ``options``.

        Raises:
            SinkConfigurationError: If the client rejects the options.
        """
        try:
            client = sentry_sdk.Client(**options.to_client_kwargs())
        except (BadDsn, TypeError) as exc:
            raise SinkConfigurationError(f"invalid sentry options: {exc}") from exc
        logger.debug(
            "sentry client created (environment=%s, release=%s)",
            options.environment,
            options.release,
        )
        return cls(client)

    @property
    def client(self) -> sentry_sdk.Client:
        return self._client

    @property
    def scope(self) -> sentry_sdk.Scope:
        return self._scope

    def capture_event(self, event: NormalizedEvent) -> str | None:
        """Send an event through the client, with this sink's breadcrumbs attached."""
        with use_scope(self._scope):
            return self._scope.capture_event(encode_event(event))

    def add_breadcrumb(self, crumb: Breadcrumb) -> None:
        """Record a breadcrumb on this sink's scope."""
        with use_scope(self._scope):
            self._scope.add_breadcrumb(encode_breadcrumb(crumb))

    def flush(self, timeout: float) -> bool:
        """Flush the client, reporting False if it used the whole timeout.

        The SDK does not say whether a flush completed, so a flush that
        takes the full timeout is treated as incomplete.
        """
        start = time.monotonic()
        self._client.flush(timeout=timeout)
        return time.monotonic() - start < timeout
