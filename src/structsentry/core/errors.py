"""Exceptions raised by structsentry."""


class StructSentryError(Exception):
    """Base class for structsentry errors."""


class SinkRequiredError(StructSentryError, ValueError):
    """Raised when a writer or sink is built without its Sentry collaborator."""

    def __init__(self, what: str = "sink") -> None:
        super().__init__(f"structsentry {what} cannot be None")


class SinkConfigurationError(StructSentryError):
    """Raised when the Sentry client rejects its options (e.g. a bad DSN)."""


class FlushTimeoutError(StructSentryError, TimeoutError):
    """Raised by close() when pending events were not delivered in time."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"structsentry flush timeout after {timeout}s")
        self.timeout = timeout


class LevelParseError(StructSentryError, ValueError):
    """Raised when a level name is not part of the recognized vocabulary."""
