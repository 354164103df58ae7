"""Configuration for writers and the Sentry sink.

Both configuration objects are frozen dataclasses: a writer's settings never
change after construction, so they can be read from any thread without locks.
"""

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

from structsentry.core.models import Clock, FieldNames, Level

DEFAULT_LEVELS = frozenset({Level.ERROR, Level.FATAL, Level.PANIC})
DEFAULT_FLUSH_TIMEOUT = 3.0


def utc_now() -> datetime:
    """Wall-clock time as an aware UTC datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class WriterConfig:
    """Settings of a SentryWriter.

    Attributes:
        levels: Levels forwarded to Sentry as events.
        flush_timeout: Seconds to wait for delivery on fatal events and close.
        breadcrumbs: Record events of other levels as breadcrumbs.
        now: Clock used for event timestamps.
        field_names: Reserved field names of the log records.
    """

    levels: frozenset[Level] = DEFAULT_LEVELS
    flush_timeout: float = DEFAULT_FLUSH_TIMEOUT
    breadcrumbs: bool = False
    now: Clock = utc_now
    field_names: FieldNames = field(default_factory=FieldNames)

    def __post_init__(self) -> None:
        # Accept any iterable of levels but store an immutable set
        object.__setattr__(self, "levels", frozenset(Level(lvl) for lvl in self.levels))

    @classmethod
    def create(
        cls,
        levels: Iterable[Level] | None = None,
        flush_timeout: float = DEFAULT_FLUSH_TIMEOUT,
        breadcrumbs: bool = False,
        field_names: FieldNames | None = None,
        fixed_timestamp: datetime | None = None,
    ) -> "WriterConfig":
        """Build a config from plain keyword options.

        Args:
            levels: Levels to forward (default: error, fatal, panic).
            flush_timeout: Flush timeout in seconds (default 3).
            breadcrumbs: Enable breadcrumbs for other levels.
            field_names: Reserved field names (default: level/time/message/error).
            fixed_timestamp: Freeze event timestamps. For tests only.
        """
        config = cls(
            levels=frozenset(levels) if levels is not None else DEFAULT_LEVELS,
            flush_timeout=flush_timeout,
            breadcrumbs=breadcrumbs,
            field_names=field_names or FieldNames(),
        )
        if fixed_timestamp is not None:
            config = config.with_fixed_timestamp(fixed_timestamp)
        return config

    def with_fixed_timestamp(self, ts: datetime) -> "WriterConfig":
        """Return a copy whose clock always returns ``ts``."""
        return replace(self, now=lambda: ts)

    def is_enabled(self, level: Level) -> bool:
        return level in self.levels


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    return float(raw) if raw else default


def _env_bool(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SinkOptions:
    """Options passed verbatim to ``sentry_sdk.Client``.

    None-valued options are left out so the SDK applies its own defaults.
    Anything not covered by a named attribute goes in ``extra``.
    """

    dsn: str | None = None
    sample_rate: float = 1.0
    release: str | None = None
    environment: str | None = None
    server_name: str | None = None
    ignore_errors: tuple[type | str, ...] = ()
    debug: bool = False
    traces_sample_rate: float | None = None
    attach_stacktrace: bool = False
    max_breadcrumbs: int | None = None
    http_proxy: str | None = None
    https_proxy: str | None = None
    ca_certs: str | None = None
    before_send: Callable[..., Any] | None = None
    transport: Any = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "SinkOptions":
        """Build options from the SENTRY_* environment variables."""
        return cls(
            dsn=os.environ.get("SENTRY_DSN") or None,
            sample_rate=_env_float("SENTRY_SAMPLE_RATE", cls.sample_rate),
            release=os.environ.get("SENTRY_RELEASE") or None,
            environment=os.environ.get("SENTRY_ENVIRONMENT") or None,
            server_name=os.environ.get("SENTRY_SERVER_NAME") or None,
            debug=_env_bool("SENTRY_DEBUG"),
        )

    def to_client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``sentry_sdk.Client``."""
        kwargs: dict[str, Any] = {
            "dsn": self.dsn,
            "sample_rate": self.sample_rate,
            "debug": self.debug,
            "attach_stacktrace": self.attach_stacktrace,
        }
        optional = {
            "release": self.release,
            "environment": self.environment,
            "server_name": self.server_name,
            "traces_sample_rate": self.traces_sample_rate,
            "max_breadcrumbs": self.max_breadcrumbs,
            "http_proxy": self.http_proxy,
            "https_proxy": self.https_proxy,
            "ca_certs": self.ca_certs,
            "before_send": self.before_send,
            "transport": self.transport,
        }
        kwargs.update({key: value for key, value in optional.items() if value is not None})
        if self.ignore_errors:
            kwargs["ignore_errors"] = list(self.ignore_errors)
        kwargs.update(self.extra)
        return kwargs
