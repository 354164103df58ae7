"""Sink adapters implementing SinkPort."""

from structsentry.adapters.sinks.in_memory import InMemorySink
from structsentry.adapters.sinks.sentry import SentrySink

__all__ = [
    "InMemorySink",
    "SentrySink",
]
