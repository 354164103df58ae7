"""Adapters connecting the core to Sentry and to Python logging."""
