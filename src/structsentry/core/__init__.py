"""Core event extraction and classification, free of Sentry SDK imports."""
