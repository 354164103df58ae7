"""Encoders turning core models into wire payloads."""
