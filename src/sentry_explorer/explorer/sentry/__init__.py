"""Sentry API access."""
