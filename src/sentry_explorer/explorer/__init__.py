"""Command-line client for Sentry built on the local secure store."""
