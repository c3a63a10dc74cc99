"""Sentry explorer.

A command-line Sentry client with:
- configuration loaded from the environment / `.env`
- structured logging
- auth tokens in the OS secret store and an encrypted local project-name cache
"""

__version__ = "0.1.0"

from sentry_explorer.store import ConfigStore

__all__ = ["__version__", "ConfigStore"]
