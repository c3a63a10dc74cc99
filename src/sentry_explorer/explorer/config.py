"""Settings for the command-line client.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Tokens are never read from here; they live in the OS secret store.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sentry_explorer.store.keys import APP_NAME


def default_config_dir() -> Path:
    """Per-user config directory (``$XDG_CONFIG_HOME`` or ``~/.config``) for this app."""

    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


class ExplorerSettings(BaseSettings):
    """Settings for the Sentry explorer CLI.

    Environment variables:
    - SENTRY_EXPLORER_CONFIG_PATH     (optional)
    - SENTRY_EXPLORER_SECRET_BACKEND  (optional: keyring | memory)
    - SENTRY_BASE_URL                 (optional)
    - LOG_LEVEL                       (optional)
    """

    config_path: Path | None = Field(
        default=None,
        validation_alias="SENTRY_EXPLORER_CONFIG_PATH",
        description="Override for the config.json location",
    )
    secret_backend: Literal["keyring", "memory"] = Field(
        default="keyring",
        validation_alias="SENTRY_EXPLORER_SECRET_BACKEND",
        description=(
            "Where tokens and the project encryption key are kept. 'memory' forgets "
            "everything at exit and is only useful for testing."
        ),
    )
    sentry_base_url: str = Field(
        default="https://sentry.io/api/0",
        validation_alias="SENTRY_BASE_URL",
        description="Sentry API base URL (useful for self-hosted Sentry)",
    )
    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @property
    def config_file(self) -> Path:
        """Path where organizations and the project cache are persisted."""

        if self.config_path is not None:
            return self.config_path
        return default_config_dir() / "config.json"
