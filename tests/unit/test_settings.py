"""Unit tests for CLI settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from sentry_explorer.explorer.config import ExplorerSettings

_ENV_VARS = (
    "SENTRY_EXPLORER_CONFIG_PATH",
    "SENTRY_EXPLORER_SECRET_BACKEND",
    "SENTRY_BASE_URL",
    "LOG_LEVEL",
    "XDG_CONFIG_HOME",
)


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_settings_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

    settings = ExplorerSettings()

    assert settings.secret_backend == "keyring"
    assert settings.sentry_base_url == "https://sentry.io/api/0"
    assert settings.log_level == "WARNING"
    assert settings.config_file == tmp_path / "xdg" / "sentry-explorer" / "config.json"


def test_settings_falls_back_to_home_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    settings = ExplorerSettings()

    assert settings.config_file == tmp_path / ".config" / "sentry-explorer" / "config.json"


def test_settings_loads_from_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                f"SENTRY_EXPLORER_CONFIG_PATH={tmp_path / 'custom.json'}",
                "SENTRY_EXPLORER_SECRET_BACKEND=memory",
                "SENTRY_BASE_URL=https://sentry.example.com/api/0",
                "LOG_LEVEL=DEBUG",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = ExplorerSettings()

    assert settings.config_file == tmp_path / "custom.json"
    assert settings.secret_backend == "memory"
    assert settings.sentry_base_url == "https://sentry.example.com/api/0"
    assert settings.log_level == "DEBUG"


def test_unknown_secret_backend_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENTRY_EXPLORER_SECRET_BACKEND", "plaintext")

    with pytest.raises(ValueError):
        ExplorerSettings()
