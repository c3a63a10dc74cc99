"""Structured logging for the CLI and the store.

One JSON object per line on stderr, so logs never mix with command output on stdout.
Context passed via ``extra={...}`` lands under ``"extra"``; values under keys that can
carry credentials or decrypted project names are replaced with ``"[redacted]"``.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

REDACTED = "[redacted]"

# Extra keys whose values must never reach a log line.
SECRET_EXTRA_KEYS: frozenset[str] = frozenset(
    {
        "token",
        "auth_token",
        "authorization",
        "key",
        "encryption_key",
        "secret",
        "password",
        "project_name",
        "plaintext",
    }
)

# Attributes every LogRecord carries; anything else on the record came from ``extra``.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def _redact(value: Any, key: str) -> Any:
    if key.lower() in SECRET_EXTRA_KEYS:
        return REDACTED
    if isinstance(value, Mapping):
        return {str(k): _redact(v, str(k)) for k, v in value.items()}
    return value


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """The ``extra=`` context of ``record`` with secret-bearing values redacted."""

    return {
        key: _redact(value, key)
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON with redacted context."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = record_extras(record)
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str) -> None:
    """Send every logger through one stderr JSON handler at ``level``."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper())

    # urllib3 logs full request URLs at DEBUG; keyring logs backend probing.
    logging.getLogger("urllib3").setLevel(max(root.level, logging.WARNING))
    logging.getLogger("keyring").setLevel(max(root.level, logging.INFO))
