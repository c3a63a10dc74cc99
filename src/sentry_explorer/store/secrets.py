"""Secret-store backends.

Everything that touches the platform secret store goes through :class:`SecretBackend`,
so the token and key logic can run against an alternative backend (tests, headless
machines without a keyring daemon).
"""

from __future__ import annotations

import logging
from typing import Protocol

import keyring
import keyring.errors

from sentry_explorer.store.errors import KeyringError

logger = logging.getLogger(__name__)


class SecretBackend(Protocol):
    """Service/account addressed text secrets."""

    def get(self, service: str, account: str) -> str | None: ...

    def set(self, service: str, account: str, value: str) -> None: ...


class KeyringSecretBackend:
    """Backend delegating to the OS secret store through ``keyring``.

    Calls block until the platform daemon answers; there is no timeout.
    """

    def get(self, service: str, account: str) -> str | None:
        try:
            return keyring.get_password(service, account)
        except (keyring.errors.KeyringError, RuntimeError) as e:
            logger.error(
                "Secret store read failed", extra={"service": service, "account": account}
            )
            raise KeyringError(service=service, account=account, reason=str(e)) from e

    def set(self, service: str, account: str, value: str) -> None:
        try:
            keyring.set_password(service, account, value)
        except (keyring.errors.KeyringError, RuntimeError) as e:
            logger.error(
                "Secret store write failed", extra={"service": service, "account": account}
            )
            raise KeyringError(service=service, account=account, reason=str(e)) from e
        logger.debug("Secret stored", extra={"service": service, "account": account})


class MemorySecretBackend:
    """Process-local backend. Nothing survives the process."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], str] = {}

    def get(self, service: str, account: str) -> str | None:
        return self._entries.get((service, account))

    def set(self, service: str, account: str, value: str) -> None:
        self._entries[(service, account)] = value
