"""Device-local symmetric key used to encrypt cached project names."""

from __future__ import annotations

import base64
import binascii
import logging
import secrets

from sentry_explorer.store.errors import InvalidKeyMaterial
from sentry_explorer.store.secrets import SecretBackend

logger = logging.getLogger(__name__)

APP_NAME = "sentry-explorer"
KEY_ACCOUNT = "project-encryption-key"
KEY_LENGTH = 32


class SecretKeyProvider:
    """Fetches the device key from the secret store, creating it on first use.

    The key is not cached: each call re-reads the secret store. Two processes creating
    the key concurrently on first run can each persist a different key; the last write
    wins and anything encrypted under the other key can no longer be decrypted.
    """

    def __init__(
        self,
        backend: SecretBackend,
        *,
        service: str = APP_NAME,
        account: str = KEY_ACCOUNT,
    ) -> None:
        self._backend = backend
        self.service = service
        self.account = account

    def get_or_create_key(self) -> bytes:
        stored = self._backend.get(self.service, self.account)
        if stored is None:
            return self._create_key()

        try:
            key = base64.b64decode(stored.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise InvalidKeyMaterial(reason=f"not valid base64: {e}") from e

        if len(key) != KEY_LENGTH:
            raise InvalidKeyMaterial(
                reason=f"expected {KEY_LENGTH} bytes, got {len(key)}",
            )
        return key

    def _create_key(self) -> bytes:
        key = secrets.token_bytes(KEY_LENGTH)
        self._backend.set(self.service, self.account, base64.b64encode(key).decode("ascii"))
        logger.info(
            "Generated new project encryption key",
            extra={"service": self.service, "account": self.account},
        )
        return key
