"""Authenticated encryption of cached project display names.

Blobs are ``nonce || ciphertext`` where the ciphertext already carries the AES-GCM tag.
"""

from __future__ import annotations

import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from sentry_explorer.store.errors import AuthenticationFailed, InvalidEncoding, MalformedCiphertext
from sentry_explorer.store.keys import SecretKeyProvider

NONCE_LENGTH = 12


class ProjectCache:
    """Encrypts and decrypts project names under the device key.

    The key is fetched from :class:`SecretKeyProvider` on every call and dropped as soon
    as the cipher operation returns.
    """

    def __init__(self, key_provider: SecretKeyProvider) -> None:
        self._key_provider = key_provider

    def encrypt(self, plaintext_name: str) -> bytes:
        key = self._key_provider.get_or_create_key()
        try:
            nonce = secrets.token_bytes(NONCE_LENGTH)
            ciphertext = AESGCM(key).encrypt(nonce, plaintext_name.encode("utf-8"), None)
        finally:
            del key
        return nonce + ciphertext

    def decrypt(self, blob: bytes) -> str:
        if len(blob) < NONCE_LENGTH:
            raise MalformedCiphertext(length=len(blob))

        nonce, ciphertext = blob[:NONCE_LENGTH], blob[NONCE_LENGTH:]

        key = self._key_provider.get_or_create_key()
        try:
            plaintext = AESGCM(key).decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise AuthenticationFailed() from e
        finally:
            del key

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncoding() from e
