"""Local secure persistence: tokens in the OS secret store, encrypted project cache on disk."""

from sentry_explorer.store.config_store import ConfigStore
from sentry_explorer.store.errors import (
    AuthenticationFailed,
    ConfigIOError,
    ConfigNotLoaded,
    ConfigParseError,
    CryptoError,
    InvalidEncoding,
    InvalidKeyMaterial,
    KeyringError,
    MalformedCiphertext,
    NotFound,
    OrganizationNotFound,
    StoreError,
)
from sentry_explorer.store.keys import APP_NAME, KEY_ACCOUNT, KEY_LENGTH, SecretKeyProvider
from sentry_explorer.store.models import Config, EncryptedProject, Organization
from sentry_explorer.store.project_cache import NONCE_LENGTH, ProjectCache
from sentry_explorer.store.secrets import KeyringSecretBackend, MemorySecretBackend, SecretBackend
from sentry_explorer.store.tokens import TOKEN_ACCOUNT, TokenStore

__all__ = [
    "APP_NAME",
    "KEY_ACCOUNT",
    "KEY_LENGTH",
    "NONCE_LENGTH",
    "TOKEN_ACCOUNT",
    "AuthenticationFailed",
    "Config",
    "ConfigIOError",
    "ConfigNotLoaded",
    "ConfigParseError",
    "ConfigStore",
    "CryptoError",
    "EncryptedProject",
    "InvalidEncoding",
    "InvalidKeyMaterial",
    "KeyringError",
    "KeyringSecretBackend",
    "MalformedCiphertext",
    "MemorySecretBackend",
    "NotFound",
    "Organization",
    "OrganizationNotFound",
    "ProjectCache",
    "SecretBackend",
    "SecretKeyProvider",
    "StoreError",
    "TokenStore",
]
