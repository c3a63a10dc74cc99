"""Error taxonomy for the local credential and project cache store.

Nothing in the store recovers from these locally. They carry the path or secret-store
entry involved so the CLI can print an actionable message.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class StoreError(Exception):
    """Base class for every failure raised by the store."""


@dataclass(frozen=True, slots=True)
class ConfigIOError(StoreError):
    """Reading or writing the config file failed."""

    path: Path
    action: str
    reason: str

    def __str__(self) -> str:
        return f"Failed to {self.action} config file: {self.path} ({self.reason})"


@dataclass(frozen=True, slots=True)
class ConfigParseError(StoreError):
    """The config file is not valid JSON or does not have the expected shape."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Failed to parse config file: {self.path} ({self.reason})"


class ConfigNotLoaded(StoreError):
    """An operation needing the in-memory document ran before ``load()``."""

    def __str__(self) -> str:
        return "Config has not been loaded; call load() first"


@dataclass(frozen=True, slots=True)
class KeyringError(StoreError):
    """The OS secret store is unavailable, denied access, or an entry operation failed."""

    service: str
    account: str
    reason: str

    def __str__(self) -> str:
        return f"Secret store error for {self.service}/{self.account}: {self.reason}"


class CryptoError(StoreError):
    """Base class for project-name encryption failures."""


@dataclass(frozen=True, slots=True)
class MalformedCiphertext(CryptoError):
    """The blob is too short to even contain a nonce."""

    length: int

    def __str__(self) -> str:
        return f"Invalid encrypted project data: {self.length} bytes is shorter than the nonce"


class AuthenticationFailed(CryptoError):
    def __str__(self) -> str:
        return "Failed to decrypt project name: authentication failed (tampered data or wrong key)"


class InvalidEncoding(CryptoError):
    def __str__(self) -> str:
        return "Invalid UTF-8 in decrypted project name"


@dataclass(frozen=True, slots=True)
class InvalidKeyMaterial(CryptoError):
    """The device key stored in the secret store cannot be used."""

    reason: str

    def __str__(self) -> str:
        return f"Invalid project encryption key: {self.reason}"


class NotFound(StoreError):
    """A looked-up entity does not exist."""


@dataclass(frozen=True, slots=True)
class OrganizationNotFound(NotFound):
    name: str

    def __str__(self) -> str:
        return f"Organization '{self.name}' not found. Add it first with 'org add'."
