"""Persisted document model for ``config.json``."""

from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_serializer, field_validator

from sentry_explorer.store.tokens import TokenStore


class EncryptedProject(BaseModel):
    """A cached project: its slug plus its encrypted display name.

    ``ciphertext`` is written to disk as base64 under the ``name`` key.
    """

    model_config = ConfigDict(populate_by_name=True)

    ciphertext: bytes = Field(alias="name")
    slug: str

    @field_validator("ciphertext", mode="before")
    @classmethod
    def _decode_base64(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return base64.b64decode(value.encode("ascii"), validate=True)
            except (binascii.Error, UnicodeEncodeError) as e:
                raise ValueError(f"project name is not valid base64: {e}") from e
        return value

    @field_serializer("ciphertext")
    def _encode_base64(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


class Organization(BaseModel):
    """A locally configured Sentry organization.

    ``name`` is the local lookup key, ``slug`` the remote identifier. The token lives in
    the secret store behind ``token_store``, which is attached after construction.
    """

    name: str
    slug: str
    projects: dict[str, EncryptedProject] = Field(default_factory=dict)

    _token_store: TokenStore | None = PrivateAttr(default=None)

    @property
    def token_store(self) -> TokenStore | None:
        return self._token_store

    def attach_token_store(self, token_store: TokenStore) -> None:
        self._token_store = token_store

    def get_auth_token(self) -> str | None:
        if self._token_store is None:
            return None
        return self._token_store.get_auth_token()

    def set_auth_token(self, token: str) -> None:
        if self._token_store is None:
            raise RuntimeError(f"Organization {self.name!r} has no token store attached")
        self._token_store.set_auth_token(token)

    def has_project(self, slug: str) -> bool:
        return slug in self.projects

    def project_slugs(self) -> list[str]:
        return sorted(self.projects)


class Config(BaseModel):
    """The whole on-disk document. Empty is the valid first-run state."""

    organizations: dict[str, Organization] = Field(default_factory=dict)
