"""Per-organization bearer tokens kept in the secret store."""

from __future__ import annotations

from dataclasses import dataclass, field

from sentry_explorer.store.keys import APP_NAME
from sentry_explorer.store.secrets import SecretBackend

TOKEN_ACCOUNT = "auth-token"


def token_service(organization_name: str, *, app_name: str = APP_NAME) -> str:
    """Secret-store service identifier holding ``organization_name``'s token."""

    return f"{app_name}-{organization_name}"


@dataclass(frozen=True, slots=True)
class TokenStore:
    """Handle on one organization's token entry.

    Rebuilt from the organization name on every load and never serialized, so the
    config file cannot carry a token.
    """

    service: str
    backend: SecretBackend = field(compare=False, repr=False)
    account: str = TOKEN_ACCOUNT

    @classmethod
    def for_organization(
        cls, organization_name: str, backend: SecretBackend, *, app_name: str = APP_NAME
    ) -> TokenStore:
        return cls(service=token_service(organization_name, app_name=app_name), backend=backend)

    def get_auth_token(self) -> str | None:
        """Return the stored token, or ``None`` when not logged in."""
        return self.backend.get(self.service, self.account)

    def set_auth_token(self, token: str) -> None:
        if not token:
            raise ValueError("auth token must not be empty")
        self.backend.set(self.service, self.account, token)
