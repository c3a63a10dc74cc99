"""JSON-file backed store for organizations, tokens and the encrypted project cache.

The store starts unloaded. ``load()`` reads ``config.json`` (or starts empty when the
file does not exist) and wires each organization's token entry; every mutating call
then persists the whole document with ``save()``.

There is no cross-process locking. Two concurrent invocations that both load, mutate
and save race on a last-writer-wins basis.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from sentry_explorer.store.errors import (
    ConfigIOError,
    ConfigNotLoaded,
    ConfigParseError,
    OrganizationNotFound,
)
from sentry_explorer.store.keys import APP_NAME, SecretKeyProvider
from sentry_explorer.store.models import Config, EncryptedProject, Organization
from sentry_explorer.store.project_cache import ProjectCache
from sentry_explorer.store.secrets import SecretBackend
from sentry_explorer.store.tokens import TokenStore

logger = logging.getLogger(__name__)


class ConfigStore:
    """Owns the in-memory :class:`Config` and its on-disk copy."""

    def __init__(
        self,
        path: Path,
        backend: SecretBackend,
        *,
        app_name: str = APP_NAME,
        project_cache: ProjectCache | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            path: Location of ``config.json``.
            backend: Secret store holding tokens and the device key.
            app_name: Prefix for secret-store service identifiers.
            project_cache: Cipher for project names; defaults to one keyed from ``backend``.
        """
        self.path = path
        self._backend = backend
        self._app_name = app_name
        self._project_cache = project_cache or ProjectCache(
            SecretKeyProvider(backend, service=app_name)
        )
        self._config: Config | None = None

    @property
    def loaded(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> Config:
        if self._config is None:
            raise ConfigNotLoaded()
        return self._config

    def load(self) -> Config:
        """Load the document from disk, or start empty if there is no file yet.

        Raises:
            ConfigIOError: The file exists but cannot be read.
            ConfigParseError: The file is not valid JSON or has the wrong shape.
        """
        if not self.path.exists():
            logger.info("No config file found, starting fresh", extra={"path": str(self.path)})
            self._config = Config()
            return self._config

        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise ConfigIOError(path=self.path, action="read", reason=str(e)) from e

        try:
            config = Config.model_validate(json.loads(raw.decode("utf-8")))
        except UnicodeDecodeError as e:
            raise ConfigParseError(path=self.path, reason=f"not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigParseError(path=self.path, reason=str(e)) from e
        except ValidationError as e:
            raise ConfigParseError(
                path=self.path, reason=f"{e.error_count()} validation error(s)"
            ) from e

        # The token entry is derived from the inner name, lookups use the key.
        for key, organization in config.organizations.items():
            if key != organization.name:
                raise ConfigParseError(
                    path=self.path,
                    reason=(
                        f"organization key {key!r} does not match its name {organization.name!r}"
                    ),
                )
            self._attach_token_store(organization)

        self._config = config
        logger.debug(
            "Config loaded",
            extra={"path": str(self.path), "organizations": len(config.organizations)},
        )
        return config

    def save(self) -> None:
        """Write the whole document to disk.

        The content goes to a temporary file in the same directory which then replaces
        the target, so an interrupted save leaves the previous file untouched.
        """
        config = self.config
        parent = self.path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigIOError(path=parent, action="create directory for", reason=str(e)) from e

        content = json.dumps(config.model_dump(mode="json", by_alias=True), indent=2) + "\n"

        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise ConfigIOError(path=self.path, action="write", reason=str(e)) from e
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise ConfigIOError(path=self.path, action="write", reason=str(e)) from e

        logger.debug("Config saved", extra={"path": str(self.path)})

    def add_organization(self, name: str, slug: str) -> Organization:
        """Insert an organization with no token and no cached projects.

        An existing entry with the same name is replaced.
        """
        organization = Organization(name=name, slug=slug)
        self._attach_token_store(organization)
        self.config.organizations[name] = organization
        logger.info("Organization added", extra={"organization": name, "slug": slug})
        return organization

    def get_organization(self, name: str) -> Organization | None:
        return self.config.organizations.get(name)

    def get_organization_mut(self, name: str) -> Organization | None:
        """Same lookup as :meth:`get_organization`; the returned object is live.

        Changes to it reach disk only on the next :meth:`save`.
        """
        return self.config.organizations.get(name)

    def organizations(self) -> Iterator[Organization]:
        for name in sorted(self.config.organizations):
            yield self.config.organizations[name]

    def set_auth_token(self, org_name: str, token: str) -> None:
        """Store ``token`` in the organization's secret-store entry.

        The config file is not touched.
        """
        self._require_organization(org_name).set_auth_token(token)
        logger.info("Auth token stored", extra={"organization": org_name})

    def get_auth_token(self, org_name: str) -> str | None:
        return self._require_organization(org_name).get_auth_token()

    def cache_project(self, org_name: str, project_slug: str, project_name: str) -> None:
        """Encrypt and cache a project's display name, then persist.

        Raises:
            OrganizationNotFound: ``org_name`` is not configured.
        """
        organization = self._require_organization(org_name)
        blob = self._project_cache.encrypt(project_name)
        organization.projects[project_slug] = EncryptedProject(ciphertext=blob, slug=project_slug)
        self.save()
        logger.debug(
            "Project cached", extra={"organization": org_name, "project": project_slug}
        )

    def get_project(self, org_name: str, project_slug: str) -> str | None:
        """Decrypt a cached project name.

        Returns ``None`` if the slug is not cached. Decryption failures propagate as
        :class:`~sentry_explorer.store.errors.CryptoError`.
        """
        organization = self._require_organization(org_name)
        project = organization.projects.get(project_slug)
        if project is None:
            return None
        return self._project_cache.decrypt(project.ciphertext)

    def has_project(self, org_name: str, project_slug: str) -> bool:
        organization = self.get_organization(org_name)
        return organization is not None and organization.has_project(project_slug)

    def find_project(self, project_slug: str) -> list[tuple[Organization, bool]]:
        """Organizations that may own ``project_slug``.

        Organizations with the slug cached come back flagged ``True``. If none has it
        cached, every organization comes back flagged ``False`` for a live lookup.
        """
        cached = [(org, True) for org in self.organizations() if org.has_project(project_slug)]
        if cached:
            return cached
        return [(org, False) for org in self.organizations()]

    def _require_organization(self, name: str) -> Organization:
        organization = self.get_organization(name)
        if organization is None:
            raise OrganizationNotFound(name=name)
        return organization

    def _attach_token_store(self, organization: Organization) -> None:
        organization.attach_token_store(
            TokenStore.for_organization(organization.name, self._backend, app_name=self._app_name)
        )
