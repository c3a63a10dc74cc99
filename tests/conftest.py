"""Test configuration and fixtures."""

from pathlib import Path

import pytest

from sentry_explorer.store import (
    ConfigStore,
    MemorySecretBackend,
    ProjectCache,
    SecretKeyProvider,
)


@pytest.fixture
def backend() -> MemorySecretBackend:
    """Provide an in-memory secret store shared by everything in one test."""
    return MemorySecretBackend()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Provide a config file location whose parent directory does not exist yet."""
    return tmp_path / "sentry-explorer" / "config.json"


@pytest.fixture
def key_provider(backend: MemorySecretBackend) -> SecretKeyProvider:
    return SecretKeyProvider(backend)


@pytest.fixture
def project_cache(key_provider: SecretKeyProvider) -> ProjectCache:
    return ProjectCache(key_provider)


@pytest.fixture
def store(config_path: Path, backend: MemorySecretBackend) -> ConfigStore:
    """Provide a loaded, empty store."""
    config_store = ConfigStore(config_path, backend)
    config_store.load()
    return config_store
