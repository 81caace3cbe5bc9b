"""Pytest configuration and shared fixtures for all tests."""

import pytest

CONFIG_ENV_VARS = (
    "REPOLOGY_INSTALL_OS",
    "REPOLOGY_API_URL",
    "REPOLOGY_USER_AGENT",
    "REPOLOGY_TIMEOUT",
    "REPOLOGY_LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep configuration environment variables from leaking into tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
