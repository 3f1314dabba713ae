"""Shared pytest configuration and fixtures for Astraventa Relay tests."""

import pytest
from fastapi.testclient import TestClient

from astraventa.core.config import Config
from astraventa.core.config.schema import ConfigSchema
from astraventa.main import create_app

# Import HTTP mocking fixtures from fixtures module
pytest_plugins = ["tests.fixtures.mock_http"]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Clear every configured variable so a developer's .env never leaks into tests."""
    for spec in ConfigSchema.all_specs().values():
        monkeypatch.delenv(spec.name, raising=False)
    yield


@pytest.fixture
def make_config():
    """Build a Config from an explicit mapping instead of the process environment."""

    def _make(**env: str) -> Config:
        return Config(environ=env)

    return _make


@pytest.fixture
def make_client(make_config):
    """Build a TestClient around a fresh app configured from keyword env values."""

    def _make(**env: str) -> TestClient:
        return TestClient(create_app(make_config(**env)))

    return _make


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        path = str(item.fspath)
        if "tests/api/" in path:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
