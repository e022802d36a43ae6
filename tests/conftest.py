"""Pytest fixtures for settings store tests."""

import pytest

from settingsstore import CONFIG_PROPERTIES, Settings, reset_settings
from settingsstore.testing import MockResourceLoader

DEFAULT_PROPERTIES = """\
# Test defaults
app.name=demo
server.port=8080
cache.size=9999999999
feature.enabled=TRUE
feature.disabled=false
blank.value=
spaces.value=\\u0020\\t\\u0020
"""


@pytest.fixture(autouse=True)
def isolated_global_settings():
    """Make every test start and end without a process-wide store."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def loader():
    """Provide a mock loader serving the test defaults."""
    return MockResourceLoader({CONFIG_PROPERTIES: DEFAULT_PROPERTIES})


@pytest.fixture
def settings(loader):
    """Provide a store initialized from the test defaults."""
    return Settings(loader)


@pytest.fixture
def write_properties(tmp_path):
    """Write a properties file under tmp_path and return its path."""
    def _write(content, name="override.properties", encoding="latin-1"):
        path = tmp_path / name
        path.write_bytes(content.encode(encoding) if isinstance(content, str) else content)
        return path
    return _write
