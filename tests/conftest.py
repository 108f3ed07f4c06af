"""
Test Configuration Module
"""

import json
from pathlib import Path

import pytest

from discussion_web.config import get_settings
from discussion_web.hosting import CONTENT_ROOT_VARIABLE, ENVIRONMENT_VARIABLE, HostingEnvironment
from discussion_web.repositories.memory import InMemoryRepositoryContext

SETTINGS_VARIABLES = (
    "mongoConnectionString",
    "MONGOCONNECTIONSTRING",
    "APP_NAME",
    "DEBUG",
    "LOGGING__LEVEL",
    "MONGO_PROBE_TIMEOUT_MS",
    "WEB_ROOT",
    "SYNC_FILE_RUNTIME",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep settings caches and storage variables from leaking between tests"""
    for name in (*SETTINGS_VARIABLES, CONTENT_ROOT_VARIABLE, ENVIRONMENT_VARIABLE):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def content_root(tmp_path) -> Path:
    """Empty content root with a web root directory"""
    (tmp_path / "wwwroot").mkdir()
    return tmp_path


@pytest.fixture
def write_settings(content_root):
    """Write a JSON settings file into the content root"""

    def _write(name: str, data: dict) -> Path:
        path = content_root / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def hosting_environment(content_root) -> HostingEnvironment:
    return HostingEnvironment(content_root=content_root, environment_name="Testing")


@pytest.fixture
def memory_context() -> InMemoryRepositoryContext:
    return InMemoryRepositoryContext()
