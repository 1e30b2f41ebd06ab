"""Root conftest — shared test configuration.

Invariants:
    - Every test gets a fresh Settings instance (get_settings cache cleared)
    - substrate_root points at a per-test tmp_path, so no test writes to the repo
"""

import pytest

from dotmatrix.config import Settings, get_settings


@pytest.fixture(autouse=True)
def substrate_root(tmp_path, monkeypatch):
    """Isolate every test under its own substrate root."""
    monkeypatch.setenv("DOTMATRIX_SUBSTRATE_ROOT", str(tmp_path))
    monkeypatch.setenv("DOTMATRIX_LOG_FORMAT", "text")
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def settings(substrate_root) -> Settings:
    return get_settings()
