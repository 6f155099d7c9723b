"""Root conftest: shared test configuration."""

import pytest

from offchain_data.config import get_settings

_ENV_VARS = (
    "STORE_FILE", "SIMULATED_FAILURE_COUNT", "CHECKPOINT_FILE",
    "MAX_WRITE_ATTEMPTS", "LOG_LEVEL", "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Every test starts from defaults, in its own directory, with a fresh settings cache."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
