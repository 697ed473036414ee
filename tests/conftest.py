import pytest

from geodist.config.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    # Settings are cached per process; env-var tests need a clean load each time.
    for name in ("GEODIST_CONFIG_PATH", "GEODIST_LOG_LEVEL", "GEODIST_DEFAULT_UNIT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
