import pytest

from slip_parser.core.config import get_settings


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    # Tests patch env vars; never leak a cached Settings across tests.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
