import pytest

from clearspace_config.config import get_settings
from clearspace_config.manager import ClearspaceManager
from clearspace_config.properties import InMemoryPropertyStore
from clearspace_config.registry import get_manager


@pytest.fixture(autouse=True)
def reset_caches():
    get_settings.cache_clear()
    get_manager.cache_clear()
    yield
    get_settings.cache_clear()
    get_manager.cache_clear()


@pytest.fixture
def store():
    return InMemoryPropertyStore()


@pytest.fixture
def manager(store):
    return ClearspaceManager(store)
