"""
Pytest configuration and shared fixtures for StateDB tests.
"""

import pytest

from statedb import InMemoryStorage, Store, StoreConfig


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def states_dir(tmp_path):
    """An existing, empty states directory."""
    path = tmp_path / "states"
    path.mkdir()
    return path


@pytest.fixture
def config(states_dir):
    """Default config rooted at the temporary states directory."""
    return StoreConfig(states_dir=states_dir)


@pytest.fixture
def manual_config(states_dir):
    """Config with auto-persist turned off."""
    return StoreConfig(states_dir=states_dir, auto_persist=False)


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def store(config):
    """A store loaded from a fresh state file."""
    return Store.open("test", config=config)


@pytest.fixture
def memory_store():
    """A store backed by in-memory storage."""
    storage = InMemoryStorage()
    yield Store.open("memory", config=StoreConfig(), storage=storage)
    storage.clear()


@pytest.fixture
def populated_store(store):
    """A store with data in every category."""
    store.config_set("bot", "prefix", "!")
    store.channel_set("channel-1", "mode", "strict")
    store.channel_set("channel-1", "slowmode", 5)
    store.message_set("m-100", "pinned", True)
    store.server_set("guild-9", "roles", ["admin", "mod"])
    store.user_set("u-42", "profile", {"nickname": "kay", "score": 1.5, "tags": None})
    return store
