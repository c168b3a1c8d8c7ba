"""
Tests for StoreConfig.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from statedb.core.config import StoreConfig


class TestStoreConfig:
    """Tests for configuration defaults and environment loading."""

    def test_defaults(self):
        config = StoreConfig()
        assert config.states_dir == Path("states")
        assert config.auto_persist is True
        assert config.indent == 2
        assert config.atomic_writes is True
        assert config.create_dirs is False

    def test_state_path(self):
        config = StoreConfig(states_dir=Path("/data/states"))
        assert config.state_path("bot") == Path("/data/states/bot.json")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("STATEDB_STATES_DIR", "/tmp/custom")
        monkeypatch.setenv("STATEDB_AUTO_PERSIST", "false")
        monkeypatch.setenv("STATEDB_INDENT", "4")
        monkeypatch.setenv("STATEDB_ATOMIC_WRITES", "0")
        monkeypatch.setenv("STATEDB_CREATE_DIRS", "yes")

        config = StoreConfig.from_env()
        assert config.states_dir == Path("/tmp/custom")
        assert config.auto_persist is False
        assert config.indent == 4
        assert config.atomic_writes is False
        assert config.create_dirs is True

    def test_from_env_defaults(self, monkeypatch):
        for name in (
            "STATEDB_STATES_DIR",
            "STATEDB_AUTO_PERSIST",
            "STATEDB_INDENT",
            "STATEDB_ATOMIC_WRITES",
            "STATEDB_CREATE_DIRS",
        ):
            monkeypatch.delenv(name, raising=False)
        assert StoreConfig.from_env() == StoreConfig()

    def test_from_env_overrides(self, monkeypatch):
        monkeypatch.setenv("STATEDB_AUTO_PERSIST", "false")
        config = StoreConfig.from_env(auto_persist=True)
        assert config.auto_persist is True

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            StoreConfig(autosave=True)

    def test_rejects_negative_indent(self):
        with pytest.raises(ValidationError):
            StoreConfig(indent=-1)

    def test_frozen(self):
        config = StoreConfig()
        with pytest.raises(ValidationError):
            config.auto_persist = False
