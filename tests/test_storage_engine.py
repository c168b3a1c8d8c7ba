"""
Tests for StateDB storage engines.

Test Coverage:
    - FileStorage read/write, atomic replace, directory handling
    - InMemoryStorage read/write/clear
"""

import os

import pytest

from statedb.core.errors import StorageIOError
from statedb.storage.engine import FileStorage, InMemoryStorage


class TestFileStorage:
    """Tests for filesystem storage."""

    def test_write_and_read(self, tmp_path):
        storage = FileStorage()
        path = tmp_path / "state.json"
        storage.write(path, b"{}")
        assert storage.read(path) == b"{}"
        assert storage.exists(path)

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(StorageIOError) as exc_info:
            FileStorage().read(tmp_path / "missing.json")
        assert exc_info.value.path == tmp_path / "missing.json"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_write_overwrites(self, tmp_path):
        storage = FileStorage()
        path = tmp_path / "state.json"
        storage.write(path, b'{"users": {}}')
        storage.write(path, b"{}")
        assert path.read_bytes() == b"{}"

    @pytest.mark.parametrize("atomic", [True, False])
    def test_write_without_directory_fails(self, tmp_path, atomic):
        """The parent directory is not created by default."""
        storage = FileStorage(atomic_writes=atomic)
        with pytest.raises(StorageIOError):
            storage.write(tmp_path / "states" / "state.json", b"{}")

    def test_create_dirs(self, tmp_path):
        storage = FileStorage(create_dirs=True)
        path = tmp_path / "states" / "state.json"
        storage.write(path, b"{}")
        assert path.read_bytes() == b"{}"

    def test_atomic_write_leaves_no_temp_files(self, tmp_path):
        storage = FileStorage(atomic_writes=True)
        storage.write(tmp_path / "state.json", b"{}")
        assert os.listdir(tmp_path) == ["state.json"]

    def test_failed_atomic_write_keeps_prior_content(self, tmp_path, monkeypatch):
        """A failure before the rename should leave the old file intact."""
        storage = FileStorage(atomic_writes=True)
        path = tmp_path / "state.json"
        storage.write(path, b"old")

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(StorageIOError):
            storage.write(path, b"new")

        assert path.read_bytes() == b"old"
        assert os.listdir(tmp_path) == ["state.json"]


class TestInMemoryStorage:
    """Tests for in-memory storage."""

    def test_write_and_read(self, tmp_path):
        storage = InMemoryStorage()
        storage.write(tmp_path / "a.json", b"{}")
        assert storage.read(tmp_path / "a.json") == b"{}"

    def test_read_missing(self, tmp_path):
        with pytest.raises(StorageIOError):
            InMemoryStorage().read(tmp_path / "a.json")

    def test_exists_and_clear(self, tmp_path):
        storage = InMemoryStorage()
        path = tmp_path / "a.json"
        assert not storage.exists(path)
        storage.write(path, b"{}")
        assert storage.exists(path)
        storage.clear()
        assert not storage.exists(path)
