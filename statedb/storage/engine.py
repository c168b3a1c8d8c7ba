"""
Storage engines for StateDB.

A storage engine moves whole state documents, as bytes, to and from a
path. It knows nothing about categories or entities; the Store decides
what the bytes mean.

Implementations:
    - FileStorage: the local filesystem, optionally with atomic writes
    - InMemoryStorage: a dict of path -> bytes for tests and embedding
"""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from threading import RLock

from statedb.core.errors import StorageIOError


logger = logging.getLogger(__name__)


class StorageEngine(ABC):
    """Abstract base class for byte-level state persistence."""

    @abstractmethod
    def read(self, path: Path) -> bytes:
        """
        Read the full contents stored at path.

        Raises:
            StorageIOError: If nothing is stored at path or it cannot be read
        """
        pass

    @abstractmethod
    def write(self, path: Path, data: bytes) -> None:
        """
        Replace the contents stored at path.

        Raises:
            StorageIOError: If the write fails
        """
        pass

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check whether anything is stored at path."""
        pass


class FileStorage(StorageEngine):
    """
    Filesystem storage.

    With atomic writes enabled the document is written to a temporary
    file in the same directory and renamed over the target, so a failed
    write leaves the previous content in place. The parent directory is
    expected to exist unless create_dirs is set.
    """

    def __init__(self, atomic_writes: bool = True, create_dirs: bool = False):
        self._atomic_writes = atomic_writes
        self._create_dirs = create_dirs

    def read(self, path: Path) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise StorageIOError(path, f"Failed to read state file ({e.strerror or e})") from e

    def write(self, path: Path, data: bytes) -> None:
        path = Path(path)
        try:
            if self._create_dirs:
                path.parent.mkdir(parents=True, exist_ok=True)
            if self._atomic_writes:
                self._write_atomic(path, data)
            else:
                path.write_bytes(data)
        except OSError as e:
            raise StorageIOError(path, f"Failed to write state file ({e.strerror or e})") from e
        logger.debug(f"Wrote {len(data)} bytes to {path}")

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    @staticmethod
    def _write_atomic(path: Path, data: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise


class InMemoryStorage(StorageEngine):
    """
    In-memory storage for development and testing.

    Data is lost when the process exits.
    """

    def __init__(self):
        self._lock = RLock()
        self._files: dict[str, bytes] = {}

    def read(self, path: Path) -> bytes:
        with self._lock:
            try:
                return self._files[str(path)]
            except KeyError:
                raise StorageIOError(path, "No such state") from None

    def write(self, path: Path, data: bytes) -> None:
        with self._lock:
            self._files[str(path)] = bytes(data)

    def exists(self, path: Path) -> bool:
        with self._lock:
            return str(path) in self._files

    def clear(self) -> None:
        """Clear all data (for testing)."""
        with self._lock:
            self._files.clear()
