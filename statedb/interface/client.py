# coding: utf-8
"""
Main client interface for StateDB.

A Store loads a named state from `<states_dir>/<state>.json`, exposes
get/set/delete of JSON values scoped by category and entity ID, and
writes the whole document back on save.

Usage:
    ```python
    from statedb import Store

    store = Store.open("bot")

    store.channel_set("channel-1", "mode", "strict")
    store.channels.get("channel-1", "mode")        # "strict"
    store.get("users", "u-42", "nickname")         # raises NotFoundError

    store.channel_del("channel-1", "mode")
    ```

Persistence:
    With auto_persist enabled (the default) every set, and every delete
    that removed a key, rewrites the state file. With it disabled,
    mutations only touch memory until save()/flush() is called.

Thread Safety:
    Every public operation holds a reentrant lock for its whole
    read-modify-persist sequence. Nothing guards the file against other
    processes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import RLock
from typing import Any, Iterator, Optional

from pydantic import JsonValue

from statedb.core.config import StoreConfig
from statedb.core.errors import DecodeError, InvalidStateError, NotFoundError, StorageIOError
from statedb.core.models import Category, StateDocument
from statedb.storage.codec import decode, encode, validate_key, validate_value
from statedb.storage.engine import FileStorage, StorageEngine


logger = logging.getLogger(__name__)


class CategoryHandle:
    """
    A handle bound to one category of a Store.

    Handles hold no state of their own; every call goes through the
    Store and its lock.
    """

    def __init__(self, store: Store, category: Category):
        self._store = store
        self._category = category

    @property
    def name(self) -> str:
        return self._category.value

    def get(self, entity_id: str, key: str) -> JsonValue:
        return self._store.get(self._category, entity_id, key)

    def set(self, entity_id: str, key: str, value: Any) -> None:
        self._store.set(self._category, entity_id, key, value)

    def delete(self, entity_id: str, key: str) -> None:
        self._store.delete(self._category, entity_id, key)

    def has(self, entity_id: str, key: str) -> bool:
        return self._store.has(self._category, entity_id, key)

    def entity_ids(self) -> list[str]:
        return self._store.entity_ids(self._category)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entity_ids())

    def __repr__(self) -> str:
        return f"CategoryHandle({self.name!r})"


class Store:
    """
    A file-backed, category-partitioned key-value state.

    Every category is always present in memory, starting empty. Entity
    bags are created on first set and survive until reset(), even once
    all of their keys have been deleted.
    """

    def __init__(
        self,
        state_name: Optional[str] = None,
        config: Optional[StoreConfig] = None,
        storage: Optional[StorageEngine] = None,
    ):
        """
        Initialize a store.

        Args:
            state_name: State to load immediately; None leaves the store unloaded
            config: Store configuration (defaults to StoreConfig.from_env())
            storage: Storage engine (defaults to FileStorage built from config)
        """
        self._config = config or StoreConfig.from_env()
        self._storage = storage or FileStorage(
            atomic_writes=self._config.atomic_writes,
            create_dirs=self._config.create_dirs,
        )
        self._lock = RLock()
        self._document = StateDocument()
        self._state_name: Optional[str] = None
        self._path: Optional[Path] = None
        self._dirty = False

        if state_name is not None:
            self.load_from(state_name)

    @classmethod
    def open(
        cls,
        state_name: str,
        config: Optional[StoreConfig] = None,
        storage: Optional[StorageEngine] = None,
    ) -> Store:
        """Create a store and load the named state into it."""
        store = cls(config=config, storage=storage)
        store.load_from(state_name)
        return store

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state_name(self) -> Optional[str]:
        return self._state_name

    @property
    def path(self) -> Optional[Path]:
        """The file this store loads from and saves to."""
        return self._path

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def storage(self) -> StorageEngine:
        return self._storage

    @property
    def loaded(self) -> bool:
        return self._path is not None

    @property
    def dirty(self) -> bool:
        """Whether memory holds changes not yet saved."""
        with self._lock:
            return self._dirty

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def load_from(self, state_name: str) -> None:
        """
        Load a named state, resolving and fixing the store's path.

        A missing, unreadable or malformed state file is not an error:
        the store is reset to empty and the empty document is written
        in its place.

        Args:
            state_name: Name of the state; the file is <states_dir>/<state_name>.json

        Raises:
            InvalidStateError: If state_name is not a plain, non-empty name
            StorageIOError: If the self-healing write fails
        """
        _check_state_name(state_name)

        with self._lock:
            self._state_name = state_name
            self._path = self._config.state_path(state_name)

            if not self._storage.exists(self._path):
                logger.info(f"State {state_name!r} not found, creating {self._path}")
                self.reset()
                return

            try:
                raw = self._storage.read(self._path)
                self._document = decode(raw)
            except (StorageIOError, DecodeError) as e:
                logger.warning(f"Resetting state {state_name!r}: {e}")
                self.reset()
                return

            self._dirty = False
            logger.info(f"Loaded state {state_name!r} from {self._path}")

    def reset(self) -> None:
        """
        Empty every category and persist, keeping the resolved path.

        Raises:
            InvalidStateError: If no state has been loaded
            EncodeError, StorageIOError: If persisting fails
        """
        with self._lock:
            if self._path is None:
                raise InvalidStateError(self._state_name, "no state loaded")
            self._document.clear()
            self._dirty = True
            logger.info(f"Reset state {self._state_name!r}")
            self.save()

    def save(self) -> None:
        """
        Write the whole store to its path, replacing prior content.

        Raises:
            InvalidStateError: If no state has been loaded
            EncodeError: If the document cannot be serialized
            StorageIOError: If the write fails
        """
        with self._lock:
            if self._path is None:
                raise InvalidStateError(self._state_name, "no state loaded")
            data = encode(self._document, indent=self._config.indent)
            self._storage.write(self._path, data)
            self._dirty = False
            logger.debug(f"Saved state {self._state_name!r} ({len(data)} bytes)")

    def flush(self) -> None:
        """Save pending changes; a no-op when nothing changed."""
        with self._lock:
            if self._dirty:
                self.save()

    def close(self) -> None:
        """Flush pending changes."""
        if self.loaded:
            self.flush()

    def __enter__(self) -> Store:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def snapshot(self) -> dict[str, Any]:
        """The document as it would be written, as plain data."""
        with self._lock:
            return self._document.to_dict()

    # =========================================================================
    # Generic category access
    # =========================================================================

    def category(self, category: Category | str) -> CategoryHandle:
        """Get a handle for a category by enum or name."""
        return CategoryHandle(self, Category.parse(category))

    def get(self, category: Category | str, entity_id: str, key: str) -> JsonValue:
        """
        Return the value stored under key for an entity.

        Raises:
            NotFoundError: If the entity was never created or lacks key
        """
        category = Category.parse(category)
        with self._lock:
            bag = self._document.bag(category, entity_id)
            if bag is None or not bag.has(key):
                raise NotFoundError(category.value, entity_id, key)
            return bag.get(key)

    def set(self, category: Category | str, entity_id: str, key: str, value: Any) -> None:
        """
        Store value under key for an entity, creating the entity if needed.

        Raises:
            EncodeError: If entity_id or key is not a string, or value is not
                JSON-representable (nothing is changed)
            StorageIOError: If auto-persist is on and the write fails
        """
        category = Category.parse(category)
        validate_key(entity_id, "entity_id")
        validate_key(key)
        value = validate_value(value)
        with self._lock:
            self._document.bag(category, entity_id, create=True).set(key, value)
            self._dirty = True
            logger.debug(f"Set {category.value}:{entity_id}:{key}")
            if self._config.auto_persist and self.loaded:
                self.save()

    def delete(self, category: Category | str, entity_id: str, key: str) -> None:
        """
        Remove key from an entity. Missing entities and keys are ignored.

        The entity itself is kept, even when its last key is removed.
        """
        category = Category.parse(category)
        with self._lock:
            bag = self._document.bag(category, entity_id)
            if bag is None or not bag.delete(key):
                return
            self._dirty = True
            logger.debug(f"Deleted {category.value}:{entity_id}:{key}")
            if self._config.auto_persist and self.loaded:
                self.save()

    def has(self, category: Category | str, entity_id: str, key: str) -> bool:
        category = Category.parse(category)
        with self._lock:
            bag = self._document.bag(category, entity_id)
            return bag is not None and bag.has(key)

    def entity_ids(self, category: Category | str) -> list[str]:
        category = Category.parse(category)
        with self._lock:
            return list(self._document.category(category))

    # =========================================================================
    # Category handles
    # =========================================================================

    @property
    def configs(self) -> CategoryHandle:
        return CategoryHandle(self, Category.CONFIGS)

    @property
    def channels(self) -> CategoryHandle:
        return CategoryHandle(self, Category.CHANNELS)

    @property
    def messages(self) -> CategoryHandle:
        return CategoryHandle(self, Category.MESSAGES)

    @property
    def servers(self) -> CategoryHandle:
        return CategoryHandle(self, Category.SERVERS)

    @property
    def users(self) -> CategoryHandle:
        return CategoryHandle(self, Category.USERS)

    # "extras" is an older name for the configs category
    extras = configs

    # =========================================================================
    # Per-category shortcuts
    # =========================================================================

    def config_get(self, config_id: str, key: str) -> JsonValue:
        return self.get(Category.CONFIGS, config_id, key)

    def config_set(self, config_id: str, key: str, value: Any) -> None:
        self.set(Category.CONFIGS, config_id, key, value)

    def config_del(self, config_id: str, key: str) -> None:
        self.delete(Category.CONFIGS, config_id, key)

    extra_get = config_get
    extra_set = config_set
    extra_del = config_del

    def channel_get(self, channel_id: str, key: str) -> JsonValue:
        return self.get(Category.CHANNELS, channel_id, key)

    def channel_set(self, channel_id: str, key: str, value: Any) -> None:
        self.set(Category.CHANNELS, channel_id, key, value)

    def channel_del(self, channel_id: str, key: str) -> None:
        self.delete(Category.CHANNELS, channel_id, key)

    def message_get(self, message_id: str, key: str) -> JsonValue:
        return self.get(Category.MESSAGES, message_id, key)

    def message_set(self, message_id: str, key: str, value: Any) -> None:
        self.set(Category.MESSAGES, message_id, key, value)

    def message_del(self, message_id: str, key: str) -> None:
        self.delete(Category.MESSAGES, message_id, key)

    def server_get(self, server_id: str, key: str) -> JsonValue:
        return self.get(Category.SERVERS, server_id, key)

    def server_set(self, server_id: str, key: str, value: Any) -> None:
        self.set(Category.SERVERS, server_id, key, value)

    def server_del(self, server_id: str, key: str) -> None:
        self.delete(Category.SERVERS, server_id, key)

    def user_get(self, user_id: str, key: str) -> JsonValue:
        return self.get(Category.USERS, user_id, key)

    def user_set(self, user_id: str, key: str, value: Any) -> None:
        self.set(Category.USERS, user_id, key, value)

    def user_del(self, user_id: str, key: str) -> None:
        self.delete(Category.USERS, user_id, key)

    def __repr__(self) -> str:
        return f"Store(state={self._state_name!r}, path={str(self._path) if self._path else None!r})"


def _check_state_name(state_name: Any) -> None:
    if not isinstance(state_name, str) or not state_name.strip():
        raise InvalidStateError(state_name, "state name must be a non-empty string")
    if state_name in (".", "..") or "/" in state_name or "\\" in state_name or "\x00" in state_name:
        raise InvalidStateError(state_name, "state name must not contain path components")
