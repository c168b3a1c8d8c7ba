"""
StateDB - a small persisted key-value state.

A named state lives in one JSON document on disk, partitioned into
fixed categories (configs, channels, messages, servers, users). Each
category maps entity IDs to a bag of arbitrary JSON values.
"""
from statedb.core.models import Category, StateDocument, StorageObject
from statedb.core.config import StoreConfig
from statedb.core.errors import (
    StateDBError,
    InvalidStateError,
    NotFoundError,
    EncodeError,
    DecodeError,
    StorageIOError,
)
from statedb.storage.engine import StorageEngine, FileStorage, InMemoryStorage
from statedb.interface.client import Store, CategoryHandle

__version__ = "0.1.0"

__all__ = [
    # Models
    "Category",
    "StateDocument",
    "StorageObject",
    # Config
    "StoreConfig",
    # Errors
    "StateDBError",
    "InvalidStateError",
    "NotFoundError",
    "EncodeError",
    "DecodeError",
    "StorageIOError",
    # Storage
    "StorageEngine",
    "FileStorage",
    "InMemoryStorage",
    # Client
    "Store",
    "CategoryHandle",
]
