"""
Core models, configuration and errors for StateDB.
"""

from statedb.core.config import StoreConfig
from statedb.core.errors import (
    DecodeError,
    EncodeError,
    InvalidStateError,
    NotFoundError,
    StateDBError,
    StorageIOError,
)
from statedb.core.models import Category, StateDocument, StorageObject

__all__ = [
    "Category",
    "StateDocument",
    "StorageObject",
    "StoreConfig",
    "StateDBError",
    "InvalidStateError",
    "NotFoundError",
    "EncodeError",
    "DecodeError",
    "StorageIOError",
]
