"""
Storage layer for StateDB.

Provides pluggable storage engines for persisting state documents,
and the JSON codec that turns documents into bytes.
"""

from statedb.storage.codec import decode, encode, validate_key, validate_value
from statedb.storage.engine import StorageEngine, FileStorage, InMemoryStorage

__all__ = [
    "StorageEngine",
    "FileStorage",
    "InMemoryStorage",
    "decode",
    "encode",
    "validate_key",
    "validate_value",
]
