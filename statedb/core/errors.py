"""
Exception taxonomy for StateDB.

- InvalidStateError: a state cannot be loaded or persisted as addressed
- NotFoundError: a category/entity/key lookup missed
- EncodeError: a value or document cannot be serialized to JSON
- DecodeError: stored bytes are not a valid state document
- StorageIOError: the backing file could not be read or written
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class StateDBError(Exception):
    """Base class for all StateDB errors."""
    pass


class InvalidStateError(StateDBError):
    """Raised when a state name is unusable or the store has no state loaded."""

    def __init__(self, state_name: Optional[str], reason: str = "invalid state"):
        self.state_name = state_name
        self.reason = reason
        super().__init__(f"Invalid state {state_name!r}: {reason}")


class NotFoundError(StateDBError, LookupError):
    """Raised when a get addresses a missing entity or key."""

    def __init__(self, category: str, entity_id: str, key: str):
        self.category = category
        self.entity_id = entity_id
        self.key = key
        super().__init__(f"Not found in {category}: {entity_id}:{key}")


class EncodeError(StateDBError, ValueError):
    """Raised when data cannot be represented as JSON."""
    pass


class StorageIOError(StateDBError):
    """Raised when the backing file cannot be read or written."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class DecodeError(StateDBError, ValueError):
    """Raised when stored bytes are not a valid state document."""
    pass
