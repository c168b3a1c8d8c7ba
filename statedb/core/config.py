"""
Runtime configuration for StateDB.

Settings can be passed explicitly or read from the environment:

    STATEDB_STATES_DIR      directory holding <state>.json files (default: states)
    STATEDB_AUTO_PERSIST    persist after every mutating set/delete (default: true)
    STATEDB_INDENT          JSON indentation width (default: 2)
    STATEDB_ATOMIC_WRITES   write to a temp file then rename (default: true)
    STATEDB_CREATE_DIRS     create the states directory on save (default: false)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


class StoreConfig(BaseModel):
    """Configuration for a Store and its backend."""

    states_dir: Path = Field(default=Path("states"), description="Directory of state files")
    auto_persist: bool = Field(
        default=True,
        description="Save after every set/delete that changes state",
    )
    indent: Optional[int] = Field(default=2, ge=0, description="JSON indentation width")
    atomic_writes: bool = Field(
        default=True,
        description="Write through a temporary file and rename over the target",
    )
    create_dirs: bool = Field(
        default=False,
        description="Create the states directory when it does not exist",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_env(cls, **overrides) -> StoreConfig:
        """Build a config from STATEDB_* environment variables."""
        values = {
            "states_dir": Path(os.getenv("STATEDB_STATES_DIR", "states")),
            "auto_persist": _env_flag("STATEDB_AUTO_PERSIST", True),
            "indent": int(os.getenv("STATEDB_INDENT", "2")),
            "atomic_writes": _env_flag("STATEDB_ATOMIC_WRITES", True),
            "create_dirs": _env_flag("STATEDB_CREATE_DIRS", False),
        }
        values.update(overrides)
        return cls(**values)

    def state_path(self, state_name: str) -> Path:
        """Resolve the file path for a state name."""
        return self.states_dir / f"{state_name}.json"
