"""
Client interface for StateDB.
"""

from statedb.interface.client import CategoryHandle, Store

__all__ = ["Store", "CategoryHandle"]
