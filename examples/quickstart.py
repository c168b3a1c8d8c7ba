"""
StateDB Quickstart Example

This example walks through the life of a named state:

1. Loading (and self-healing) a state file
2. Setting, getting and deleting values per category
3. Manual flushing with auto-persist turned off
"""

import tempfile
from pathlib import Path

from statedb import NotFoundError, Store, StoreConfig


def main():
    print("=" * 60)
    print("StateDB Quickstart")
    print("=" * 60)

    states_dir = Path(tempfile.mkdtemp()) / "states"
    states_dir.mkdir()
    config = StoreConfig(states_dir=states_dir)

    # ==========================================================================
    # Load a state (missing files are created empty)
    # ==========================================================================
    store = Store.open("bot", config=config)
    print(f"\nLoaded state {store.state_name!r} from {store.path}")

    # ==========================================================================
    # Per-category values
    # ==========================================================================
    print("\n" + "-" * 40)
    print("Step 1: Setting values")
    print("-" * 40)

    store.config_set("bot", "prefix", "!")
    store.channel_set("channel-1", "mode", "strict")
    store.users.set("u-42", "profile", {"nickname": "kay", "warnings": 0})
    print(f"channel-1 mode: {store.channel_get('channel-1', 'mode')}")
    print(f"u-42 profile:   {store.users.get('u-42', 'profile')}")

    try:
        store.channel_get("channel-1", "topic")
    except NotFoundError as e:
        print(f"Missing: {e}")

    store.channel_del("channel-1", "mode")
    print(f"After delete, has mode: {store.channels.has('channel-1', 'mode')}")

    print("\nOn disk:")
    print(store.path.read_text(encoding="utf-8"))

    # ==========================================================================
    # Batch updates without auto-persist
    # ==========================================================================
    print("\n" + "-" * 40)
    print("Step 2: Batching with flush()")
    print("-" * 40)

    manual = StoreConfig(states_dir=states_dir, auto_persist=False)
    with Store.open("batch", config=manual) as batch:
        for i in range(3):
            batch.message_set(f"m-{i}", "seen", True)
        print(f"Dirty before exit: {batch.dirty}")

    print(Store.open("batch", config=manual).snapshot())


if __name__ == "__main__":
    main()
