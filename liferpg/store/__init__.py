"""Snapshot store interface and in-memory implementation"""

from liferpg.store.snapshot_store import SnapshotStore, InMemorySnapshotStore

__all__ = ["SnapshotStore", "InMemorySnapshotStore"]
