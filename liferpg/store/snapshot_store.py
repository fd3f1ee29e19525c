"""
Player Snapshot Store

The engine reads and writes player snapshots only through the SnapshotStore
protocol. Persistence is the host's concern: hosts plug in their own storage,
and InMemorySnapshotStore serves tests and embedded use.

The username index is kept by the host (usernames are registered at account
creation). Readers must treat it as a superset of stored snapshots and ignore
entries whose snapshot is missing. No locking or transactions are provided:
concurrent writers for the same username may race, and a full read is only a
best-effort point-in-time view.
"""

import logging
from typing import Dict, List, Optional, Protocol, runtime_checkable

from liferpg.models import PlayerSnapshot

logger = logging.getLogger(__name__)


@runtime_checkable
class SnapshotStore(Protocol):
    """Key-value access to player snapshots, keyed by username"""

    def get_index(self) -> List[str]:
        """All registered usernames"""
        ...

    def get_snapshot(self, username: str) -> Optional[PlayerSnapshot]:
        """Snapshot for a username, or None when absent"""
        ...

    def put_snapshot(self, username: str, snapshot: PlayerSnapshot) -> None:
        """Store a snapshot under a username"""
        ...


class InMemorySnapshotStore:
    """In-memory SnapshotStore; nothing is persisted"""

    def __init__(self):
        self._index: List[str] = []
        self._snapshots: Dict[str, PlayerSnapshot] = {}

    def register_username(self, username: str) -> None:
        """Add a username to the index (account creation)"""
        if username not in self._index:
            self._index.append(username)
            logger.debug(f"Registered {username} in snapshot index")

    def get_index(self) -> List[str]:
        return list(self._index)

    def get_snapshot(self, username: str) -> Optional[PlayerSnapshot]:
        snapshot = self._snapshots.get(username)
        # Copies keep callers from mutating stored state
        return snapshot.model_copy(deep=True) if snapshot is not None else None

    def put_snapshot(self, username: str, snapshot: PlayerSnapshot) -> None:
        self._snapshots[username] = snapshot.model_copy(deep=True)
        logger.debug(f"Saved snapshot for {username}")
