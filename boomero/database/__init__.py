"""
Boomero Database Layer.

Snapshot persistence for the single game state: local JSON file,
Supabase `game_state` table, or process memory.
"""

from boomero.database.models import DartRecord, GameSnapshot
from boomero.database.snapshots import (
    FileSnapshotStore,
    MemorySnapshotStore,
    PersistenceLoadFailure,
    PersistenceSaveFailure,
    SnapshotStore,
    SupabaseSnapshotStore,
    build_snapshot_store,
    decode_snapshot,
)

__all__ = [
    "DartRecord",
    "FileSnapshotStore",
    "GameSnapshot",
    "MemorySnapshotStore",
    "PersistenceLoadFailure",
    "PersistenceSaveFailure",
    "SnapshotStore",
    "SupabaseSnapshotStore",
    "build_snapshot_store",
    "decode_snapshot",
]
