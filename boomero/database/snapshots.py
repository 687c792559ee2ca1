"""
Boomero - Snapshot Stores

Load and save the single game snapshot. Three backends share one protocol:
a local JSON file, the Supabase `game_state` table, and process memory.

``load_snapshot`` never raises: a missing or unreadable snapshot is reported
as ``None`` and the caller starts a new game.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError
from supabase import Client

from boomero.config.settings import Settings
from boomero.database.models import GameSnapshot
from boomero.engine.base import GameState

logger = logging.getLogger(__name__)


class PersistenceLoadFailure(Exception):
    """A stored snapshot exists but cannot be turned back into a GameState."""


class PersistenceSaveFailure(Exception):
    """A snapshot could not be written."""


class SnapshotStore(Protocol):
    """Persistence boundary of the game state store."""

    def load_snapshot(self) -> GameState | None:
        ...

    def save_snapshot(self, state: GameState) -> None:
        ...


def decode_snapshot(raw: str | bytes | dict[str, Any]) -> GameState:
    """
    Decode a stored snapshot.

    Args:
        raw: JSON text or an already-parsed row

    Raises:
        PersistenceLoadFailure: If the data does not describe a valid game
    """
    try:
        if isinstance(raw, dict):
            snapshot = GameSnapshot.model_validate(raw)
        else:
            snapshot = GameSnapshot.model_validate_json(raw)
        return snapshot.to_state()
    except (ValidationError, ValueError) as exc:
        raise PersistenceLoadFailure(str(exc)) from exc


class MemorySnapshotStore:
    """Keeps the last snapshot in process memory."""

    def __init__(self, state: GameState | None = None) -> None:
        self._state = state
        self.save_count = 0

    def load_snapshot(self) -> GameState | None:
        return self._state

    def save_snapshot(self, state: GameState) -> None:
        self._state = state
        self.save_count += 1


class FileSnapshotStore:
    """Stores the snapshot as JSON in a local file."""

    def __init__(self, path: Path | str, game_id: str = "local") -> None:
        self.path = Path(path)
        self.game_id = game_id

    def load_snapshot(self) -> GameState | None:
        """Read the snapshot file, or None if absent or unreadable."""
        if not self.path.exists():
            logger.info("No saved game state at %s, using default", self.path)
            return None
        try:
            state = decode_snapshot(self.path.read_text(encoding="utf-8"))
        except (OSError, PersistenceLoadFailure) as exc:
            logger.warning("Error loading game state from %s: %s", self.path, exc)
            return None
        logger.info("Game state loaded from %s", self.path)
        return state

    def save_snapshot(self, state: GameState) -> None:
        """
        Write the snapshot file atomically.

        Raises:
            PersistenceSaveFailure: If the file cannot be written
        """
        payload = GameSnapshot.from_state(state, self.game_id).model_dump_json(indent=2)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise PersistenceSaveFailure(f"Cannot write {self.path}: {exc}") from exc
        logger.debug("Game state saved to %s", self.path)


class SupabaseSnapshotStore:
    """Stores the snapshot in the Supabase `game_state` table."""

    def __init__(self, client: Client, game_id: str = "local") -> None:
        self.client = client
        self.game_id = game_id
        self.table = client.table("game_state")

    def load_snapshot(self) -> GameState | None:
        """Get the stored game state, or None if absent or unreadable."""
        try:
            data = (
                self.table
                .select("*")
                .eq("game_id", self.game_id)
                .execute()
            )
        except Exception:
            logger.exception("Error fetching game state %s", self.game_id)
            return None

        if not data.data:
            logger.info("No saved game state for %s, using default", self.game_id)
            return None
        try:
            return decode_snapshot(data.data[0])
        except PersistenceLoadFailure as exc:
            logger.warning("Error decoding game state %s: %s", self.game_id, exc)
            return None

    def save_snapshot(self, state: GameState) -> None:
        """
        Upsert the game state row.

        Raises:
            PersistenceSaveFailure: If the request fails
        """
        row = GameSnapshot.from_state(state, self.game_id).model_dump(mode="json")
        try:
            self.table.upsert(row, on_conflict="game_id").execute()
        except Exception as exc:
            raise PersistenceSaveFailure(f"Cannot save game state {self.game_id}: {exc}") from exc


def build_snapshot_store(settings: Settings) -> SnapshotStore:
    """Create the snapshot store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "supabase":
        from boomero.database.client import get_supabase_client

        return SupabaseSnapshotStore(get_supabase_client(), settings.game_id)
    if settings.storage_backend == "memory":
        return MemorySnapshotStore()
    return FileSnapshotStore(settings.snapshot_path, settings.game_id)
