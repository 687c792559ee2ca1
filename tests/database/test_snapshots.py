"""Tests for boomero/database/snapshots.py persistence backends."""

import json
from unittest.mock import MagicMock

import pytest

from boomero.config.settings import Settings
from boomero.database.models import GameSnapshot
from boomero.database.snapshots import (
    FileSnapshotStore,
    MemorySnapshotStore,
    PersistenceLoadFailure,
    PersistenceSaveFailure,
    SupabaseSnapshotStore,
    build_snapshot_store,
    decode_snapshot,
)
from boomero.engine.base import Category, Dart, DartKind, GameState


@pytest.fixture
def played_state(state_builder):
    return state_builder(
        hits={Category.number_row(18): (3, 2), Category.DOUBLE: (1, 0)},
        player2_score=36,
        current_dart_index=2,
        current_turn_darts=(Dart(DartKind.SINGLE, 18), Dart(DartKind.DOUBLE, 4, scored_as_category=True), None),
    )


@pytest.fixture
def mock_client():
    """Mock Supabase client whose table calls chain back to the same mock."""
    client = MagicMock()
    table = client.table.return_value
    table.select.return_value = table
    table.eq.return_value = table
    table.upsert.return_value = table
    return client


class TestDecodeSnapshot:
    def test_decode_json_text(self, played_state):
        raw = GameSnapshot.from_state(played_state).model_dump_json()
        assert decode_snapshot(raw) == played_state

    def test_decode_row(self, played_state):
        row = GameSnapshot.from_state(played_state).model_dump(mode="json")
        assert decode_snapshot(row) == played_state

    def test_decode_garbage(self):
        with pytest.raises(PersistenceLoadFailure):
            decode_snapshot("{not json")

    def test_decode_inconsistent_state(self):
        with pytest.raises(PersistenceLoadFailure):
            decode_snapshot({"current_player": 5})


class TestMemorySnapshotStore:
    def test_empty(self):
        assert MemorySnapshotStore().load_snapshot() is None

    def test_save_then_load(self, played_state):
        store = MemorySnapshotStore()
        store.save_snapshot(played_state)
        assert store.load_snapshot() == played_state
        assert store.save_count == 1


class TestFileSnapshotStore:
    def test_missing_file(self, tmp_path):
        assert FileSnapshotStore(tmp_path / "none.json").load_snapshot() is None

    def test_save_then_load(self, tmp_path, played_state):
        path = tmp_path / "nested" / "game.json"
        store = FileSnapshotStore(path, game_id="kitchen")

        store.save_snapshot(played_state)

        assert path.exists()
        assert not path.with_suffix(".json.tmp").exists()
        assert json.loads(path.read_text())["game_id"] == "kitchen"
        assert FileSnapshotStore(path).load_snapshot() == played_state

    def test_corrupted_file(self, tmp_path, caplog):
        path = tmp_path / "game.json"
        path.write_text("]]]")

        assert FileSnapshotStore(path).load_snapshot() is None
        assert "Error loading game state" in caplog.text

    def test_unwritable_location(self, tmp_path, played_state):
        blocker = tmp_path / "file"
        blocker.write_text("")
        store = FileSnapshotStore(blocker / "game.json")

        with pytest.raises(PersistenceSaveFailure):
            store.save_snapshot(played_state)


class TestSupabaseSnapshotStore:
    def test_load(self, mock_client, played_state):
        table = mock_client.table.return_value
        table.execute.return_value.data = [GameSnapshot.from_state(played_state, "g1").model_dump(mode="json")]

        store = SupabaseSnapshotStore(mock_client, "g1")

        assert store.load_snapshot() == played_state
        mock_client.table.assert_called_with("game_state")
        table.eq.assert_called_with("game_id", "g1")

    def test_load_no_row(self, mock_client):
        mock_client.table.return_value.execute.return_value.data = []
        assert SupabaseSnapshotStore(mock_client).load_snapshot() is None

    def test_load_request_error(self, mock_client):
        mock_client.table.return_value.execute.side_effect = Exception("offline")
        assert SupabaseSnapshotStore(mock_client).load_snapshot() is None

    def test_load_bad_row(self, mock_client):
        mock_client.table.return_value.execute.return_value.data = [{"matrix": []}]
        assert SupabaseSnapshotStore(mock_client).load_snapshot() is None

    def test_save_upserts(self, mock_client, played_state):
        store = SupabaseSnapshotStore(mock_client, "g1")

        store.save_snapshot(played_state)

        table = mock_client.table.return_value
        row = table.upsert.call_args.args[0]
        assert row["game_id"] == "g1"
        assert row["player2_score"] == 36
        assert table.upsert.call_args.kwargs == {"on_conflict": "game_id"}

    def test_save_error(self, mock_client, played_state):
        mock_client.table.return_value.execute.side_effect = Exception("offline")
        with pytest.raises(PersistenceSaveFailure):
            SupabaseSnapshotStore(mock_client).save_snapshot(played_state)


class TestBuildSnapshotStore:
    def test_file_backend(self, tmp_path):
        settings = Settings(storage_backend="file", snapshot_path=tmp_path / "s.json", game_id="x")
        store = build_snapshot_store(settings)
        assert isinstance(store, FileSnapshotStore)
        assert store.path == tmp_path / "s.json"

    def test_memory_backend(self):
        assert isinstance(build_snapshot_store(Settings(storage_backend="memory")), MemorySnapshotStore)
