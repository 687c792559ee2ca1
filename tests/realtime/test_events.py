"""Tests for boomero/realtime/events.py event classification."""

from dataclasses import replace

from boomero.engine.base import Dart, DartKind, GameState
from boomero.engine.dialogs import NO_DIALOG, CircleChoice, DoubleChoice, TurnSummary
from boomero.realtime.events import EventPayload, GameEvent, classify_transition

S20 = Dart(DartKind.SINGLE, 20)


class TestGameEvent:
    def test_all_events_exist(self):
        expected = {
            "DART_THROWN", "CHOICE_REQUIRED", "TURN_SUMMARY", "TURN_CONFIRMED",
            "TURN_RESET", "GAME_WON", "NEW_GAME", "STATE_UPDATED",
        }
        assert {e.name for e in GameEvent} == expected

    def test_payload_defaults(self):
        payload = EventPayload(event=GameEvent.NEW_GAME, player=1)
        assert payload.data == {}


class TestClassifyTransition:
    def test_dart_thrown(self):
        old = GameState()
        new = replace(old.with_dart(0, S20), current_dart_index=1)
        assert classify_transition(old, new, NO_DIALOG, NO_DIALOG) == GameEvent.DART_THROWN

    def test_choice_required(self):
        old = GameState()
        new = old.with_dart(0, Dart(DartKind.DOUBLE, 15))
        dialog = DoubleChoice(number=15, dart_index=0, scoring_player=1, pending_darts=new.current_turn_darts)
        assert classify_transition(old, new, NO_DIALOG, dialog) == GameEvent.CHOICE_REQUIRED

    def test_circle_choice_required(self):
        darts = (S20,) * 3
        old = GameState(current_dart_index=2, current_turn_darts=(S20, S20, None))
        new = GameState(current_dart_index=3, current_turn_darts=darts)
        dialog = CircleChoice(points=60, scoring_player=1, darts=darts)
        assert classify_transition(old, new, NO_DIALOG, dialog) == GameEvent.CHOICE_REQUIRED

    def test_turn_summary(self):
        darts = (S20, S20, Dart.miss())
        old = GameState(current_dart_index=2, current_turn_darts=(S20, S20, None))
        new = GameState(current_dart_index=3, current_turn_darts=darts)
        summary = TurnSummary(darts=darts, points_scored=0, current_player=1)
        assert classify_transition(old, new, NO_DIALOG, summary) == GameEvent.TURN_SUMMARY

    def test_turn_confirmed(self):
        darts = (S20, S20, Dart.miss())
        old = GameState(current_dart_index=3, current_turn_darts=darts)
        new = GameState(current_player=2)
        summary = TurnSummary(darts=darts, points_scored=0, current_player=1)
        assert classify_transition(old, new, summary, NO_DIALOG) == GameEvent.TURN_CONFIRMED

    def test_turn_reset(self):
        old = GameState(current_dart_index=2, current_turn_darts=(S20, S20, None))
        assert classify_transition(old, GameState(), NO_DIALOG, NO_DIALOG) == GameEvent.TURN_RESET

    def test_dismissed_first_dart_is_not_reset(self):
        old = GameState().with_dart(0, Dart(DartKind.DOUBLE, 15))
        dialog = DoubleChoice(number=15, dart_index=0, scoring_player=1, pending_darts=old.current_turn_darts)
        assert classify_transition(old, GameState(), dialog, NO_DIALOG) == GameEvent.STATE_UPDATED

    def test_game_won(self):
        old = GameState(current_dart_index=3, current_turn_darts=(S20, S20, S20))
        new = GameState(current_player=2, is_game_over=True, player1_score=80)
        assert classify_transition(old, new, NO_DIALOG, NO_DIALOG) == GameEvent.GAME_WON

    def test_nothing_changed(self):
        state = GameState()
        assert classify_transition(state, state, NO_DIALOG, NO_DIALOG) is None
