"""
Boomero - Game Event Definitions

Event types and payloads describing what a state change meant, so the
presentation layer can react (animations, toasts) without diffing state.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from boomero.engine.base import GameState
from boomero.engine.dialogs import (
    CircleChoice,
    DialogState,
    DoubleChoice,
    TripleChoice,
    TurnSummary,
)


class GameEvent(Enum):
    """Events that can occur during a game."""

    DART_THROWN = auto()
    CHOICE_REQUIRED = auto()
    TURN_SUMMARY = auto()
    TURN_CONFIRMED = auto()
    TURN_RESET = auto()
    GAME_WON = auto()
    NEW_GAME = auto()
    STATE_UPDATED = auto()


@dataclass
class EventPayload:
    """Wrapper for game event data."""

    event: GameEvent
    player: int
    data: dict[str, Any] = field(default_factory=dict)


_CHOICE_DIALOGS = (DoubleChoice, TripleChoice, CircleChoice)


def classify_transition(
    old_state: GameState,
    new_state: GameState,
    old_dialog: DialogState,
    new_dialog: DialogState,
) -> GameEvent | None:
    """Determine the game event from a state/dialog change."""
    if new_state.is_game_over and not old_state.is_game_over:
        return GameEvent.GAME_WON
    if new_state.current_player != old_state.current_player and not new_state.recorded_darts:
        return GameEvent.TURN_CONFIRMED
    if isinstance(new_dialog, _CHOICE_DIALOGS) and new_dialog != old_dialog:
        return GameEvent.CHOICE_REQUIRED
    if isinstance(new_dialog, TurnSummary) and not isinstance(old_dialog, TurnSummary):
        return GameEvent.TURN_SUMMARY
    if old_state.current_dart_index > 0 and not new_state.recorded_darts:
        return GameEvent.TURN_RESET
    if new_state.current_dart_index > old_state.current_dart_index:
        return GameEvent.DART_THROWN
    if new_state != old_state or new_dialog != old_dialog:
        return GameEvent.STATE_UPDATED
    return None
