"""
Boomero - Game State Store

Owns the single current GameState and DialogState. Every command is applied
atomically through the turn state machine and the results are published on
the store's streams:

- ``game_state``: latest snapshot, replayed to new subscribers
- ``dialog_state``: latest pending decision, ``NoDialog`` by default
- ``messages``: transient notices, not replayed
- ``events``: classified game events, not replayed
"""

from __future__ import annotations

import logging
import threading

from boomero.database.snapshots import MemorySnapshotStore, SnapshotStore
from boomero.engine.base import DartKind, GameState
from boomero.engine.dialogs import NO_DIALOG, DialogState
from boomero.engine.scoring import ScoringEngine
from boomero.engine.turn import (
    ChooseCircle,
    ChooseDouble,
    ChooseTriple,
    Command,
    ConfirmTurn,
    DismissDialog,
    ResetTurn,
    ThrowDart,
    TurnPhase,
    TurnStateMachine,
)
from boomero.engine.validators import InvalidCommand, InvalidTarget
from boomero.realtime.events import EventPayload, GameEvent, classify_transition
from boomero.realtime.streams import MessageStream, StateStream

logger = logging.getLogger(__name__)


class GameStore:
    """Single source of truth for the running game.

    Commands never raise for user or protocol errors: invalid targets are
    reported on ``messages``, protocol violations are logged and ignored,
    and persistence failures are logged while play continues in memory.
    """

    def __init__(self, snapshots: SnapshotStore | None = None) -> None:
        self._snapshots = snapshots if snapshots is not None else MemorySnapshotStore()
        self._lock = threading.RLock()

        self.game_state: StateStream[GameState] = StateStream(self._load_initial_state(), "game_state")
        self.dialog_state: StateStream[DialogState] = StateStream(NO_DIALOG, "dialog_state")
        self.messages: MessageStream[str] = MessageStream("messages")
        self.events: MessageStream[EventPayload] = MessageStream("events")

    # -- Queries ---------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self.game_state.value

    @property
    def dialog(self) -> DialogState:
        return self.dialog_state.value

    @property
    def phase(self) -> TurnPhase:
        return TurnStateMachine.phase_of(self.state, self.dialog)

    @staticmethod
    def category_label(row: int) -> str:
        return ScoringEngine.category_label(row)

    # -- Commands --------------------------------------------------------

    def throw_dart(self, kind: DartKind, value: int = 0) -> None:
        self._dispatch(ThrowDart(kind=kind, value=value))

    def resolve_double_choice(self, number: int, dart_index: int, use_category: bool) -> None:
        self._dispatch(ChooseDouble(number=number, dart_index=dart_index, use_category=use_category))

    def resolve_triple_choice(self, number: int, dart_index: int, use_category: bool) -> None:
        self._dispatch(ChooseTriple(number=number, dart_index=dart_index, use_category=use_category))

    def resolve_circle_choice(self, use_circle: bool) -> None:
        self._dispatch(ChooseCircle(use_circle=use_circle))

    def confirm_turn(self) -> None:
        self._dispatch(ConfirmTurn())

    def reset_turn(self) -> None:
        self._dispatch(ResetTurn())

    def dismiss_dialog(self) -> None:
        self._dispatch(DismissDialog())

    def new_game(self) -> None:
        """Discard the current game and start a fresh one."""
        with self._lock:
            fresh = GameState()
            self.game_state.publish(fresh)
            self.dialog_state.publish(NO_DIALOG)
            self._persist(fresh)
            logger.info("New game started")
            self.messages.emit("New game started")
            self.events.emit(EventPayload(event=GameEvent.NEW_GAME, player=fresh.current_player))

    # -- Internals -------------------------------------------------------

    def _dispatch(self, command: Command) -> None:
        with self._lock:
            old_state, old_dialog = self.state, self.dialog
            try:
                transition = TurnStateMachine.apply(old_state, old_dialog, command)
            except InvalidTarget as exc:
                self.messages.emit(str(exc))
                return
            except InvalidCommand as exc:
                logger.warning("Ignoring %s: %s", type(command).__name__, exc)
                return

            self.game_state.publish(transition.state)
            self.dialog_state.publish(transition.dialog)
            if transition.persist:
                self._persist(transition.state)

            for notice in transition.notices:
                self.messages.emit(notice)

            event = classify_transition(old_state, transition.state, old_dialog, transition.dialog)
            if event is not None:
                self.events.emit(EventPayload(
                    event=event,
                    player=old_state.current_player,
                    data={"command": type(command).__name__, "dialog": type(transition.dialog).__name__},
                ))

    def _load_initial_state(self) -> GameState:
        try:
            state = self._snapshots.load_snapshot()
        except Exception:
            logger.exception("Error loading game state, using default")
            state = None
        return state if state is not None else GameState()

    def _persist(self, state: GameState) -> None:
        try:
            self._snapshots.save_snapshot(state)
        except Exception:
            logger.exception("Error saving game state")
