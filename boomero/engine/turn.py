"""
Boomero - Turn State Machine

Sequences scoring engine calls across a turn's three darts:

    AWAITING_THROW --(ambiguous double/triple)--> AWAITING_CHOICE
    AWAITING_THROW --(third dart, same target)--> AWAITING_CIRCLE_DECISION
    AWAITING_THROW --(third dart)--> AWAITING_TURN_SUMMARY
    AWAITING_TURN_SUMMARY --confirm--> AWAITING_THROW (next player)
    any phase --reset--> AWAITING_THROW (same player, turn undone)

Every transition is a pure function of ``(GameState, DialogState, Command)``.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum, auto

from boomero.engine.base import DARTS_PER_TURN, DartKind, GameState, empty_turn
from boomero.engine.dialogs import (
    NO_DIALOG,
    CircleChoice,
    DialogState,
    DoubleChoice,
    NoDialog,
    TripleChoice,
    TurnSummary,
)
from boomero.engine.scoring import MIN_SCORING_NUMBER, Resolution, ScoringEngine
from boomero.engine.validators import (
    INVALID_KIND_MESSAGE,
    InvalidChoiceContext,
    InvalidCommand,
    InvalidTarget,
)

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Where the active turn stands."""
    AWAITING_THROW = auto()
    AWAITING_CHOICE = auto()
    AWAITING_CIRCLE_DECISION = auto()
    AWAITING_TURN_SUMMARY = auto()
    GAME_OVER = auto()


# === Commands ===


@dataclass(frozen=True)
class ThrowDart:
    kind: DartKind
    value: int = 0


@dataclass(frozen=True)
class ChooseDouble:
    number: int
    dart_index: int
    use_category: bool


@dataclass(frozen=True)
class ChooseTriple:
    number: int
    dart_index: int
    use_category: bool


@dataclass(frozen=True)
class ChooseCircle:
    use_circle: bool


@dataclass(frozen=True)
class ConfirmTurn:
    pass


@dataclass(frozen=True)
class ResetTurn:
    pass


@dataclass(frozen=True)
class DismissDialog:
    pass


Command = (
    ThrowDart | ChooseDouble | ChooseTriple | ChooseCircle | ConfirmTurn | ResetTurn | DismissDialog
)


@dataclass(frozen=True)
class Transition:
    """
    Outcome of applying a command.

    Attributes:
        state: New game state
        dialog: New dialog state
        notices: Transient messages for the player
        persist: Whether the new state must be saved
    """
    state: GameState
    dialog: DialogState = NO_DIALOG
    notices: tuple[str, ...] = ()
    persist: bool = False

    @classmethod
    def from_resolution(cls, resolution: Resolution) -> "Transition":
        return cls(state=resolution.state, dialog=resolution.dialog, notices=resolution.notices)


class TurnStateMachine:
    """Stateless turn sequencing on top of ``ScoringEngine``."""

    @classmethod
    def phase_of(cls, state: GameState, dialog: DialogState) -> TurnPhase:
        """Derive the turn phase from the current state and dialog."""
        if isinstance(dialog, (DoubleChoice, TripleChoice)):
            return TurnPhase.AWAITING_CHOICE
        if isinstance(dialog, CircleChoice):
            return TurnPhase.AWAITING_CIRCLE_DECISION
        if isinstance(dialog, TurnSummary):
            return TurnPhase.AWAITING_TURN_SUMMARY
        if state.is_game_over:
            return TurnPhase.GAME_OVER
        return TurnPhase.AWAITING_THROW

    @classmethod
    def apply(cls, state: GameState, dialog: DialogState, command: Command) -> Transition:
        """
        Apply a command to the current state and dialog.

        Raises:
            InvalidTarget: Throw at a number or bull value that does not exist
            InvalidChoiceContext: Choice answer with no matching dialog
            InvalidCommand: Command not allowed in the current phase
        """
        if isinstance(command, ThrowDart):
            return cls.throw(state, dialog, command.kind, command.value)
        if isinstance(command, ChooseDouble):
            return cls.choose_double(state, dialog, command.number, command.dart_index, command.use_category)
        if isinstance(command, ChooseTriple):
            return cls.choose_triple(state, dialog, command.number, command.dart_index, command.use_category)
        if isinstance(command, ChooseCircle):
            return cls.choose_circle(state, dialog, command.use_circle)
        if isinstance(command, ConfirmTurn):
            return cls.confirm(state, dialog)
        if isinstance(command, ResetTurn):
            return cls.reset(state, dialog)
        if isinstance(command, DismissDialog):
            return cls.dismiss(state, dialog)
        raise TypeError(f"Unknown command: {command!r}")

    @classmethod
    def throw(cls, state: GameState, dialog: DialogState, kind: DartKind, value: int) -> Transition:
        """Resolve one dart and, after the third, complete the turn."""
        if not isinstance(dialog, NoDialog):
            raise InvalidCommand("Resolve the pending decision before throwing.")
        if state.is_game_over:
            raise InvalidCommand("The game is over.")
        if state.current_dart_index >= DARTS_PER_TURN:
            raise InvalidCommand("All three darts of this turn have been thrown.")

        needs_finalize = state.current_dart_index == DARTS_PER_TURN - 1

        if kind == DartKind.SINGLE:
            resolution = ScoringEngine.resolve_single(value, state)
        elif kind == DartKind.DOUBLE:
            resolution = ScoringEngine.resolve_double(value, needs_finalize, state)
        elif kind == DartKind.TRIPLE:
            resolution = ScoringEngine.resolve_triple(value, needs_finalize, state)
        elif kind == DartKind.BULLSEYE:
            resolution = ScoringEngine.resolve_bullseye(value, state)
        elif kind == DartKind.MISS:
            resolution = ScoringEngine.resolve_miss(state)
        else:
            raise InvalidTarget(INVALID_KIND_MESSAGE)

        if resolution.is_pending:
            logger.debug("Dart %d awaits a choice", state.current_dart_index)
            return Transition.from_resolution(resolution)
        return cls._after_dart(resolution)

    @classmethod
    def complete_turn(cls, state: GameState, skip_circle_check: bool = False) -> Transition:
        """
        Finish a turn once all three darts are resolved.

        Three plain singles on the same number under 10 are scored as a circle
        automatically. Other circles ask the player. Everything else goes to
        the turn summary.

        Args:
            state: State with three resolved darts
            skip_circle_check: Go straight to the summary without circle logic
        """
        if state.current_dart_index != DARTS_PER_TURN:
            raise InvalidCommand("The turn is not complete.")

        player = state.current_player
        darts = state.current_turn_darts

        if not skip_circle_check and ScoringEngine.evaluate_circle_eligibility(state):
            points = ScoringEngine.compute_circle_points(darts)
            if all(d.kind == DartKind.SINGLE and d.value < MIN_SCORING_NUMBER for d in darts):
                logger.debug("Auto-scoring circle for player %d", player)
                return Transition.from_resolution(
                    ScoringEngine.resolve_circle_auto(points, player, darts, state)
                )
            return Transition(
                state=state,
                dialog=CircleChoice(points=points, scoring_player=player, darts=darts),
            )

        return Transition(
            state=state,
            dialog=TurnSummary(darts=darts, points_scored=state.points_this_turn, current_player=player),
        )

    @classmethod
    def choose_double(
        cls, state: GameState, dialog: DialogState, number: int, dart_index: int, use_category: bool
    ) -> Transition:
        if not isinstance(dialog, DoubleChoice) or (dialog.number, dialog.dart_index) != (number, dart_index):
            raise InvalidChoiceContext(f"No double choice pending for {number} at dart {dart_index}.")
        return cls._after_dart(
            ScoringEngine.resolve_double_choice(number, dart_index, use_category, dialog, state)
        )

    @classmethod
    def choose_triple(
        cls, state: GameState, dialog: DialogState, number: int, dart_index: int, use_category: bool
    ) -> Transition:
        if not isinstance(dialog, TripleChoice) or (dialog.number, dialog.dart_index) != (number, dart_index):
            raise InvalidChoiceContext(f"No triple choice pending for {number} at dart {dart_index}.")
        return cls._after_dart(
            ScoringEngine.resolve_triple_choice(number, dart_index, use_category, dialog, state)
        )

    @classmethod
    def choose_circle(cls, state: GameState, dialog: DialogState, use_circle: bool) -> Transition:
        if not isinstance(dialog, CircleChoice):
            raise InvalidChoiceContext("No circle choice pending.")
        return Transition.from_resolution(
            ScoringEngine.resolve_circle_choice(
                use_circle, dialog.points, dialog.scoring_player, dialog.darts, state
            )
        )

    @classmethod
    def confirm(cls, state: GameState, dialog: DialogState) -> Transition:
        """Commit the turn's points and hand the board to the other player."""
        if not isinstance(dialog, TurnSummary):
            raise InvalidCommand("There is no turn summary to confirm.")

        player = state.current_player
        points = state.points_this_turn
        state = replace(
            state,
            player1_score=state.player1_score + (points if player == 1 else 0),
            player2_score=state.player2_score + (points if player == 2 else 0),
            current_player=state.opponent,
            current_dart_index=0,
            points_this_turn=0,
            current_turn_darts=empty_turn(),
        )

        notices = [f"Player {player} scored {points} points"]
        if not state.is_game_over and ScoringEngine.check_game_end(state):
            state = replace(state, is_game_over=True)
            winner = ScoringEngine.winner(state)
            notices.append(f"Game over! Player {winner} wins" if winner else "Game over! It's a tie")
            logger.info("Game over: player1=%d player2=%d", state.player1_score, state.player2_score)

        return Transition(state=state, dialog=NO_DIALOG, notices=tuple(notices), persist=True)

    @classmethod
    def reset(cls, state: GameState, dialog: DialogState) -> Transition:
        """Undo every hit of the unconfirmed turn; the same player throws again."""
        darts = state.current_turn_darts
        if isinstance(dialog, (DoubleChoice, TripleChoice)):
            # The pending dart has not touched the matrix yet
            darts = state.with_dart(dialog.dart_index, None).current_turn_darts

        state = ScoringEngine.reverse_contributions(state, darts, state.current_player)
        state = replace(
            state,
            current_dart_index=0,
            points_this_turn=0,
            current_turn_darts=empty_turn(),
        )
        return Transition(
            state=state, dialog=NO_DIALOG, notices=("Turn reset successfully",), persist=True
        )

    @classmethod
    def dismiss(cls, state: GameState, dialog: DialogState) -> Transition:
        """
        Close the current dialog without answering it.

        A pending double/triple is withdrawn so the dart can be entered again.
        A dismissed circle keeps the darts as they were scored. A turn summary
        stays until the turn is confirmed or reset.
        """
        if isinstance(dialog, (DoubleChoice, TripleChoice)):
            return Transition(
                state=state.with_dart(dialog.dart_index, None),
                dialog=NO_DIALOG,
                notices=("Throw cancelled",),
            )
        if isinstance(dialog, CircleChoice):
            return cls.complete_turn(state, skip_circle_check=True)
        return Transition(state=state, dialog=dialog)

    @classmethod
    def _after_dart(cls, resolution: Resolution) -> Transition:
        if resolution.state.current_dart_index < DARTS_PER_TURN:
            return Transition.from_resolution(resolution)
        completion = cls.complete_turn(resolution.state)
        return replace(completion, notices=resolution.notices + completion.notices)
