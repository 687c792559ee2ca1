"""
Boomero - Scoring Engine

Rules of the closing game:
- Each player has a hit counter per row (numbers 1-20, DOUBLE, TRIPLE,
  BULLSEYE, CIRCLE); a row is closed for a player at 3 hits
- Hits beyond the third score the row's value while the opponent has not
  closed the same row
- Numbers under 10 never score as plain numbers; their doubles and triples go
  to the DOUBLE / TRIPLE rows
- Three darts on the same target may be scored as one CIRCLE hit worth their
  summed value

All methods are stateless class methods operating on immutable data.
State is passed in and returned, never stored.
"""

import logging
from dataclasses import dataclass, replace

from boomero.engine.base import (
    CLOSED_AT,
    DARTS_PER_TURN,
    Category,
    Dart,
    DartKind,
    GameState,
    TurnDarts,
    opponent_of,
)
from boomero.engine.dialogs import (
    NO_DIALOG,
    DialogState,
    DoubleChoice,
    TripleChoice,
    TurnSummary,
)
from boomero.engine.validators import (
    InvalidCommand,
    validate_bullseye_value,
    validate_number,
    validate_player,
)

logger = logging.getLogger(__name__)

BULL_POINTS = 25
MIN_SCORING_NUMBER = 10

_CATEGORY_LABELS = {
    Category.DOUBLE: "DBL",
    Category.TRIPLE: "TPL",
    Category.BULLSEYE: "BULL",
    Category.CIRCLE: "CIRC",
}


@dataclass(frozen=True)
class Resolution:
    """
    Result of resolving a throw or a choice.

    Attributes:
        state: Game state after the resolution
        dialog: Decision the player must make next (NoDialog if none)
        notices: Transient messages for the player
    """
    state: GameState
    dialog: DialogState = NO_DIALOG
    notices: tuple[str, ...] = ()

    @property
    def is_pending(self) -> bool:
        """True when the dart awaits a Double/Triple choice."""
        return isinstance(self.dialog, (DoubleChoice, TripleChoice))


class ScoringEngine:
    """
    Stateless engine for closing-game scoring.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    # === Single-dart resolvers ===

    @classmethod
    def resolve_single(cls, number: int, state: GameState) -> Resolution:
        """
        Resolve a SINGLE hit on a number.

        Args:
            number: Number hit (1-20)
            state: Current game state

        Returns:
            Resolution with the dart recorded and the dart index advanced

        Raises:
            InvalidTarget: If number is not 1-20
        """
        validate_number(number)
        index = cls._open_slot(state)
        player = state.current_player

        state, points = cls._add_hits(
            state, Category.number_row(number), player, 1, cls._number_value(number)
        )
        state = replace(
            state.with_dart(index, Dart(kind=DartKind.SINGLE, value=number)),
            points_this_turn=state.points_this_turn + points,
            current_dart_index=index + 1,
        )
        return Resolution(state=state, notices=cls._scored_notice(points))

    @classmethod
    def resolve_double(cls, number: int, needs_finalize: bool, state: GameState) -> Resolution:
        """
        Resolve a DOUBLE hit.

        Numbers under 10 go straight to the DOUBLE row. Numbers 10-20 are
        scored as two number hits when the choice is moot, otherwise a
        ``DoubleChoice`` is returned and the dart index is left in place.

        Raises:
            InvalidTarget: If number is not 1-20
        """
        return cls._resolve_multiple(DartKind.DOUBLE, number, needs_finalize, state)

    @classmethod
    def resolve_triple(cls, number: int, needs_finalize: bool, state: GameState) -> Resolution:
        """Resolve a TRIPLE hit; see ``resolve_double``."""
        return cls._resolve_multiple(DartKind.TRIPLE, number, needs_finalize, state)

    @classmethod
    def resolve_bullseye(cls, value: int, state: GameState) -> Resolution:
        """
        Resolve a bullseye (value 1 = single bull, 2 = double bull).

        A double bull adds two hits, each checked against the running counter,
        but still counts as one dart.

        Raises:
            InvalidTarget: If value is not 1 or 2
        """
        validate_bullseye_value(value)
        index = cls._open_slot(state)

        state, points = cls._add_hits(
            state, Category.BULLSEYE, state.current_player, value, BULL_POINTS
        )
        state = replace(
            state.with_dart(index, Dart(kind=DartKind.BULLSEYE, value=value)),
            points_this_turn=state.points_this_turn + points,
            current_dart_index=index + 1,
        )
        added = "Added double bullseye" if value == 2 else "Added single bullseye"
        return Resolution(state=state, notices=(added,) + cls._scored_notice(points))

    @classmethod
    def resolve_miss(cls, state: GameState) -> Resolution:
        """Record a miss: no hits, no points, one dart used."""
        index = cls._open_slot(state)
        state = replace(state.with_dart(index, Dart.miss()), current_dart_index=index + 1)
        return Resolution(state=state, notices=("Recorded miss (0 points)",))

    # === Choice resolvers ===

    @classmethod
    def resolve_double_choice(
        cls,
        number: int,
        dart_index: int,
        use_category: bool,
        choice: DoubleChoice,
        state: GameState,
    ) -> Resolution:
        """
        Apply the player's answer to a ``DoubleChoice``.

        Args:
            number: Number of the pending double
            dart_index: Slot of the pending dart
            use_category: True to add one hit to the DOUBLE row, False to add
                          two hits to the number row
            choice: The pending dialog (provides the scoring player)
            state: Current game state
        """
        return cls._resolve_choice(DartKind.DOUBLE, number, dart_index, use_category, choice, state)

    @classmethod
    def resolve_triple_choice(
        cls,
        number: int,
        dart_index: int,
        use_category: bool,
        choice: TripleChoice,
        state: GameState,
    ) -> Resolution:
        """Apply the player's answer to a ``TripleChoice``."""
        return cls._resolve_choice(DartKind.TRIPLE, number, dart_index, use_category, choice, state)

    # === Circle ===

    @classmethod
    def evaluate_circle_eligibility(cls, state: GameState) -> bool:
        """
        Check whether the turn's darts can be scored as a circle.

        True when three darts are recorded, none is a miss, all share the same
        value, and either all or none of them are bullseyes.
        """
        darts = state.current_turn_darts
        if len(darts) != DARTS_PER_TURN or any(d is None or not d.valid for d in darts):
            return False
        if len({d.value for d in darts}) != 1:
            return False
        bulls = [d.kind == DartKind.BULLSEYE for d in darts]
        return all(bulls) or not any(bulls)

    @classmethod
    def compute_circle_points(cls, darts: TurnDarts) -> int:
        """
        Calculate the value of a circle.

        Bullseyes are worth 25 (single) or 50 (double) each. Otherwise each
        dart is worth the shared base number times its multiplier.
        """
        if not darts or darts[0] is None:
            return 0

        first = darts[0]
        if first.kind == DartKind.BULLSEYE:
            return sum(50 if d.value == 2 else BULL_POINTS for d in darts if d is not None)

        total = 0
        for dart in darts:
            if dart is not None and dart.kind in (DartKind.SINGLE, DartKind.DOUBLE, DartKind.TRIPLE):
                total += first.value * dart.multiplier
        return total

    @classmethod
    def resolve_circle_auto(
        cls, points: int, player: int, darts: TurnDarts, state: GameState
    ) -> Resolution:
        """
        Score the turn as one CIRCLE hit.

        Removes every dart's own matrix contribution, then adds a hit to the
        CIRCLE row. The circle is worth ``points`` only once the player had
        already closed CIRCLE and the opponent has not.
        """
        validate_player(player)
        state = cls.reverse_contributions(state, darts, player)
        state, scored = cls._add_hits(state, Category.CIRCLE, player, 1, points)

        marked = tuple(
            replace(d, scored_as_category=True, scored_as_circle=True) if d is not None else None
            for d in darts
        )
        state = replace(state, points_this_turn=scored, current_turn_darts=marked)
        logger.debug("Circle scored for player %d: %d points", player, scored)
        return Resolution(
            state=state,
            dialog=TurnSummary(darts=marked, points_scored=scored, current_player=player),
            notices=("Scored as circle",) + cls._scored_notice(scored),
        )

    @classmethod
    def resolve_circle_choice(
        cls,
        use_circle: bool,
        points: int,
        player: int,
        darts: TurnDarts,
        state: GameState,
    ) -> Resolution:
        """Apply the player's answer to a ``CircleChoice``."""
        if use_circle:
            return cls.resolve_circle_auto(points, player, darts, state)
        return cls.reprocess_as_numbers(player, darts, state)

    @classmethod
    def reprocess_as_numbers(cls, player: int, darts: TurnDarts, state: GameState) -> Resolution:
        """
        Re-score the turn's darts as plain hits.

        All contributions are removed, then the darts are replayed in throw
        order so threshold crossings follow the running counter. The turn's
        points are rebuilt from zero.
        """
        validate_player(player)
        state = cls.reverse_contributions(state, darts, player)
        state, points, replayed = cls.replay_darts(state, darts, player)
        state = replace(state, points_this_turn=points, current_turn_darts=replayed)
        return Resolution(
            state=state,
            dialog=TurnSummary(darts=replayed, points_scored=points, current_player=player),
            notices=cls._scored_notice(points),
        )

    # === Reversal and replay ===

    @classmethod
    def reverse_contributions(
        cls, state: GameState, darts: TurnDarts, player: int
    ) -> GameState:
        """
        Remove the matrix hits a turn's darts contributed, floored at zero.

        A fully circle-scored turn contributed exactly one CIRCLE hit.
        """
        present = [d for d in darts if d is not None]
        if len(present) == DARTS_PER_TURN and all(d.scored_as_circle for d in present):
            return state.with_hits(Category.CIRCLE, player, state.hits(Category.CIRCLE, player) - 1)

        for dart in present:
            contribution = cls._contribution(dart)
            if contribution is None:
                continue
            row, hits = contribution
            state = state.with_hits(row, player, state.hits(row, player) - hits)
        return state

    @classmethod
    def replay_darts(
        cls, state: GameState, darts: TurnDarts, player: int
    ) -> tuple[GameState, int, TurnDarts]:
        """
        Apply darts in order as plain number (or bull) hits.

        Returns:
            Tuple of (new_state, points_scored, darts_with_flags_cleared)
        """
        points = 0
        replayed: list[Dart | None] = []
        for dart in darts:
            if dart is None:
                replayed.append(None)
                continue
            if dart.valid:
                if dart.kind == DartKind.BULLSEYE:
                    row, value = Category.BULLSEYE, BULL_POINTS
                else:
                    row, value = Category.number_row(dart.value), cls._number_value(dart.value)
                state, scored = cls._add_hits(state, row, player, dart.multiplier, value)
                points += scored
            replayed.append(replace(dart, scored_as_category=False, scored_as_circle=False))
        return state, points, tuple(replayed)

    # === Game end ===

    @classmethod
    def has_completed_all(cls, state: GameState, player: int) -> bool:
        """True when the player has closed numbers 10-20 and every category."""
        return all(
            cls._clamped(state, row, player) >= CLOSED_AT
            for row in range(Category.FIRST_SCORING_ROW, Category.ROW_COUNT)
        )

    @classmethod
    def can_still_score(cls, state: GameState, player: int) -> bool:
        """True when some row is closed for ``player`` but open for the opponent."""
        other = opponent_of(player)
        return any(
            cls._clamped(state, row, player) >= CLOSED_AT and cls._clamped(state, row, other) < CLOSED_AT
            for row in range(Category.FIRST_SCORING_ROW, Category.ROW_COUNT)
        )

    @classmethod
    def has_won(cls, state: GameState, player: int) -> bool:
        """
        Check whether a player has won.

        The player must have completed every row, lead on score, and the
        opponent must either be unable to score or have completed too.
        """
        if not cls.has_completed_all(state, player):
            return False
        other = opponent_of(player)
        if state.score_of(player) <= state.score_of(other):
            return False
        return not cls.can_still_score(state, other) or cls.has_completed_all(state, other)

    @classmethod
    def check_game_end(cls, state: GameState) -> bool:
        """True when either player has won or both have completed every row."""
        return (
            cls.has_won(state, 1)
            or cls.has_won(state, 2)
            or (cls.has_completed_all(state, 1) and cls.has_completed_all(state, 2))
        )

    @classmethod
    def winner(cls, state: GameState) -> int | None:
        """
        Determine the winner by raw score.

        Returns:
            1 if player 1 leads, 2 if player 2 leads, None for a tie
        """
        if state.player1_score > state.player2_score:
            return 1
        if state.player2_score > state.player1_score:
            return 2
        return None

    @classmethod
    def category_label(cls, row: int) -> str:
        """Display label of a matrix row: "1".."20", "DBL", "TPL", "BULL", "CIRC"."""
        if 0 <= row < Category.DOUBLE:
            return str(row + 1)
        return _CATEGORY_LABELS.get(row, "???")

    @classmethod
    def is_eliminated(cls, state: GameState, number: int, category_row: int) -> bool:
        """
        Whether a double/triple on ``number`` needs no player decision.

        Either both players have closed the number itself, or both have closed
        the DOUBLE/TRIPLE row so the category can no longer score.
        """
        number_row = Category.number_row(number)
        return cls._mutually_closed(state, number_row) or cls._mutually_closed(state, category_row)

    # === Internals ===

    @classmethod
    def _resolve_multiple(
        cls, kind: DartKind, number: int, needs_finalize: bool, state: GameState
    ) -> Resolution:
        validate_number(number)
        index = cls._open_slot(state)
        player = state.current_player
        category_row = cls._category_row(kind)

        state = state.with_dart(index, Dart(kind=kind, value=number))
        logger.debug(
            "Resolving %s %d for player %d (last dart: %s)",
            kind.name, number, player, needs_finalize,
        )

        if number < MIN_SCORING_NUMBER:
            state, points = cls._apply_hit(state, kind, number, index, player, use_category=True)
        elif cls.is_eliminated(state, number, category_row):
            state, points = cls._apply_hit(state, kind, number, index, player, use_category=False)
        else:
            choice_type = DoubleChoice if kind == DartKind.DOUBLE else TripleChoice
            dialog = choice_type(
                number=number,
                dart_index=index,
                scoring_player=player,
                pending_darts=state.current_turn_darts,
            )
            return Resolution(state=state, dialog=dialog)

        state = replace(
            state,
            points_this_turn=state.points_this_turn + points,
            current_dart_index=index + 1,
        )
        return Resolution(state=state, notices=cls._scored_notice(points))

    @classmethod
    def _resolve_choice(
        cls,
        kind: DartKind,
        number: int,
        dart_index: int,
        use_category: bool,
        choice: DoubleChoice | TripleChoice,
        state: GameState,
    ) -> Resolution:
        validate_number(number)
        if not (0 <= dart_index < DARTS_PER_TURN):
            raise InvalidCommand(f"Dart index must be between 0 and {DARTS_PER_TURN - 1}, got {dart_index}")

        player = choice.scoring_player
        state, points = cls._apply_hit(state, kind, number, dart_index, player, use_category)
        state = replace(
            state,
            points_this_turn=state.points_this_turn + points,
            current_dart_index=dart_index + 1,
            current_player=player,
        )
        return Resolution(state=state, notices=cls._scored_notice(points))

    @classmethod
    def _apply_hit(
        cls,
        state: GameState,
        kind: DartKind,
        number: int,
        index: int,
        player: int,
        use_category: bool,
    ) -> tuple[GameState, int]:
        """Score a DOUBLE/TRIPLE dart on its category row or its number row."""
        dart = Dart(kind=kind, value=number, scored_as_category=use_category)
        if use_category:
            state, points = cls._add_hits(
                state, cls._category_row(kind), player, 1, number * dart.multiplier
            )
        else:
            state, points = cls._add_hits(
                state, Category.number_row(number), player, dart.multiplier, cls._number_value(number)
            )
        return state.with_dart(index, dart), points

    @classmethod
    def _add_hits(
        cls, state: GameState, row: int, player: int, hits: int, points_per_hit: int
    ) -> tuple[GameState, int]:
        """
        Add hits to a row one at a time.

        A hit scores ``points_per_hit`` when the player had already closed the
        row before it and the opponent has not closed it.
        """
        other = opponent_of(player)
        count = state.hits(row, player)
        opponent_closed = state.hits(row, other) >= CLOSED_AT
        points = 0
        for _ in range(hits):
            if count >= CLOSED_AT and not opponent_closed:
                points += points_per_hit
            count += 1
        return state.with_hits(row, player, count), points

    @classmethod
    def _contribution(cls, dart: Dart) -> tuple[int, int] | None:
        """Row and hit count a dart added to the matrix."""
        if not dart.valid or dart.kind == DartKind.MISS:
            return None
        if dart.kind == DartKind.BULLSEYE:
            return Category.BULLSEYE, dart.multiplier
        if dart.scored_as_category and dart.kind in (DartKind.DOUBLE, DartKind.TRIPLE):
            return cls._category_row(dart.kind), 1
        return Category.number_row(dart.value), dart.multiplier

    @classmethod
    def _open_slot(cls, state: GameState) -> int:
        if state.current_dart_index >= DARTS_PER_TURN:
            raise InvalidCommand("All three darts of this turn have been thrown.")
        return state.current_dart_index

    @classmethod
    def _mutually_closed(cls, state: GameState, row: int) -> bool:
        return cls._clamped(state, row, 1) >= CLOSED_AT and cls._clamped(state, row, 2) >= CLOSED_AT

    @staticmethod
    def _clamped(state: GameState, row: int, player: int) -> int:
        return min(state.hits(row, player), CLOSED_AT)

    @staticmethod
    def _category_row(kind: DartKind) -> int:
        return Category.DOUBLE if kind == DartKind.DOUBLE else Category.TRIPLE

    @staticmethod
    def _number_value(number: int) -> int:
        return number if number >= MIN_SCORING_NUMBER else 0

    @staticmethod
    def _scored_notice(points: int) -> tuple[str, ...]:
        return (f"Scored {points} points",) if points else ()
