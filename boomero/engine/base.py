"""
Boomero - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses) so every state
change produces a new snapshot and the old one can be compared or discarded.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar


class DartKind(Enum):
    """Outcome of a single throw."""
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    BULLSEYE = "bullseye"
    MISS = "miss"


class Category:
    """Row indices of the hit matrix.

    Rows 0-19 hold the numbers 1-20 (row = number - 1). The four special
    categories follow.
    """
    DOUBLE: ClassVar[int] = 20
    TRIPLE: ClassVar[int] = 21
    BULLSEYE: ClassVar[int] = 22
    CIRCLE: ClassVar[int] = 23

    ROW_COUNT: ClassVar[int] = 24
    FIRST_SCORING_ROW: ClassVar[int] = 9  # number 10

    @staticmethod
    def number_row(number: int) -> int:
        return number - 1


CLOSED_AT = 3
DARTS_PER_TURN = 3
PLAYERS = (1, 2)

Matrix = tuple[tuple[int, int], ...]


def empty_matrix() -> Matrix:
    """Fresh 24x2 hit matrix."""
    return tuple((0, 0) for _ in range(Category.ROW_COUNT))


@dataclass(frozen=True)
class Dart:
    """
    Immutable record of one resolved throw.

    Attributes:
        kind: What the dart hit
        value: 1-20 for SINGLE/DOUBLE/TRIPLE, 1 (25) or 2 (50) for BULLSEYE,
               0 for MISS
        valid: False only for a miss
        scored_as_category: DOUBLE/TRIPLE hit resolved against the DOUBLE or
                            TRIPLE row instead of the number row
        scored_as_circle: Dart was folded into a CIRCLE-row resolution
    """
    kind: DartKind
    value: int
    valid: bool = True
    scored_as_category: bool = False
    scored_as_circle: bool = False

    @classmethod
    def miss(cls) -> "Dart":
        return cls(kind=DartKind.MISS, value=0, valid=False)

    @property
    def multiplier(self) -> int:
        """Hits this dart adds to a number row (or bull row)."""
        if self.kind == DartKind.SINGLE:
            return 1
        if self.kind == DartKind.DOUBLE:
            return 2
        if self.kind == DartKind.TRIPLE:
            return 3
        if self.kind == DartKind.BULLSEYE:
            return 2 if self.value == 2 else 1
        return 0

    @property
    def label(self) -> str:
        """Short board notation, e.g. ``T20`` or ``DBULL``."""
        if self.kind == DartKind.MISS:
            return "MISS"
        if self.kind == DartKind.BULLSEYE:
            return "DBULL" if self.value == 2 else "BULL"
        prefix = {DartKind.SINGLE: "S", DartKind.DOUBLE: "D", DartKind.TRIPLE: "T"}
        return f"{prefix[self.kind]}{self.value}"


TurnDarts = tuple[Dart | None, Dart | None, Dart | None]


def empty_turn() -> TurnDarts:
    return (None, None, None)


@dataclass(frozen=True)
class GameState:
    """
    Complete authoritative snapshot of a game.

    Attributes:
        player1_score: Committed points of player 1
        player2_score: Committed points of player 2
        current_player: Player whose turn it is (1 or 2)
        current_dart_index: Darts resolved in the active turn (0-3)
        points_this_turn: Provisional points, committed on confirm
        is_game_over: Terminal flag
        matrix: 24 rows of (player 1 hits, player 2 hits)
        current_turn_darts: The three dart slots of the active turn
    """
    player1_score: int = 0
    player2_score: int = 0
    current_player: int = 1
    current_dart_index: int = 0
    points_this_turn: int = 0
    is_game_over: bool = False
    matrix: Matrix = field(default_factory=empty_matrix)
    current_turn_darts: TurnDarts = field(default_factory=empty_turn)

    def __post_init__(self) -> None:
        """Validate structural invariants."""
        if self.current_player not in PLAYERS:
            raise ValueError(f"current_player must be 1 or 2, got {self.current_player}")
        if not (0 <= self.current_dart_index <= DARTS_PER_TURN):
            raise ValueError(
                f"current_dart_index must be between 0 and {DARTS_PER_TURN}, "
                f"got {self.current_dart_index}"
            )
        if len(self.matrix) != Category.ROW_COUNT:
            raise ValueError(f"Matrix must have {Category.ROW_COUNT} rows, got {len(self.matrix)}")
        for row, counts in enumerate(self.matrix):
            if len(counts) != 2 or min(counts) < 0:
                raise ValueError(f"Invalid hit counters {counts} on row {row}")
        if len(self.current_turn_darts) != DARTS_PER_TURN:
            raise ValueError(
                f"current_turn_darts must have {DARTS_PER_TURN} slots, "
                f"got {len(self.current_turn_darts)}"
            )

    @property
    def turns_left(self) -> int:
        """Darts remaining in the active turn."""
        return DARTS_PER_TURN - self.current_dart_index

    @property
    def opponent(self) -> int:
        return opponent_of(self.current_player)

    @property
    def recorded_darts(self) -> tuple[Dart, ...]:
        """Filled dart slots in throw order."""
        return tuple(d for d in self.current_turn_darts if d is not None)

    def hits(self, row: int, player: int) -> int:
        return self.matrix[row][player - 1]

    def score_of(self, player: int) -> int:
        return self.player1_score if player == 1 else self.player2_score

    def with_hits(self, row: int, player: int, count: int) -> "GameState":
        """Return a copy with one hit counter replaced (floored at 0)."""
        rows = list(self.matrix)
        counts = list(rows[row])
        counts[player - 1] = max(0, count)
        rows[row] = (counts[0], counts[1])
        return replace(self, matrix=tuple(rows))

    def with_dart(self, index: int, dart: Dart | None) -> "GameState":
        """Return a copy with one dart slot replaced."""
        darts = list(self.current_turn_darts)
        darts[index] = dart
        return replace(self, current_turn_darts=tuple(darts))


def opponent_of(player: int) -> int:
    return 2 if player == 1 else 1
