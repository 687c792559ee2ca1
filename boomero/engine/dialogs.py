"""
Boomero - Dialog States

Pending player decisions and notifications. Exactly one dialog state is live
at a time; ``NoDialog`` is the default.
"""

from dataclasses import dataclass

from boomero.engine.base import TurnDarts


@dataclass(frozen=True)
class NoDialog:
    """No pending decision."""


@dataclass(frozen=True)
class DoubleChoice:
    """
    A double on a number >= 10 that could count on the number or the DOUBLE row.

    Attributes:
        number: The number hit (10-20)
        dart_index: Slot of the provisional dart awaiting resolution
        scoring_player: Player who threw the dart
        pending_darts: Turn darts at the moment the choice was raised
    """
    number: int
    dart_index: int
    scoring_player: int
    pending_darts: TurnDarts


@dataclass(frozen=True)
class TripleChoice:
    """A triple on a number >= 10; see ``DoubleChoice``."""
    number: int
    dart_index: int
    scoring_player: int
    pending_darts: TurnDarts


@dataclass(frozen=True)
class CircleChoice:
    """
    All three darts share a target: score them as one CIRCLE hit or as numbers.

    Attributes:
        points: Circle value of the three darts
        scoring_player: Player who threw the darts
        darts: The three darts of the turn
    """
    points: int
    scoring_player: int
    darts: TurnDarts


@dataclass(frozen=True)
class TurnSummary:
    """Final confirmation before the turn is committed."""
    darts: TurnDarts
    points_scored: int
    current_player: int


DialogState = NoDialog | DoubleChoice | TripleChoice | CircleChoice | TurnSummary

NO_DIALOG = NoDialog()
