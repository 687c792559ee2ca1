"""
Boomero Game Engine.

Pure Python game logic with zero UI/database dependencies.
Handles hit counting, closing, circle scoring and turn sequencing.
"""

from boomero.engine.base import Category, Dart, DartKind, GameState
from boomero.engine.dialogs import (
    NO_DIALOG,
    CircleChoice,
    DialogState,
    DoubleChoice,
    NoDialog,
    TripleChoice,
    TurnSummary,
)
from boomero.engine.scoring import Resolution, ScoringEngine
from boomero.engine.turn import (
    ChooseCircle,
    ChooseDouble,
    ChooseTriple,
    Command,
    ConfirmTurn,
    DismissDialog,
    ResetTurn,
    ThrowDart,
    Transition,
    TurnPhase,
    TurnStateMachine,
)
from boomero.engine.validators import InvalidChoiceContext, InvalidCommand, InvalidTarget

__all__ = [
    # Data Classes
    "Dart",
    "GameState",
    "Resolution",
    "Transition",
    # Enums
    "Category",
    "DartKind",
    "TurnPhase",
    # Dialogs
    "DialogState",
    "NoDialog",
    "NO_DIALOG",
    "DoubleChoice",
    "TripleChoice",
    "CircleChoice",
    "TurnSummary",
    # Commands
    "Command",
    "ThrowDart",
    "ChooseDouble",
    "ChooseTriple",
    "ChooseCircle",
    "ConfirmTurn",
    "ResetTurn",
    "DismissDialog",
    # Errors
    "InvalidTarget",
    "InvalidCommand",
    "InvalidChoiceContext",
    # Engines
    "ScoringEngine",
    "TurnStateMachine",
]
