"""
Boomero - Input Validation Utilities

Provides validation functions for game engine inputs and the engine's error
types. All validators either return validated data or raise descriptive
exceptions.
"""

from boomero.engine.base import PLAYERS


class InvalidTarget(ValueError):
    """A throw aimed at a number or bullseye value that does not exist."""


class InvalidCommand(RuntimeError):
    """A command that is not allowed in the current turn phase."""


class InvalidChoiceContext(InvalidCommand):
    """A choice answer arrived while no matching dialog was pending."""


INVALID_NUMBER_MESSAGE = "Invalid number. Must be between 1 and 20."
INVALID_BULLSEYE_MESSAGE = "Invalid bullseye type. Use 1 for single (25) or 2 for double (50)."
INVALID_KIND_MESSAGE = "Invalid dart type. Use single, double, triple, bullseye or miss."


def validate_number(number: int) -> int:
    """
    Validate a board number.

    Args:
        number: Number hit by a SINGLE, DOUBLE or TRIPLE dart

    Returns:
        Validated number

    Raises:
        InvalidTarget: If number is not 1-20
    """
    if not isinstance(number, int) or isinstance(number, bool):
        raise InvalidTarget(INVALID_NUMBER_MESSAGE)
    if not (1 <= number <= 20):
        raise InvalidTarget(INVALID_NUMBER_MESSAGE)
    return number


def validate_bullseye_value(value: int) -> int:
    """
    Validate a bullseye value (1 = single bull, 2 = double bull).

    Raises:
        InvalidTarget: If value is not 1 or 2
    """
    if value not in (1, 2) or isinstance(value, bool):
        raise InvalidTarget(INVALID_BULLSEYE_MESSAGE)
    return value


def validate_player(player: int) -> int:
    """
    Validate a player number.

    Raises:
        ValueError: If player is not 1 or 2
    """
    if player not in PLAYERS:
        raise ValueError(f"Player must be 1 or 2, got {player}.")
    return player
