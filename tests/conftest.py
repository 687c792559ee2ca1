"""
Boomero - Test Configuration and Fixtures

Common fixtures and state builders for all test modules.
"""

from dataclasses import replace
from typing import Callable

import pytest

from boomero.engine.base import Category, GameState


def build_state(
    hits: dict[int, tuple[int, int]] | None = None,
    **fields,
) -> GameState:
    """
    Create a GameState with selected hit counters preset.

    Args:
        hits: Mapping of matrix row to (player 1 hits, player 2 hits)
        **fields: Any other GameState field
    """
    state = GameState()
    for row, (p1, p2) in (hits or {}).items():
        state = state.with_hits(row, 1, p1).with_hits(row, 2, p2)
    return replace(state, **fields)


@pytest.fixture
def fresh_state() -> GameState:
    """Brand new game."""
    return GameState()


@pytest.fixture
def state_builder() -> Callable[..., GameState]:
    """Factory for GameState with preset hit counters."""
    return build_state


@pytest.fixture
def tracked_rows() -> Callable[[int, int], dict[int, tuple[int, int]]]:
    """Factory for hit counters on every tracked row (numbers 10-20 and categories)."""
    def _rows(p1: int = 3, p2: int = 3) -> dict[int, tuple[int, int]]:
        return {row: (p1, p2) for row in range(Category.FIRST_SCORING_ROW, Category.ROW_COUNT)}
    return _rows
