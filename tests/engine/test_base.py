"""
Boomero - Base Classes Tests

Tests for dataclasses, enums, and validation utilities.
"""

import pytest

from boomero.engine.base import (
    Category,
    Dart,
    DartKind,
    GameState,
    empty_matrix,
    opponent_of,
)
from boomero.engine.dialogs import NO_DIALOG, DoubleChoice, NoDialog
from boomero.engine.validators import (
    InvalidChoiceContext,
    InvalidCommand,
    InvalidTarget,
    validate_bullseye_value,
    validate_number,
    validate_player,
)


class TestCategory:
    """Tests for matrix row constants."""

    def test_category_rows(self):
        assert Category.DOUBLE == 20
        assert Category.TRIPLE == 21
        assert Category.BULLSEYE == 22
        assert Category.CIRCLE == 23

    def test_number_row(self):
        assert Category.number_row(1) == 0
        assert Category.number_row(20) == 19

    def test_row_count(self):
        assert len(empty_matrix()) == Category.ROW_COUNT == 24


class TestDart:
    """Tests for Dart dataclass."""

    @pytest.mark.parametrize("kind,value,expected", [
        (DartKind.SINGLE, 20, 1),
        (DartKind.DOUBLE, 20, 2),
        (DartKind.TRIPLE, 20, 3),
        (DartKind.BULLSEYE, 1, 1),
        (DartKind.BULLSEYE, 2, 2),
        (DartKind.MISS, 0, 0),
    ])
    def test_multiplier(self, kind, value, expected):
        assert Dart(kind=kind, value=value).multiplier == expected

    @pytest.mark.parametrize("dart,label", [
        (Dart(DartKind.SINGLE, 7), "S7"),
        (Dart(DartKind.DOUBLE, 15), "D15"),
        (Dart(DartKind.TRIPLE, 20), "T20"),
        (Dart(DartKind.BULLSEYE, 1), "BULL"),
        (Dart(DartKind.BULLSEYE, 2), "DBULL"),
        (Dart.miss(), "MISS"),
    ])
    def test_label(self, dart, label):
        assert dart.label == label

    def test_miss_is_invalid(self):
        miss = Dart.miss()
        assert miss.valid is False
        assert miss.value == 0

    def test_defaults(self):
        dart = Dart(DartKind.SINGLE, 5)
        assert dart.valid is True
        assert dart.scored_as_category is False
        assert dart.scored_as_circle is False

    def test_frozen(self):
        dart = Dart(DartKind.SINGLE, 5)
        with pytest.raises(AttributeError):
            dart.value = 6


class TestGameState:
    """Tests for GameState dataclass."""

    def test_fresh_state(self, fresh_state):
        assert fresh_state.player1_score == 0
        assert fresh_state.player2_score == 0
        assert fresh_state.current_player == 1
        assert fresh_state.current_dart_index == 0
        assert fresh_state.points_this_turn == 0
        assert fresh_state.is_game_over is False
        assert fresh_state.current_turn_darts == (None, None, None)
        assert all(counts == (0, 0) for counts in fresh_state.matrix)

    def test_turns_left(self, fresh_state):
        assert fresh_state.turns_left == 3

    def test_with_hits_is_copy(self, fresh_state):
        updated = fresh_state.with_hits(19, 1, 3)
        assert updated.hits(19, 1) == 3
        assert updated.hits(19, 2) == 0
        assert fresh_state.hits(19, 1) == 0

    def test_with_hits_floors_at_zero(self, fresh_state):
        assert fresh_state.with_hits(5, 2, -4).hits(5, 2) == 0

    def test_with_dart(self, fresh_state):
        dart = Dart(DartKind.SINGLE, 20)
        updated = fresh_state.with_dart(1, dart)
        assert updated.current_turn_darts == (None, dart, None)
        assert updated.recorded_darts == (dart,)

    def test_score_of(self, state_builder):
        state = state_builder(player1_score=40, player2_score=15)
        assert state.score_of(1) == 40
        assert state.score_of(2) == 15

    def test_opponent(self, state_builder):
        assert state_builder(current_player=1).opponent == 2
        assert state_builder(current_player=2).opponent == 1
        assert opponent_of(2) == 1

    def test_invalid_player_raises(self):
        with pytest.raises(ValueError, match="current_player"):
            GameState(current_player=3)

    def test_invalid_dart_index_raises(self):
        with pytest.raises(ValueError, match="current_dart_index"):
            GameState(current_dart_index=4)

    def test_wrong_matrix_size_raises(self):
        with pytest.raises(ValueError, match="24 rows"):
            GameState(matrix=((0, 0),) * 23)

    def test_negative_counter_raises(self):
        rows = list(empty_matrix())
        rows[3] = (-1, 0)
        with pytest.raises(ValueError, match="row 3"):
            GameState(matrix=tuple(rows))

    def test_wrong_slot_count_raises(self):
        with pytest.raises(ValueError, match="3 slots"):
            GameState(current_turn_darts=(None, None))

    def test_equality(self):
        assert GameState() == GameState()
        assert GameState().with_hits(0, 1, 1) != GameState()


class TestDialogs:
    """Tests for dialog states."""

    def test_no_dialog_singleton_equal(self):
        assert NO_DIALOG == NoDialog()

    def test_choice_carries_context(self):
        darts = (Dart(DartKind.DOUBLE, 15), None, None)
        choice = DoubleChoice(number=15, dart_index=0, scoring_player=2, pending_darts=darts)
        assert choice.scoring_player == 2
        assert choice.pending_darts[0].value == 15


class TestValidators:
    """Tests for input validators."""

    @pytest.mark.parametrize("number", [1, 10, 20])
    def test_valid_numbers(self, number):
        assert validate_number(number) == number

    @pytest.mark.parametrize("number", [0, 21, -1, 25])
    def test_invalid_numbers(self, number):
        with pytest.raises(InvalidTarget, match="between 1 and 20"):
            validate_number(number)

    def test_non_int_number(self):
        with pytest.raises(InvalidTarget):
            validate_number("20")

    @pytest.mark.parametrize("value", [1, 2])
    def test_valid_bullseye(self, value):
        assert validate_bullseye_value(value) == value

    @pytest.mark.parametrize("value", [0, 3, 25, 50])
    def test_invalid_bullseye(self, value):
        with pytest.raises(InvalidTarget, match="bullseye"):
            validate_bullseye_value(value)

    def test_invalid_target_is_value_error(self):
        assert issubclass(InvalidTarget, ValueError)

    def test_choice_context_is_invalid_command(self):
        assert issubclass(InvalidChoiceContext, InvalidCommand)

    def test_validate_player(self):
        assert validate_player(1) == 1
        with pytest.raises(ValueError, match="Player must be 1 or 2"):
            validate_player(0)
