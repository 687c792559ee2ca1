"""
Boomero - Database Models

Pydantic models that mirror the `game_state` table and the JSON snapshot file.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from boomero.engine.base import DARTS_PER_TURN, Category, Dart, DartKind, GameState


class DartRecord(BaseModel):
    """Serialized form of a ``Dart``."""

    kind: DartKind
    value: int = Field(ge=0, le=20)
    valid: bool = True
    scored_as_category: bool = False
    scored_as_circle: bool = False

    model_config = {"from_attributes": True}

    def to_dart(self) -> Dart:
        return Dart(
            kind=self.kind,
            value=self.value,
            valid=self.valid,
            scored_as_category=self.scored_as_category,
            scored_as_circle=self.scored_as_circle,
        )


class GameSnapshot(BaseModel):
    """Mirrors the `game_state` table."""

    game_id: str = "local"
    player1_score: int = Field(default=0, ge=0)
    player2_score: int = Field(default=0, ge=0)
    current_player: int = Field(default=1, ge=1, le=2)
    current_dart_index: int = Field(default=0, ge=0, le=DARTS_PER_TURN)
    points_this_turn: int = Field(default=0, ge=0)
    is_game_over: bool = False
    matrix: list[list[int]] = Field(
        default_factory=lambda: [[0, 0] for _ in range(Category.ROW_COUNT)]
    )
    current_turn_darts: list[DartRecord | None] = Field(
        default_factory=lambda: [None] * DARTS_PER_TURN
    )
    updated_at: datetime | None = None

    @field_validator("matrix")
    @classmethod
    def _check_matrix(cls, rows: list[list[int]]) -> list[list[int]]:
        if len(rows) != Category.ROW_COUNT:
            raise ValueError(f"matrix must have {Category.ROW_COUNT} rows, got {len(rows)}")
        normalized = []
        for row in rows:
            # Older snapshots carry a third, unused middle column
            if len(row) == 3:
                row = [row[0], row[2]]
            if len(row) != 2 or min(row) < 0:
                raise ValueError(f"invalid matrix row {row}")
            normalized.append(row)
        return normalized

    @field_validator("current_turn_darts")
    @classmethod
    def _check_darts(cls, darts: list[DartRecord | None]) -> list[DartRecord | None]:
        if len(darts) != DARTS_PER_TURN:
            raise ValueError(f"current_turn_darts must have {DARTS_PER_TURN} slots, got {len(darts)}")
        return darts

    @classmethod
    def from_state(cls, state: GameState, game_id: str = "local") -> "GameSnapshot":
        """Build a snapshot from an engine state."""
        return cls(
            game_id=game_id,
            player1_score=state.player1_score,
            player2_score=state.player2_score,
            current_player=state.current_player,
            current_dart_index=state.current_dart_index,
            points_this_turn=state.points_this_turn,
            is_game_over=state.is_game_over,
            matrix=[list(row) for row in state.matrix],
            current_turn_darts=[
                DartRecord.model_validate(d) if d is not None else None
                for d in state.current_turn_darts
            ],
            updated_at=datetime.now(timezone.utc),
        )

    def to_state(self) -> GameState:
        """Convert back to an engine state."""
        return GameState(
            player1_score=self.player1_score,
            player2_score=self.player2_score,
            current_player=self.current_player,
            current_dart_index=self.current_dart_index,
            points_this_turn=self.points_this_turn,
            is_game_over=self.is_game_over,
            matrix=tuple((row[0], row[1]) for row in self.matrix),
            current_turn_darts=tuple(
                d.to_dart() if d is not None else None for d in self.current_turn_darts
            ),
        )
