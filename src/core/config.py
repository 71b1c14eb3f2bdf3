"""
Configuration accepted when a Game gets constructed.

Plain pydantic models: the display/settings layer fills these in, the domain layer only reads them.
"""

from typing import Optional, Self

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidConfigError
from src.core.shared_types import Side


class PlayerConfig(BaseModel):
    name: str
    side: Side
    is_ai: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise InvalidConfigError("Player name cannot be empty.")
        return name


class GameConfig(BaseModel):
    """Who plays which side, who moves first, and (optionally) the seed used by the random agent."""

    players: tuple[PlayerConfig, PlayerConfig]
    first_side: Side = Side.BOTTOM
    seed: Optional[int] = None

    @model_validator(mode="after")
    def validate_sides(self) -> Self:
        first, second = self.players
        if first.side == second.side:
            raise InvalidConfigError(
                f"Both players are configured to play the {first.side} side. Pick opposite sides."
            )
        return self

    @classmethod
    def default(cls) -> Self:
        """Two human players, Bottom moves first"""
        return cls(
            players=(
                PlayerConfig(name="Player 1", side=Side.BOTTOM),
                PlayerConfig(name="Player 2", side=Side.TOP),
            )
        )

    def player(self, side: Side) -> PlayerConfig:
        return next(player for player in self.players if player.side == side)
