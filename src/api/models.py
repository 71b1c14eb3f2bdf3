"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.checkers.coordinate import Coordinate
from src.checkers.game import TurnAction
from src.core.config import GameConfig, PlayerConfig
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import ActionType, GamePhase, Side

PlayerName = str
SquareName = str

DEFAULT_OPPONENT_NAME = "Computer"


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    """
    What the settings screen asks for: your name and side, optionally an opponent.
    Without an opponent name (or with opponent_is_ai) the computer plays the other side.
    """

    player_name: PlayerName
    side: Side
    opponent_name: Optional[PlayerName] = None
    opponent_is_ai: bool = False
    first_side: Side = Side.BOTTOM
    seed: Optional[int] = None

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value.strip()

    def to_config(self) -> GameConfig:
        opponent_name = (self.opponent_name or "").strip()
        is_ai = self.opponent_is_ai or not opponent_name
        return GameConfig(
            players=(
                PlayerConfig(name=self.player_name, side=self.side),
                PlayerConfig(
                    name=opponent_name or DEFAULT_OPPONENT_NAME,
                    side=self.side.opposite,
                    is_ai=is_ai,
                ),
            ),
            first_side=self.first_side,
            seed=self.seed,
        )


class ActionRequest(BaseModel):
    action: ActionType
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if Coordinate.from_notation(value) is None:
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value.strip().upper()

    @property
    def coordinate(self) -> Coordinate:
        coordinate = Coordinate.from_notation(self.square)
        # for the type checker: validated on construction
        assert coordinate is not None
        return coordinate

    def to_turn_action(self) -> TurnAction:
        return TurnAction(self.action, self.coordinate)


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    board: str
    side_to_move: Side
    phase: GamePhase
    players: dict[Side, PlayerName]
    captures: dict[Side, int]
    selected: Optional[SquareName]
    targets: list[SquareName]
    log: list[str]
    winner: Optional[PlayerName]


class LegalMovesResponse(BaseModel):
    side: Side
    player_name: PlayerName
    legal_moves: list[str]
