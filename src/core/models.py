"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The Game (domain layer) encodes its state into a GameModel, the Service turns that into responses for the API layer.
(Decouples the domain objects from what needs to be sent across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.shared_types import GamePhase, Side

# Type aliases to make GameModel easier to read
PlayerName = str
SquareName = str


@dataclass
class GameModel:
    """Transport-safe snapshot of a checkers game."""

    board: str  # board diagram, see Board.to_diagram()
    side_to_move: Side
    phase: GamePhase
    players: dict[Side, PlayerName]
    captures: dict[Side, int]
    selected: Optional[SquareName] = None
    targets: list[SquareName] = field(default_factory=list)
    log: list[str] = field(default_factory=list)
    winner: Optional[PlayerName] = None
