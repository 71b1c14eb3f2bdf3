"""Defines the checker pieces and where they start / get crowned"""

from dataclasses import dataclass, replace
from typing import Self

from src.checkers.coordinate import BOARD_LENGTH, Coordinate
from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Side

# Each side fills the playable squares of the three rows closest to its own edge of the board
STARTING_RANKS: dict[Side, tuple[int, ...]] = {
    Side.TOP: (0, 1, 2),
    Side.BOTTOM: (BOARD_LENGTH - 3, BOARD_LENGTH - 2, BOARD_LENGTH - 1),
}

# A man becomes a king once it reaches the opponent's back row
PROMOTION_RANK: dict[Side, int] = {
    Side.TOP: BOARD_LENGTH - 1,
    Side.BOTTOM: 0,
}

PIECES_PER_SIDE = 12

# Characters used in board diagrams: men lower case, kings upper case
SIDE_TO_DIAGRAM: dict[Side, str] = {Side.TOP: "t", Side.BOTTOM: "b"}
DIAGRAM_TO_SIDE: dict[str, Side] = {value: key for key, value in SIDE_TO_DIAGRAM.items()}


@dataclass(frozen=True)
class Checker:
    side: Side
    coordinate: Coordinate
    is_king: bool = False
    # transient flag: set at the start of a turn for pieces that have at least one legal move
    moveable: bool = False

    @classmethod
    def from_diagram(cls, character: str, coordinate: Coordinate) -> Self:
        side = DIAGRAM_TO_SIDE.get(character.lower())
        if side is None:
            raise InvalidBoardError(
                f"Unknown piece character {character!r} at {coordinate}."
            )
        return cls(side, coordinate, is_king=character.isupper())

    def to_diagram(self) -> str:
        character = SIDE_TO_DIAGRAM[self.side]
        return character.upper() if self.is_king else character

    def moved_to(self, coordinate: Coordinate) -> Self:
        """The same piece standing on a new coordinate. Reaching the promotion rank crowns it (and a king stays a king)."""
        crowned = self.is_king or coordinate.rank == PROMOTION_RANK[self.side]
        return replace(self, coordinate=coordinate, is_king=crowned)

    def with_moveable(self, moveable: bool) -> Self:
        return replace(self, moveable=moveable)

    def __str__(self) -> str:
        kind = "king" if self.is_king else "man"
        return f"{self.side.capitalize()} {kind} on {self.coordinate}"
