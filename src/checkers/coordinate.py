"""
A coordinate on the board, and the four diagonal directions pieces travel along.

(placed in its own module as every other module needs to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from string import ascii_uppercase, digits
from typing import Optional

# Checkers board is always 8x8 (square, so a single length suffices)
BOARD_LENGTH = 8

FILE_LETTERS = ascii_uppercase[:BOARD_LENGTH]

Vector = tuple[int, int]


@dataclass(frozen=True)
class Coordinate:
    """
    file: column, counted from the left (0-7)
    rank: row, counted from the top (0-7). Rank 0 is the Top player's back row.
    """

    file: int
    rank: int

    @classmethod
    def from_notation(cls, text: str) -> Optional[Coordinate]:
        """
        Display notation: 'A1' - 'H8' get converted to (0,0) - (7,7). The digit is the rank + 1.

        Returns None if the text cannot be read as a coordinate.
        """
        text = text.strip().upper()
        if len(text) != 2:
            return None

        letter, digit = text
        # ASCII digits only: str.isdigit() also accepts superscripts and other scripts
        if letter not in FILE_LETTERS or digit not in digits:
            return None

        rank = int(digit) - 1
        if not 0 <= rank < BOARD_LENGTH:
            return None
        return cls(FILE_LETTERS.index(letter), rank)

    def to_notation(self) -> str:
        """Only defined for coordinates on the board. Raises ValueError otherwise."""
        if not self.is_within_bounds():
            raise ValueError(f"Coordinate({self.file}, {self.rank}) is not on the board.")
        return f"{FILE_LETTERS[self.file]}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_LENGTH) and (0 <= self.rank < BOARD_LENGTH)

    def step(self, direction: Direction, magnitude: int = 1) -> Optional[Coordinate]:
        """
        Move `magnitude` spaces along the direction (1 for a normal move, 2 for a jump).
        Falling off the board means there is no such coordinate.
        """
        df, dr = direction.value
        target = Coordinate(self.file + df * magnitude, self.rank + dr * magnitude)
        if not target.is_within_bounds():
            return None
        return target

    def __str__(self) -> str:
        return self.to_notation()


class Direction(Enum):
    """Diagonal unit vectors (d_file, d_rank). 'Upper' means towards rank 0."""

    UPPER_LEFT = (-1, -1)
    UPPER_RIGHT = (1, -1)
    LOWER_LEFT = (-1, 1)
    LOWER_RIGHT = (1, 1)

    @property
    def opposite(self) -> Direction:
        df, dr = self.value
        return Direction((-df, -dr))

    @classmethod
    def between(cls, start: Coordinate, end: Coordinate) -> Direction:
        """Diagonal heading from start towards end. Only meaningful if both lie on the same diagonal."""
        df = 1 if end.file > start.file else -1
        dr = 1 if end.rank > start.rank else -1
        return cls((df, dr))
