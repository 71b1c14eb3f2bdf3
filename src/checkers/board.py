"""
The Game board: 64 spaces, the pieces standing on them and the highlights the display layer shows.

A Board is a value snapshot. Every 'mutation' returns a new Board, the Game keeps the sequence of snapshots.
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Iterable, Iterator, Optional, Self

from src.checkers.coordinate import BOARD_LENGTH, Coordinate
from src.checkers.pieces import STARTING_RANKS, Checker
from src.core.exceptions import GameStateError, InvalidBoardError
from src.core.shared_types import Side

EMPTY_DIAGRAM_CHAR = "."


class Highlight(Enum):
    """Mutually exclusive: a space is at most one of these at a time."""

    NONE = auto()
    SELECTED = auto()
    OCCUPIABLE = auto()
    OCCUPIABLE_BY_JUMP = auto()


@dataclass(frozen=True)
class Space:
    coordinate: Coordinate
    playable: bool
    occupant: Optional[Checker] = None
    highlight: Highlight = Highlight.NONE

    @property
    def is_occupied(self) -> bool:
        return self.occupant is not None


def is_playable(coordinate: Coordinate) -> bool:
    """Only the dark squares are used. With (0,0) light, those are the ones with an odd coordinate sum."""
    return (coordinate.file + coordinate.rank) % 2 == 1


@dataclass(frozen=True)
class Board:
    # indexed as spaces[rank][file]
    spaces: tuple[tuple[Space, ...], ...]

    # -- CREATION LOGIC ---
    @classmethod
    def generate(cls) -> Self:
        """Empty board, playability alternating with the coordinate-sum parity"""
        return cls(
            tuple(
                tuple(
                    Space(Coordinate(file, rank), is_playable(Coordinate(file, rank)))
                    for file in range(BOARD_LENGTH)
                )
                for rank in range(BOARD_LENGTH)
            )
        )

    @classmethod
    def starting_position(cls) -> Self:
        return cls.generate().layout_checkers()

    def layout_checkers(self) -> Self:
        """Twelve men per side on the playable squares of their three starting rows. Only valid on an empty board."""
        if any(space.is_occupied for space in self):
            raise GameStateError("Checkers can only be laid out on an empty board.")

        board = self
        for side, ranks in STARTING_RANKS.items():
            for space in self:
                if space.playable and space.coordinate.rank in ranks:
                    board = board.place(Checker(side, space.coordinate))
        return board

    @classmethod
    def from_diagram(cls, diagram: str) -> Self:
        """
        Construct a board from a text diagram.

        Ranks are separated by slashes and read from rank 0 (Top's back row) to rank 7.
        Every rank has one character per file:
        * '.' an empty space
        * 't' / 'T' a Top man / king
        * 'b' / 'B' a Bottom man / king

        ex. the starting position:
        .t.t.t.t/t.t.t.t./.t.t.t.t/......../......../b.b.b.b./.b.b.b.b/b.b.b.b.
        """
        rows = diagram.strip().split("/")
        if len(rows) != BOARD_LENGTH:
            raise InvalidBoardError(
                f"Diagram needs {BOARD_LENGTH} ranks, found {len(rows)}: {diagram!r}"
            )

        board = cls.generate()
        for rank, row in enumerate(rows):
            if len(row) != BOARD_LENGTH:
                raise InvalidBoardError(
                    f"Rank {rank} needs {BOARD_LENGTH} characters, found {len(row)}: {row!r}"
                )
            for file, character in enumerate(row):
                if character == EMPTY_DIAGRAM_CHAR:
                    continue
                coordinate = Coordinate(file, rank)
                if not is_playable(coordinate):
                    raise InvalidBoardError(
                        f"Pieces can only stand on playable squares. Found {character!r} on {coordinate}."
                    )
                board = board.place(Checker.from_diagram(character, coordinate))
        return board

    def to_diagram(self) -> str:
        return "/".join(
            "".join(
                space.occupant.to_diagram() if space.occupant else EMPTY_DIAGRAM_CHAR
                for space in row
            )
            for row in self.spaces
        )

    # -- QUERIES ---
    def __iter__(self) -> Iterator[Space]:
        for row in self.spaces:
            yield from row

    def space(self, coordinate: Coordinate) -> Space:
        return self.spaces[coordinate.rank][coordinate.file]

    def checker(self, coordinate: Coordinate) -> Optional[Checker]:
        return self.space(coordinate).occupant

    def is_empty(self, coordinate: Coordinate) -> bool:
        return self.checker(coordinate) is None

    def checkers(self, side: Side) -> list[Checker]:
        return [
            space.occupant
            for space in self
            if space.occupant is not None and space.occupant.side == side
        ]

    @property
    def selected(self) -> Optional[Space]:
        return next(
            (space for space in self if space.highlight == Highlight.SELECTED), None
        )

    @property
    def occupiable(self) -> list[Space]:
        return [
            space
            for space in self
            if space.highlight in (Highlight.OCCUPIABLE, Highlight.OCCUPIABLE_BY_JUMP)
        ]

    @property
    def moveable(self) -> list[Space]:
        return [
            space for space in self if space.occupant and space.occupant.moveable
        ]

    def diff(self, other: "Board") -> set[Space]:
        """
        The spaces of this board whose content differs from the same space on the other board.

        NOTE: only meant to limit what a display needs to redraw. Gameplay never looks at this.
        """
        return {space for space in self if space != other.space(space.coordinate)}

    # -- UPDATES (each returns a new Board) ---
    def select(self, coordinate: Coordinate) -> Self:
        """Only one space is selected at a time"""
        board = self.clear_all_selected()
        return board._set_highlight(coordinate, Highlight.SELECTED)

    def move(self, checker: Checker, from_: Coordinate, to: Coordinate) -> Self:
        """Relocate the checker. Crowning happens as the checker takes on its new coordinate."""
        moved = checker.moved_to(to)
        return self._with_spaces(
            [
                replace(self.space(from_), occupant=None),
                replace(self.space(to), occupant=moved),
            ]
        )

    def place(self, checker: Checker) -> Self:
        return self._with_spaces(
            [replace(self.space(checker.coordinate), occupant=checker)]
        )

    def remove(self, coordinate: Coordinate) -> Self:
        return self._with_spaces([replace(self.space(coordinate), occupant=None)])

    def mark_occupiable(self, coordinate: Coordinate, by_jump: bool = False) -> Self:
        highlight = Highlight.OCCUPIABLE_BY_JUMP if by_jump else Highlight.OCCUPIABLE
        return self._set_highlight(coordinate, highlight)

    def mark_moveable(self, coordinates: Iterable[Coordinate]) -> Self:
        updated: list[Space] = []
        for coordinate in coordinates:
            space = self.space(coordinate)
            if space.occupant is None:
                continue
            updated.append(replace(space, occupant=space.occupant.with_moveable(True)))
        return self._with_spaces(updated)

    def clear_all_selected(self) -> Self:
        return self._clear_highlights((Highlight.SELECTED,))

    def clear_all_occupiable(self) -> Self:
        return self._clear_highlights(
            (Highlight.OCCUPIABLE, Highlight.OCCUPIABLE_BY_JUMP)
        )

    def clear_all_moveable(self) -> Self:
        return self._with_spaces(
            [
                replace(space, occupant=space.occupant.with_moveable(False))
                for space in self.moveable
                if space.occupant is not None
            ]
        )

    # -- PRIVATE HELPERS ---
    def _set_highlight(self, coordinate: Coordinate, highlight: Highlight) -> Self:
        return self._with_spaces([replace(self.space(coordinate), highlight=highlight)])

    def _clear_highlights(self, highlights: tuple[Highlight, ...]) -> Self:
        return self._with_spaces(
            [
                replace(space, highlight=Highlight.NONE)
                for space in self
                if space.highlight in highlights
            ]
        )

    def _with_spaces(self, updated: Iterable[Space]) -> Self:
        """Copy of this board with the given spaces swapped in (matched by coordinate)"""
        rows = [list(row) for row in self.spaces]
        for space in updated:
            rows[space.coordinate.rank][space.coordinate.file] = space
        return replace(self, spaces=tuple(tuple(row) for row in rows))
