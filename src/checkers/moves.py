"""
Geometry of moves and the rules for which ones a checker may make.

Key idea: a single step (normal move or jump) is cheap to validate on its own.
Chains of jumps are found by recursing from every landing square, and the resulting flat set of steps is stitched
back together into Paths: the complete actions a player can commit to.

Turn order / who is allowed to move is handled by the Game.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Protocol, Self

from src.checkers.coordinate import Coordinate, Direction
from src.checkers.pieces import Checker
from src.core.shared_types import Side


class Board(Protocol):
    """Just the parts the movement rules need"""

    def checker(self, coordinate: Coordinate) -> Optional[Checker]: ...
    def checkers(self, side: Side) -> list[Checker]: ...
    def move(self, checker: Checker, from_: Coordinate, to: Coordinate) -> Self: ...


class MoveType(Enum):
    """Values are the number of spaces travelled"""

    NORMAL = 1
    JUMP = 2


@dataclass(frozen=True)
class Move:
    """A single step from a starting coordinate along one diagonal. The ending coordinate is derived, never stored."""

    start: Coordinate
    direction: Direction
    kind: MoveType = MoveType.NORMAL
    captured: Optional[Checker] = None

    @property
    def end(self) -> Optional[Coordinate]:
        return self.start.step(self.direction, self.kind.value)

    @property
    def is_jump(self) -> bool:
        return self.kind == MoveType.JUMP

    def to_notation(self) -> str:
        """ex. 'C6-D5' for a normal move, 'C6xE4' for a jump"""
        separator = "x" if self.is_jump else "-"
        end = self.end.to_notation() if self.end else "??"
        return f"{self.start.to_notation()}{separator}{end}"


@dataclass(frozen=True)
class Path:
    """Ordered chain of moves, each one starting where the previous one ended."""

    moves: tuple[Move, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)

    @property
    def start(self) -> Coordinate:
        return self.moves[0].start

    @property
    def end(self) -> Optional[Coordinate]:
        return self.moves[-1].end

    @property
    def is_jump(self) -> bool:
        return any(move.is_jump for move in self.moves)

    @property
    def captured(self) -> list[Checker]:
        return [move.captured for move in self.moves if move.captured is not None]

    def can_extend(self, move: Move) -> bool:
        """Only jumps chain, and the same piece cannot be jumped twice"""
        if not (move.is_jump and all(step.is_jump for step in self.moves)):
            return False
        if move.start != self.end or move in self.moves:
            return False
        assert move.captured is not None
        captured_squares = {checker.coordinate for checker in self.captured}
        return move.captured.coordinate not in captured_squares

    def extended(self, move: Move) -> Self:
        return type(self)(self.moves + (move,))

    def to_notation(self) -> str:
        """ex. 'C6xE4xG2'"""
        if not self.moves:
            return ""
        separator = "x" if self.is_jump else "-"
        squares = [self.start] + [move.end for move in self.moves if move.end]
        return separator.join(square.to_notation() for square in squares)


# --- MOVEMENT RULES ---
FORWARD_DIRECTIONS: dict[Side, list[Direction]] = {
    Side.TOP: [Direction.LOWER_LEFT, Direction.LOWER_RIGHT],
    Side.BOTTOM: [Direction.UPPER_LEFT, Direction.UPPER_RIGHT],
}

KING_DIRECTIONS: list[Direction] = [
    Direction.UPPER_LEFT,
    Direction.UPPER_RIGHT,
    Direction.LOWER_LEFT,
    Direction.LOWER_RIGHT,
]


def available_directions(side: Side, is_king: bool) -> list[Direction]:
    """Men only move forward (towards the opponent), kings in all four directions"""
    return KING_DIRECTIONS if is_king else FORWARD_DIRECTIONS[side]


def step_in_direction(
    checker: Checker, board: Board, direction: Direction
) -> Optional[Move]:
    """
    Look at the adjacent space along the direction:
    * empty --> normal move
    * opponent's piece, with an empty space right behind it --> jump, capturing that piece
    * anything else (own piece, blocked landing, edge of the board) --> no move
    """
    adjacent = checker.coordinate.step(direction, MoveType.NORMAL.value)
    if adjacent is None:
        return None

    occupant = board.checker(adjacent)
    if occupant is None:
        return Move(checker.coordinate, direction)

    if occupant.side == checker.side:
        return None

    landing = checker.coordinate.step(direction, MoveType.JUMP.value)
    if landing is None or board.checker(landing) is not None:
        return None
    return Move(checker.coordinate, direction, MoveType.JUMP, captured=occupant)


def legal_steps(checker: Checker, board: Board) -> list[Move]:
    """All single steps (normal moves and jumps) available to the checker"""
    moves: list[Move] = []
    for direction in available_directions(checker.side, checker.is_king):
        move = step_in_direction(checker, board, direction)
        if move is not None:
            moves.append(move)
    return moves


def legal_move_tree(checker: Checker, board: Board) -> tuple[Move, ...]:
    """
    Every move reachable from the checker's square in a single turn
    -----

    Starts from the legal steps, then extends every jump by looking for further jumps from its landing square.

    ---
    NOTE: Captured pieces stay on the board until the turn is played out, so they keep blocking landing squares,
    and the same piece can never be jumped twice (which also rules out jumping straight back).
    The lookups for each landing square happen on a fresh board snapshot with the mover relocated:
    no board is ever modified in place while searching.
    """
    found: dict[Move, None] = {}
    for move in legal_steps(checker, board):
        found[move] = None
        if move.is_jump:
            for continuation in _jump_continuations(
                checker, board, move, captured=frozenset()
            ):
                found[continuation] = None
    return tuple(found)


def _jump_continuations(
    checker: Checker,
    board: Board,
    jump: Move,
    captured: frozenset[Coordinate],
) -> list[Move]:
    """
    Recursively collect the jumps that can follow `jump`.
    Bounded: every level captures a different opponent piece.
    """
    assert jump.end is not None and jump.captured is not None
    captured = captured | {jump.captured.coordinate}
    landed_board = board.move(checker, jump.start, jump.end)
    # Direction choice sticks with the piece's kind at the start of the chain
    landed = Checker(checker.side, jump.end, is_king=checker.is_king)

    continuations: list[Move] = []
    for direction in available_directions(landed.side, landed.is_king):
        move = step_in_direction(landed, landed_board, direction)
        if move is None or not move.is_jump:
            continue
        assert move.captured is not None
        if move.captured.coordinate in captured:
            continue
        continuations.append(move)
        continuations.extend(_jump_continuations(landed, landed_board, move, captured))
    return continuations


def reconstruct_paths(
    moves: Iterable[Move], origin: Optional[Coordinate] = None
) -> list[Path]:
    """
    Stitch a flat collection of moves back together into paths.
    -----

    * Paths start at `origin`. If not given: at the moves whose start is not the end of any other move.
    * A path grows by a jump starting where it ended (see `Path.can_extend`)
    * Every prefix of a chain is a path of its own: a player may stop after any jump.
    """
    moves = list(dict.fromkeys(moves))
    if not moves:
        return []

    if origin is not None:
        roots = [move for move in moves if move.start == origin]
    else:
        ends = {move.end for move in moves}
        roots = [move for move in moves if move.start not in ends] or moves[:1]

    paths: list[Path] = []
    for root in roots:
        paths.extend(_grow(Path((root,)), moves))
    return paths


def _grow(path: Path, moves: list[Move]) -> list[Path]:
    """depth-first: the path itself, followed by every extension of it"""
    grown = [path]
    for move in moves:
        if path.can_extend(move):
            grown.extend(_grow(path.extended(move), moves))
    return grown


def legal_paths(checker: Checker, board: Board) -> list[Path]:
    """Convenience method: the complete set of actions for a single checker"""
    return reconstruct_paths(legal_move_tree(checker, board), origin=checker.coordinate)


def jump_paths(checker: Checker, board: Board) -> list[Path]:
    """The jump chains available from the checker's square (offered as continuation after a jump)"""
    jumps = [move for move in legal_move_tree(checker, board) if move.is_jump]
    return reconstruct_paths(jumps, origin=checker.coordinate)


def playable_checkers(side: Side, board: Board) -> list[Checker]:
    """Checkers of the given side that have at least one legal step"""
    return [
        checker for checker in board.checkers(side) if legal_steps(checker, board)
    ]


def all_legal_paths(side: Side, board: Board) -> list[Path]:
    paths: list[Path] = []
    for checker in board.checkers(side):
        paths.extend(legal_paths(checker, board))
    return paths
