"""
The Game class is the entrypoint into the domain layer for the service layer (and for any display / input layer).
It is responsible for orchestrating everything required to play a turn:
select a piece --> move it --> capture --> promote --> end the turn --> next player.

Illegal actions (selecting an opponent's piece, moving to a square that is not a legal target, acting after the game ended)
are ignored: nothing changes. Callers inspect the resulting board / phase to notice.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional, Self

from src.checkers.board import Board, Space
from src.checkers.coordinate import Coordinate
from src.checkers.moves import Path, jump_paths, legal_paths, playable_checkers
from src.checkers.pieces import Checker
from src.core.config import GameConfig
from src.core.models import GameModel
from src.core.shared_types import ActionType, GameOverReason, GamePhase, Side

logger = logging.getLogger(__name__)


@dataclass
class Player:
    name: str
    side: Side
    is_ai: bool = False
    captured: list[Checker] = field(default_factory=list)

    @property
    def capture_count(self) -> int:
        return len(self.captured)

    def __str__(self) -> str:
        return f"{self.side.capitalize()} ({self.name})"


@dataclass(frozen=True)
class TurnAction:
    kind: ActionType
    coordinate: Coordinate

    def __str__(self) -> str:
        return f"{self.kind} {self.coordinate}"


@dataclass(frozen=True)
class Selection:
    """The selected piece's square and everything it can do from there."""

    coordinate: Coordinate
    paths: tuple[Path, ...]
    # True when the piece already jumped this turn and is offered to keep jumping
    continuing: bool = False

    def path_to(self, target: Coordinate) -> Optional[Path]:
        """If several paths end on the target, take the one capturing the most pieces (first found on a tie)"""
        candidates = [path for path in self.paths if path.end == target]
        if not candidates:
            return None
        return max(candidates, key=lambda path: len(path.captured))


@dataclass
class Turn:
    side: Side
    board_at_start: Board
    board_at_end: Optional[Board] = None
    actions: list[TurnAction] = field(default_factory=list)
    log: list[str] = field(default_factory=list)
    selection: Optional[Selection] = None


@dataclass(frozen=True)
class GameResult:
    winner: Player
    loser: Player
    reason: GameOverReason


# -- OBSERVERS ---
BoardChangedCallback = Callable[[Board, set[Space]], None]
GameStartedCallback = Callable[[Board], None]
ActionCallback = Callable[[str], None]
CapturesChangedCallback = Callable[[Player], None]
GameOverCallback = Callable[[GameResult], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event, fired after a transition got committed."""

    on_board_changed: list[BoardChangedCallback] = field(default_factory=list)
    on_game_started: list[GameStartedCallback] = field(default_factory=list)
    on_action: list[ActionCallback] = field(default_factory=list)
    on_captures_changed: list[CapturesChangedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


@dataclass
class Game:
    board: Board
    players: dict[Side, Player]
    turn: Turn
    timeline: list[Turn] = field(default_factory=list)
    history: list[Board] = field(default_factory=list)
    phase: GamePhase = GamePhase.NOT_STARTED
    result: Optional[GameResult] = None
    events: GameEvents = field(default_factory=GameEvents)

    @classmethod
    def new_game(cls, config: GameConfig, board: Optional[Board] = None) -> Self:
        """
        Set up a game from the configuration. Starts from the standard layout unless a board is given.

        NOTE: subscribe to `events` before calling `start()`, otherwise you miss the start of the game.
        """
        board = board if board is not None else Board.starting_position()
        players = {
            player.side: Player(player.name, player.side, player.is_ai)
            for player in config.players
        }
        return cls(
            board=board,
            players=players,
            turn=Turn(config.first_side, board),
            history=[board],
        )

    # --- DOMAIN LAYER API ---
    @property
    def current_player(self) -> Player:
        return self.players[self.turn.side]

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def selection(self) -> Optional[Selection]:
        return self.turn.selection

    def start(self) -> None:
        if self.phase != GamePhase.NOT_STARTED:
            logger.debug("Game already started, ignoring start()")
            return
        logger.info(
            "New game: %s vs %s",
            self.players[Side.BOTTOM],
            self.players[Side.TOP],
        )
        for callback in self.events.on_game_started:
            callback(self.board)
        self._start_turn()

    def take_action(self, action: TurnAction) -> Board:
        """Single entry point for player actions. Returns the (possibly unchanged) board."""
        handlers: dict[ActionType, Callable[[Coordinate], bool]] = {
            ActionType.SELECT: self._select,
            ActionType.DESELECT: self._deselect,
            ActionType.MOVE: self._move,
        }
        if self.phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            logger.debug("Ignoring %s: game is %s", action, self.phase)
            return self.board

        accepted = handlers[action.kind](action.coordinate)
        if not accepted:
            logger.debug("Ignoring illegal action %s by %s", action, self.current_player)
        return self.board

    def select(self, coordinate: Coordinate) -> Board:
        return self.take_action(TurnAction(ActionType.SELECT, coordinate))

    def deselect(self, coordinate: Coordinate) -> Board:
        return self.take_action(TurnAction(ActionType.DESELECT, coordinate))

    def move(self, coordinate: Coordinate) -> Board:
        return self.take_action(TurnAction(ActionType.MOVE, coordinate))

    def changed_spaces(self) -> set[Space]:
        """Spaces that changed with the last committed snapshot (for incremental redraws)"""
        if len(self.history) < 2:
            return set(self.board)
        return self.board.diff(self.history[-2])

    def to_model(self) -> GameModel:
        """Encode into the format the Service layer uses"""
        selection = self.selection
        return GameModel(
            board=self.board.to_diagram(),
            side_to_move=self.turn.side,
            phase=self.phase,
            players={side: player.name for side, player in self.players.items()},
            captures={side: player.capture_count for side, player in self.players.items()},
            selected=selection.coordinate.to_notation() if selection else None,
            targets=[target.to_notation() for target in self._targets(selection)],
            log=[line for turn in self.timeline for line in turn.log] + self.turn.log,
            winner=self.result.winner.name if self.result else None,
        )

    # --- TRANSITIONS ---
    def _start_turn(self) -> None:
        """
        Mark the pieces that can move. The side to move loses if it has nothing left to move.
        """
        side = self.turn.side
        if not self.board.checkers(side):
            self._game_over(loser=side, reason=GameOverReason.ALL_CAPTURED)
            return

        moveable = playable_checkers(side, self.board)
        if not moveable:
            self._game_over(loser=side, reason=GameOverReason.NO_LEGAL_MOVES)
            return

        self.phase = GamePhase.AWAITING_SELECTION
        self._commit(
            self.board.mark_moveable(checker.coordinate for checker in moveable)
        )
        logger.info(
            "Turn %d: %s to move", len(self.timeline) + 1, self.current_player
        )

    def _select(self, coordinate: Coordinate) -> bool:
        checker = self.board.checker(coordinate)
        if checker is None or checker.side != self.turn.side:
            return False

        selection = self.turn.selection
        if selection is not None and selection.continuing:
            # mid-chain: the jumping piece is the only one allowed to act
            return False

        paths = tuple(legal_paths(checker, self.board))
        self._show_selection(Selection(coordinate, paths))
        self._record(TurnAction(ActionType.SELECT, coordinate), f"selected {coordinate}")
        logger.debug(
            "%s can play: %s",
            checker,
            ", ".join(path.to_notation() for path in paths) or "nothing",
        )
        return True

    def _deselect(self, coordinate: Coordinate) -> bool:
        selection = self.turn.selection
        if selection is None or selection.coordinate != coordinate:
            return False

        self.turn.selection = None
        self._commit(self.board.clear_all_selected().clear_all_occupiable())
        self._record(
            TurnAction(ActionType.DESELECT, coordinate), f"deselected {coordinate}"
        )

        if selection.continuing:
            # Stopping halfway through a chain of jumps: the turn is over
            self._end_turn()
        else:
            self.phase = GamePhase.AWAITING_SELECTION
        return True

    def _move(self, target: Coordinate) -> bool:
        selection = self.turn.selection
        if selection is None:
            return False
        path = selection.path_to(target)
        if path is None:
            return False

        checker = self.board.checker(selection.coordinate)
        assert checker is not None
        was_king = checker.is_king

        board = self.board
        mover = self.current_player
        for move in path:
            assert move.end is not None
            board = board.move(checker, move.start, move.end)
            if move.captured is not None:
                board = board.remove(move.captured.coordinate)
                mover.captured.append(move.captured)
            moved = board.checker(move.end)
            assert moved is not None
            checker = moved

        self._commit(board.clear_all_selected().clear_all_occupiable())
        self._record(TurnAction(ActionType.MOVE, target), f"moved {path.to_notation()}")
        if path.is_jump:
            for callback in self.events.on_captures_changed:
                callback(mover)

        crowned = checker.is_king and not was_king
        if crowned:
            logger.info("%s got crowned on %s", mover, target)

        continuations = (
            tuple(jump_paths(checker, self.board)) if path.is_jump and not crowned else ()
        )
        if continuations:
            self._show_selection(Selection(target, continuations, continuing=True))
            self._emit_action(f"{mover} may continue jumping from {target}")
        else:
            self.turn.selection = None
            self._end_turn()
        return True

    def _end_turn(self) -> None:
        self._commit(self.board.clear_all_moveable())
        self.turn.board_at_end = self.board
        self.timeline.append(self.turn)
        self.turn = Turn(self.turn.side.opposite, self.board)
        self._start_turn()

    def _game_over(self, loser: Side, reason: GameOverReason) -> None:
        self.phase = GamePhase.GAME_OVER
        self.turn.selection = None
        self._commit(
            self.board.clear_all_moveable().clear_all_selected().clear_all_occupiable()
        )
        self.result = GameResult(
            winner=self.players[loser.opposite],
            loser=self.players[loser],
            reason=reason,
        )
        logger.info(
            "Game over: %s wins, %s lost (%s)",
            self.result.winner,
            self.result.loser,
            reason,
        )
        for callback in self.events.on_game_over:
            callback(self.result)

    # -- PRIVATE HELPERS ---
    def _show_selection(self, selection: Selection) -> None:
        """Highlight the selected square and the squares the selected piece can end up on"""
        board = self.board.clear_all_selected().clear_all_occupiable()
        board = board.select(selection.coordinate)
        for path in selection.paths:
            assert path.end is not None
            # a king circling back onto its own square keeps the selection highlight
            if path.end != selection.coordinate:
                board = board.mark_occupiable(path.end, by_jump=path.is_jump)

        self.turn.selection = selection
        self.phase = GamePhase.PIECE_SELECTED
        self._commit(board)

    @staticmethod
    def _targets(selection: Optional[Selection]) -> list[Coordinate]:
        """Distinct squares the selected piece can end up on, in path order. Its own square is not a target."""
        if selection is None:
            return []
        ends = (path.end for path in selection.paths)
        return list(
            dict.fromkeys(
                end for end in ends if end is not None and end != selection.coordinate
            )
        )

    def _commit(self, board: Board) -> None:
        """Swap in a new snapshot and tell the observers what changed"""
        previous = self.board
        self.board = board
        changed = board.diff(previous)
        if not changed:
            return
        self.history.append(board)
        for callback in self.events.on_board_changed:
            callback(board, changed)

    def _record(self, action: TurnAction, description: str) -> None:
        self.turn.actions.append(action)
        self._emit_action(f"{self.current_player} {description}")

    def _emit_action(self, message: str) -> None:
        self.turn.log.append(message)
        logger.debug(message)
        for callback in self.events.on_action:
            callback(message)
