"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.checkers.board import Board
from src.checkers.coordinate import Coordinate
from src.checkers.game import Game
from src.checkers.pieces import Checker
from src.core.config import GameConfig, PlayerConfig
from src.core.shared_types import Side

PiecePlacement = dict[tuple[int, int], str]


@pytest.fixture
def board_with_pieces() -> Callable[[PiecePlacement], Board]:
    """Call the inner function with {(file, rank): piece character} to get an otherwise empty board"""

    def _create_board(pieces: PiecePlacement) -> Board:
        board = Board.generate()
        for (file, rank), character in pieces.items():
            board = board.place(Checker.from_diagram(character, Coordinate(file, rank)))
        return board

    return _create_board


@pytest.fixture
def two_player_config() -> GameConfig:
    return GameConfig(
        players=(
            PlayerConfig(name="Wendy", side=Side.BOTTOM),
            PlayerConfig(name="James", side=Side.TOP),
        )
    )


@pytest.fixture
def started_game(
    board_with_pieces: Callable[[PiecePlacement], Board],
    two_player_config: GameConfig,
) -> Callable[..., Game]:
    """Call the inner function with a piece placement (or None for the standard layout) to get a game that is ready for input"""

    def _create_game(
        pieces: PiecePlacement | None = None, first_side: Side = Side.BOTTOM
    ) -> Game:
        board = board_with_pieces(pieces) if pieces is not None else None
        config = two_player_config.model_copy(update={"first_side": first_side})
        game = Game.new_game(config, board=board)
        game.start()
        return game

    return _create_game
