"""Orchestration of communication from the input/display layer to the game logic (and the reverse direction)."""

import logging
import random
from dataclasses import asdict
from typing import Optional

from src.api.models import (
    ActionRequest,
    GameResponse,
    LegalMovesResponse,
    NewGameRequest,
)
from src.checkers.agent import choose_move
from src.checkers.game import Game, GameEvents
from src.checkers.moves import all_legal_paths
from src.core.config import GameConfig
from src.core.exceptions import GameStateError, InvalidConfigError
from src.core.models import GameModel
from src.core.shared_types import GamePhase

logger = logging.getLogger(__name__)


class CheckersService:
    """
    Runs one game session at a time (a new game discards the previous one).
    Plays the computer's turns after every human action.
    """

    def __init__(self, events: Optional[GameEvents] = None) -> None:
        self.events = events or GameEvents()
        self.game: Optional[Game] = None
        self.rng = random.Random()

    # -- Entry points ---
    def new_game(self, request: NewGameRequest) -> GameResponse:
        return self.start_game(request.to_config())

    def start_game(self, config: GameConfig) -> GameResponse:
        """Start a game straight from a configuration"""
        if all(player.is_ai for player in config.players):
            raise InvalidConfigError(
                "At least one of the players must be human: the service only plays the computer in between human actions."
            )
        self.rng = random.Random(config.seed)
        self.game = Game.new_game(config)
        self.game.events = self.events
        self.game.start()
        self._play_ai_turns()
        return self._create_game_response(self.game.to_model())

    def get_game_state(self) -> GameResponse:
        """Used in a "polling" loop by a frontend to see what changed."""
        game = self._fetch_game()
        return self._create_game_response(game.to_model())

    def submit_action(self, request: ActionRequest) -> GameResponse:
        """
        A select / deselect / move on behalf of the human player whose turn it is.
        Illegal actions leave the game untouched (the response simply shows the same state).
        """
        game = self._fetch_game()
        if game.current_player.is_ai:
            logger.debug("Ignoring %s: waiting on the computer", request.action)
        else:
            game.take_action(request.to_turn_action())
            self._play_ai_turns()
        return self._create_game_response(game.to_model())

    def legal_moves(self) -> LegalMovesResponse:
        """Every path the side to move could play"""
        game = self._fetch_game()
        player = game.current_player
        paths = [] if game.is_over else all_legal_paths(player.side, game.board)
        return LegalMovesResponse(
            side=player.side,
            player_name=player.name,
            legal_moves=[path.to_notation() for path in paths],
        )

    # -- Internal helpers --
    def _play_ai_turns(self) -> None:
        """Keep playing for the computer until a human is to move (or the game ended)."""
        game = self._fetch_game()
        while not game.is_over and game.current_player.is_ai:
            selection = game.selection
            if selection is not None and selection.continuing:
                path = choose_move(selection.paths, self.rng)
            else:
                path = choose_move(
                    all_legal_paths(game.current_player.side, game.board), self.rng
                )
                game.select(path.start)

            assert path.end is not None
            logger.debug("%s plays %s", game.current_player, path.to_notation())
            game.move(path.end)

    def _create_game_response(self, model: GameModel) -> GameResponse:
        return GameResponse(**asdict(model))

    def _fetch_game(self) -> Game:
        if self.game is None or self.game.phase == GamePhase.NOT_STARTED:
            raise GameStateError("No game in progress. Start a new game first.")
        return self.game
