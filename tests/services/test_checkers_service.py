"""Unit tests for src/services/checkers_service.py"""

from unittest.mock import Mock

import pytest

from src.api.models import ActionRequest, GameResponse, NewGameRequest
from src.checkers.board import Board
from src.checkers.game import GameEvents
from src.core.config import GameConfig, PlayerConfig
from src.core.exceptions import GameStateError, InvalidConfigError
from src.core.shared_types import ActionType, GamePhase, Side
from src.services.checkers_service import CheckersService

STARTING_DIAGRAM = Board.starting_position().to_diagram()


def _count_pieces(response: GameResponse, side: Side) -> int:
    character = "t" if side == Side.TOP else "b"
    return response.board.lower().count(character)


@pytest.fixture
def service() -> CheckersService:
    return CheckersService()


@pytest.fixture
def two_humans() -> NewGameRequest:
    return NewGameRequest(player_name="Wendy", side=Side.BOTTOM, opponent_name="James")


@pytest.fixture
def against_computer() -> NewGameRequest:
    return NewGameRequest(player_name="Wendy", side=Side.BOTTOM, seed=1)


# --- SERVICE - NEW GAME ----
def test_new_game(service: CheckersService, two_humans: NewGameRequest) -> None:
    response = service.new_game(two_humans)

    assert response.board == STARTING_DIAGRAM
    assert response.side_to_move == Side.BOTTOM
    assert response.phase == GamePhase.AWAITING_SELECTION
    assert response.players == {Side.BOTTOM: "Wendy", Side.TOP: "James"}
    assert response.captures == {Side.BOTTOM: 0, Side.TOP: 0}
    assert response.selected is None
    assert response.winner is None


def test_new_game_replaces_previous(service: CheckersService, two_humans: NewGameRequest) -> None:
    service.new_game(two_humans)
    service.submit_action(ActionRequest(action=ActionType.SELECT, square="A6"))
    service.submit_action(ActionRequest(action=ActionType.MOVE, square="B5"))

    response = service.new_game(two_humans)
    assert response.board == STARTING_DIAGRAM
    assert response.log == []


def test_both_players_computer_is_refused(service: CheckersService) -> None:
    config = GameConfig(
        players=(
            PlayerConfig(name="Deep", side=Side.BOTTOM, is_ai=True),
            PlayerConfig(name="Blue", side=Side.TOP, is_ai=True),
        )
    )
    with pytest.raises(InvalidConfigError):
        _ = service.start_game(config)


# --- SERVICE - NO GAME YET ----
def test_state_without_game(service: CheckersService) -> None:
    with pytest.raises(GameStateError):
        _ = service.get_game_state()


def test_action_without_game(service: CheckersService) -> None:
    with pytest.raises(GameStateError):
        _ = service.submit_action(ActionRequest(action=ActionType.SELECT, square="A6"))


def test_legal_moves_without_game(service: CheckersService) -> None:
    with pytest.raises(GameStateError):
        _ = service.legal_moves()


# --- SERVICE - PLAYING ----
def test_select_and_move(service: CheckersService, two_humans: NewGameRequest) -> None:
    service.new_game(two_humans)

    response = service.submit_action(ActionRequest(action=ActionType.SELECT, square="a6"))
    assert response.phase == GamePhase.PIECE_SELECTED
    assert response.selected == "A6"
    assert response.targets == ["B5"]

    response = service.submit_action(ActionRequest(action=ActionType.MOVE, square="B5"))
    assert response.side_to_move == Side.TOP
    assert response.selected is None
    assert response.log == ["Bottom (Wendy) selected A6", "Bottom (Wendy) moved A6-B5"]
    assert service.get_game_state() == response


def test_illegal_action_changes_nothing(service: CheckersService, two_humans: NewGameRequest) -> None:
    before = service.new_game(two_humans)
    # empty square, then the opponent's piece
    assert service.submit_action(ActionRequest(action=ActionType.SELECT, square="D5")) == before
    assert service.submit_action(ActionRequest(action=ActionType.SELECT, square="B3")) == before


def test_legal_moves_at_start(service: CheckersService, two_humans: NewGameRequest) -> None:
    service.new_game(two_humans)
    response = service.legal_moves()

    assert response.side == Side.BOTTOM
    assert response.player_name == "Wendy"
    assert len(response.legal_moves) == 7
    assert "A6-B5" in response.legal_moves


# --- SERVICE - COMPUTER OPPONENT ----
def test_computer_replies(service: CheckersService, against_computer: NewGameRequest) -> None:
    service.new_game(against_computer)
    service.submit_action(ActionRequest(action=ActionType.SELECT, square="A6"))
    response = service.submit_action(ActionRequest(action=ActionType.MOVE, square="B5"))

    assert response.side_to_move == Side.BOTTOM
    assert response.phase == GamePhase.AWAITING_SELECTION
    computer_lines = [line for line in response.log if line.startswith("Top (Computer)")]
    assert len(computer_lines) == 2
    assert "selected" in computer_lines[0]
    assert "moved" in computer_lines[1]
    assert _count_pieces(response, Side.TOP) == 12


def test_computer_moves_first(service: CheckersService) -> None:
    request = NewGameRequest(player_name="Wendy", side=Side.BOTTOM, first_side=Side.TOP, seed=5)
    response = service.new_game(request)

    assert response.side_to_move == Side.BOTTOM
    assert response.board != STARTING_DIAGRAM
    assert response.players[Side.TOP] == "Computer"
    assert all(line.startswith("Top (Computer)") for line in response.log)
    assert len(response.log) == 2


def test_seeded_computer_is_deterministic(against_computer: NewGameRequest) -> None:
    responses = []
    for _ in range(2):
        service = CheckersService()
        service.new_game(against_computer)
        service.submit_action(ActionRequest(action=ActionType.SELECT, square="C6"))
        responses.append(
            service.submit_action(ActionRequest(action=ActionType.MOVE, square="D5"))
        )
    assert responses[0] == responses[1]


# --- SERVICE - OBSERVERS ----
def test_events_reach_subscribers(two_humans: NewGameRequest) -> None:
    on_action, on_started = Mock(), Mock()
    service = CheckersService(GameEvents(on_action=[on_action], on_game_started=[on_started]))
    service.new_game(two_humans)
    on_started.assert_called_once()

    service.submit_action(ActionRequest(action=ActionType.SELECT, square="A6"))
    on_action.assert_called_once_with("Bottom (Wendy) selected A6")
