import pytest

from src.api.models import DEFAULT_OPPONENT_NAME, ActionRequest, NewGameRequest
from src.checkers.coordinate import Coordinate
from src.checkers.game import TurnAction
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import ActionType, Side


# -- Validation - NewGameRequest --
def test_new_game_against_the_computer() -> None:
    """Without an opponent name the computer takes the other side."""
    request = NewGameRequest(player_name="  Wendy ", side=Side.TOP)
    assert request.player_name == "Wendy"

    config = request.to_config()
    assert config.player(Side.TOP).name == "Wendy"
    assert not config.player(Side.TOP).is_ai
    assert config.player(Side.BOTTOM).name == DEFAULT_OPPONENT_NAME
    assert config.player(Side.BOTTOM).is_ai
    assert config.first_side == Side.BOTTOM


def test_new_game_against_a_friend() -> None:
    request = NewGameRequest(
        player_name="Wendy",
        side=Side.BOTTOM,
        opponent_name="James",
        first_side=Side.TOP,
        seed=3,
    )
    config = request.to_config()
    assert config.player(Side.TOP).name == "James"
    assert not config.player(Side.TOP).is_ai
    assert config.first_side == Side.TOP
    assert config.seed == 3


def test_named_computer_opponent() -> None:
    request = NewGameRequest(
        player_name="Wendy", side=Side.BOTTOM, opponent_name="Hal", opponent_is_ai=True
    )
    opponent = request.to_config().player(Side.TOP)
    assert opponent.name == "Hal"
    assert opponent.is_ai


@pytest.mark.parametrize("name", ["", "   "])
def test_empty_player_name(name: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = NewGameRequest(player_name=name, side=Side.BOTTOM)


# -- Validation - ActionRequest --
@pytest.mark.parametrize(
    "square, coordinate",
    [
        ("A6", Coordinate(0, 5)),
        ("b5", Coordinate(1, 4)),  # lower case is fine
        (" h8 ", Coordinate(7, 7)),  # surrounding whitespace is ignored
    ],
)
def test_valid_square_names(square: str, coordinate: Coordinate) -> None:
    request = ActionRequest(action=ActionType.SELECT, square=square)
    assert request.coordinate == coordinate
    assert request.square == coordinate.to_notation()


def test_action_from_string_value() -> None:
    request = ActionRequest.model_validate({"action": "move", "square": "B5"})
    assert request.to_turn_action() == TurnAction(ActionType.MOVE, Coordinate(1, 4))


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "I1",  # file beyond H
        "A9",  # rank beyond 8
        "A0",  # ranks start at 1
        "B\u0663",  # Arabic-Indic digit three
        "A\u00b2",  # superscript two
        "",
    ],
)
def test_invalid_square(square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = ActionRequest(action=ActionType.SELECT, square=square)
