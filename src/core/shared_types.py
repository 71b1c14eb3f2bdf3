"""
Type definitions used across layers
"""

from __future__ import annotations

from enum import StrEnum


class Side(StrEnum):
    """The two competing players. Top starts on ranks 0-2 and moves down the board, Bottom starts on ranks 5-7 and moves up."""

    TOP = "top"
    BOTTOM = "bottom"

    @property
    def opposite(self) -> Side:
        return Side.BOTTOM if self == Side.TOP else Side.TOP


class ActionType(StrEnum):
    """Actions a player (or the display layer on their behalf) can submit."""

    SELECT = "select"
    DESELECT = "deselect"
    MOVE = "move"


class GamePhase(StrEnum):
    NOT_STARTED = "not started"
    AWAITING_SELECTION = "awaiting selection"
    PIECE_SELECTED = "piece selected"
    GAME_OVER = "game over"


class GameOverReason(StrEnum):
    ALL_CAPTURED = "all pieces captured"
    NO_LEGAL_MOVES = "no legal moves"
