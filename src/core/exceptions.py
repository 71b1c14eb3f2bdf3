"""
Errors raised across layers.

NOTE: Illegal player actions (selecting an opponent's piece, moving to a square that is not a legal target) are NOT errors.
The Game simply ignores those. The errors below are for broken invariants and malformed input at the boundaries.
"""


class GameError(Exception):
    """Base class for everything the checkers package raises on purpose."""


class GameStateError(GameError):
    """The requested operation does not make sense in the current state (ex. laying out pieces twice)."""


class InvalidBoardError(GameError):
    """A board diagram could not be parsed."""


class InvalidConfigError(GameError):
    """Game configuration is inconsistent (ex. both players on the same side)."""


class InvalidRequestError(GameError):
    """A request coming in through the service layer is malformed."""
