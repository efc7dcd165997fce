"""
Exceptions raised at the service boundary.

The engine itself (src/chess) never raises for a rejected move: it answers False / an empty list.
The service layer translates those answers into the errors below.
"""


class GameError(Exception):
    """Top-level exception for anything going wrong while handling a game."""


class InvalidRequestError(GameError):
    """Request could not be interpreted (ex. a square name that is not algebraic notation)."""


class GameNotFoundError(GameError):
    """No game registered under the requested ID."""


class IllegalMoveError(GameError):
    """The engine rejected the move."""


class GameOverError(GameError):
    """The game already reached checkmate or stalemate."""
