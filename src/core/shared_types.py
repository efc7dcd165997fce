"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class GameState(StrEnum):
    """Derived after every ply. DRAW is never produced by the engine itself (no repetition/50-move adjudication)."""

    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


TERMINAL_STATES: frozenset[GameState] = frozenset(
    {GameState.CHECKMATE, GameState.STALEMATE, GameState.DRAW}
)
