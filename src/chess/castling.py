"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Self

from src.chess.moves import Board, is_square_attacked
from src.chess.pieces import Color, PieceType
from src.chess.square import Square


class CastlingSide(StrEnum):
    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: as long as neither piece has moved, we already know the king / rook are still at their starting squares.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (Color.WHITE, CastlingSide.KINGSIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    (Color.WHITE, CastlingSide.QUEENSIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    (Color.BLACK, CastlingSide.KINGSIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    (Color.BLACK, CastlingSide.QUEENSIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}


def squares_between_on_rank(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares in between the two squares specified that are on the same rank (exclusive on both ends)

    Needed for checking if you can still castle
    """
    if from_square.row != to_square.row:
        raise ValueError(
            f"squares_between_on_rank requires both squares to lie on the same rank. \n from: {from_square}\n to:{to_square}"
        )

    step = 1 if to_square.col > from_square.col else -1
    return [
        Square(from_square.row, col)
        for col in range(from_square.col + step, to_square.col, step)
    ]


def king_path(color: Color, side: CastlingSide) -> list[Square]:
    """Squares the king stands on / passes over / lands on while castling"""
    rule = CASTLING_RULES[(color, side)]
    between = squares_between_on_rank(rule.king_from, rule.king_to)
    return [rule.king_from, *between, rule.king_to]


def can_castle(
    board: Board,
    color: Color,
    side: CastlingSide,
    castle_through_check: bool = True,
) -> bool:
    """
    You are allowed to castle if
    ---

    * the king and the rook on that side are both still on their starting squares and never moved.
    * all the squares in between the two pieces are empty.

    NOTE: By default this does NOT check whether the king leaves, passes through or lands on an attacked square
    (deviation from standard chess). Only with `castle_through_check=False` are those squares required to be safe.
    """
    rule = CASTLING_RULES[(color, side)]
    king = board.piece(rule.king_from)
    rook = board.piece(rule.rook_from)

    if king is None or king.type != PieceType.KING or king.color != color:
        return False
    if rook is None or rook.type != PieceType.ROOK or rook.color != color:
        return False
    if king.has_moved or rook.has_moved:
        return False

    path = squares_between_on_rank(rule.king_from, rule.rook_from)
    if any(board.piece(square) is not None for square in path):
        return False

    if not castle_through_check:
        if any(
            is_square_attacked(square, color.opponent, board)
            for square in king_path(color, side)
        ):
            return False

    return True


def castling_moves(
    king_square: Square, board: Board, castle_through_check: bool = True
) -> list[Square]:
    """Two-square king moves for every side the king on `king_square` may castle to"""
    king = board.piece(king_square)
    if king.has_moved:
        return []

    targets: list[Square] = []
    for side in CastlingSide:
        rule = CASTLING_RULES[(king.color, side)]
        if rule.king_from != king_square:
            continue
        if can_castle(board, king.color, side, castle_through_check):
            targets.append(rule.king_to)
    return targets


def castling_rule_for(
    king_from: Square, king_to: Square, color: Color
) -> Optional[CastlingSquares]:
    """Find the castling rule a king move corresponds to (None for an ordinary king move)"""
    for (rule_color, _), rule in CASTLING_RULES.items():
        if rule_color != color:
            continue
        if rule.king_from == king_from and rule.king_to == king_to:
            return rule
    return None
