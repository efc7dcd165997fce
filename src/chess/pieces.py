"""Defines the chess pieces"""

from dataclasses import dataclass, field
from typing import Self

from src.chess.square import Square
from src.core.shared_types import Color, PieceType

SYMBOL_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_SYMBOL: dict[PieceType, str] = {
    value: key for key, value in SYMBOL_TO_PIECE.items()
}


PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
}

# Order of the pieces on the back rank, a-file to h-file
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass
class Piece:
    """
    `position` is a cache of where the Board stores this piece. The Board is the source of truth:
    only Board.place_piece writes to it (Board.move_piece puts an updated copy on the target square).
    """

    type: PieceType
    color: Color
    position: Square
    has_moved: bool = False
    points: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # NOTE: The King's worth is undefined (does not count towards total points)
        self.points = PIECE_POINTS.get(self.type, 0)

    @classmethod
    def from_symbol(cls, character: str, position: Square) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = SYMBOL_TO_PIECE[character.lower()]
        return cls(piece_type, color, position)

    @property
    def symbol(self) -> str:
        letter = PIECE_TO_SYMBOL[self.type]
        return letter.upper() if self.color == Color.WHITE else letter

    def describe(self) -> str:
        """Snapshot encoding of a single piece: <type>-<color>-<square>"""
        return f"{self.type}-{self.color}-{self.position.to_algebraic()}"
