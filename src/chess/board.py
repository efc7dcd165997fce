"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

from copy import deepcopy
from dataclasses import dataclass, replace
from typing import Optional, Self

from src.chess.castling import castling_moves
from src.chess.moves import Move, candidate_moves, is_square_attacked
from src.chess.pieces import BACK_RANK, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square

Grid = list[list[Optional[Piece]]]
ReadOnlyGrid = tuple[tuple[Optional[Piece], ...], ...]


def _empty_grid() -> Grid:
    return [[None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]


@dataclass
class Board:
    """
    8x8 grid of optional pieces. grid[row][col], row 0 being the 8th rank.

    The grid is the source of truth for occupancy: every piece's `position` must equal the cell it is stored in.
    """

    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls(_empty_grid())

    @classmethod
    def starting_position(cls) -> Self:
        """
        Canonical starting position:
        * black back rank on row 0 (8th rank), black pawns on row 1
        * white pawns on row 6, white back rank on row 7 (1st rank)
        Both back ranks read rook, knight, bishop, queen, king, bishop, knight, rook from the a-file onwards.
        """
        board = cls.empty()
        last_row = BOARD_DIMENSIONS[0] - 1
        for color, back_row, pawn_row in [
            (Color.BLACK, 0, 1),
            (Color.WHITE, last_row, last_row - 1),
        ]:
            for col, piece_type in enumerate(BACK_RANK):
                back_square = Square(back_row, col)
                board.place_piece(Piece(piece_type, color, back_square), back_square)
                pawn_square = Square(pawn_row, col)
                board.place_piece(Piece(PieceType.PAWN, color, pawn_square), pawn_square)
        return board

    @classmethod
    def from_placements(cls, placements: dict[str, str]) -> Self:
        """
        Construct a board from {square: symbol}, ex. {"e1": "K", "e8": "k", "a1": "R"}
        Upper case symbols are white pieces, lower case black ones. All pieces start as unmoved.
        """
        board = cls.empty()
        for square_name, symbol in placements.items():
            square = Square.from_algebraic(square_name)
            board.place_piece(Piece.from_symbol(symbol, square), square)
        return board

    # --- QUERIES ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def pieces(self, color: Color) -> list[Piece]:
        """All pieces of a given color, in board order (a8 .. h1)"""
        return [
            piece
            for row in self.grid
            for piece in row
            if piece is not None and piece.color == color
        ]

    def find_king(self, color: Color) -> Optional[Piece]:
        return next(
            (piece for piece in self.pieces(color) if piece.type == PieceType.KING),
            None,
        )

    def copy(self) -> Self:
        """
        New grid holding the same Piece objects.
        Safe to play moves on: `move_piece` replaces the mover instead of mutating it, so the pieces are never written to.
        """
        return type(self)([list(row) for row in self.grid])

    def read_only(self) -> ReadOnlyGrid:
        """Snapshot for rendering: nested tuples holding copies of the pieces (mutating them never touches this board)"""
        return tuple(tuple(deepcopy(piece) for piece in row) for row in self.grid)

    def snapshot(self) -> str:
        """
        Serialized position, one entry per ply in the game history.

        Every cell is either `null` or `<type>-<color>-<square>`, cells are joined by `|` and rows by newlines.
        """
        return "\n".join(
            "|".join(piece.describe() if piece else "null" for piece in row)
            for row in self.grid
        )

    # --- MUTATIONS ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.grid[square.row][square.col] = piece
        piece.position = square

    def remove_piece(self, square: Square) -> Optional[Piece]:
        removed = self.piece(square)
        self.grid[square.row][square.col] = None
        return removed

    def move_piece(self, move: Move) -> Optional[Piece]:
        """
        Relocate the piece and return whatever got captured.
        The mover is replaced by an updated copy (new position, has_moved), the Piece object handed in stays as it was.
        """
        piece_that_moved = self.remove_piece(move.from_square)
        captured = self.remove_piece(move.to_square)
        moved = replace(piece_that_moved, position=move.to_square, has_moved=True)
        self.grid[move.to_square.row][move.to_square.col] = moved
        return captured

    # --- RULES ---
    def candidate_moves(
        self, piece: Piece, castle_through_check: bool = True
    ) -> list[Square]:
        """
        Before knowing the set of legal moves, we use the movement rules to find candidate moves,
        which will later be tested for legality (making sure it does not put yourself in check.)
        """
        candidates = candidate_moves(piece.position, self)
        if piece.type == PieceType.KING:
            candidates.extend(
                castling_moves(piece.position, self, castle_through_check)
            )
        return candidates

    def is_check(self, color: Color) -> bool:
        """
        Is the king of `color` under attack by any of the opponent's pieces?

        NOTE: A board without that king is never in check.
        """
        king = self.find_king(color)
        if king is None:
            return False
        return is_square_attacked(king.position, color.opponent, self)

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {
            color: sum(piece.points for piece in self.pieces(color)) for color in Color
        }
