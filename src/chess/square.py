"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Squares are stored as zero-based (row, col) grid indices:
row 0 is the 8th rank (black's back rank), row 7 the 1st rank. col 0 is the a-file.
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)

FILES = "abcdefgh"
RANKS = "12345678"


def algebraic_to_coords(sq: str) -> tuple[int, int]:
    """'a8' -> (0, 0), 'h1' -> (7, 7)"""
    col = ord(sq[0]) - ord("a")
    row = BOARD_DIMENSIONS[0] - int(sq[1])
    return row, col


def coords_to_algebraic(row: int, col: int) -> str:
    return f"{chr(ord('a') + col)}{BOARD_DIMENSIONS[0] - row}"


def is_valid_position(row: int, col: int) -> bool:
    return (0 <= row < BOARD_DIMENSIONS[0]) and (0 <= col < BOARD_DIMENSIONS[1])


def is_algebraic(value: str) -> bool:
    """Guard for callers: the conversions above assume a well-formed square name."""
    return (
        isinstance(value, str)
        and len(value) == 2
        and value[0] in FILES[: BOARD_DIMENSIONS[1]]
        and value[1] in RANKS[: BOARD_DIMENSIONS[0]]
    )


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        row, col = algebraic_to_coords(sq)
        return cls(row, col)

    def to_algebraic(self) -> str:
        return coords_to_algebraic(self.row, self.col)

    def is_within_bounds(self) -> bool:
        return is_valid_position(self.row, self.col)

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return self.to_algebraic()
