"""
Geometry/Base movement and capturing/attacking rules

Every generator answers: "Which squares could the piece on this square move to, looking only at how the piece moves?"
None of them check whether the move leaves the mover's own king in check.
Legality (self-check filtering) is done later by Game, because it has to simulate every candidate.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Self, assert_never

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def pieces(self, color: Color) -> list[Piece]: ...


# (delta row, delta col). NOTE: row 0 is the 8th rank, so white pawns move towards smaller rows.
Vector = tuple[int, int]

STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_JUMPS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_STEPS: list[Vector] = STRAIGHTS + DIAGONALS


@dataclass(frozen=True)
class Move:
    """A single ply as recorded in the move history"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_algebraic(cls, from_sq: str, to_sq: str) -> Self:
        return cls(Square.from_algebraic(from_sq), Square.from_algebraic(to_sq))

    def __str__(self) -> str:
        return f"{self.from_square}-{self.to_square}"


def pawn_direction(color: Color) -> int:
    """White moves UP the board (towards row 0), black moves DOWN"""
    return -1 if color == Color.WHITE else 1


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Square]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board. An opponent's piece ends the ray but can be captured,
    your own piece ends the ray and blocks the square.
    """
    player_color = board.piece(square).color

    targets: list[Square] = []
    for direction in directions:
        target_square = square.offset(*direction)
        while target_square.is_within_bounds():
            occupant = board.piece(target_square)
            if occupant is None:
                targets.append(target_square)
                target_square = target_square.offset(*direction)
                continue

            if occupant.color != player_color:
                targets.append(target_square)
            break
    return targets


def single_step_move(
    square: Square, board: Board, deltas: list[Vector]
) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump by a fixed offset"""
    player_color = board.piece(square).color

    targets: list[Square] = []
    for delta in deltas:
        target_square = square.offset(*delta)
        if not target_square.is_within_bounds():
            continue

        occupant = board.piece(target_square)
        if occupant is None or occupant.color != player_color:
            targets.append(target_square)
    return targets


def pawn_capture_squares(square: Square, color: Color) -> list[Square]:
    """The two diagonals in front of the pawn (the squares it attacks), as far as they are on the board"""
    forward = pawn_direction(color)
    diagonals = [square.offset(forward, -1), square.offset(forward, 1)]
    return [target for target in diagonals if target.is_within_bounds()]


def candidate_pawn_moves(square: Square, board: Board) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward (if that square is empty).
    - can move by two in its first move, when both squares are empty.
    - takes diagonally, only if an opponent's piece stands there.

    NOTE: No en passant and no promotion.
    """
    pawn = board.piece(square)
    forward = pawn_direction(pawn.color)

    targets: list[Square] = []
    one_step = square.offset(forward, 0)
    if one_step.is_within_bounds() and board.piece(one_step) is None:
        targets.append(one_step)

        two_steps = square.offset(2 * forward, 0)
        if (
            not pawn.has_moved
            and two_steps.is_within_bounds()
            and board.piece(two_steps) is None
        ):
            targets.append(two_steps)

    for target_square in pawn_capture_squares(square, pawn.color):
        occupant = board.piece(target_square)
        if occupant is not None and occupant.color != pawn.color:
            targets.append(target_square)
    return targets


def candidate_knight_moves(square: Square, board: Board) -> list[Square]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_JUMPS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Square]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_rook_moves(square, board) + candidate_bishop_moves(
        square, board
    )


def candidate_king_moves(square: Square, board: Board) -> list[Square]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (added by the Board, see castling.py).
    """
    return single_step_move(square, board, KING_STEPS)


def candidate_moves(square: Square, board: Board) -> list[Square]:
    """Dispatch on the type of the piece standing on `square`. Kings get their single steps only (no castling)."""
    piece_type = board.piece(square).type
    match piece_type:
        case PieceType.PAWN:
            return candidate_pawn_moves(square, board)
        case PieceType.KNIGHT:
            return candidate_knight_moves(square, board)
        case PieceType.BISHOP:
            return candidate_bishop_moves(square, board)
        case PieceType.ROOK:
            return candidate_rook_moves(square, board)
        case PieceType.QUEEN:
            return candidate_queen_moves(square, board)
        case PieceType.KING:
            return candidate_king_moves(square, board)
        case _:
            assert_never(piece_type)


# --- ATTACKING RULES ---
def attacked_squares(square: Square, board: Board) -> list[Square]:
    """
    Squares the piece on `square` is hitting.

    Same as its candidate moves, except for pawns: a pawn push never attacks,
    while a diagonal is attacked even while it is still empty.
    """
    piece = board.piece(square)
    if piece.type == PieceType.PAWN:
        return pawn_capture_squares(square, piece.color)
    return candidate_moves(square, board)


def is_square_attacked(square: Square, by_color: Color, board: Board) -> bool:
    """
    Is `square` in the line-of-sight of any piece of `by_color`?

    ---
    Only uses the unfiltered movement rules: checking legality here would ask this very question again (infinite recursion).
    Returns on the first attacker found.
    """
    return any(
        square in attacked_squares(attacker.position, board)
        for attacker in board.pieces(by_color)
    )
