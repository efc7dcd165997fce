"""Unit tests for /src/chess/board.py"""

import pytest

from src.chess.board import Board, Color, Move, Square
from src.chess.pieces import BACK_RANK, Piece, PieceType


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


# -- CREATION LOGIC --
def test_starting_position_places_32_pieces() -> None:
    board = Board.starting_position()
    assert len(board.pieces(Color.WHITE)) == 16
    assert len(board.pieces(Color.BLACK)) == 16
    assert all(piece is None for row in board.grid[2:6] for piece in row)


@pytest.mark.parametrize("col, piece_type", list(enumerate(BACK_RANK)))
def test_starting_back_ranks(col: int, piece_type: PieceType) -> None:
    """White back rank on row 7, black mirrored on row 0, in file order a-h"""
    board = Board.starting_position()
    white = board.piece(Square(7, col))
    black = board.piece(Square(0, col))
    assert (white.type, white.color) == (piece_type, Color.WHITE)
    assert (black.type, black.color) == (piece_type, Color.BLACK)


def test_starting_pawns() -> None:
    board = Board.starting_position()
    for col in range(8):
        assert board.piece(Square(6, col)) == Piece(
            PieceType.PAWN, Color.WHITE, Square(6, col)
        )
        assert board.piece(Square(1, col)) == Piece(
            PieceType.PAWN, Color.BLACK, Square(1, col)
        )


def test_every_position_cache_matches_grid() -> None:
    board = Board.starting_position()
    for row_idx, row in enumerate(board.grid):
        for col_idx, piece in enumerate(row):
            if piece is not None:
                assert piece.position == Square(row_idx, col_idx)
                assert not piece.has_moved


def test_from_placements() -> None:
    board = Board.from_placements({"e1": "K", "d8": "q"})
    assert board.piece(sq("e1")) == Piece(PieceType.KING, Color.WHITE, sq("e1"))
    assert board.piece(sq("d8")) == Piece(PieceType.QUEEN, Color.BLACK, sq("d8"))
    assert board.piece(sq("e2")) is None


# -- QUERIES --
def test_find_king(kings_only_board: Board) -> None:
    assert kings_only_board.find_king(Color.WHITE).position == sq("e1")
    assert kings_only_board.find_king(Color.BLACK).position == sq("e8")
    assert Board.empty().find_king(Color.WHITE) is None


def test_read_only_copies_pieces() -> None:
    """Mutating what the renderer received never touches the board"""
    board = Board.starting_position()
    grid = board.read_only()
    assert isinstance(grid, tuple) and all(isinstance(row, tuple) for row in grid)

    rendered_pawn = grid[6][4]
    assert rendered_pawn == board.piece(sq("e2"))
    rendered_pawn.has_moved = True
    rendered_pawn.position = sq("e4")
    assert board.piece(sq("e2")).has_moved is False
    assert board.piece(sq("e2")).position == sq("e2")


def test_snapshot_format() -> None:
    board = Board.from_placements({"a8": "r", "h1": "K"})
    rows = board.snapshot().split("\n")
    assert len(rows) == 8
    assert rows[0].split("|") == ["rook-black-a8"] + ["null"] * 7
    assert rows[7].split("|") == ["null"] * 7 + ["king-white-h1"]


def test_snapshot_changes_with_position() -> None:
    board = Board.starting_position()
    before = board.snapshot()
    board.move_piece(Move.from_algebraic("e2", "e4"))
    assert board.snapshot() != before


# -- MUTATIONS --
def test_move_piece_updates_grid_and_cache() -> None:
    board = Board.starting_position()
    captured = board.move_piece(Move.from_algebraic("g1", "f3"))
    knight = board.piece(sq("f3"))
    assert captured is None
    assert board.piece(sq("g1")) is None
    assert knight.type == PieceType.KNIGHT
    assert knight.position == sq("f3")
    assert knight.has_moved


def test_move_piece_returns_capture() -> None:
    board = Board.from_placements({"d1": "Q", "d8": "q"})
    captured = board.move_piece(Move.from_algebraic("d1", "d8"))
    assert captured == Piece(PieceType.QUEEN, Color.BLACK, sq("d8"))
    assert board.pieces(Color.BLACK) == []


def test_moving_on_a_copy_leaves_the_original_untouched() -> None:
    """The copy shares the pieces, so playing a move on it must not write to any of them"""
    board = Board.starting_position()
    pawn = board.piece(sq("e2"))
    board_copy = board.copy()

    board_copy.move_piece(Move.from_algebraic("e2", "e4"))

    assert board.piece(sq("e2")) is pawn
    assert pawn.position == sq("e2")
    assert not pawn.has_moved
    assert board.piece(sq("e4")) is None
    assert board_copy.piece(sq("e4")).has_moved
    assert board_copy.piece(sq("d2")) is board.piece(sq("d2"))
    assert board == Board.starting_position()


def test_remove_piece() -> None:
    board = Board.from_placements({"c3": "N"})
    assert board.remove_piece(sq("c3")).type == PieceType.KNIGHT
    assert board.remove_piece(sq("c3")) is None


# -- RULES --
def test_candidate_moves_add_castling_for_kings(castling_board: Board) -> None:
    white_king = castling_board.piece(sq("e1"))
    candidates = {s.to_algebraic() for s in castling_board.candidate_moves(white_king)}
    assert candidates == {"d1", "d2", "e2", "f2", "f1", "g1", "c1"}


def test_candidate_moves_strict_castling() -> None:
    board = Board.from_placements({"e1": "K", "h1": "R", "f8": "r", "a8": "k"})
    king = board.piece(sq("e1"))
    relaxed = {s.to_algebraic() for s in board.candidate_moves(king)}
    strict = {
        s.to_algebraic()
        for s in board.candidate_moves(king, castle_through_check=False)
    }
    assert "g1" in relaxed
    assert "g1" not in strict


def test_is_check(kings_only_board: Board) -> None:
    assert not kings_only_board.is_check(Color.WHITE)
    kings_only_board.place_piece(Piece.from_symbol("r", sq("e4")), sq("e4"))
    assert kings_only_board.is_check(Color.WHITE)
    assert not kings_only_board.is_check(Color.BLACK)


def test_check_is_blocked_by_piece_in_between(kings_only_board: Board) -> None:
    kings_only_board.place_piece(Piece.from_symbol("r", sq("e4")), sq("e4"))
    kings_only_board.place_piece(Piece.from_symbol("B", sq("e2")), sq("e2"))
    assert not kings_only_board.is_check(Color.WHITE)


def test_no_king_is_never_in_check() -> None:
    board = Board.from_placements({"e4": "q"})
    assert not board.is_check(Color.WHITE)


def test_count_material() -> None:
    """8 pawns + 2 knights + 2 bishops + 2 rooks + queen = 8 + 6 + 6 + 10 + 9"""
    assert Board.starting_position().count_material() == {
        Color.WHITE: 39,
        Color.BLACK: 39,
    }
    assert Board.from_placements({"e1": "K", "d4": "R", "e8": "k"}).count_material() == {
        Color.WHITE: 5,
        Color.BLACK: 0,
    }
