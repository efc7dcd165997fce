"""
The Game class is the entrypoint into the domain layer for the service layer (or any UI that wants to drive a match).
It is responsible for orchestrating all the rules required to play a ply -->
it validates a move, applies it, and derives the new game state in one step.

Nothing in here raises to signal a rejected move: `make_move` answers False and leaves the game untouched.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.board import Board, ReadOnlyGrid
from src.chess.castling import CastlingSide, can_castle, castling_rule_for
from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square, is_algebraic
from src.core.config import RulesConfig
from src.core.shared_types import TERMINAL_STATES, GameState

logger = logging.getLogger(__name__)


@dataclass
class Game:
    board: Board
    current_player: Color
    state: GameState
    moves: list[Move]
    history: list[str]  # one board snapshot per ply, starting with the initial position
    config: RulesConfig
    last_moved_piece: Optional[Piece] = None

    @classmethod
    def new_game(cls, config: Optional[RulesConfig] = None) -> Self:
        """Start a match from the canonical starting position, white to move."""
        return cls.from_board(Board.starting_position(), Color.WHITE, config)

    @classmethod
    def from_board(
        cls,
        board: Board,
        current_player: Color = Color.WHITE,
        config: Optional[RulesConfig] = None,
    ) -> Self:
        """
        Start a match from a constructed position.
        The first snapshot is recorded and the state derived, so the position may already be check/mate/stalemate.
        """
        game = cls(
            board=board,
            moves=[],
            history=[board.snapshot()],
            current_player=current_player,
            state=GameState.PLAYING,
            config=config or RulesConfig(),
        )
        game._update_game_state()
        return game

    # --- ENGINE API CALLED BY THE UI / SERVICE ---
    def get_board(self) -> ReadOnlyGrid:
        return self.board.read_only()

    def get_current_player(self) -> Color:
        return self.current_player

    def get_game_state(self) -> GameState:
        return self.state

    @property
    def is_over(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def winner(self) -> Optional[Color]:
        """
        Only defined for checkmate.
        The side to move just got mated, so the opponent must be the winner.
        """
        if self.state != GameState.CHECKMATE:
            return None
        return self.current_player.opponent

    def get_possible_moves(self, piece: Piece) -> list[str]:
        """
        Legal destination squares for the piece
        ----

        1. find the piece on the board (the one handed in may be a copy from `get_board()`)
        2. generate candidate moves, using the basic movement rules (the board does this calculation)
        3. remove every candidate that would leave your own king in check

        NOTE: Pieces of the player not to move are answered as well. `make_move` will refuse them.
        """
        live_piece = self._resolve(piece)
        if live_piece is None:
            return []

        candidates = self.board.candidate_moves(
            live_piece, castle_through_check=self.config.castle_through_check
        )
        return [
            target.to_algebraic()
            for target in candidates
            if not self._is_putting_yourself_in_check(
                Move(live_piece.position, target), live_piece.color
            )
        ]

    def possible_moves_from(self, square: str) -> list[str]:
        """Convenience method for callers that only know a square name."""
        if not is_algebraic(square):
            return []
        piece = self.board.piece(Square.from_algebraic(square))
        return self.get_possible_moves(piece) if piece else []

    def legal_moves(self, color: Color) -> list[Move]:
        """Union of the legal moves of all pieces of `color`"""
        return [
            Move(piece.position, Square.from_algebraic(target))
            for piece in self.board.pieces(color)
            for target in self.get_possible_moves(piece)
        ]

    def is_in_check(self, color: Color) -> bool:
        return self.board.is_check(color)

    def can_castle(self, color: Color, side: CastlingSide) -> bool:
        return can_castle(
            self.board,
            color,
            side,
            castle_through_check=self.config.castle_through_check,
        )

    def count_material(self) -> dict[Color, int]:
        return self.board.count_material()

    def make_move(self, from_square: str, to_square: str) -> bool:
        """
        Attempt to make a move
        -----

        1. reject when the squares are not algebraic, there is no piece of the player to move on `from_square`,
           or `to_square` is not one of its legal moves
        2. apply the move on a copy of the board (captures the occupant, sets `has_moved`)
        3. reject if that copy still leaves the mover in check
        4. commit: board, move history, snapshot history, player to move, game state

        A rejected move leaves every part of the game exactly as it was.
        """
        if self.is_over:
            logger.debug(
                "Rejected %s-%s: game is over (%s)", from_square, to_square, self.state
            )
            return False

        if not (is_algebraic(from_square) and is_algebraic(to_square)):
            logger.debug("Rejected %r-%r: not a square name", from_square, to_square)
            return False

        move = Move.from_algebraic(from_square, to_square)
        piece = self.board.piece(move.from_square)
        if piece is None or piece.color != self.current_player:
            logger.debug(
                "Rejected %s: no %s piece on %s", move, self.current_player, from_square
            )
            return False

        if to_square not in self.get_possible_moves(piece):
            logger.debug("Rejected %s: not a legal move for the %s", move, piece.type)
            return False

        next_board = self._apply(self.board, move)

        # Safety net: get_possible_moves already simulated this exact move.
        if next_board.is_check(self.current_player):
            logger.warning(
                "Rejected %s: would leave the %s king in check", move, self.current_player
            )
            return False

        self._commit(next_board, move)
        return True

    # -- PRIVATE HELPERS ---
    def _resolve(self, piece: Piece) -> Optional[Piece]:
        """The live piece standing where `piece` claims to be (None if that square holds something else)"""
        if not piece.position.is_within_bounds():
            return None
        live_piece = self.board.piece(piece.position)
        if live_piece is None:
            return None
        if (live_piece.type, live_piece.color) != (piece.type, piece.color):
            return None
        return live_piece

    def _apply(self, board: Board, move: Move) -> Board:
        """
        Return a new board with the move played. The board handed in is never touched.

        NOTE: Castling only moves the king, unless the rules ask to relocate the rook as well.
        """
        next_board = board.copy()
        piece = next_board.piece(move.from_square)
        next_board.move_piece(move)

        if self.config.relocate_castling_rook and piece.type == PieceType.KING:
            rule = castling_rule_for(move.from_square, move.to_square, piece.color)
            if rule is not None:
                next_board.move_piece(Move(rule.rook_from, rule.rook_to))
        return next_board

    def _is_putting_yourself_in_check(self, move: Move, color: Color) -> bool:
        """Return True if the move puts (or leaves) you in check

        plan:
        1. Copy the board and make the candidate move on the copy
        2. determine if king is in check on the new board
        """
        return self._apply(self.board, move).is_check(color)

    def _commit(self, next_board: Board, move: Move) -> None:
        self.board = next_board
        self.moves.append(move)
        self.history.append(next_board.snapshot())
        self.last_moved_piece = next_board.piece(move.to_square)
        self.current_player = self.current_player.opponent
        self._update_game_state()
        logger.debug("Played %s, %s to move (%s)", move, self.current_player, self.state)

    def _update_game_state(self) -> None:
        """
        Derive the state for the player who has to move next.

        in check + no legal moves --> checkmate
        no legal moves            --> stalemate
        in check                  --> check
        """
        side = self.current_player
        has_legal_move = any(
            self.get_possible_moves(piece) for piece in self.board.pieces(side)
        )
        in_check = self.is_in_check(side)

        if in_check and not has_legal_move:
            self.state = GameState.CHECKMATE
        elif not has_legal_move:
            self.state = GameState.STALEMATE
        elif in_check:
            self.state = GameState.CHECK
        else:
            self.state = GameState.PLAYING

        if self.is_over:
            logger.info("Game over: %s with %s to move", self.state, side)
