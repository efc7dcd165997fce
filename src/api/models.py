"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.game import Game
from src.chess.moves import Move
from src.chess.pieces import Piece
from src.chess.square import is_algebraic
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameState, PieceType


def _validate_square_name(value: str) -> str:
    if not is_algebraic(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Rule switches are optional: leaving them out uses the engine defaults (RulesConfig)."""

    castle_through_check: Optional[bool] = None
    relocate_castling_rook: Optional[bool] = None


class GetGameRequest(BaseModel):
    game_id: UUID


class PossibleMovesRequest(BaseModel):
    game_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    type: PieceType
    color: Color
    position: str
    has_moved: bool

    @classmethod
    def from_piece(cls, piece: Piece) -> Self:
        return cls(
            type=piece.type,
            color=piece.color,
            position=piece.position.to_algebraic(),
            has_moved=piece.has_moved,
        )


class MoveResponse(BaseModel):
    from_square: str
    to_square: str

    @classmethod
    def from_move(cls, move: Move) -> Self:
        return cls(
            from_square=move.from_square.to_algebraic(),
            to_square=move.to_square.to_algebraic(),
        )


class GameResponse(BaseModel):
    """Everything a UI needs to redraw after a request. board[0] is the 8th rank, board[0][0] is a8."""

    game_id: UUID
    board: list[list[Optional[PieceResponse]]]
    current_player: Color
    game_state: GameState
    move_history: list[MoveResponse]
    material: dict[Color, int]
    winner: Optional[Color] = None

    @classmethod
    def from_game(cls, game_id: UUID, game: Game) -> Self:
        return cls(
            game_id=game_id,
            board=[
                [PieceResponse.from_piece(piece) if piece else None for piece in row]
                for row in game.get_board()
            ],
            current_player=game.get_current_player(),
            game_state=game.get_game_state(),
            move_history=[MoveResponse.from_move(move) for move in game.moves],
            material=game.count_material(),
            winner=game.winner,
        )


class PossibleMovesResponse(BaseModel):
    game_id: UUID
    square: str
    possible_moves: list[str]
