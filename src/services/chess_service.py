"""Orchestration of communication from the UI/API layer to the chess engine (and the reverse direction)."""

import logging
from dataclasses import replace
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    PossibleMovesRequest,
    PossibleMovesResponse,
)
from src.chess.game import Game
from src.core.config import RulesConfig
from src.core.exceptions import GameNotFoundError, GameOverError, IllegalMoveError
from src.services.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(
        self, repository: GameRepository, config: RulesConfig | None = None
    ) -> None:
        self.repo = repository
        self.config = config or RulesConfig()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a match from the standard starting position. Flags left out of the request fall back to the service config."""
        overrides = {
            name: value
            for name, value in request.model_dump().items()
            if value is not None
        }
        config = replace(self.config, **overrides)

        game = Game.new_game(config)
        game_id = self.repo.create_game(game)
        logger.info("Created game %s (%s)", game_id, config)
        return GameResponse.from_game(game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by the frontend to redraw the board.
        """
        game = self._fetch_game(request.game_id)
        return GameResponse.from_game(request.game_id, game)

    def possible_moves(self, request: PossibleMovesRequest) -> PossibleMovesResponse:
        """Legal destinations for the piece on the requested square (empty if there is none)."""
        game = self._fetch_game(request.game_id)
        return PossibleMovesResponse(
            game_id=request.game_id,
            square=request.square,
            possible_moves=game.possible_moves_from(request.square),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. The engine answers True/False, the service turns a refusal into an exception."""
        game = self._fetch_game(request.game_id)

        if game.is_over:
            raise GameOverError(
                f"Game {request.game_id} is over. status: {game.get_game_state()}"
            )

        if not game.make_move(request.from_square, request.to_square):
            raise IllegalMoveError(
                f"Move not allowed: {request.from_square}-{request.to_square} "
                f"({game.get_current_player()} to move)"
            )

        return GameResponse.from_game(request.game_id, game)

    def list_games(self) -> list[UUID]:
        """Show all games currently held."""
        return self.repo.list_games()

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to drop a game."""
        if self.repo.delete_game(request.game_id) is None:
            raise GameNotFoundError(f"Game with game_id={request.game_id} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game
