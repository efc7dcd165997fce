"""
Protocol repository: who owns the running Game objects.

There is no persistence: a Game lives as long as the repository holding it.
"""

from typing import Protocol
from uuid import UUID, uuid4

from src.chess.game import Game


class GameRepository(Protocol):
    """Game ownership orchestration"""

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if it exists."""
        ...

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Drop a game (the caller starts a new match or the UI goes away)."""
        ...

    def list_games(self) -> list[UUID]:
        """IDs of all games currently held."""
        ...


class InMemoryGameRepository:
    """Keep the Game objects themselves in a dictionary"""

    def __init__(self) -> None:
        self._games: dict[UUID, Game] = {}

    def get_game(self, game_id: UUID) -> Game | None:
        return self._games.get(game_id)

    def create_game(self, game: Game) -> UUID:
        game_id = uuid4()
        self._games[game_id] = game
        return game_id

    def delete_game(self, game_id: UUID) -> Game | None:
        return self._games.pop(game_id, None)

    def list_games(self) -> list[UUID]:
        return list(self._games.keys())
