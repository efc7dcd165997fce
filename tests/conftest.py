"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.game import Game
from src.core.config import RulesConfig
from src.core.shared_types import Color


@pytest.fixture
def fools_mate() -> list[tuple[str, str]]:
    """The fastest checkmate there is: black mates white after 2 moves."""
    return [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]


@pytest.fixture
def new_game() -> Game:
    return Game.new_game()


@pytest.fixture
def castling_board() -> Board:
    """Create a board with only the Kings and the Rooks. Ready to perform any castling move (if allowed)."""
    return Board.from_placements(
        {"e1": "K", "a1": "R", "h1": "R", "e8": "k", "a8": "r", "h8": "r"}
    )


@pytest.fixture
def kings_only_board() -> Board:
    """
    Create a board with only kings on their canonical starting squares.
    Add pieces to it with `place_piece` to construct a position.
    """
    return Board.from_placements({"e1": "K", "e8": "k"})


@pytest.fixture
def game_from() -> Callable[..., Game]:
    """Call the inner function with {square: symbol} placements (and optionally who is to move)"""

    def _create_game(
        placements: dict[str, str], to_move: Color = Color.WHITE, **config
    ) -> Game:
        return Game.from_board(
            Board.from_placements(placements), to_move, RulesConfig(**config)
        )

    return _create_game
