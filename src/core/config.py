"""Rule switches for behavior where the engine deliberately deviates from standard chess."""

import os
from dataclasses import dataclass
from typing import Self

TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY


@dataclass(frozen=True)
class RulesConfig:
    """
    Defaults reproduce the relaxed rules the engine has always played by:

    * castle_through_check: the king may castle out of, through, or into an attacked square.
      Only the landing square is protected (by the ordinary self-check filter).
      Set to False for standard chess.
    * relocate_castling_rook: castling only moves the king two squares. Set to True to also
      move the rook to the square the king passed over.
    """

    castle_through_check: bool = True
    relocate_castling_rook: bool = False

    @classmethod
    def from_env(cls) -> Self:
        """Read overrides from CHESS_CASTLE_THROUGH_CHECK and CHESS_RELOCATE_CASTLING_ROOK."""
        defaults = cls()
        return cls(
            castle_through_check=_env_flag(
                "CHESS_CASTLE_THROUGH_CHECK", defaults.castle_through_check
            ),
            relocate_castling_rook=_env_flag(
                "CHESS_RELOCATE_CASTLING_ROOK", defaults.relocate_castling_rook
            ),
        )
