"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from oukchess.core.piece import Piece
from oukchess.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A piece travelling from one square to another.

    Moves compare by piece identity, so two pawns stepping to the same
    square are different moves.
    """

    piece: Piece
    from_sq: Square
    to_sq: Square

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
