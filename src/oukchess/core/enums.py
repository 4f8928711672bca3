"""Core enumerations for the rules engine."""

from __future__ import annotations

from enum import IntEnum, auto


class Side(IntEnum):
    """One of the two competing players."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Side:
        return Side(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank direction this side's pawns advance in."""
        return 1 if self is Side.WHITE else -1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece variants. ``TREYBOK`` only appears through promotion."""

    PAWN = 1
    ROOK = 2
    KNIGHT = 3
    BISHOP = 4
    QUEEN = 5
    KING = 6
    TREYBOK = 7


class CellState(IntEnum):
    """Classification of a target square relative to an asking piece."""

    NONE = 0
    FREE = auto()
    FRIENDLY = auto()
    ENEMY = auto()
    OUT_OF_BOUNDS = auto()


class EndState(IntEnum):
    """Turn-level outcome for the side to move, derived from the board."""

    NONE = 0
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (EndState.CHECKMATE, EndState.STALEMATE)
