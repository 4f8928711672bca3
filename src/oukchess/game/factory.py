"""Default piece factory and the starting layout."""

from __future__ import annotations

from oukchess.core.enums import PieceType, Side
from oukchess.core.piece import Piece
from oukchess.game.interfaces import IPieceFactory

# Back ranks, file a → h. The kings do not face each other.
WHITE_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.KING,
    PieceType.QUEEN,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)
BLACK_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# (pawn rank, back rank) per side; pawns start on the third rank.
START_RANKS: dict[Side, tuple[int, int]] = {
    Side.WHITE: (2, 0),
    Side.BLACK: (5, 7),
}


def back_rank(side: Side) -> tuple[PieceType, ...]:
    return WHITE_BACK_RANK if side == Side.WHITE else BLACK_BACK_RANK


class PieceFactory(IPieceFactory):
    """Creates plain :class:`Piece` instances and counts what it made."""

    __slots__ = ("created",)

    def __init__(self) -> None:
        self.created = 0

    def create(self, side: Side, piece_type: PieceType) -> Piece:
        self.created += 1
        return Piece(side, piece_type)
