"""Piece entity: side, variant and per-match mutable status."""

from __future__ import annotations

from oukchess.core.enums import PieceType, Side
from oukchess.core.types import Square, square_name

# Diagram letter ↔ (Side, PieceType); uppercase = white.
_CHAR_MAP: dict[str, tuple[Side, PieceType]] = {
    "P": (Side.WHITE, PieceType.PAWN),
    "R": (Side.WHITE, PieceType.ROOK),
    "N": (Side.WHITE, PieceType.KNIGHT),
    "B": (Side.WHITE, PieceType.BISHOP),
    "Q": (Side.WHITE, PieceType.QUEEN),
    "K": (Side.WHITE, PieceType.KING),
    "T": (Side.WHITE, PieceType.TREYBOK),
    "p": (Side.BLACK, PieceType.PAWN),
    "r": (Side.BLACK, PieceType.ROOK),
    "n": (Side.BLACK, PieceType.KNIGHT),
    "b": (Side.BLACK, PieceType.BISHOP),
    "q": (Side.BLACK, PieceType.QUEEN),
    "k": (Side.BLACK, PieceType.KING),
    "t": (Side.BLACK, PieceType.TREYBOK),
}

_CHARS: dict[tuple[Side, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

# Pieces whose check can be answered by interposing. Treybok checks cannot.
_SLIDERS = frozenset({PieceType.ROOK, PieceType.BISHOP, PieceType.QUEEN})


class Piece:
    """A single piece instance.

    Unlike squares and moves, pieces have identity: two white pawns are
    different pieces, and the controller tracks them individually through
    captures, promotion and reset.  A piece knows its square (an arena index
    into the board), never the :class:`~oukchess.core.board.Cell` itself.
    """

    __slots__ = (
        "side",
        "piece_type",
        "square",
        "home_square",
        "is_first_move",
        "is_alive",
        "enabled",
    )

    def __init__(self, side: Side, piece_type: PieceType) -> None:
        self.side = side
        self.piece_type = piece_type
        self.square: Square | None = None
        self.home_square: Square | None = None
        # Treybok never gets first-move privileges.
        self.is_first_move = piece_type != PieceType.TREYBOK
        self.is_alive = True
        self.enabled = False

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from a diagram letter, e.g. 'N' → white knight."""
        try:
            side, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(side, ptype)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def on_board(self) -> bool:
        """Alive and standing on a square."""
        return self.is_alive and self.square is not None

    @property
    def is_slider(self) -> bool:
        """Its check can be blocked by interposing a piece."""
        return self.piece_type in _SLIDERS

    @property
    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __str__(self) -> str:
        return _CHARS[(self.side, self.piece_type)]

    def __repr__(self) -> str:
        where = square_name(self.square) if self.square is not None else "-"
        return f"Piece({self.side}, {self.piece_type.name.lower()}, {where})"
