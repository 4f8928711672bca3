"""Position — board + piece rosters + turn flags, with scoped move simulation."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from oukchess.core.board import Board
from oukchess.core.enums import PieceType, Side
from oukchess.core.move_generator import MoveGenerator
from oukchess.core.piece import Piece
from oukchess.core.types import Square, make_square


class Position:
    """Full match state the rules operate on.

    Holds the board, the two starting rosters, the separately tracked
    promoted pieces, the side to move and whether that side is in check.
    All placement goes through the methods here so that a piece's square and
    its cell's occupant always agree; :meth:`is_consistent` verifies it.
    """

    __slots__ = ("board", "side_to_move", "side_in_check", "_rosters", "promoted")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Side = Side.WHITE,
    ) -> None:
        self.board = board if board is not None else Board()
        self.side_to_move = side_to_move
        self.side_in_check = False
        self._rosters: dict[Side, list[Piece]] = {Side.WHITE: [], Side.BLACK: []}
        self.promoted: list[Piece] = []

    @classmethod
    def from_diagram(cls, diagram: str, side_to_move: Side = Side.WHITE) -> Position:
        """Build a position from eight rows of piece letters, rank 8 first.

        Uses the same letters as ``repr(board)`` (``.`` for an empty square,
        ``T``/``t`` for a Treybok).  Every piece keeps its first-move right
        except Treybok, which is registered as a promoted piece.
        """
        rows = [line.split() for line in diagram.strip().splitlines()]
        if len(rows) != 8 or any(len(row) != 8 for row in rows):
            raise ValueError("Diagram must have 8 rows of 8 squares")

        pos = cls(side_to_move=side_to_move)
        for i, row in enumerate(rows):
            rank = 7 - i
            for file, char in enumerate(row):
                if char == ".":
                    continue
                piece = Piece.from_char(char)
                pos.add_piece(
                    piece,
                    make_square(file, rank),
                    promoted=piece.piece_type == PieceType.TREYBOK,
                )
        pos.set_turn(side_to_move)
        return pos

    # ── Rosters ──────────────────────────────────────────────────────────

    def roster(self, side: Side) -> list[Piece]:
        """The pieces *side* started the match with (dead ones included)."""
        return self._rosters[side]

    def pieces(self, side: Side) -> list[Piece]:
        """Roster plus promoted pieces of *side*, dead ones included."""
        return self._rosters[side] + [p for p in self.promoted if p.side == side]

    def live_pieces(self, side: Side) -> list[Piece]:
        return [p for p in self.pieces(side) if p.on_board]

    def all_pieces(self) -> list[Piece]:
        return self.pieces(Side.WHITE) + self.pieces(Side.BLACK)

    def king(self, side: Side) -> Piece | None:
        for piece in self.pieces(side):
            if piece.is_king and piece.on_board:
                return piece
        return None

    def king_square(self, side: Side) -> Square | None:
        """Square of *side*'s king, or ``None`` if it is not on the board."""
        king = self.king(side)
        return king.square if king is not None else None

    # ── Placement / capture / promotion ──────────────────────────────────

    def add_piece(self, piece: Piece, sq: Square, *, promoted: bool = False) -> None:
        """Put a new piece into play on an empty square."""
        if not self.board.is_empty(sq):
            raise ValueError(f"Square {sq} is already occupied")
        self._place(piece, sq)
        if promoted:
            self.promoted.append(piece)
        else:
            piece.home_square = sq
            self._rosters[piece.side].append(piece)

    def move_piece(self, piece: Piece, to_sq: Square) -> Piece | None:
        """Move *piece* to *to_sq*, capturing any occupant; return the capture."""
        assert piece.on_board, f"{piece!r} is not on the board"
        from_sq = piece.square
        assert from_sq is not None

        captured = self.board[to_sq]
        if captured is not None:
            self.kill(captured)

        self.board[from_sq] = None
        self._place(piece, to_sq)
        piece.is_first_move = False
        return captured

    def kill(self, piece: Piece) -> None:
        """Remove *piece* from play."""
        sq = piece.square
        if sq is not None and self.board[sq] is piece:
            self.board[sq] = None
        piece.square = None
        piece.is_alive = False
        piece.enabled = False

    def promote(self, pawn: Piece, replacement: Piece) -> Piece:
        """Replace *pawn* with *replacement* on the same square."""
        sq = pawn.square
        assert sq is not None, "Cannot promote a pawn that is off the board"
        self.kill(pawn)
        replacement.is_first_move = False
        self.add_piece(replacement, sq, promoted=True)
        return replacement

    def reset(self) -> None:
        """Back to the starting layout: promoted pieces dropped, rosters home."""
        for piece in self.promoted:
            self.kill(piece)
        self.promoted.clear()

        self.board.clear()
        for piece in self._rosters[Side.WHITE] + self._rosters[Side.BLACK]:
            piece.square = None
            piece.is_alive = True
            piece.is_first_move = True
            piece.enabled = False
            if piece.home_square is not None:
                self._place(piece, piece.home_square)

        self.side_to_move = Side.WHITE
        self.side_in_check = False

    # ── Turn flags ───────────────────────────────────────────────────────

    def set_turn(self, side: Side) -> bool:
        """Make *side* the side to move and refresh its check flag."""
        self.side_to_move = side
        self.side_in_check = MoveGenerator(self).is_in_check(side)
        return self.side_in_check

    # ── Simulation ───────────────────────────────────────────────────────

    @contextmanager
    def simulate(self, piece: Piece, target: Square) -> Iterator[Piece | None]:
        """Temporarily stand *piece* on *target*; yields the displaced piece.

        Only the two cells and the mover's square change, and they are
        restored on exit whatever happens inside the block.  The displaced
        piece keeps its own square, so callers must exclude it explicitly.
        """
        from_sq = piece.square
        assert from_sq is not None
        captured = self.board[target]

        self.board[from_sq] = None
        self.board[target] = piece
        piece.square = target
        try:
            yield captured
        finally:
            piece.square = from_sq
            self.board[target] = captured
            self.board[from_sq] = piece

    # ── Invariants ───────────────────────────────────────────────────────

    def is_consistent(self) -> bool:
        """Every live piece and every occupied cell point at each other."""
        for piece in self.all_pieces():
            if piece.on_board:
                assert piece.square is not None
                if self.board[piece.square] is not piece:
                    return False
            elif piece.square is not None:
                return False

        for cell in self.board:
            occupant = cell.occupant
            if occupant is not None and (
                not occupant.is_alive or occupant.square != cell.square
            ):
                return False

        for side in Side:
            kings = [p for p in self.live_pieces(side) if p.is_king]
            if len(kings) > 1:
                return False
        return True

    # ── Internal ─────────────────────────────────────────────────────────

    def _place(self, piece: Piece, sq: Square) -> None:
        self.board[sq] = piece
        piece.square = sq
        piece.is_alive = True

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
