"""Legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from oukchess.core.enums import CellState, PieceType, Side
from oukchess.core.move import Move
from oukchess.core.movement import generate_candidates, pawn_attack_squares
from oukchess.core.types import Square, make_square

if TYPE_CHECKING:
    from oukchess.core.piece import Piece
    from oukchess.core.position import Position


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Legality is decided by simulating each candidate in place through
    :meth:`Position.simulate`, which always restores the position before
    control returns here.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Candidates ---------------------------------------------------------

    def candidates(self, piece: Piece) -> list[Square]:
        """Geometric destinations of *piece*, before the king-safety filter."""
        pos = self._pos
        jump_blocked = pos.side_in_check and pos.side_to_move == piece.side
        return generate_candidates(piece, self._board, king_jump_blocked=jump_blocked)

    # -- Legality -----------------------------------------------------------

    def is_legal_move(self, piece: Piece, target: Square) -> bool:
        """Would moving *piece* to *target* keep its own king safe?"""
        with self._pos.simulate(piece, target) as captured:
            # The captured piece is out of the game in this line, so it
            # cannot give check back.
            leaves_in_check = self.is_in_check(piece.side, ignore=captured)
        return not leaves_in_check

    def legal_targets(self, piece: Piece) -> list[Square]:
        if not piece.on_board:
            return []
        return [sq for sq in self.candidates(piece) if self.is_legal_move(piece, sq)]

    def generate_legal_moves(self, side: Side) -> list[Move]:
        """All strictly legal moves for *side*."""
        legal: list[Move] = []
        append_legal = legal.append
        for piece in self._pos.live_pieces(side):
            from_sq = piece.square
            assert from_sq is not None
            for to_sq in self.candidates(piece):
                if self.is_legal_move(piece, to_sq):
                    append_legal(Move(piece, from_sq, to_sq))
        return legal

    def has_legal_move(self, side: Side) -> bool:
        for piece in self._pos.live_pieces(side):
            for to_sq in self.candidates(piece):
                if self.is_legal_move(piece, to_sq):
                    return True
        return False

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, side: Side, ignore: Piece | None = None) -> bool:
        """Is *side*'s king attacked by the opponent?  ``False`` if no king."""
        king_sq = self._pos.king_square(side)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, side.opposite, ignore)

    def checking_pieces(self, side: Side) -> list[Piece]:
        """Opponent pieces currently attacking *side*'s king."""
        king_sq = self._pos.king_square(side)
        if king_sq is None:
            return []
        return self.attackers_on_square(king_sq, side.opposite)

    def is_square_attacked(
        self, sq: Square, by_side: Side, ignore: Piece | None = None
    ) -> bool:
        """Is *sq* attacked by any piece of *by_side* other than *ignore*?"""
        for piece in self._pos.live_pieces(by_side):
            if piece is ignore:
                continue
            if self._attacks(piece, sq):
                return True
        return False

    def attackers_on_square(
        self, sq: Square, by_side: Side, ignore: Piece | None = None
    ) -> list[Piece]:
        """All pieces of *by_side* (except *ignore*) attacking *sq*."""
        return [
            piece
            for piece in self._pos.live_pieces(by_side)
            if piece is not ignore and self._attacks(piece, sq)
        ]

    # -- Internal -----------------------------------------------------------

    def _attacks(self, piece: Piece, sq: Square) -> bool:
        if piece.piece_type == PieceType.PAWN:
            # Pawn capture geometry is fixed; no need to generate its path.
            for f, r in pawn_attack_squares(piece):
                state = self._board.validate_cell(f, r, piece)
                if state in (CellState.FREE, CellState.ENEMY) and make_square(f, r) == sq:
                    return True
            return False
        return sq in self.candidates(piece)
