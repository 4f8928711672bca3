"""High-level rules: check responses, checkmate, stalemate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from oukchess.core.enums import EndState, Side
from oukchess.core.move_generator import MoveGenerator
from oukchess.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from oukchess.core.move import Move
    from oukchess.core.piece import Piece
    from oukchess.core.position import Position


@dataclass(slots=True)
class CheckAnalysis:
    """How the side to move can answer a check.

    Empty (no attackers) when the side is not in check.
    """

    attackers: list[Piece] = field(default_factory=list)
    is_double_check: bool = False
    king_moves: list[Move] = field(default_factory=list)
    capture_moves: list[Move] = field(default_factory=list)
    block_moves: list[Move] = field(default_factory=list)

    @property
    def in_check(self) -> bool:
        return bool(self.attackers)

    @property
    def responses(self) -> list[Move]:
        """Every move that answers the check."""
        if self.is_double_check:
            return list(self.king_moves)
        return self.king_moves + self.capture_moves + self.block_moves

    @property
    def allowed_pieces(self) -> set[Piece]:
        """Pieces that may be moved this turn."""
        return {move.piece for move in self.responses}


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    King-jump availability follows ``position.side_in_check``; callers
    evaluating the side to move refresh it with :meth:`Position.set_turn`.
    """

    @staticmethod
    def squares_between(a: Square, b: Square) -> list[Square]:
        """Squares strictly between *a* and *b* on a shared line.

        Empty when the two squares are adjacent or not on the same rank,
        file or diagonal.
        """
        df = file_of(b) - file_of(a)
        dr = rank_of(b) - rank_of(a)
        if not (df == 0 or dr == 0 or abs(df) == abs(dr)):
            return []

        sf = (df > 0) - (df < 0)
        sr = (dr > 0) - (dr < 0)
        steps = max(abs(df), abs(dr))
        return [
            make_square(file_of(a) + i * sf, rank_of(a) + i * sr)
            for i in range(1, steps)
        ]

    @staticmethod
    def is_in_check(position: Position, side: Side | None = None) -> bool:
        side = position.side_to_move if side is None else side
        return MoveGenerator(position).is_in_check(side)

    @staticmethod
    def analyze_check_responses(position: Position, side: Side) -> CheckAnalysis:
        """Classify *side*'s legal answers to a check."""
        gen = MoveGenerator(position)
        result = CheckAnalysis()

        result.attackers = gen.checking_pieces(side)
        if not result.attackers:
            return result
        result.is_double_check = len(result.attackers) >= 2

        legal = gen.generate_legal_moves(side)
        # A king move can escape any check, single or double.
        result.king_moves = [mv for mv in legal if mv.piece.is_king]
        if result.is_double_check:
            return result

        attacker = result.attackers[0]
        attacker_sq = attacker.square
        king_sq = position.king_square(side)
        assert attacker_sq is not None and king_sq is not None

        block_squares: set[Square] = set()
        if attacker.is_slider:
            block_squares.update(Rules.squares_between(attacker_sq, king_sq))

        for mv in legal:
            if mv.piece.is_king:
                continue
            if mv.to_sq == attacker_sq:
                result.capture_moves.append(mv)
            elif mv.to_sq in block_squares:
                result.block_moves.append(mv)
        return result

    @staticmethod
    def evaluate_end_state(position: Position, side: Side | None = None) -> EndState:
        """Check / checkmate / stalemate status of *side*, freshly computed."""
        side = position.side_to_move if side is None else side
        gen = MoveGenerator(position)
        in_check = gen.is_in_check(side)
        has_moves = gen.has_legal_move(side)

        if not has_moves:
            return EndState.CHECKMATE if in_check else EndState.STALEMATE
        if in_check:
            return EndState.CHECK
        return EndState.NONE

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.evaluate_end_state(position) == EndState.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.evaluate_end_state(position) == EndState.STALEMATE

    @staticmethod
    def winner(position: Position) -> Side | None:
        """The side that has delivered mate, if the side to move is mated."""
        if Rules.is_checkmate(position):
            return position.side_to_move.opposite
        return None
