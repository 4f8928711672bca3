"""Per-variant movement profiles and candidate-square generation.

Candidates are the squares a piece could geometrically reach from where it
stands, captures included; whether the move would leave the mover's own king
attacked is decided later by :class:`~oukchess.core.move_generator.MoveGenerator`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from oukchess.core.enums import CellState, PieceType, Side
from oukchess.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from oukchess.core.board import Board
    from oukchess.core.piece import Piece


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

DIAGONAL_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = DIAGONAL_DIRS + ROOK_DIRS

# Rank component is relative to the side: +1 means "towards the opponent".
BISHOP_DIRS: tuple[tuple[int, int], ...] = (
    (0, 1),  # forward
    (-1, 1),  # forward-left
    (1, 1),  # forward-right
    (1, -1),  # backward-right
    (-1, -1),  # backward-left
)

KING_JUMP_FILES: tuple[int, ...] = (-2, 2)

_FULL_RANGE = 7


@dataclass(frozen=True, slots=True)
class MovementProfile:
    """Reachable offsets of a variant.

    Args:
        directions: ``(file, rank)`` step vectors.
        max_steps: How far a ray may run (1 = single step / jump).
        side_relative: Flip the rank component for Black.
    """

    directions: tuple[tuple[int, int], ...]
    max_steps: int
    side_relative: bool = False

    def oriented(self, side: Side) -> tuple[tuple[int, int], ...]:
        if not self.side_relative or side == Side.WHITE:
            return self.directions
        return tuple((df, -dr) for df, dr in self.directions)


PROFILES: dict[PieceType, MovementProfile] = {
    PieceType.ROOK: MovementProfile(ROOK_DIRS, _FULL_RANGE),
    PieceType.KNIGHT: MovementProfile(KNIGHT_OFFSETS, 1),
    PieceType.BISHOP: MovementProfile(BISHOP_DIRS, 1, side_relative=True),
    PieceType.QUEEN: MovementProfile(QUEEN_DIRS, _FULL_RANGE),
    PieceType.KING: MovementProfile(QUEEN_DIRS, 1),
    PieceType.TREYBOK: MovementProfile(QUEEN_DIRS, _FULL_RANGE),
}


def promotion_zone(side: Side, rank: int) -> bool:
    """Whether *rank* is inside *side*'s promotion zone (last three ranks)."""
    if side == Side.WHITE:
        return rank >= 5
    return rank <= 2


def pawn_attack_squares(pawn: Piece) -> list[tuple[int, int]]:
    """The two forward-diagonal (file, rank) pairs a pawn attacks.

    Pairs may lie off the board; callers classify them.
    """
    assert pawn.square is not None
    f = file_of(pawn.square)
    r = rank_of(pawn.square) + pawn.side.forward
    return [(f - 1, r), (f + 1, r)]


def generate_candidates(
    piece: Piece,
    board: Board,
    *,
    king_jump_blocked: bool = False,
) -> list[Square]:
    """Candidate destination squares for *piece* on *board*.

    Args:
        piece: A piece standing on *board*.
        board: Current board; never mutated.
        king_jump_blocked: Suppress the king's first-move jump (its side is
            to move and in check).
    """
    if piece.square is None:
        return []

    if piece.piece_type == PieceType.PAWN:
        return _pawn_candidates(piece, board)

    profile = PROFILES[piece.piece_type]
    targets = _walk_rays(piece, board, profile.oriented(piece.side), profile.max_steps)

    if piece.is_first_move:
        if piece.piece_type == PieceType.QUEEN:
            targets = _queen_first_move(piece, board, targets)
        elif piece.piece_type == PieceType.KING and not king_jump_blocked:
            targets.extend(_king_jumps(piece, board))
    return targets


# -- Variant specifics (private) ---------------------------------------------


def _walk_rays(
    piece: Piece,
    board: Board,
    directions: tuple[tuple[int, int], ...],
    max_steps: int,
) -> list[Square]:
    assert piece.square is not None
    f0 = file_of(piece.square)
    r0 = rank_of(piece.square)
    targets: list[Square] = []
    for df, dr in directions:
        f, r = f0, r0
        for _ in range(max_steps):
            f += df
            r += dr
            state = board.validate_cell(f, r, piece)
            if state == CellState.FREE:
                targets.append(make_square(f, r))
                continue
            if state == CellState.ENEMY:
                targets.append(make_square(f, r))
            break
    return targets


def _pawn_candidates(pawn: Piece, board: Board) -> list[Square]:
    assert pawn.square is not None
    targets: list[Square] = []
    f = file_of(pawn.square)
    r = rank_of(pawn.square) + pawn.side.forward

    if board.validate_cell(f, r, pawn) == CellState.FREE:
        targets.append(make_square(f, r))

    for af, ar in pawn_attack_squares(pawn):
        if board.validate_cell(af, ar, pawn) == CellState.ENEMY:
            targets.append(make_square(af, ar))
    return targets


def _queen_first_move(
    queen: Piece, board: Board, targets: list[Square]
) -> list[Square]:
    """Replace forward moves along the queen's file with one double step."""
    assert queen.square is not None
    f = file_of(queen.square)
    r = rank_of(queen.square)
    forward = queen.side.forward

    kept = [
        sq
        for sq in targets
        if not (file_of(sq) == f and (rank_of(sq) - r) * forward > 0)
    ]
    if board.validate_cell(f, r + 2 * forward, queen) == CellState.FREE:
        kept.append(make_square(f, r + 2 * forward))
    return kept


def _king_jumps(king: Piece, board: Board) -> list[Square]:
    assert king.square is not None
    f = file_of(king.square)
    r = rank_of(king.square) + king.side.forward
    return [
        make_square(f + df, r)
        for df in KING_JUMP_FILES
        if board.validate_cell(f + df, r, king) == CellState.FREE
    ]
