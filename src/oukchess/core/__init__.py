"""Core domain layer — pure rules logic with zero external dependencies.

Quick start::

    from oukchess.core import MoveGenerator, Position, Rules, Side

    pos = Position.from_diagram(diagram, Side.WHITE)
    for move in MoveGenerator(pos).generate_legal_moves(Side.WHITE):
        print(move)
    print(Rules.evaluate_end_state(pos))
"""

from oukchess.core.board import Board, Cell
from oukchess.core.enums import CellState, EndState, PieceType, Side
from oukchess.core.move import Move
from oukchess.core.move_generator import MoveGenerator
from oukchess.core.movement import PROFILES, MovementProfile, generate_candidates
from oukchess.core.piece import Piece
from oukchess.core.position import Position
from oukchess.core.rules import CheckAnalysis, Rules
from oukchess.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "CellState",
    "EndState",
    "PieceType",
    "Side",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Movement
    "PROFILES",
    "MovementProfile",
    "generate_candidates",
    # Domain objects
    "Board",
    "Cell",
    "CheckAnalysis",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
]
