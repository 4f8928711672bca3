"""Board - the fixed 8x8 grid of cells."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from oukchess.core.enums import CellState
from oukchess.core.types import Square, file_of, is_on_board, make_square, rank_of

if TYPE_CHECKING:
    from oukchess.core.piece import Piece


@dataclass(slots=True, eq=False)
class Cell:
    """One board square and the piece standing on it, if any."""

    square: Square
    occupant: Piece | None = None

    @property
    def file(self) -> int:
        return file_of(self.square)

    @property
    def rank(self) -> int:
        return rank_of(self.square)

    @property
    def is_empty(self) -> bool:
        return self.occupant is None


class Board:
    """Owns the 64 cells for the lifetime of a match.

    Cells are created once and never replaced; only their occupants change.
    ``board[sq]`` reads and writes the occupant directly and does not touch
    the piece's own square (see :class:`~oukchess.core.position.Position`
    for the operations that keep both sides in step).
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: tuple[Cell, ...] = tuple(Cell(sq) for sq in range(64))

    # -- Element access -----------------------------------------------------

    def cell(self, sq: Square) -> Cell:
        return self._cells[sq]

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._cells[sq].occupant

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._cells[sq].occupant = piece

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def is_empty(self, sq: Square) -> bool:
        return self._cells[sq].occupant is None

    # -- Query helpers ------------------------------------------------------

    def validate_cell(self, file: int, rank: int, asking: Piece) -> CellState:
        """Classify (file, rank) from the point of view of *asking*."""
        if not is_on_board(file, rank):
            return CellState.OUT_OF_BOUNDS
        occupant = self._cells[make_square(file, rank)].occupant
        if occupant is None:
            return CellState.FREE
        if occupant.side == asking.side:
            return CellState.FRIENDLY
        return CellState.ENEMY

    def occupied_squares(self) -> list[Square]:
        return [c.square for c in self._cells if c.occupant is not None]

    # -- Mutation -----------------------------------------------------------

    def clear(self) -> None:
        for c in self._cells:
            c.occupant = None

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
