"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level MatchController depends on
these ABCs, not on concrete clock / sound / factory implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oukchess.core.board import Board
    from oukchess.core.enums import PieceType, Side
    from oukchess.core.piece import Piece
    from oukchess.core.types import Square
    from oukchess.game.sounds import SoundCue
    from oukchess.game.state import TurnOutcome


# ── Match phase FSM states ───────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a match."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


# ── Time control ─────────────────────────────────────────────────────────────


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player.
        increment_seconds: Bonus granted to a player after each of their moves.
    """

    __slots__ = ("initial_seconds", "increment_seconds")

    def __init__(self, initial_seconds: float, increment_seconds: float = 0.0) -> None:
        self.initial_seconds = initial_seconds
        self.increment_seconds = increment_seconds

    @classmethod
    def default(cls) -> TimeControl:
        """Five minutes with a five second bonus per move."""
        return cls(300, 5)

    @classmethod
    def unlimited(cls) -> TimeControl:
        """No time limit."""
        return cls(float("inf"), 0)

    def __repr__(self) -> str:
        mins = self.initial_seconds / 60
        if self.increment_seconds:
            return f"TimeControl({mins:.0f}m+{self.increment_seconds:.0f}s)"
        return f"TimeControl({mins:.0f}m)"


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPieceFactory(ABC):
    """Creates piece entities for setup and promotion."""

    @abstractmethod
    def create(self, side: Side, piece_type: PieceType) -> Piece:
        """Return a new, unplaced piece."""


class ITurnClock(ABC):
    """Interface for the per-side turn clock."""

    @abstractmethod
    def stop(self) -> None:
        """Pause counting (game over or paused)."""

    @abstractmethod
    def resume(self) -> None:
        """Resume counting for the active side."""

    @abstractmethod
    def switch_turn(self) -> None:
        """Hand the clock to the other side, crediting the mover's increment."""

    @abstractmethod
    def reset(self) -> None:
        """Restore both times and give the clock to White."""


class ISoundSink(ABC):
    """Receives outcome cues to select audio feedback."""

    @abstractmethod
    def set_pending_move(self, is_capture: bool) -> None:
        """Queue the move or capture cue for the move just made."""

    @abstractmethod
    def clear_pending(self) -> None:
        """Drop any queued move / capture cue."""

    @abstractmethod
    def play(self, cue: SoundCue) -> None:
        """Play *cue* immediately."""

    @abstractmethod
    def play_pending_if_no_check(self) -> None:
        """Play the queued move / capture cue, if any, then clear it."""


class IMatchController(ABC):
    """Interface for the match orchestrator."""

    @abstractmethod
    def initialize_match(self, board: Board | None = None) -> None:
        """Populate both rosters at their starting squares."""

    @abstractmethod
    def attempt_move(self, piece: Piece, target: Square) -> bool:
        """Apply the move if legal. Returns True if applied."""

    @abstractmethod
    def switch_turn(self, side: Side) -> TurnOutcome:
        """Hand the move to the opponent of *side* and evaluate the result."""

    @abstractmethod
    def reset_match(self) -> None:
        """Restore the initial roster and turn state."""
