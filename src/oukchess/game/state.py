"""Match state — phase, outcome and move history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from oukchess.core.enums import EndState, Side
from oukchess.game.interfaces import GamePhase

if TYPE_CHECKING:
    from oukchess.core.move import Move
    from oukchess.core.piece import Piece


@dataclass(frozen=True, slots=True)
class TurnOutcome:
    """Result of handing the move to the next side."""

    end_state: EndState
    winner: Side | None = None

    @property
    def is_game_over(self) -> bool:
        return self.end_state.is_terminal


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    captured: Piece | None = None
    promoted_to: Piece | None = None
    end_state: EndState = EndState.NONE

    @property
    def was_capture(self) -> bool:
        return self.captured is not None

    @property
    def was_check(self) -> bool:
        return self.end_state in (EndState.CHECK, EndState.CHECKMATE)


@dataclass
class MatchState:
    """Match lifecycle: phase, outcome, history.

    This is a pure data class — no rules, no UI.
    """

    phase: GamePhase = GamePhase.NOT_STARTED
    end_state: EndState = EndState.NONE
    winner: Side | None = None
    move_history: list[MoveRecord] = field(default_factory=list)

    def start(self) -> None:
        """Initialise (or reset) for a fresh match."""
        self.phase = GamePhase.AWAITING_MOVE
        self.end_state = EndState.NONE
        self.winner = None
        self.move_history.clear()

    def record(self, outcome: TurnOutcome) -> None:
        self.end_state = outcome.end_state
        self.winner = outcome.winner
        if outcome.is_game_over:
            self.phase = GamePhase.GAME_OVER

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        return len(self.move_history)
