"""Turn clock with per-move increment."""

from __future__ import annotations

import time

from oukchess.core.enums import Side
from oukchess.game.interfaces import ITurnClock, TimeControl


class TurnClock(ITurnClock):
    """Dual clock tracking remaining time for both sides.

    Uses monotonic time for accuracy.  The clock belongs to White after
    :meth:`reset`; each :meth:`switch_turn` credits the increment to the side
    that just moved and starts the opponent's countdown.
    """

    __slots__ = (
        "_time_control",
        "_remaining",
        "_active_side",
        "_last_tick",
        "_running",
    )

    def __init__(self, time_control: TimeControl | None = None) -> None:
        self._time_control = time_control or TimeControl.default()
        self._remaining: dict[Side, float] = {}
        self._active_side = Side.WHITE
        self._last_tick: float = 0.0
        self._running: bool = False
        self._restore_initial()

    # ── ITurnClock implementation ────────────────────────────────────────

    def stop(self) -> None:
        if self._running:
            self._consume_elapsed()
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._last_tick = time.monotonic()
            self._running = True

    def switch_turn(self) -> None:
        if self._running:
            self._consume_elapsed()
        mover = self._active_side
        self._remaining[mover] += self._time_control.increment_seconds
        self._active_side = mover.opposite
        self._last_tick = time.monotonic()
        self._running = True

    def reset(self) -> None:
        self._restore_initial()
        self._last_tick = time.monotonic()
        self._running = True

    # ── Queries ──────────────────────────────────────────────────────────

    def remaining(self, side: Side) -> float:
        if self._running and self._active_side == side:
            elapsed = time.monotonic() - self._last_tick
            return max(0.0, self._remaining[side] - elapsed)
        return max(0.0, self._remaining[side])

    def is_flag_fallen(self, side: Side) -> bool:
        return self.remaining(side) <= 0.0

    @property
    def is_unlimited(self) -> bool:
        return self._time_control.initial_seconds == float("inf")

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def active_side(self) -> Side:
        return self._active_side

    def set_remaining(self, side: Side, seconds: float) -> None:
        """Manually override remaining time (for testing / UI override)."""
        self._remaining[side] = seconds

    # ── Internal ─────────────────────────────────────────────────────────

    def _restore_initial(self) -> None:
        initial = self._time_control.initial_seconds
        self._remaining = {Side.WHITE: initial, Side.BLACK: initial}
        self._active_side = Side.WHITE

    def _consume_elapsed(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_tick
        side = self._active_side
        self._remaining[side] = max(0.0, self._remaining[side] - elapsed)
        self._last_tick = now
