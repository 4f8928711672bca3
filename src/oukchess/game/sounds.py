"""Sound cue selection for move outcomes.

The engine does not play audio.  :class:`SoundCueQueue` decides *which* cue
a turn deserves and hands it to subscribers (a Qt sound player, a test).
A move or capture cue is held back until the turn is evaluated, so that
check, checkmate and draw cues can replace it.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum, auto

from oukchess.game.interfaces import ISoundSink

SoundCallback = Callable[["SoundCue"], None]


class SoundCue(IntEnum):
    """Audio feedback kinds, lowest to highest priority."""

    MOVE = auto()
    CAPTURE = auto()
    CHECK = auto()
    CHECKMATE = auto()
    DRAW = auto()


class SoundCueQueue(ISoundSink):
    """Holds at most one pending move / capture cue."""

    __slots__ = ("_enabled", "_volume", "_pending", "on_play")

    def __init__(self, enabled: bool = True, volume: int = 80) -> None:
        self._enabled = enabled
        self._volume = max(0, min(100, volume)) / 100.0
        self._pending: SoundCue | None = None
        self.on_play: list[SoundCallback] = []

    # ── Settings ──────────────────────────────────────────────────────────

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def set_volume(self, volume: int) -> None:
        """Set volume in range 0–100."""
        self._volume = max(0, min(100, volume)) / 100.0

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def pending(self) -> SoundCue | None:
        return self._pending

    # ── ISoundSink implementation ─────────────────────────────────────────

    def set_pending_move(self, is_capture: bool) -> None:
        self._pending = SoundCue.CAPTURE if is_capture else SoundCue.MOVE

    def clear_pending(self) -> None:
        self._pending = None

    def play(self, cue: SoundCue) -> None:
        self._pending = None
        if not self._enabled:
            return
        for cb in self.on_play:
            cb(cue)

    def play_pending_if_no_check(self) -> None:
        pending = self._pending
        self._pending = None
        if pending is not None:
            self.play(pending)
