"""Qt bridge exposing match notifications as signals."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal

from oukchess.core.enums import Side
from oukchess.core.piece import Piece
from oukchess.game.controller import MatchController
from oukchess.game.sounds import SoundCue, SoundCueQueue
from oukchess.game.state import MoveRecord


class MatchSignals(QObject):
    """Re-emits :class:`MatchEvents` callbacks and sound cues as Qt signals.

    Status overlays, sound players and clocks in the UI connect to these
    instead of registering Python callbacks on the controller.
    """

    check = pyqtSignal()
    checkmate = pyqtSignal()
    checkmate_with_winner = pyqtSignal(object)  # Side
    stalemate = pyqtSignal()
    status_cleared = pyqtSignal()
    move_made = pyqtSignal(object)  # MoveRecord
    promoted = pyqtSignal(object)  # Piece
    sound_requested = pyqtSignal(object)  # SoundCue

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._controller: MatchController | None = None
        self._registered: list[tuple[list[Any], Callable[..., None]]] = []
        self._sound_queue: SoundCueQueue | None = None

    # ── Wiring ────────────────────────────────────────────────────────────

    def attach(self, controller: MatchController) -> None:
        """Forward *controller*'s events; replaces any previous attachment."""
        self.detach()
        events = controller.events
        self._register(events.on_check, self._emit_check)
        self._register(events.on_checkmate, self._emit_checkmate)
        self._register(events.on_checkmate_with_winner, self._emit_winner)
        self._register(events.on_stalemate, self._emit_stalemate)
        self._register(events.on_clear_status, self._emit_cleared)
        self._register(events.on_move, self._emit_move)
        self._register(events.on_promotion, self._emit_promoted)
        self._controller = controller

        sounds = controller.sounds
        if isinstance(sounds, SoundCueQueue):
            self.attach_sounds(sounds)

    def attach_sounds(self, queue: SoundCueQueue) -> None:
        if self._sound_queue is queue:
            return
        self._register(queue.on_play, self._emit_sound)
        self._sound_queue = queue

    def detach(self) -> None:
        for handlers, callback in self._registered:
            if callback in handlers:
                handlers.remove(callback)
        self._registered.clear()
        self._controller = None
        self._sound_queue = None

    @property
    def controller(self) -> MatchController | None:
        return self._controller

    # ── Internal ──────────────────────────────────────────────────────────

    def _register(self, handlers: list[Any], callback: Callable[..., None]) -> None:
        handlers.append(callback)
        self._registered.append((handlers, callback))

    def _emit_check(self) -> None:
        self.check.emit()

    def _emit_checkmate(self) -> None:
        self.checkmate.emit()

    def _emit_winner(self, winner: Side) -> None:
        self.checkmate_with_winner.emit(winner)

    def _emit_stalemate(self) -> None:
        self.stalemate.emit()

    def _emit_cleared(self) -> None:
        self.status_cleared.emit()

    def _emit_move(self, record: MoveRecord) -> None:
        self.move_made.emit(record)

    def _emit_promoted(self, piece: Piece) -> None:
        self.promoted.emit(piece)

    def _emit_sound(self, cue: SoundCue) -> None:
        self.sound_requested.emit(cue)
