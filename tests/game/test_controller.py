"""Tests for MatchController — the orchestrator."""

from __future__ import annotations

import pytest

from oukchess.core.enums import EndState, PieceType, Side
from oukchess.core.piece import Piece
from oukchess.core.position import Position
from oukchess.core.types import (
    A5,
    A6,
    A8,
    B2,
    B6,
    B8,
    C6,
    D1,
    D8,
    E1,
    E3,
    E4,
    E5,
    E6,
    E7,
    E8,
    F2,
    F6,
    G1,
    G8,
    H7,
    H8,
    Square,
)
from oukchess.game.controller import MatchController, MatchEvents
from oukchess.game.factory import PieceFactory
from oukchess.game.interfaces import GamePhase, ISoundSink, ITurnClock
from oukchess.game.sounds import SoundCue

MATE_IN_ONE = """
k . . . . . . .
. . . . . . . R
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . K . R .
"""

STALEMATE_IN_ONE = """
k . . . . . . .
. . . . . . . .
. . T . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
K . . . . . . .
"""

PROMOTION = """
. . . . . . . k
. . . . . . . .
. . . . . . . .
. . . . P . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
K . . . . . . .
"""

CHECK_WITH_SPECTATOR = """
. . . . k . . .
. . . . . . . .
p . . . . n . .
. . . . . . . .
. . . . R . . .
. . . . . . . .
. . . . . . . .
. . . . . . . K
"""


TREYBOK_CHECK = """
. . . . k . . .
. . . . . . . .
r . . . . . . .
. . . . . . . .
. . . . T . . .
. . . . . . . .
. . . . . . . .
. . . . . . . K
"""

# ── Test doubles ────────────────────────────────────────────────────────────


class _RecordingClock(ITurnClock):
    def __init__(self) -> None:
        self.calls: list[str] = []

    def stop(self) -> None:
        self.calls.append("stop")

    def resume(self) -> None:
        self.calls.append("resume")

    def switch_turn(self) -> None:
        self.calls.append("switch_turn")

    def reset(self) -> None:
        self.calls.append("reset")


class _RecordingSounds(ISoundSink):
    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def set_pending_move(self, is_capture: bool) -> None:
        self.calls.append(("pending", is_capture))

    def clear_pending(self) -> None:
        self.calls.append(("clear", None))

    def play(self, cue: SoundCue) -> None:
        self.calls.append(("play", cue))

    def play_pending_if_no_check(self) -> None:
        self.calls.append(("play_pending", None))


def _piece_at(ctrl: MatchController, sq: Square) -> Piece:
    piece = ctrl.position.board[sq]
    assert piece is not None
    return piece


def _status_log(ctrl: MatchController) -> list[str]:
    """Record every status event the controller fires, by name."""
    log: list[str] = []
    events = ctrl.events
    events.on_check.append(lambda: log.append("check"))
    events.on_checkmate.append(lambda: log.append("checkmate"))
    events.on_checkmate_with_winner.append(lambda side: log.append(f"winner:{side}"))
    events.on_stalemate.append(lambda: log.append("stalemate"))
    events.on_clear_status.append(lambda: log.append("clear"))
    return log


# ── Setup ───────────────────────────────────────────────────────────────────


class TestInitializeMatch:
    def test_phase_awaiting(self, controller: MatchController) -> None:
        assert controller.state.phase == GamePhase.AWAITING_MOVE
        assert controller.side_to_move == Side.WHITE
        assert not controller.is_game_over

    def test_starting_layout(self, controller: MatchController) -> None:
        pos = controller.position
        assert _piece_at(controller, D1).piece_type == PieceType.KING
        assert _piece_at(controller, E1).piece_type == PieceType.QUEEN
        assert _piece_at(controller, D8).piece_type == PieceType.QUEEN
        assert _piece_at(controller, E8).piece_type == PieceType.KING
        assert _piece_at(controller, E3).piece_type == PieceType.PAWN
        assert len(pos.roster(Side.WHITE)) == 16
        assert len(pos.roster(Side.BLACK)) == 16
        assert pos.is_consistent()

    def test_only_white_enabled(self, controller: MatchController) -> None:
        enabled = controller.enabled_pieces()
        assert len(enabled) == 16
        assert all(p.side == Side.WHITE for p in enabled)

    def test_pieces_come_from_factory(self) -> None:
        factory = PieceFactory()
        ctrl = MatchController(factory=factory)
        ctrl.initialize_match()
        assert factory.created == 32

    def test_clock_reset(self) -> None:
        clock = _RecordingClock()
        ctrl = MatchController(clock=clock)
        ctrl.initialize_match()
        assert clock.calls == ["reset"]


# ── Moves ───────────────────────────────────────────────────────────────────


class TestAttemptMove:
    def test_pawn_step(self, controller: MatchController, cues: list[SoundCue]) -> None:
        pawn = _piece_at(controller, E3)
        assert controller.attempt_move(pawn, E4)
        assert controller.side_to_move == Side.BLACK
        assert controller.state.ply_count == 1
        assert cues == [SoundCue.MOVE]
        assert controller.last_outcome.end_state == EndState.NONE
        assert all(p.side == Side.BLACK for p in controller.enabled_pieces())

    def test_history_record(self, controller: MatchController) -> None:
        pawn = _piece_at(controller, E3)
        controller.attempt_move(pawn, E4)
        record = controller.state.move_history[-1]
        assert record.move.piece is pawn
        assert (record.move.from_sq, record.move.to_sq) == (E3, E4)
        assert not record.was_capture
        assert record.promoted_to is None

    def test_rejects_illegal_target(self, controller: MatchController) -> None:
        pawn = _piece_at(controller, E3)
        assert not controller.attempt_move(pawn, E5)
        assert controller.side_to_move == Side.WHITE
        assert controller.state.ply_count == 0

    def test_rejects_wrong_side(self, controller: MatchController) -> None:
        black_king = _piece_at(controller, E8)
        assert not controller.attempt_move(black_king, E7)

    def test_rejects_disabled_piece(self, controller: MatchController) -> None:
        pawn = _piece_at(controller, E3)
        pawn.enabled = False
        assert not controller.attempt_move(pawn, E4)

    def test_king_jump(self, controller: MatchController) -> None:
        king = _piece_at(controller, D1)
        targets = controller.legal_targets(king)
        assert B2 in targets
        assert F2 in targets
        assert controller.attempt_move(king, B2)
        assert not king.is_first_move

    def test_move_event(self, controller: MatchController) -> None:
        records = []
        controller.events.on_move.append(records.append)
        controller.attempt_move(_piece_at(controller, E3), E4)
        assert len(records) == 1
        assert records[0].end_state == EndState.NONE

    def test_disabled_piece_has_no_targets(self, controller: MatchController) -> None:
        black_pawn = _piece_at(controller, E6)
        assert controller.legal_targets(black_pawn) == []


class TestPromotion:
    def test_pawn_becomes_treybok(self, controller: MatchController, cues: list[SoundCue]) -> None:
        controller.load_position(Position.from_diagram(PROMOTION))
        promoted: list[Piece] = []
        controller.events.on_promotion.append(promoted.append)
        pawn = _piece_at(controller, E5)

        assert controller.attempt_move(pawn, E6)
        treybok = _piece_at(controller, E6)
        assert treybok.piece_type == PieceType.TREYBOK
        assert treybok.side == Side.WHITE
        assert not pawn.is_alive
        assert treybok in controller.position.promoted
        assert promoted == [treybok]
        assert controller.state.move_history[-1].promoted_to is treybok
        assert controller.last_outcome.end_state == EndState.NONE
        assert cues == [SoundCue.MOVE]

    def test_treybok_moves_next_turn(self, controller: MatchController) -> None:
        controller.load_position(Position.from_diagram(PROMOTION))
        controller.attempt_move(_piece_at(controller, E5), E6)
        treybok = _piece_at(controller, E6)
        assert not treybok.enabled

        assert controller.attempt_move(_piece_at(controller, H8), H7)
        assert treybok.enabled
        assert controller.legal_targets(treybok)


# ── Turn evaluation ─────────────────────────────────────────────────────────


class TestCheck:
    def test_only_responders_enabled(self, controller: MatchController, cues: list[SoundCue]) -> None:
        outcome = controller.load_position(
            Position.from_diagram(CHECK_WITH_SPECTATOR, Side.BLACK)
        )
        assert outcome.end_state == EndState.CHECK
        enabled = set(controller.enabled_pieces())
        assert enabled == {_piece_at(controller, E8), _piece_at(controller, F6)}
        assert not _piece_at(controller, A6).enabled
        assert cues == [SoundCue.CHECK]

    def test_treybok_check_disables_interposer(self, controller: MatchController) -> None:
        outcome = controller.load_position(Position.from_diagram(TREYBOK_CHECK, Side.BLACK))
        assert outcome.end_state == EndState.CHECK
        rook = _piece_at(controller, A6)
        assert not rook.enabled
        assert controller.enabled_pieces() == [_piece_at(controller, E8)]
        assert not controller.attempt_move(rook, E6)

    def test_check_analysis(self, controller: MatchController) -> None:
        controller.load_position(Position.from_diagram(CHECK_WITH_SPECTATOR, Side.BLACK))
        analysis = controller.check_analysis()
        assert analysis.in_check
        assert [mv.to_sq for mv in analysis.capture_moves] == [E4]

    def test_spectator_move_rejected(self, controller: MatchController) -> None:
        controller.load_position(Position.from_diagram(CHECK_WITH_SPECTATOR, Side.BLACK))
        assert not controller.attempt_move(_piece_at(controller, A6), A5)


class TestCheckmate:
    def test_mate_ends_the_game(self, controller: MatchController, cues: list[SoundCue]) -> None:
        controller.load_position(Position.from_diagram(MATE_IN_ONE))
        rook = _piece_at(controller, G1)

        assert controller.attempt_move(rook, G8)
        assert controller.is_game_over
        assert controller.state.phase == GamePhase.GAME_OVER
        assert controller.state.winner == Side.WHITE
        assert controller.last_outcome.end_state == EndState.CHECKMATE
        assert controller.enabled_pieces() == []
        assert cues == [SoundCue.CHECKMATE]
        assert controller.state.move_history[-1].was_check

    def test_winner_reported_before_checkmate(self, controller: MatchController) -> None:
        controller.load_position(Position.from_diagram(MATE_IN_ONE))
        log = _status_log(controller)
        controller.attempt_move(_piece_at(controller, G1), G8)
        assert log == ["winner:white", "checkmate"]

    def test_no_moves_after_game_over(self, controller: MatchController) -> None:
        controller.load_position(Position.from_diagram(MATE_IN_ONE))
        controller.attempt_move(_piece_at(controller, G1), G8)
        king = _piece_at(controller, A8)
        assert not controller.attempt_move(king, B8)
        assert controller.legal_targets(king) == []

    def test_switch_turn_after_game_over_is_noop(self, controller: MatchController) -> None:
        controller.load_position(Position.from_diagram(MATE_IN_ONE))
        controller.attempt_move(_piece_at(controller, G1), G8)
        outcome = controller.switch_turn(Side.BLACK)
        assert outcome.end_state == EndState.CHECKMATE
        assert controller.side_to_move == Side.BLACK

    def test_clock_stopped_not_switched(self) -> None:
        clock = _RecordingClock()
        ctrl = MatchController(clock=clock)
        ctrl.initialize_match()
        ctrl.load_position(Position.from_diagram(MATE_IN_ONE))
        clock.calls.clear()

        ctrl.attempt_move(_piece_at(ctrl, G1), G8)
        assert clock.calls == ["stop"]


class TestStalemate:
    def test_draw(self, controller: MatchController, cues: list[SoundCue]) -> None:
        controller.load_position(Position.from_diagram(STALEMATE_IN_ONE))
        log = _status_log(controller)

        assert controller.attempt_move(_piece_at(controller, C6), B6)
        assert controller.last_outcome.end_state == EndState.STALEMATE
        assert controller.state.winner is None
        assert controller.is_game_over
        assert log == ["stalemate"]
        assert cues == [SoundCue.DRAW]


class TestNotifications:
    def test_exactly_one_status_event_per_turn(self, controller: MatchController) -> None:
        log = _status_log(controller)
        controller.attempt_move(_piece_at(controller, E3), E4)
        assert log == ["clear"]

    def test_move_sound_pending_until_evaluated(self) -> None:
        sounds = _RecordingSounds()
        ctrl = MatchController(sounds=sounds)
        ctrl.initialize_match()
        sounds.calls.clear()

        ctrl.attempt_move(_piece_at(ctrl, E3), E4)
        assert sounds.calls == [("pending", False), ("play_pending", None)]

    def test_check_replaces_move_sound(self) -> None:
        sounds = _RecordingSounds()
        ctrl = MatchController(sounds=sounds)
        ctrl.initialize_match()
        ctrl.load_position(Position.from_diagram(MATE_IN_ONE))
        sounds.calls.clear()

        ctrl.attempt_move(_piece_at(ctrl, G1), G8)
        assert sounds.calls == [("pending", False), ("clear", None), ("play", SoundCue.CHECKMATE)]

    def test_shared_events_object(self) -> None:
        events = MatchEvents()
        fired: list[str] = []
        events.on_clear_status.append(lambda: fired.append("clear"))
        ctrl = MatchController(events=events)
        ctrl.initialize_match()
        assert ctrl.events is events
        assert fired == ["clear"]


class TestReset:
    def test_reset_restores_start(self, controller: MatchController) -> None:
        pawn = _piece_at(controller, E3)
        controller.attempt_move(pawn, E4)
        controller.reset_match()

        assert controller.position.board[E3] is pawn
        assert controller.side_to_move == Side.WHITE
        assert controller.state.ply_count == 0
        assert controller.state.phase == GamePhase.AWAITING_MOVE
        assert all(p.side == Side.WHITE for p in controller.enabled_pieces())

    def test_reset_after_mate(self, controller: MatchController) -> None:
        controller.load_position(Position.from_diagram(MATE_IN_ONE))
        controller.attempt_move(_piece_at(controller, G1), G8)
        controller.reset_match()
        assert not controller.is_game_over
        assert controller.enabled_pieces()

    def test_reset_before_initialize(self) -> None:
        ctrl = MatchController()
        ctrl.reset_match()
        assert len(ctrl.position.roster(Side.WHITE)) == 16


class TestClockIntegration:
    def test_increment_credited(self, controller: MatchController) -> None:
        controller.attempt_move(_piece_at(controller, E3), E4)
        clock = controller.clock
        assert clock.active_side == Side.BLACK
        assert clock.remaining(Side.WHITE) == pytest.approx(65, abs=1)
