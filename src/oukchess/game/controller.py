"""MatchController — the central orchestrator of a match.

Coordinates: Position, MoveGenerator / Rules, piece factory, clock, sounds.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from oukchess.core.board import Board
from oukchess.core.enums import EndState, PieceType, Side
from oukchess.core.move import Move
from oukchess.core.move_generator import MoveGenerator
from oukchess.core.movement import promotion_zone
from oukchess.core.piece import Piece
from oukchess.core.position import Position
from oukchess.core.rules import CheckAnalysis, Rules
from oukchess.core.types import Square, make_square, rank_of, square_name
from oukchess.game.clock import TurnClock
from oukchess.game.factory import START_RANKS, PieceFactory, back_rank
from oukchess.game.interfaces import (
    GamePhase,
    IMatchController,
    IPieceFactory,
    ISoundSink,
    ITurnClock,
)
from oukchess.game.settings import MatchSettings
from oukchess.game.sounds import SoundCue, SoundCueQueue
from oukchess.game.state import MatchState, MoveRecord, TurnOutcome

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

StatusCallback = Callable[[], None]
WinnerCallback = Callable[[Side], None]
MoveCallback = Callable[[MoveRecord], None]
PromotionCallback = Callable[[Piece], None]


@dataclass
class MatchEvents:
    """Observable callbacks. Multiple handlers per event.

    Exactly one status event fires per turn switch; ``on_checkmate_with_winner``
    and ``on_checkmate`` fire together, winner first.
    """

    on_check: list[StatusCallback] = field(default_factory=list)
    on_checkmate: list[StatusCallback] = field(default_factory=list)
    on_checkmate_with_winner: list[WinnerCallback] = field(default_factory=list)
    on_stalemate: list[StatusCallback] = field(default_factory=list)
    on_clear_status: list[StatusCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion: list[PromotionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class MatchController(IMatchController):
    """Owns both sides' pieces: validates moves, promotes pawns, switches
    turns, restricts which pieces may move and notifies listeners.

    Thread-safety: all methods run to completion on the calling thread;
    nothing here yields while the board is mid-simulation.
    """

    __slots__ = (
        "_settings",
        "_factory",
        "_clock",
        "_sounds",
        "_position",
        "_state",
        "_last_outcome",
        "events",
    )

    def __init__(
        self,
        *,
        factory: IPieceFactory | None = None,
        clock: ITurnClock | None = None,
        sounds: ISoundSink | None = None,
        events: MatchEvents | None = None,
        settings: MatchSettings | None = None,
    ) -> None:
        self._settings = settings or MatchSettings()
        self._factory = factory or PieceFactory()
        self._clock = clock or TurnClock(self._settings.time_control)
        self._sounds = sounds or SoundCueQueue(
            self._settings.sound_enabled, self._settings.sound_volume
        )
        self.events = events or MatchEvents()
        self._position = Position()
        self._state = MatchState()
        self._last_outcome = TurnOutcome(EndState.NONE)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def clock(self) -> ITurnClock:
        return self._clock

    @property
    def sounds(self) -> ISoundSink:
        return self._sounds

    @property
    def settings(self) -> MatchSettings:
        return self._settings

    @property
    def side_to_move(self) -> Side:
        return self._position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    @property
    def last_outcome(self) -> TurnOutcome:
        return self._last_outcome

    def enabled_pieces(self) -> list[Piece]:
        return [p for p in self._position.all_pieces() if p.enabled]

    def legal_targets(self, piece: Piece) -> list[Square]:
        """Squares *piece* may move to right now (empty if it may not move)."""
        if not piece.enabled or self.is_game_over:
            return []
        return MoveGenerator(self._position).legal_targets(piece)

    def check_analysis(self) -> CheckAnalysis:
        """Check responses for the side to move (empty when not in check)."""
        return Rules.analyze_check_responses(self._position, self.side_to_move)

    # ── IMatchController impl ────────────────────────────────────────────

    def initialize_match(self, board: Board | None = None) -> None:
        if board is not None:
            board.clear()
        position = Position(board)

        for side in Side:
            pawn_rank, royal_rank = START_RANKS[side]
            for file in range(8):
                pawn = self._factory.create(side, PieceType.PAWN)
                position.add_piece(pawn, make_square(file, pawn_rank))
            for file, piece_type in enumerate(back_rank(side)):
                piece = self._factory.create(side, piece_type)
                position.add_piece(piece, make_square(file, royal_rank))

        self._adopt(position)
        _LOGGER.info("Match initialised; %s to move", self.side_to_move)

    def load_position(self, position: Position) -> TurnOutcome:
        """Continue a match from an arbitrary *position*.

        The side to move is evaluated straight away, so a loaded position
        may already be in check or over.
        """
        self._state.start()
        self._position = position
        self._clock.reset()
        outcome = self._evaluate_turn(position.side_to_move)
        _LOGGER.info("Position loaded; %s to move (%s)", self.side_to_move, outcome)
        return outcome

    def attempt_move(self, piece: Piece, target: Square) -> bool:
        if self._state.phase != GamePhase.AWAITING_MOVE:
            _LOGGER.debug("Rejected %r: match phase is %s", piece, self._state.phase.name)
            return False
        if not piece.on_board or not piece.enabled or piece.side != self.side_to_move:
            _LOGGER.debug("Rejected %r: piece may not move this turn", piece)
            return False

        gen = MoveGenerator(self._position)
        if target not in gen.legal_targets(piece):
            _LOGGER.debug("Rejected %r → %s: illegal move", piece, square_name(target))
            return False

        from_sq = piece.square
        assert from_sq is not None
        captured = self._position.move_piece(piece, target)
        self._sounds.set_pending_move(captured is not None)

        record = MoveRecord(Move(piece, from_sq, target), captured)
        if piece.piece_type == PieceType.PAWN and promotion_zone(
            piece.side, rank_of(target)
        ):
            record.promoted_to = self._promote(piece)
        self._state.move_history.append(record)
        assert self._position.is_consistent()

        outcome = self.switch_turn(piece.side)
        record.end_state = outcome.end_state

        for cb in self.events.on_move:
            cb(record)
        return True

    def switch_turn(self, side: Side) -> TurnOutcome:
        if self._state.is_game_over:
            return self._last_outcome

        outcome = self._evaluate_turn(side.opposite)
        if not outcome.is_game_over:
            self._clock.switch_turn()
        return outcome

    def reset_match(self) -> None:
        if not self._position.roster(Side.WHITE):
            self.initialize_match(self._position.board)
            return

        self._position.reset()
        self._adopt(self._position)
        _LOGGER.info("Match reset")

    # ── Internal helpers ─────────────────────────────────────────────────

    def _adopt(self, position: Position) -> None:
        """Start play from *position* at its initial turn state."""
        self._position = position
        self._state.start()
        self._last_outcome = TurnOutcome(EndState.NONE)
        position.set_turn(Side.WHITE)
        self._enable_side(Side.WHITE)
        self._sounds.clear_pending()
        self._clock.reset()
        for cb in self.events.on_clear_status:
            cb()

    def _promote(self, pawn: Piece) -> Piece:
        side = pawn.side
        treybok = self._factory.create(side, PieceType.TREYBOK)
        self._position.promote(pawn, treybok)
        assert treybok.square is not None
        _LOGGER.info("%s pawn promoted on %s", side, square_name(treybok.square))
        for cb in self.events.on_promotion:
            cb(treybok)
        return treybok

    def _evaluate_turn(self, side: Side) -> TurnOutcome:
        """Give the move to *side*, classify its situation and notify."""
        position = self._position
        if position.king(side) is None:
            _LOGGER.warning("No %s king on the board", side)

        # The check flag must be set before moves are enumerated: it
        # decides whether the king's first-move jump is available.
        position.set_turn(side)
        end_state = Rules.evaluate_end_state(position, side)
        winner = side.opposite if end_state == EndState.CHECKMATE else None
        outcome = TurnOutcome(end_state, winner)
        _LOGGER.debug("%s to move: %s", side, end_state.name)

        if outcome.is_game_over:
            self._clock.stop()
            for piece in position.all_pieces():
                piece.enabled = False
            _LOGGER.info("Game over: %s (winner: %s)", end_state.name, winner)
        else:
            self._enable_side(side)
            if end_state == EndState.CHECK:
                allowed = Rules.analyze_check_responses(position, side).allowed_pieces
                for piece in position.pieces(side):
                    piece.enabled = piece in allowed

        self._state.record(outcome)
        self._last_outcome = outcome
        self._notify(outcome)
        return outcome

    def _enable_side(self, side: Side) -> None:
        for piece in self._position.all_pieces():
            piece.enabled = piece.on_board and piece.side == side

    def _notify(self, outcome: TurnOutcome) -> None:
        end_state = outcome.end_state
        if end_state == EndState.CHECKMATE:
            assert outcome.winner is not None
            for cb in self.events.on_checkmate_with_winner:
                cb(outcome.winner)
            for cb in self.events.on_checkmate:
                cb()
            self._sounds.clear_pending()
            self._sounds.play(SoundCue.CHECKMATE)
        elif end_state == EndState.STALEMATE:
            for cb in self.events.on_stalemate:
                cb()
            self._sounds.clear_pending()
            self._sounds.play(SoundCue.DRAW)
        elif end_state == EndState.CHECK:
            for cb in self.events.on_check:
                cb()
            self._sounds.clear_pending()
            self._sounds.play(SoundCue.CHECK)
        else:
            for cb in self.events.on_clear_status:
                cb()
            self._sounds.play_pending_if_no_check()
