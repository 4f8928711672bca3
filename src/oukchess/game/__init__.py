"""Game management layer — controller, clock, sounds, state machine.

Quick start::

    from oukchess.game import MatchController, MatchSettings

    ctrl = MatchController(settings=MatchSettings(initial_seconds=600))
    ctrl.events.on_check.append(lambda: print("check"))
    ctrl.initialize_match()

The Qt signal adapter lives in :mod:`oukchess.game.qt_bridge` and is not
imported here, so the game layer works without PyQt6 loaded.
"""

from oukchess.game.clock import TurnClock
from oukchess.game.controller import MatchController, MatchEvents
from oukchess.game.factory import PieceFactory
from oukchess.game.interfaces import (
    GamePhase,
    IMatchController,
    IPieceFactory,
    ISoundSink,
    ITurnClock,
    TimeControl,
)
from oukchess.game.settings import MatchSettings
from oukchess.game.sounds import SoundCue, SoundCueQueue
from oukchess.game.state import MatchState, MoveRecord, TurnOutcome

__all__ = [
    # Interfaces
    "GamePhase",
    "IMatchController",
    "IPieceFactory",
    "ISoundSink",
    "ITurnClock",
    "TimeControl",
    # Concrete
    "MatchController",
    "MatchEvents",
    "MatchSettings",
    "MatchState",
    "MoveRecord",
    "PieceFactory",
    "SoundCue",
    "SoundCueQueue",
    "TurnClock",
    "TurnOutcome",
]
