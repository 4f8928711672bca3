"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

from oukchess.game.controller import MatchController
from oukchess.game.settings import MatchSettings
from oukchess.game.sounds import SoundCue, SoundCueQueue

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton Qt application for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def cues() -> list[SoundCue]:
    """Sound cues played by the controller fixture, in order."""
    return []


@pytest.fixture
def controller(cues: list[SoundCue]) -> MatchController:
    """A controller with the standard starting layout, White to move."""
    sounds = SoundCueQueue()
    sounds.on_play.append(cues.append)
    ctrl = MatchController(
        sounds=sounds,
        settings=MatchSettings(initial_seconds=60, increment_seconds=5),
    )
    ctrl.initialize_match()
    return ctrl
