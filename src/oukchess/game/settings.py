"""Match configuration."""

from __future__ import annotations

from dataclasses import dataclass

from oukchess.game.interfaces import TimeControl


@dataclass
class MatchSettings:
    """All user-configurable match settings."""

    # Clock
    initial_seconds: float = 300.0
    increment_seconds: float = 5.0

    # Sound
    sound_enabled: bool = True
    sound_volume: int = 80  # 0–100

    def __post_init__(self) -> None:
        if self.initial_seconds <= 0:
            raise ValueError(f"initial_seconds must be positive: {self.initial_seconds}")
        if self.increment_seconds < 0:
            raise ValueError(
                f"increment_seconds must not be negative: {self.increment_seconds}"
            )
        self.sound_volume = max(0, min(100, self.sound_volume))

    @property
    def time_control(self) -> TimeControl:
        return TimeControl(self.initial_seconds, self.increment_seconds)
