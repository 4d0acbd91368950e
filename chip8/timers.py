"""Delay and sound countdown timers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TimerBank:
    """Two independent byte counters decremented once per 60 Hz tick."""

    delay: int = 0
    sound: int = 0

    def __post_init__(self) -> None:
        self.delay = int(self.delay) & 0xFF
        self.sound = int(self.sound) & 0xFF

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0

    def tick(self) -> None:
        """Decrement each non-zero counter by one; zero stays zero."""

        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    @property
    def sounding(self) -> bool:
        return self.sound > 0


__all__ = ["TimerBank"]
