"""Input collaborators that need no host window."""

from __future__ import annotations

import time
from typing import Callable, Iterable, List, Optional, Tuple

from .keypad import Keypad


class HeadlessInput:
    """Never touches keys; requests quit once ``seconds`` have elapsed."""

    def __init__(
        self,
        seconds: Optional[float] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.clock = clock
        self.deadline = None if seconds is None else clock() + seconds

    def poll(self, keypad: Keypad) -> bool:
        if self.deadline is None:
            return True
        return self.clock() < self.deadline


class ScriptedInput(HeadlessInput):
    """Replay ``(time, key, pressed)`` events relative to construction time."""

    def __init__(
        self,
        events: Iterable[Tuple[float, int, bool]],
        seconds: Optional[float] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        super().__init__(seconds, clock)
        origin = clock()
        self._events: List[Tuple[float, int, bool]] = sorted(
            (origin + at, key, pressed) for at, key, pressed in events
        )

    def poll(self, keypad: Keypad) -> bool:
        now = self.clock()
        while self._events and self._events[0][0] <= now:
            _, key, pressed = self._events.pop(0)
            keypad.set_key(key, pressed)
        return super().poll(keypad)


__all__ = ["HeadlessInput", "ScriptedInput"]
