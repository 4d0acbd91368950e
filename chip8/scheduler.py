"""Wall-clock scheduler driving the instruction, timer and render cadences."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
import logging
import time
from typing import Callable, Optional, Protocol

from .display.framebuffer import Framebuffer
from .display.renderers import Renderer
from .errors import Chip8Fault
from .keypad import Keypad

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleeper = Callable[[float], None]


class InputSource(Protocol):
    def poll(self, keypad: Keypad) -> bool:
        """Update ``keypad`` from host events; return False to quit."""
        ...


class Engine(Protocol):
    """What the scheduler needs from the emulator."""

    @property
    def keypad(self) -> Keypad: ...

    @property
    def framebuffer(self) -> Framebuffer: ...

    def step(self) -> object: ...

    def tick_timers(self) -> None: ...


class ExitReason(Enum):
    QUIT = auto()
    FAULT = auto()


@dataclass
class RunSummary:
    reason: ExitReason
    fault: Optional[Chip8Fault] = None
    instructions: int = 0
    timer_ticks: int = 0
    frames: int = 0
    elapsed: float = 0.0


@dataclass
class Cadence:
    """Fixed-period deadline tracker."""

    period: float
    next_due: float = 0.0

    def reset(self, now: float) -> None:
        self.next_due = now + self.period

    def due(self, now: float) -> int:
        """Return how many whole periods have elapsed and advance the deadline."""
        if now < self.next_due:
            return 0
        fired = int((now - self.next_due) // self.period) + 1
        self.next_due += fired * self.period
        return fired


@dataclass
class _RateCounter:
    instructions: int = 0
    frames: int = 0
    window_start: float = 0.0


@dataclass
class Scheduler:
    """Cooperative single-threaded loop over three independent cadences.

    Instruction steps are throttled to at most one per ``1 / cpu_hz``
    seconds.  Timer ticks are caught up one by one when the host falls
    behind; renders are not (one present per pass at most).
    """

    engine: Engine
    renderer: Renderer
    input_source: InputSource
    cpu_hz: int = 600
    timer_hz: int = 60
    render_hz: int = 60
    clock: Clock = time.perf_counter
    sleeper: Optional[Sleeper] = time.sleep
    _cpu: Cadence = field(init=False)
    _timers: Cadence = field(init=False)
    _render: Cadence = field(init=False)
    _rates: _RateCounter = field(init=False, default_factory=_RateCounter)

    def __post_init__(self) -> None:
        self._cpu = Cadence(1.0 / self.cpu_hz)
        self._timers = Cadence(1.0 / self.timer_hz)
        self._render = Cadence(1.0 / self.render_hz)
        self.instructions = 0
        self.timer_ticks = 0
        self.frames = 0

    def start(self) -> None:
        now = self.clock()
        self._cpu.next_due = now
        self._timers.reset(now)
        self._render.reset(now)
        self._rates = _RateCounter(window_start=now)

    def tick(self) -> bool:
        """Run one scheduler pass; return False when input requests quit.

        Faults from the engine propagate to the caller.
        """
        if not self.input_source.poll(self.engine.keypad):
            return False

        now = self.clock()
        if self._cpu.due(now):
            # One step per pass regardless of backlog.
            self._cpu.next_due = now + self._cpu.period
            self.engine.step()
            self.instructions += 1
            self._rates.instructions += 1

        for _ in range(self._timers.due(now)):
            self.engine.tick_timers()
            self.timer_ticks += 1

        if self._render.due(now):
            self.renderer.present(self.engine.framebuffer)
            self.frames += 1
            self._rates.frames += 1

        self._log_rates(now)
        return True

    def _log_rates(self, now: float) -> None:
        elapsed = now - self._rates.window_start
        if elapsed < 1.0:
            return
        logger.debug(
            "%.0fHz %.0ffps",
            self._rates.instructions / elapsed,
            self._rates.frames / elapsed,
        )
        self._rates = _RateCounter(window_start=now)

    def _idle(self) -> None:
        if self.sleeper is None:
            return
        wait = min(self._cpu.next_due, self._timers.next_due, self._render.next_due)
        delay = wait - self.clock()
        if delay > 0:
            self.sleeper(delay)

    def run(self) -> RunSummary:
        """Loop until the input source asks to quit or the engine faults."""
        self.start()
        started = self.clock()
        reason = ExitReason.QUIT
        fault: Optional[Chip8Fault] = None
        try:
            while self.tick():
                self._idle()
        except Chip8Fault as exc:
            logger.error("Execution halted: %s", exc)
            reason = ExitReason.FAULT
            fault = exc
        return RunSummary(
            reason=reason,
            fault=fault,
            instructions=self.instructions,
            timer_ticks=self.timer_ticks,
            frames=self.frames,
            elapsed=self.clock() - started,
        )


__all__ = [
    "Cadence",
    "Clock",
    "Engine",
    "ExitReason",
    "InputSource",
    "RunSummary",
    "Scheduler",
]
