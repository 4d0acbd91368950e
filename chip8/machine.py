"""Aggregate owning every piece of mutable interpreter state."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import PROGRAM_START
from .display.framebuffer import Framebuffer
from .keypad import Keypad
from .memory import Memory
from .registers import Registers
from .timers import TimerBank


@dataclass
class Machine:
    """Memory, registers, timers, framebuffer and key state of one instance."""

    memory: Memory = field(default_factory=Memory)
    regs: Registers = field(default_factory=Registers)
    timers: TimerBank = field(default_factory=TimerBank)
    display: Framebuffer = field(default_factory=Framebuffer)
    keypad: Keypad = field(default_factory=Keypad)
    program: bytes = b""

    def reset(self, *, keep_program: bool = True) -> None:
        """Return every component to its power-on state.

        With ``keep_program`` the image passed to :meth:`load_program` is
        written back, so anything the program stored at run time is lost.
        """
        self.memory.clear()
        if keep_program:
            self.memory.load_program(self.program)
        else:
            self.program = b""
        self.regs.reset()
        self.timers.reset()
        self.display.clear()
        self.keypad.reset()

    def load_program(self, program: bytes) -> None:
        self.memory.load_program(program)
        self.program = bytes(program)
        self.regs.pc = PROGRAM_START


__all__ = ["Machine"]
