"""Fatal execution faults raised by the CHIP-8 core.

None of these are recoverable for the running program: the instruction set
has no trap mechanism.  They are raised out of ``Chip8CPU.step`` so the caller
(scheduler, CLI, tests) decides whether to halt, restart or report.
"""

from __future__ import annotations


class Chip8Fault(Exception):
    """Base class for all fatal interpreter conditions."""


class UnrecognizedOpcode(Chip8Fault):
    def __init__(self, value: int, address: int | None = None) -> None:
        self.value = value & 0xFFFF
        self.address = address
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Unrecognized opcode 0x{self.value:04X}{where}")


class StackOverflow(Chip8Fault):
    def __init__(self, address: int | None = None) -> None:
        self.address = address
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Stack overflow{where}")


class StackUnderflow(Chip8Fault):
    def __init__(self, address: int | None = None) -> None:
        self.address = address
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Stack underflow{where}")


class OutOfBoundsAccess(Chip8Fault):
    def __init__(self, address: int) -> None:
        self.address = address
        super().__init__(f"Memory access out of bounds: 0x{address:04X}")


__all__ = [
    "Chip8Fault",
    "UnrecognizedOpcode",
    "StackOverflow",
    "StackUnderflow",
    "OutOfBoundsAccess",
]
