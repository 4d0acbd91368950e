"""Register file and return-address stack."""

from __future__ import annotations

from typing import List

from .constants import FLAG_REGISTER, NUM_REGISTERS, PROGRAM_START, STACK_DEPTH
from .errors import StackOverflow, StackUnderflow


class Registers:
    """V0-VF, the index register I, PC and the call stack.

    The stack is post-increment: ``sp`` counts the stored return addresses,
    so a full stack has ``sp == STACK_DEPTH``.
    """

    def __init__(self) -> None:
        self.v: List[int] = [0] * NUM_REGISTERS
        self.i = 0
        self.pc = PROGRAM_START
        self.sp = 0
        self.stack: List[int] = [0] * STACK_DEPTH

    def reset(self, pc: int = PROGRAM_START) -> None:
        self.v = [0] * NUM_REGISTERS
        self.i = 0
        self.pc = pc
        self.sp = 0
        self.stack = [0] * STACK_DEPTH

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    def set_v(self, index: int, value: int) -> None:
        self.v[index & 0xF] = value & 0xFF

    def push(self, address: int) -> None:
        if self.sp >= STACK_DEPTH:
            raise StackOverflow(self.pc)
        self.stack[self.sp] = address & 0xFFFF
        self.sp += 1

    def pop(self) -> int:
        if self.sp == 0:
            raise StackUnderflow(self.pc)
        self.sp -= 1
        return self.stack[self.sp]

    def call_stack(self) -> List[int]:
        """Return the live return addresses, oldest first."""
        return list(self.stack[: self.sp])

    def __repr__(self) -> str:
        regs = " ".join(f"V{idx:X}={val:02X}" for idx, val in enumerate(self.v))
        return f"<Registers PC={self.pc:03X} I={self.i:03X} SP={self.sp} {regs}>"


__all__ = ["Registers"]
