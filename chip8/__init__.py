"""CHIP-8 interpreter package."""

from .config import MachineConfig, Quirks
from .cpu import Chip8CPU, CPUState, StepResult
from .emulator import Chip8Emulator
from .errors import (
    Chip8Fault,
    OutOfBoundsAccess,
    StackOverflow,
    StackUnderflow,
    UnrecognizedOpcode,
)
from .machine import Machine
from .scheduler import ExitReason, RunSummary, Scheduler

__all__ = [
    "Chip8Emulator",
    "Chip8CPU",
    "CPUState",
    "StepResult",
    "Machine",
    "MachineConfig",
    "Quirks",
    "Scheduler",
    "RunSummary",
    "ExitReason",
    # Faults
    "Chip8Fault",
    "UnrecognizedOpcode",
    "StackOverflow",
    "StackUnderflow",
    "OutOfBoundsAccess",
]
