"""CHIP-8 emulator combining machine state and the execution engine."""

from __future__ import annotations

import logging
import random
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from .config import MachineConfig
from .cpu import Chip8CPU, StepResult
from .constants import PROGRAM_START
from .decoder import iter_program
from .display.framebuffer import Framebuffer
from .keypad import Keypad
from .machine import Machine
from .memory import Memory

logger = logging.getLogger(__name__)


class Chip8Emulator:
    """One interpreter instance: machine state, CPU and bookkeeping."""

    def __init__(self, config: Optional[MachineConfig] = None):
        self.config = config or MachineConfig()
        self.machine = Machine()
        self.cpu = Chip8CPU(
            self.machine,
            quirks=self.config.quirks,
            rng=random.Random(self.config.seed),
            trace=self.config.trace,
        )
        self.breakpoints: Set[int] = set()
        self.rom_size = 0
        self.start_time = time.perf_counter()

    @property
    def memory(self) -> Memory:
        return self.machine.memory

    @property
    def framebuffer(self) -> Framebuffer:
        return self.machine.display

    @property
    def keypad(self) -> Keypad:
        return self.machine.keypad

    @property
    def instruction_count(self) -> int:
        return self.cpu.instruction_count

    def load_rom(self, rom_data: bytes) -> None:
        """Load a raw program image at 0x200 and point PC at it."""
        self.machine.load_program(rom_data)
        self.rom_size = len(rom_data)
        logger.info("Loaded %d byte program", len(rom_data))

    def load_rom_file(self, path: str | Path) -> None:
        path = Path(path)
        logger.info("Reading file: %s", path)
        self.load_rom(path.read_bytes())

    def reset(self) -> None:
        """Power-cycle the machine, keeping the loaded program."""
        self.machine.reset(keep_program=True)
        self.cpu.reset()
        self.start_time = time.perf_counter()

    def step(self) -> StepResult:
        return self.cpu.step()

    def tick_timers(self) -> None:
        self.machine.timers.tick()

    def add_breakpoint(self, address: int) -> None:
        self.breakpoints.add(address & 0xFFF)

    def remove_breakpoint(self, address: int) -> None:
        self.breakpoints.discard(address & 0xFFF)

    def run_until_breakpoint(self, max_steps: int = 100_000) -> int:
        """Step until PC hits a breakpoint or ``max_steps`` run; return steps."""
        steps = 0
        while steps < max_steps:
            self.cpu.step()
            steps += 1
            if self.machine.regs.pc in self.breakpoints:
                break
        return steps

    def disassemble_rom(self) -> List[str]:
        program = self.memory.read_block(PROGRAM_START, self.rom_size)
        return [
            f"{address:03X}: {opcode:04X}  {text}"
            for address, opcode, text in iter_program(program, PROGRAM_START)
        ]

    def get_cpu_state(self) -> Dict[str, Any]:
        regs = self.machine.regs
        timers = self.machine.timers
        return {
            "pc": regs.pc,
            "i": regs.i,
            "sp": regs.sp,
            "v": list(regs.v),
            "stack": regs.call_stack(),
            "dt": timers.delay,
            "st": timers.sound,
            "state": self.cpu.state.name,
            "instructions": self.cpu.instruction_count,
        }

    def get_performance_stats(self) -> Dict[str, float]:
        elapsed = time.perf_counter() - self.start_time
        executed = self.cpu.instruction_count
        return {
            "instructions_executed": executed,
            "elapsed_time": elapsed,
            "instructions_per_second": executed / elapsed if executed and elapsed > 0 else 0,
        }


__all__ = ["Chip8Emulator"]
