"""Fetch-decode-execute engine for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging
import random
from typing import Callable, Dict, Optional

from .config import Quirks
from .constants import FLAG_REGISTER, glyph_address
from .decoder import Instruction, Op, decode
from .errors import UnrecognizedOpcode
from .machine import Machine

logger = logging.getLogger(__name__)


class CPUState(Enum):
    RUNNING = auto()
    AWAITING_KEY = auto()


@dataclass(frozen=True)
class StepResult:
    """Side effects of one ``step()`` call."""

    pc: int
    opcode: int
    drew: bool = False
    collision: bool = False
    awaiting_key: bool = False
    key: Optional[int] = None


Handler = Callable[[Instruction], Optional[int]]


class Chip8CPU:
    """Executes one instruction per :meth:`step` against a :class:`Machine`.

    Handlers return the next program counter, or ``None`` to fall through
    to the following instruction.  Faults propagate as
    :class:`~chip8.errors.Chip8Fault` with the PC left on the faulting
    instruction.
    """

    def __init__(
        self,
        machine: Machine,
        quirks: Optional[Quirks] = None,
        rng: Optional[random.Random] = None,
        trace: bool = False,
    ):
        self.machine = machine
        self.quirks = quirks or Quirks()
        self.rng = rng or random.Random()
        self.trace = trace
        self.state = CPUState.RUNNING
        self.instruction_count = 0
        self._wait_register: Optional[int] = None
        self._drew = False
        self._collision = False
        self._handlers: Dict[Op, Handler] = {
            Op.CLS: self._op_cls,
            Op.RET: self._op_ret,
            Op.JP: self._op_jp,
            Op.CALL: self._op_call,
            Op.SE_IMM: self._op_se_imm,
            Op.SNE_IMM: self._op_sne_imm,
            Op.SE_REG: self._op_se_reg,
            Op.LD_IMM: self._op_ld_imm,
            Op.ADD_IMM: self._op_add_imm,
            Op.LD_REG: self._op_ld_reg,
            Op.OR: self._op_or,
            Op.AND: self._op_and,
            Op.XOR: self._op_xor,
            Op.ADD_REG: self._op_add_reg,
            Op.SUB: self._op_sub,
            Op.SHR: self._op_shr,
            Op.SUBN: self._op_subn,
            Op.SHL: self._op_shl,
            Op.SNE_REG: self._op_sne_reg,
            Op.LD_I: self._op_ld_i,
            Op.JP_V0: self._op_jp_v0,
            Op.RND: self._op_rnd,
            Op.DRW: self._op_drw,
            Op.SKP: self._op_skp,
            Op.SKNP: self._op_sknp,
            Op.LD_VX_DT: self._op_ld_vx_dt,
            Op.LD_VX_K: self._op_ld_vx_k,
            Op.LD_DT_VX: self._op_ld_dt_vx,
            Op.LD_ST_VX: self._op_ld_st_vx,
            Op.ADD_I: self._op_add_i,
            Op.LD_F: self._op_ld_f,
            Op.LD_B: self._op_ld_b,
            Op.LD_MEM_VX: self._op_ld_mem_vx,
            Op.LD_VX_MEM: self._op_ld_vx_mem,
        }

    @property
    def regs(self):
        return self.machine.regs

    @property
    def memory(self):
        return self.machine.memory

    @property
    def awaiting_key(self) -> bool:
        return self.state is CPUState.AWAITING_KEY

    def reset(self) -> None:
        self.state = CPUState.RUNNING
        self.instruction_count = 0
        self._wait_register = None

    def fetch(self) -> int:
        return self.memory.read_word(self.regs.pc)

    def step(self) -> StepResult:
        """Execute exactly one instruction, or poll for a key while waiting."""

        regs = self.regs
        if self.state is CPUState.AWAITING_KEY:
            return self._poll_key()

        pc = regs.pc
        opcode = self.fetch()
        instr = decode(opcode)
        if instr.op is None:
            raise UnrecognizedOpcode(opcode, pc)

        if self.trace and logger.isEnabledFor(logging.DEBUG):
            logger.debug("%03X: %04X  %s", pc, opcode, instr.render())

        self._drew = False
        self._collision = False
        next_pc = self._handlers[instr.op](instr)
        if self.state is CPUState.AWAITING_KEY:
            # PC stays on Fx0A until a key arrives
            self.instruction_count += 1
            return StepResult(pc=pc, opcode=opcode, awaiting_key=True)

        regs.pc = ((pc + 2) if next_pc is None else next_pc) & 0xFFFF
        self.instruction_count += 1
        return StepResult(
            pc=pc,
            opcode=opcode,
            drew=self._drew,
            collision=self._collision,
        )

    def _poll_key(self) -> StepResult:
        regs = self.regs
        pc = regs.pc
        opcode = 0xF00A | ((self._wait_register or 0) << 8)
        key = self.machine.keypad.pop_press()
        if key is None:
            return StepResult(pc=pc, opcode=opcode, awaiting_key=True)
        if self._wait_register is None:
            raise RuntimeError("Awaiting a key with no target register")
        regs.set_v(self._wait_register, key)
        logger.debug("Key %X pressed, resuming at %03X", key, (pc + 2) & 0xFFFF)
        self._wait_register = None
        self.state = CPUState.RUNNING
        regs.pc = (pc + 2) & 0xFFFF
        return StepResult(pc=pc, opcode=opcode, key=key)

    def _skip_if(self, condition: bool) -> int:
        return self.regs.pc + (4 if condition else 2)

    # 0x0 family
    def _op_cls(self, instr: Instruction) -> Optional[int]:
        self.machine.display.clear()
        self._drew = True
        return None

    def _op_ret(self, instr: Instruction) -> Optional[int]:
        return self.regs.pop()

    # Flow control
    def _op_jp(self, instr: Instruction) -> Optional[int]:
        return instr.nnn

    def _op_call(self, instr: Instruction) -> Optional[int]:
        self.regs.push(self.regs.pc + 2)
        return instr.nnn

    def _op_jp_v0(self, instr: Instruction) -> Optional[int]:
        return instr.nnn + self.regs.v[0]

    # Conditional skips
    def _op_se_imm(self, instr: Instruction) -> Optional[int]:
        return self._skip_if(self.regs.v[instr.x] == instr.kk)

    def _op_sne_imm(self, instr: Instruction) -> Optional[int]:
        return self._skip_if(self.regs.v[instr.x] != instr.kk)

    def _op_se_reg(self, instr: Instruction) -> Optional[int]:
        v = self.regs.v
        return self._skip_if(v[instr.x] == v[instr.y])

    def _op_sne_reg(self, instr: Instruction) -> Optional[int]:
        v = self.regs.v
        return self._skip_if(v[instr.x] != v[instr.y])

    def _op_skp(self, instr: Instruction) -> Optional[int]:
        key = self.regs.v[instr.x] & 0xF
        return self._skip_if(self.machine.keypad.is_pressed(key))

    def _op_sknp(self, instr: Instruction) -> Optional[int]:
        key = self.regs.v[instr.x] & 0xF
        return self._skip_if(not self.machine.keypad.is_pressed(key))

    # Immediate loads
    def _op_ld_imm(self, instr: Instruction) -> Optional[int]:
        self.regs.set_v(instr.x, instr.kk)
        return None

    def _op_add_imm(self, instr: Instruction) -> Optional[int]:
        self.regs.set_v(instr.x, self.regs.v[instr.x] + instr.kk)
        return None

    # 0x8 ALU group; VF is always written last
    def _op_ld_reg(self, instr: Instruction) -> Optional[int]:
        self.regs.set_v(instr.x, self.regs.v[instr.y])
        return None

    def _logic(self, instr: Instruction, value: int) -> None:
        self.regs.set_v(instr.x, value)
        if self.quirks.logic_resets_flag:
            self.regs.vf = 0

    def _op_or(self, instr: Instruction) -> Optional[int]:
        v = self.regs.v
        self._logic(instr, v[instr.x] | v[instr.y])
        return None

    def _op_and(self, instr: Instruction) -> Optional[int]:
        v = self.regs.v
        self._logic(instr, v[instr.x] & v[instr.y])
        return None

    def _op_xor(self, instr: Instruction) -> Optional[int]:
        v = self.regs.v
        self._logic(instr, v[instr.x] ^ v[instr.y])
        return None

    def _op_add_reg(self, instr: Instruction) -> Optional[int]:
        v = self.regs.v
        total = v[instr.x] + v[instr.y]
        self.regs.set_v(instr.x, total)
        self.regs.vf = 1 if total > 0xFF else 0
        return None

    def _op_sub(self, instr: Instruction) -> Optional[int]:
        v = self.regs.v
        a, b = v[instr.x], v[instr.y]
        self.regs.set_v(instr.x, a - b)
        self.regs.vf = 1 if a >= b else 0
        return None

    def _op_subn(self, instr: Instruction) -> Optional[int]:
        v = self.regs.v
        a, b = v[instr.x], v[instr.y]
        self.regs.set_v(instr.x, b - a)
        self.regs.vf = 1 if b >= a else 0
        return None

    def _shift_source(self, instr: Instruction) -> int:
        return self.regs.v[instr.y if self.quirks.shift_uses_vy else instr.x]

    def _op_shr(self, instr: Instruction) -> Optional[int]:
        source = self._shift_source(instr)
        self.regs.set_v(instr.x, source >> 1)
        self.regs.vf = source & 0x1
        return None

    def _op_shl(self, instr: Instruction) -> Optional[int]:
        source = self._shift_source(instr)
        self.regs.set_v(instr.x, source << 1)
        self.regs.vf = (source >> 7) & 0x1
        return None

    # Index register
    def _op_ld_i(self, instr: Instruction) -> Optional[int]:
        self.regs.i = instr.nnn
        return None

    def _op_add_i(self, instr: Instruction) -> Optional[int]:
        self.regs.i = (self.regs.i + self.regs.v[instr.x]) & 0xFFFF
        return None

    def _op_ld_f(self, instr: Instruction) -> Optional[int]:
        self.regs.i = glyph_address(self.regs.v[instr.x])
        return None

    def _op_rnd(self, instr: Instruction) -> Optional[int]:
        self.regs.set_v(instr.x, self.rng.getrandbits(8) & instr.kk)
        return None

    def _op_drw(self, instr: Instruction) -> Optional[int]:
        v = self.regs.v
        sprite = self.memory.read_block(self.regs.i, instr.n)
        collision = self.machine.display.draw_sprite(
            v[instr.x], v[instr.y], sprite, wrap=self.quirks.wrap_sprites
        )
        self.regs.v[FLAG_REGISTER] = 1 if collision else 0
        self._drew = True
        self._collision = collision
        return None

    # Timers and keys
    def _op_ld_vx_dt(self, instr: Instruction) -> Optional[int]:
        self.regs.set_v(instr.x, self.machine.timers.delay)
        return None

    def _op_ld_dt_vx(self, instr: Instruction) -> Optional[int]:
        self.machine.timers.set_delay(self.regs.v[instr.x])
        return None

    def _op_ld_st_vx(self, instr: Instruction) -> Optional[int]:
        self.machine.timers.set_sound(self.regs.v[instr.x])
        return None

    def _op_ld_vx_k(self, instr: Instruction) -> Optional[int]:
        # Only presses that happen after this point resume execution.
        self.machine.keypad.clear_presses()
        self._wait_register = instr.x
        self.state = CPUState.AWAITING_KEY
        return None

    # Memory transfers
    def _op_ld_b(self, instr: Instruction) -> Optional[int]:
        value = self.regs.v[instr.x]
        self.memory.write_block(
            self.regs.i, (value // 100, (value // 10) % 10, value % 10)
        )
        return None

    def _op_ld_mem_vx(self, instr: Instruction) -> Optional[int]:
        count = instr.x + 1
        self.memory.write_block(self.regs.i, self.regs.v[:count])
        if self.quirks.memory_increments_index:
            self.regs.i = (self.regs.i + count) & 0xFFFF
        return None

    def _op_ld_vx_mem(self, instr: Instruction) -> Optional[int]:
        count = instr.x + 1
        for index, value in enumerate(self.memory.read_block(self.regs.i, count)):
            self.regs.v[index] = value
        if self.quirks.memory_increments_index:
            self.regs.i = (self.regs.i + count) & 0xFFFF
        return None


__all__ = ["Chip8CPU", "CPUState", "StepResult"]
