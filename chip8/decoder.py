"""Opcode decoding and disassembly.

``decode`` splits a raw 16-bit opcode into its operand fields and resolves
it to an :class:`Op`.  Unknown patterns decode to ``None`` so both the
engine (which faults) and the disassembler (which emits a data word) can
share the same table.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple


class Op(Enum):
    CLS = "CLS"
    RET = "RET"
    JP = "JP"
    CALL = "CALL"
    SE_IMM = "SE_IMM"
    SNE_IMM = "SNE_IMM"
    SE_REG = "SE_REG"
    LD_IMM = "LD_IMM"
    ADD_IMM = "ADD_IMM"
    LD_REG = "LD_REG"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD_REG = "ADD_REG"
    SUB = "SUB"
    SHR = "SHR"
    SUBN = "SUBN"
    SHL = "SHL"
    SNE_REG = "SNE_REG"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND = "RND"
    DRW = "DRW"
    SKP = "SKP"
    SKNP = "SKNP"
    LD_VX_DT = "LD_VX_DT"
    LD_VX_K = "LD_VX_K"
    LD_DT_VX = "LD_DT_VX"
    LD_ST_VX = "LD_ST_VX"
    ADD_I = "ADD_I"
    LD_F = "LD_F"
    LD_B = "LD_B"
    LD_MEM_VX = "LD_MEM_VX"
    LD_VX_MEM = "LD_VX_MEM"


# Families whose operation is fully determined by the high nibble.
_PRIMARY: Dict[int, Op] = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_IMM,
    0x4: Op.SNE_IMM,
    0x5: Op.SE_REG,
    0x6: Op.LD_IMM,
    0x7: Op.ADD_IMM,
    0x9: Op.SNE_REG,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

_SYSTEM: Dict[int, Op] = {
    0x00E0: Op.CLS,
    0x00EE: Op.RET,
}

_ALU: Dict[int, Op] = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

_KEY: Dict[int, Op] = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

_MISC: Dict[int, Op] = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I,
    0x29: Op.LD_F,
    0x33: Op.LD_B,
    0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}


@dataclass(frozen=True)
class Instruction:
    """A decoded opcode and its operand fields."""

    opcode: int
    op: Optional[Op]

    @property
    def family(self) -> int:
        return (self.opcode >> 12) & 0xF

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def kk(self) -> int:
        return self.opcode & 0xFF

    @property
    def nnn(self) -> int:
        return self.opcode & 0xFFF

    @property
    def n(self) -> int:
        return self.opcode & 0xF

    @property
    def valid(self) -> bool:
        return self.op is not None

    def render(self) -> str:
        return disassemble(self.opcode)


def resolve(opcode: int) -> Optional[Op]:
    """Map a raw opcode to its operation, or ``None`` if unrecognized."""

    opcode &= 0xFFFF
    family = opcode >> 12
    if family == 0x0:
        return _SYSTEM.get(opcode)
    if family == 0x8:
        return _ALU.get(opcode & 0xF)
    if family == 0xE:
        return _KEY.get(opcode & 0xFF)
    if family == 0xF:
        return _MISC.get(opcode & 0xFF)
    return _PRIMARY.get(family)


def decode(opcode: int) -> Instruction:
    opcode &= 0xFFFF
    return Instruction(opcode, resolve(opcode))


def _format(instr: Instruction) -> str:
    op = instr.op
    x, y, kk, nnn, n = instr.x, instr.y, instr.kk, instr.nnn, instr.n
    if op is None:
        return f"DW 0x{instr.opcode:04X}"
    formats: Dict[Op, str] = {
        Op.CLS: "CLS",
        Op.RET: "RET",
        Op.JP: f"JP 0x{nnn:03X}",
        Op.CALL: f"CALL 0x{nnn:03X}",
        Op.SE_IMM: f"SE V{x:X}, 0x{kk:02X}",
        Op.SNE_IMM: f"SNE V{x:X}, 0x{kk:02X}",
        Op.SE_REG: f"SE V{x:X}, V{y:X}",
        Op.LD_IMM: f"LD V{x:X}, 0x{kk:02X}",
        Op.ADD_IMM: f"ADD V{x:X}, 0x{kk:02X}",
        Op.LD_REG: f"LD V{x:X}, V{y:X}",
        Op.OR: f"OR V{x:X}, V{y:X}",
        Op.AND: f"AND V{x:X}, V{y:X}",
        Op.XOR: f"XOR V{x:X}, V{y:X}",
        Op.ADD_REG: f"ADD V{x:X}, V{y:X}",
        Op.SUB: f"SUB V{x:X}, V{y:X}",
        Op.SHR: f"SHR V{x:X}, V{y:X}",
        Op.SUBN: f"SUBN V{x:X}, V{y:X}",
        Op.SHL: f"SHL V{x:X}, V{y:X}",
        Op.SNE_REG: f"SNE V{x:X}, V{y:X}",
        Op.LD_I: f"LD I, 0x{nnn:03X}",
        Op.JP_V0: f"JP V0, 0x{nnn:03X}",
        Op.RND: f"RND V{x:X}, 0x{kk:02X}",
        Op.DRW: f"DRW V{x:X}, V{y:X}, {n}",
        Op.SKP: f"SKP V{x:X}",
        Op.SKNP: f"SKNP V{x:X}",
        Op.LD_VX_DT: f"LD V{x:X}, DT",
        Op.LD_VX_K: f"LD V{x:X}, K",
        Op.LD_DT_VX: f"LD DT, V{x:X}",
        Op.LD_ST_VX: f"LD ST, V{x:X}",
        Op.ADD_I: f"ADD I, V{x:X}",
        Op.LD_F: f"LD F, V{x:X}",
        Op.LD_B: f"LD B, V{x:X}",
        Op.LD_MEM_VX: f"LD [I], V{x:X}",
        Op.LD_VX_MEM: f"LD V{x:X}, [I]",
    }
    return formats[op]


def disassemble(opcode: int) -> str:
    """Return the mnemonic for ``opcode``, e.g. ``"LD V1, 0x2A"``."""
    return _format(decode(opcode))


def iter_program(
    program: bytes, base: int = 0x200
) -> Iterator[Tuple[int, int, str]]:
    """Yield ``(address, opcode, mnemonic)`` for each aligned word of ``program``.

    A trailing odd byte is padded with zero.
    """
    for offset in range(0, len(program), 2):
        high = program[offset]
        low = program[offset + 1] if offset + 1 < len(program) else 0
        opcode = (high << 8) | low
        yield base + offset, opcode, disassemble(opcode)


__all__ = ["Op", "Instruction", "decode", "resolve", "disassemble", "iter_program"]
