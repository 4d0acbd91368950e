from __future__ import annotations

import pytest

from chip8.decoder import Op, decode, disassemble, iter_program


def test_operand_fields() -> None:
    instr = decode(0xD12F)
    assert instr.op is Op.DRW
    assert (instr.x, instr.y, instr.n) == (0x1, 0x2, 0xF)
    assert decode(0xA123).nnn == 0x123
    assert decode(0x6A42).kk == 0x42


@pytest.mark.parametrize(
    "opcode, op",
    [
        (0x00E0, Op.CLS),
        (0x00EE, Op.RET),
        (0x5120, Op.SE_REG),
        (0x5001, Op.SE_REG),
        (0x9121, Op.SNE_REG),
        (0x812E, Op.SHL),
        (0xE09E, Op.SKP),
        (0xE1A1, Op.SKNP),
        (0xF30A, Op.LD_VX_K),
        (0xF265, Op.LD_VX_MEM),
    ],
)
def test_recognized(opcode: int, op: Op) -> None:
    assert decode(opcode).op is op


@pytest.mark.parametrize(
    "opcode", [0x00F0, 0x0000, 0x0123, 0x8008, 0x800F, 0xE000, 0xF000, 0xF0FF]
)
def test_unrecognized(opcode: int) -> None:
    assert decode(opcode).op is None
    assert not decode(opcode).valid


def test_disassemble() -> None:
    assert disassemble(0x612A) == "LD V1, 0x2A"
    assert disassemble(0xD015) == "DRW V0, V1, 5"
    assert disassemble(0x2ABC) == "CALL 0xABC"
    assert disassemble(0xFA55) == "LD [I], VA"
    assert disassemble(0x00F0) == "DW 0x00F0"


def test_iter_program_pads_odd_tail() -> None:
    listing = list(iter_program(bytes([0x00, 0xE0, 0x12])))
    assert listing == [(0x200, 0x00E0, "CLS"), (0x202, 0x1200, "JP 0x200")]
