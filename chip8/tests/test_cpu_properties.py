"""Property tests for ALU and control-flow invariants."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from chip8 import Chip8Emulator, MachineConfig
from chip8.decoder import decode

byte = st.integers(min_value=0, max_value=0xFF)
register = st.integers(min_value=0, max_value=0xE)


def _emulator(*words: int) -> Chip8Emulator:
    emu = Chip8Emulator(MachineConfig(seed=0))
    emu.load_rom(b"".join(w.to_bytes(2, "big") for w in words))
    return emu


@settings(max_examples=300, deadline=None)
@given(x=register, a=byte, b=byte, flag=byte)
def test_add_immediate_never_touches_flag(x: int, a: int, b: int, flag: int) -> None:
    emu = _emulator(0x6F00 | flag, 0x6000 | (x << 8) | a, 0x7000 | (x << 8) | b)
    for _ in range(3):
        emu.step()
    assert emu.machine.regs.v[x] == (a + b) & 0xFF
    assert emu.machine.regs.vf == flag


@settings(max_examples=500, deadline=None)
@given(a=byte, b=byte)
def test_add_with_carry_for_all_pairs(a: int, b: int) -> None:
    emu = _emulator(0x6000 | a, 0x6100 | b, 0x8014)
    for _ in range(3):
        emu.step()
    assert emu.machine.regs.v[0] == (a + b) & 0xFF
    assert emu.machine.regs.vf == (1 if a + b > 0xFF else 0)


@settings(max_examples=300, deadline=None)
@given(a=byte, b=byte)
def test_subtract_flag_is_not_borrow(a: int, b: int) -> None:
    emu = _emulator(0x6000 | a, 0x6100 | b, 0x8015)
    for _ in range(3):
        emu.step()
    assert emu.machine.regs.v[0] == (a - b) & 0xFF
    assert emu.machine.regs.vf == (1 if a >= b else 0)


@settings(max_examples=200, deadline=None)
@given(target=st.integers(min_value=0x204, max_value=0xFFE).filter(lambda t: t % 2 == 0))
def test_call_then_return_restores_pc(target: int) -> None:
    emu = _emulator(0x2000 | target)
    emu.memory.write_block(target, [0x00, 0xEE])
    emu.step()
    assert emu.machine.regs.pc == target
    emu.step()
    assert emu.machine.regs.pc == 0x202


@given(opcode=st.integers(min_value=0, max_value=0xFFFF))
def test_decode_fields_cover_opcode(opcode: int) -> None:
    instr = decode(opcode)
    assert (instr.family << 12) | instr.nnn == opcode
    assert (instr.x << 8) | instr.kk == instr.nnn
    assert (instr.y << 4) | instr.n == instr.kk
