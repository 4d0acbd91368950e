from __future__ import annotations

import pytest

from chip8.constants import FONT_GLYPHS, PROGRAM_START, glyph_address
from chip8.errors import OutOfBoundsAccess
from chip8.memory import Memory


def test_glyphs_loaded_at_power_on() -> None:
    mem = Memory()
    assert mem.read_block(0, 5) == bytes(FONT_GLYPHS[0])
    assert mem.read_block(glyph_address(0xF), 5) == bytes(FONT_GLYPHS[0xF])
    assert mem.read_byte(80) == 0


def test_clear_restores_glyphs() -> None:
    mem = Memory()
    mem.write_byte(0x000, 0x00)
    mem.write_byte(0x300, 0x42)
    mem.clear()
    assert mem.read_byte(0x000) == 0xF0
    assert mem.read_byte(0x300) == 0


def test_read_word_is_big_endian() -> None:
    mem = Memory()
    mem.load_program(bytes([0x12, 0x34]))
    assert mem.read_word(PROGRAM_START) == 0x1234


@pytest.mark.parametrize("address", [-1, 0x1000, 0xFFFF])
def test_out_of_range_access_raises(address: int) -> None:
    mem = Memory()
    with pytest.raises(OutOfBoundsAccess) as excinfo:
        mem.read_byte(address)
    assert excinfo.value.address == address
    with pytest.raises(OutOfBoundsAccess):
        mem.write_byte(address, 1)


def test_word_fetch_straddling_end_raises() -> None:
    mem = Memory()
    with pytest.raises(OutOfBoundsAccess) as excinfo:
        mem.read_word(0xFFF)
    assert excinfo.value.address == 0x1000


def test_block_bounds_checked_before_write() -> None:
    mem = Memory()
    with pytest.raises(OutOfBoundsAccess):
        mem.write_block(0xFFE, [1, 2, 3])
    assert mem.read_byte(0xFFE) == 0


def test_oversized_program_rejected() -> None:
    mem = Memory()
    mem.load_program(bytes(0x1000 - PROGRAM_START))
    with pytest.raises(ValueError):
        mem.load_program(bytes(0x1000 - PROGRAM_START + 1))


def test_dump_formats_rows() -> None:
    mem = Memory()
    mem.load_program(bytes(range(20)))
    lines = mem.dump(PROGRAM_START, 20).splitlines()
    assert lines[0].startswith("200: 00 01 02")
    assert lines[1] == "210: 10 11 12 13"
