"""Flat 4 KiB memory image for the CHIP-8 machine."""

from __future__ import annotations

from typing import Iterable

from .constants import (
    FONT_BASE,
    FONT_GLYPHS,
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
)
from .errors import OutOfBoundsAccess


class Memory:
    """Byte-addressable memory with the glyph table pre-loaded.

    Every access is bounds-checked; touching an address outside
    ``0x000-0xFFF`` raises :class:`OutOfBoundsAccess` rather than wrapping.
    """

    def __init__(self, size: int = MEMORY_SIZE):
        self.size = size
        self.data = bytearray(size)
        self._load_glyphs()

    def _load_glyphs(self) -> None:
        offset = FONT_BASE
        for glyph in FONT_GLYPHS:
            self.data[offset : offset + len(glyph)] = bytes(glyph)
            offset += len(glyph)

    def clear(self) -> None:
        """Zero the whole image and rewrite the glyph table."""
        self.data[:] = bytes(self.size)
        self._load_glyphs()

    def contains(self, address: int) -> bool:
        return 0 <= address < self.size

    def _check(self, address: int) -> None:
        if not self.contains(address):
            raise OutOfBoundsAccess(address)

    def read_byte(self, address: int) -> int:
        self._check(address)
        return self.data[address]

    def write_byte(self, address: int, value: int) -> None:
        self._check(address)
        self.data[address] = value & 0xFF

    def read_word(self, address: int) -> int:
        """Read a big-endian 16-bit word (instruction fetch order)."""
        high = self.read_byte(address)
        low = self.read_byte(address + 1)
        return (high << 8) | low

    def read_block(self, address: int, length: int) -> bytes:
        if length <= 0:
            return b""
        self._check(address)
        self._check(address + length - 1)
        return bytes(self.data[address : address + length])

    def write_block(self, address: int, values: Iterable[int]) -> None:
        payload = bytes(v & 0xFF for v in values)
        if not payload:
            return
        self._check(address)
        self._check(address + len(payload) - 1)
        self.data[address : address + len(payload)] = payload

    def load_program(self, program: bytes, start: int = PROGRAM_START) -> None:
        """Copy a raw program image into memory starting at ``start``."""
        if len(program) > MAX_PROGRAM_SIZE or start + len(program) > self.size:
            raise ValueError(
                f"Program image too large ({len(program)} bytes, "
                f"max {self.size - start})"
            )
        self.data[start : start + len(program)] = program

    def dump(self, start: int = PROGRAM_START, length: int = 64) -> str:
        """Return a hex dump of ``length`` bytes, 16 per line."""
        lines = []
        end = min(start + length, self.size)
        for base in range(start, end, 16):
            chunk = self.data[base : min(base + 16, end)]
            lines.append(f"{base:03X}: " + " ".join(f"{b:02X}" for b in chunk))
        return "\n".join(lines)


__all__ = ["Memory"]
