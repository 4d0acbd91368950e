"""Shared pytest fixtures for the CHIP-8 tests."""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from chip8 import Chip8Emulator, MachineConfig, Quirks


def words_to_bytes(*words: int) -> bytes:
    return b"".join(word.to_bytes(2, "big") for word in words)


@pytest.fixture
def make_emulator() -> Callable[..., Chip8Emulator]:
    """Build an emulator with ``words`` loaded at 0x200."""

    def _make(*words: int, quirks: Optional[Quirks] = None, seed: int = 1234):
        config = MachineConfig(seed=seed, quirks=quirks or Quirks())
        emu = Chip8Emulator(config)
        emu.load_rom(words_to_bytes(*words))
        return emu

    return _make
