from __future__ import annotations

import pytest

from chip8 import MachineConfig, Quirks


def test_defaults() -> None:
    config = MachineConfig()
    assert (config.cpu_hz, config.timer_hz, config.render_hz) == (600, 60, 60)
    assert config.quirks == Quirks(
        shift_uses_vy=True,
        memory_increments_index=True,
        wrap_sprites=True,
        logic_resets_flag=True,
    )


def test_save_and_load(tmp_path) -> None:
    path = tmp_path / "machine.json"
    original = MachineConfig(cpu_hz=1000, seed=3, quirks=Quirks(wrap_sprites=False))
    original.save(path)
    loaded = MachineConfig.load(path)
    assert loaded == original


def test_rejects_non_positive_rates() -> None:
    with pytest.raises(ValueError):
        MachineConfig(cpu_hz=0)


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CHIP8_CPU_HZ", "0x100")
    monkeypatch.setenv("CHIP8_SHIFT_USES_VY", "off")
    monkeypatch.setenv("CHIP8_TRACE", "1")
    config = MachineConfig.from_env()
    assert config.cpu_hz == 0x100
    assert config.trace
    assert not config.quirks.shift_uses_vy
    assert config.quirks.memory_increments_index
