from __future__ import annotations

import json

from chip8.cli import build_parser, resolve_config, run
from chip8.inputs import ScriptedInput
from chip8.keypad import Keypad


def _write_rom(tmp_path, *words):
    rom = tmp_path / "prog.ch8"
    rom.write_bytes(b"".join(w.to_bytes(2, "big") for w in words))
    return rom


def test_disasm_listing(tmp_path, capsys) -> None:
    rom = _write_rom(tmp_path, 0x00E0, 0x1200)
    assert run([str(rom), "--disasm"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["200: 00E0  CLS", "202: 1200  JP 0x200"]


def test_headless_run_saves_frame(tmp_path) -> None:
    # Draw glyph 0 at the origin then spin
    rom = _write_rom(tmp_path, 0xD005, 0x1202)
    frame = tmp_path / "frame.png"
    code = run([str(rom), "--headless", "--seconds", "0.2", "--save-frame", str(frame)])
    assert code == 0
    assert frame.exists()


def test_headless_fault_exit_code(tmp_path) -> None:
    rom = _write_rom(tmp_path, 0x00F0)
    assert run([str(rom), "--headless", "--seconds", "1"]) == 1


def test_fault_before_first_frame_still_saves(tmp_path) -> None:
    rom = _write_rom(tmp_path, 0x00F0)
    frame = tmp_path / "frame.png"
    code = run([str(rom), "--headless", "--seconds", "1", "--save-frame", str(frame)])
    assert code == 1
    assert frame.exists()


def test_zero_second_run_saves_blank_frame(tmp_path) -> None:
    rom = _write_rom(tmp_path, 0x1200)
    frame = tmp_path / "frame.png"
    code = run([str(rom), "--headless", "--seconds", "0", "--save-frame", str(frame)])
    assert code == 0
    assert frame.exists()


def test_missing_rom(tmp_path) -> None:
    assert run([str(tmp_path / "missing.ch8"), "--headless"]) == 2


def test_resolve_config_merges_file_and_flags(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("CHIP8_CPU_HZ", raising=False)
    config_path = tmp_path / "cfg.json"
    config_path.write_text(json.dumps({"cpu_hz": 900, "quirks": {"wrap_sprites": False}}))
    args = build_parser().parse_args(
        ["rom.ch8", "--config", str(config_path), "--no-shift-uses-vy", "--seed", "5"]
    )
    config = resolve_config(args)
    assert config.cpu_hz == 900
    assert config.seed == 5
    assert not config.quirks.wrap_sprites
    assert not config.quirks.shift_uses_vy


def test_press_spec_parsing() -> None:
    args = build_parser().parse_args(["rom.ch8", "--press", "a@0.5", "--press", "3"])
    assert args.press == [(0.5, 0xA), (0.0, 0x3)]


def test_scripted_input_replays_events() -> None:
    now = [0.0]
    source = ScriptedInput([(0.1, 4, True), (0.2, 4, False)], seconds=1.0, clock=lambda: now[0])
    keypad = Keypad()
    assert source.poll(keypad)
    assert not keypad.is_pressed(4)
    now[0] = 0.15
    source.poll(keypad)
    assert keypad.is_pressed(4)
    now[0] = 0.25
    source.poll(keypad)
    assert not keypad.is_pressed(4)
    now[0] = 1.0
    assert not source.poll(keypad)
