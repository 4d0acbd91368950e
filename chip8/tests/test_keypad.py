from __future__ import annotations

import pytest

from chip8.keypad import HOST_KEYMAP, Keypad


def test_press_and_release() -> None:
    keypad = Keypad()
    keypad.press(0xA)
    assert keypad.is_pressed(0xA)
    assert keypad.pressed_keys() == (0xA,)
    keypad.release(0xA)
    assert not keypad.any_pressed()


def test_press_transitions_are_queued_once() -> None:
    keypad = Keypad()
    keypad.press(3)
    keypad.press(3)  # still held, not a new transition
    keypad.press(5)
    assert keypad.pop_press() == 3
    assert keypad.pop_press() == 5
    assert keypad.pop_press() is None


def test_clear_presses_forgets_history_but_not_state() -> None:
    keypad = Keypad()
    keypad.press(1)
    keypad.clear_presses()
    assert keypad.pop_press() is None
    assert keypad.is_pressed(1)


def test_host_keymap_covers_all_keys() -> None:
    assert sorted(HOST_KEYMAP.values()) == list(range(16))
    keypad = Keypad()
    assert keypad.press_host_key("X")
    assert keypad.is_pressed(0x0)
    assert keypad.release_host_key("x")
    assert not keypad.is_pressed(0x0)
    assert not keypad.press_host_key("p")


def test_invalid_key_rejected() -> None:
    with pytest.raises(ValueError):
        Keypad().press(16)
