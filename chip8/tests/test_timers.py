from __future__ import annotations

from chip8.timers import TimerBank


def test_timer_counts_down_to_zero_and_stays() -> None:
    timers = TimerBank(delay=10, sound=3)
    for _ in range(10):
        timers.tick()
    assert timers.delay == 0
    assert timers.sound == 0
    for _ in range(5):
        timers.tick()
    assert timers.delay == 0
    assert not timers.sounding


def test_timers_are_independent() -> None:
    timers = TimerBank()
    timers.set_sound(2)
    timers.tick()
    assert timers.sound == 1
    assert timers.delay == 0
    assert timers.sounding


def test_setters_truncate_to_byte() -> None:
    timers = TimerBank()
    timers.set_delay(0x1FF)
    assert timers.delay == 0xFF
