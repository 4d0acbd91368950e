"""16-key hexadecimal keypad state."""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from .constants import NUM_KEYS

# Logical keypad layout:
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F
#
# mapped onto the left block of a QWERTY keyboard:
#   1 2 3 4
#   Q W E R
#   A S D F
#   Z X C V
HOST_KEYMAP: Dict[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


class Keypad:
    """Boolean key flags plus a queue of press transitions.

    The input collaborator calls :meth:`press` / :meth:`release`; the engine
    reads :meth:`is_pressed` for the skip instructions and drains
    :meth:`pop_press` while waiting for a key.
    """

    def __init__(self) -> None:
        self.keys: List[bool] = [False] * NUM_KEYS
        self._presses: Deque[int] = deque(maxlen=NUM_KEYS)

    def reset(self) -> None:
        self.keys = [False] * NUM_KEYS
        self._presses.clear()

    def press(self, key: int) -> None:
        key = self._check(key)
        if not self.keys[key]:
            self._presses.append(key)
        self.keys[key] = True

    def release(self, key: int) -> None:
        self.keys[self._check(key)] = False

    def set_key(self, key: int, pressed: bool) -> None:
        if pressed:
            self.press(key)
        else:
            self.release(key)

    def is_pressed(self, key: int) -> bool:
        return self.keys[key & 0xF]

    def any_pressed(self) -> bool:
        return any(self.keys)

    def pressed_keys(self) -> Tuple[int, ...]:
        return tuple(idx for idx, down in enumerate(self.keys) if down)

    def pop_press(self) -> Optional[int]:
        """Return the oldest unconsumed press transition, if any."""
        if self._presses:
            return self._presses.popleft()
        return None

    def clear_presses(self) -> None:
        self._presses.clear()

    def press_host_key(self, name: str) -> bool:
        """Press the logical key bound to host key ``name``; False if unbound."""
        key = HOST_KEYMAP.get(name.lower())
        if key is None:
            return False
        self.press(key)
        return True

    def release_host_key(self, name: str) -> bool:
        key = HOST_KEYMAP.get(name.lower())
        if key is None:
            return False
        self.release(key)
        return True

    @staticmethod
    def _check(key: int) -> int:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key index out of range: {key}")
        return key


__all__ = ["HOST_KEYMAP", "Keypad"]
