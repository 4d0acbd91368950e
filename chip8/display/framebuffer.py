"""Monochrome 64x32 framebuffer with XOR sprite drawing."""

from __future__ import annotations

from typing import Iterable, List

import numpy as np
from PIL import Image, ImageDraw

from ..constants import DISPLAY_HEIGHT, DISPLAY_WIDTH, ROW_MASK


class Framebuffer:
    """Single authoritative bitmap, one 64-bit int per row.

    Bit 63 of a row word is the leftmost column.  Collisions are always
    computed against the pre-draw contents of a row.
    """

    width = DISPLAY_WIDTH
    height = DISPLAY_HEIGHT

    def __init__(self) -> None:
        self.rows: List[int] = [0] * self.height

    def clear(self) -> None:
        self.rows = [0] * self.height

    def get_pixel(self, x: int, y: int) -> bool:
        if 0 <= x < self.width and 0 <= y < self.height:
            return bool((self.rows[y] >> (self.width - 1 - x)) & 1)
        return False

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return
        bit = 1 << (self.width - 1 - x)
        if value:
            self.rows[y] |= bit
        else:
            self.rows[y] &= ~bit & ROW_MASK

    def _row_mask(self, sprite_byte: int, x: int, wrap: bool) -> int:
        aligned = (sprite_byte & 0xFF) << (self.width - 8)
        if wrap:
            # Rotate right within the 64-bit row
            return ((aligned >> x) | (aligned << (self.width - x))) & ROW_MASK
        return aligned >> x

    def draw_sprite(
        self, x: int, y: int, sprite: Iterable[int], *, wrap: bool = True
    ) -> bool:
        """XOR ``sprite`` rows in at (x, y) and return the collision flag.

        The start position is taken modulo the grid size.  Rows always wrap
        vertically; columns wrap when ``wrap`` is set and are clipped
        otherwise.
        """

        x %= self.width
        y %= self.height
        collision = False
        for offset, sprite_byte in enumerate(sprite):
            row = (y + offset) % self.height
            mask = self._row_mask(sprite_byte, x, wrap)
            current = self.rows[row]
            if current & mask:
                collision = True
            self.rows[row] = current ^ mask
        return collision

    def lit_count(self) -> int:
        return sum(bin(row).count("1") for row in self.rows)

    def copy_rows(self) -> List[int]:
        return list(self.rows)

    def get_display_buffer(self) -> np.ndarray:
        """Return the bitmap as a ``(32, 64)`` array of 0/1 values."""
        buffer = np.zeros((self.height, self.width), dtype=np.uint8)
        for y, row in enumerate(self.rows):
            if not row:
                continue
            for x in range(self.width):
                if (row >> (self.width - 1 - x)) & 1:
                    buffer[y, x] = 1
        return buffer

    def to_text(self, on: str = "#", off: str = ".") -> str:
        return "\n".join(
            "".join(on if self.get_pixel(x, y) else off for x in range(self.width))
            for y in range(self.height)
        )

    def to_image(
        self,
        zoom: int = 1,
        on_color=(255, 255, 255),
        off_color=(0, 0, 0),
    ) -> Image.Image:
        """Render the framebuffer as an RGB PIL image.

        Args:
            zoom: Scaling factor applied to each pixel

        Returns:
            PIL Image of size ``(64 * zoom, 32 * zoom)``
        """
        image = Image.new("RGB", (self.width * zoom, self.height * zoom), off_color)
        draw = ImageDraw.Draw(image)
        for y, row in enumerate(self.rows):
            if not row:
                continue
            for x in range(self.width):
                if (row >> (self.width - 1 - x)) & 1:
                    draw.rectangle(
                        [x * zoom, y * zoom, x * zoom + zoom - 1, y * zoom + zoom - 1],
                        fill=on_color,
                    )
        return image


__all__ = ["Framebuffer"]
