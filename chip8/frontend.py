"""pygame window acting as both render and input collaborator."""

from __future__ import annotations

import logging
from typing import Dict

import pygame

from .constants import DISPLAY_HEIGHT, DISPLAY_WIDTH
from .display.framebuffer import Framebuffer
from .keypad import HOST_KEYMAP, Keypad

logger = logging.getLogger(__name__)

PIXEL_OFF = (0, 0, 0)
PIXEL_ON = (255, 255, 255)


def _build_keymap() -> Dict[int, int]:
    return {pygame.key.key_code(name): key for name, key in HOST_KEYMAP.items()}


class PygameFrontend:
    """Window that scales the 64x32 bitmap and feeds host keys to the keypad."""

    def __init__(self, scale: int = 10, title: str = "chip8"):
        pygame.init()
        self.scale = scale
        self.screen = pygame.display.set_mode(
            (DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale)
        )
        pygame.display.set_caption(title)
        self.keymap = _build_keymap()
        logger.debug("Opened %dx%d window", DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale)
        self.frames = 0

    def poll(self, keypad: Keypad) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type in (pygame.KEYDOWN, pygame.KEYUP):
                if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    return False
                key = self.keymap.get(event.key)
                if key is not None:
                    keypad.set_key(key, event.type == pygame.KEYDOWN)
        return True

    def present(self, framebuffer: Framebuffer) -> None:
        self.frames += 1
        self.screen.fill(PIXEL_OFF)
        scale = self.scale
        for y, row in enumerate(framebuffer.rows):
            if not row:
                continue
            for x in range(framebuffer.width):
                if (row >> (framebuffer.width - 1 - x)) & 1:
                    self.screen.fill(PIXEL_ON, (x * scale, y * scale, scale, scale))
        pygame.display.flip()

    def close(self) -> None:
        pygame.quit()


__all__ = ["PygameFrontend"]
