"""Headless render collaborators.

A renderer receives the framebuffer once per render tick through
``present`` and must treat it as read-only.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Protocol, TextIO

from PIL import Image

from .framebuffer import Framebuffer


class Renderer(Protocol):
    def present(self, framebuffer: Framebuffer) -> None: ...


class NullRenderer:
    """Counts frames and draws nothing."""

    def __init__(self) -> None:
        self.frames = 0

    def present(self, framebuffer: Framebuffer) -> None:
        self.frames += 1


class TerminalRenderer:
    """Dump the framebuffer as text whenever its contents change."""

    def __init__(self, stream: Optional[TextIO] = None, on: str = "#", off: str = " "):
        self.stream = stream if stream is not None else sys.stdout
        self.on = on
        self.off = off
        self.frames = 0
        self._last_rows: Optional[list[int]] = None

    def present(self, framebuffer: Framebuffer) -> None:
        self.frames += 1
        rows = framebuffer.copy_rows()
        if rows == self._last_rows:
            return
        self._last_rows = rows
        border = "+" + "-" * framebuffer.width + "+"
        body = framebuffer.to_text(on=self.on, off=self.off)
        lines = [border] + [f"|{line}|" for line in body.splitlines()] + [border]
        self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()


class ImageRenderer:
    """Keep the most recent frame as a PIL image and save it on request."""

    def __init__(self, zoom: int = 4):
        self.zoom = zoom
        self.frames = 0
        self.last_image: Optional[Image.Image] = None

    def present(self, framebuffer: Framebuffer) -> None:
        self.frames += 1
        self.last_image = framebuffer.to_image(zoom=self.zoom)

    def save(self, path: str | Path) -> Path:
        if self.last_image is None:
            raise ValueError("No frame has been presented yet")
        target = Path(path)
        self.last_image.save(target)
        return target


__all__ = ["Renderer", "NullRenderer", "TerminalRenderer", "ImageRenderer"]
