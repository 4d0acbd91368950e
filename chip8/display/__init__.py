"""Display subsystem for the CHIP-8 interpreter."""

from .framebuffer import Framebuffer
from .renderers import ImageRenderer, NullRenderer, Renderer, TerminalRenderer

__all__ = [
    "Framebuffer",
    # Render collaborators
    "Renderer",
    "NullRenderer",
    "TerminalRenderer",
    "ImageRenderer",
]
