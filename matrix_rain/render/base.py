"""Renderer capability contract.

The engine never references a renderer. Embedding code pulls a snapshot from
the engine and hands it to anything that satisfies this protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

from ..core.colors import BLACK, RGB
from ..engine.frame import Glyph

if TYPE_CHECKING:
    from ..engine.rain import RainEngine


@runtime_checkable
class Renderer(Protocol):
    """Sink for drawable glyphs."""

    def clear(self, color: RGB) -> None:
        """Clear the surface to a background color."""
        ...

    def draw_glyphs(self, glyphs: Sequence[Glyph]) -> None:
        """Paint a batch of glyphs."""
        ...

    def present(self) -> None:
        """Flush the frame to the display."""
        ...

    @property
    def width(self) -> int:
        """Surface width in pixels."""
        ...

    @property
    def height(self) -> int:
        """Surface height in pixels."""
        ...


def present_frame(engine: RainEngine, renderer: Renderer, background: RGB = BLACK) -> int:
    """Clear, draw the engine's current snapshot, and present. Returns glyph count."""
    frame = engine.snapshot()
    renderer.clear(background)
    renderer.draw_glyphs(frame)
    renderer.present()
    return len(frame)
