"""Per-frame render data handed to renderers and across the handle boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

# Mirrors the host-side C struct: u32 codepoint, f32 x/y, u8 rgb, f32 alpha, f32 font size
RENDER_DTYPE = np.dtype(
    [
        ("character", "<u4"),
        ("x", "<f4"),
        ("y", "<f4"),
        ("r", "u1"),
        ("g", "u1"),
        ("b", "u1"),
        ("a", "<f4"),
        ("font_size", "<f4"),
    ],
    align=True,
)


@dataclass(frozen=True)
class Glyph:
    """One drawable glyph in surface (pixel) coordinates."""
    char: str
    x: float
    y: float
    r: int
    g: int
    b: int
    alpha: float
    font_size: float
    layer: str

    @property
    def codepoint(self) -> int:
        return ord(self.char)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


Frame = tuple[Glyph, ...]


def to_render_batch(glyphs: Sequence[Glyph]) -> np.ndarray:
    """Pack glyphs into a structured array with the boundary layout."""
    batch = np.zeros(len(glyphs), dtype=RENDER_DTYPE)
    if not glyphs:
        return batch
    batch["character"] = [g.codepoint for g in glyphs]
    batch["x"] = [g.x for g in glyphs]
    batch["y"] = [g.y for g in glyphs]
    batch["r"] = [g.r for g in glyphs]
    batch["g"] = [g.g for g in glyphs]
    batch["b"] = [g.b for g in glyphs]
    batch["a"] = [g.alpha for g in glyphs]
    batch["font_size"] = [g.font_size for g in glyphs]
    return batch
