"""Column state machine, layers and the rain engine."""

from .column import Column, ColumnState
from .frame import RENDER_DTYPE, Frame, Glyph, to_render_batch
from .layer import Layer, column_count
from .rain import RainEngine

__all__ = [
    "Column",
    "ColumnState",
    "Layer",
    "column_count",
    "RainEngine",
    "Glyph",
    "Frame",
    "RENDER_DTYPE",
    "to_render_batch",
]
