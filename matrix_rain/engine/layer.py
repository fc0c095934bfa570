"""
Rain layers - ordered column collections sharing one parameter profile.

The foreground fills every slot; the background takes every third slot and
runs slower, shorter and dimmer. Both drive the same column state machine.
"""

from __future__ import annotations

import math
from typing import Iterator

import numpy as np

from ..core.colors import ColorScheme, trail_color
from ..core.tables import GlyphSource, LayerProfile, SpeedLevel, speed_params
from .column import Column
from .frame import Glyph


def column_count(surface_width: float, cell_width: float, stride: int) -> int:
    """
    Number of columns a layer gets for a surface width.

    Non-positive widths or cell sizes clamp to a single column instead of
    raising, so a degenerate surface still animates.
    """
    if surface_width <= 0 or cell_width <= 0 or stride <= 0:
        return 1
    return max(1, math.floor(surface_width / cell_width / stride))


class Layer:
    """A set of columns animated with one profile."""

    def __init__(self, profile: LayerProfile, speed: SpeedLevel, columns: list[Column] | None = None):
        self.profile = profile
        self.speed = speed
        self.columns: list[Column] = columns if columns is not None else []

    @classmethod
    def build(
        cls,
        profile: LayerProfile,
        surface_width: float,
        cell_width: float,
        speed: SpeedLevel,
        rng: np.random.Generator,
    ) -> "Layer":
        """Create a layer sized to the surface with freshly spawned columns."""
        layer = cls(profile, speed)
        count = column_count(surface_width, cell_width, profile.stride)
        layer.columns = [
            Column.spawn(i * profile.stride, layer.base_speed, layer.max_trail, rng)
            for i in range(count)
        ]
        return layer

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def base_speed(self) -> float:
        return speed_params(self.speed).speed_multiplier * self.profile.speed_scale

    @property
    def max_trail(self) -> int:
        return max(1, int(speed_params(self.speed).max_trail_length * self.profile.trail_scale))

    @property
    def active_count(self) -> int:
        return sum(1 for c in self.columns if c.active)

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def update(self, rows: float, glyphs: GlyphSource, rng: np.random.Generator) -> None:
        """Tick every column once."""
        base_speed = self.base_speed
        max_trail = self.max_trail
        for column in self.columns:
            column.tick(rows, glyphs, self.profile, base_speed, max_trail, rng)

    def retune(self, speed: SpeedLevel, rng: np.random.Generator) -> None:
        """Switch speed level while keeping every column in flight."""
        self.speed = speed
        base_speed = self.base_speed
        max_trail = self.max_trail
        for column in self.columns:
            column.retune(base_speed, max_trail, rng)

    def emit(
        self,
        scheme: ColorScheme,
        surface_width: float,
        surface_height: float,
        cell_width: float,
        cell_height: float,
        font_size: float,
    ) -> Iterator[Glyph]:
        """Yield drawable glyphs for every visible glyph of every active column."""
        profile = self.profile
        size = font_size * profile.font_scale
        for column in self.columns:
            if not column.active:
                continue
            x = column.slot_index * cell_width
            if x < 0 or x >= surface_width:
                continue
            for char, row, t in column.trail_positions():
                y = row * cell_height
                if y < 0 or y > surface_height:
                    continue
                r, g, b, alpha = trail_color(scheme, t, profile.white_leader, profile.alpha_scale)
                yield Glyph(char, float(x), float(y), r, g, b, alpha, size, profile.name)
