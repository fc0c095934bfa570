"""
Rain engine - owns both layers, the random source and the configuration.

Call update() then snapshot() once per frame. The engine is single-threaded
and not reentrant; it performs no I/O and holds no locks.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..core.config import RainConfig
from ..core.tables import BACKGROUND, FOREGROUND, GlyphSource, SpeedLevel, update_interval_ms
from .frame import Frame, to_render_batch
from .layer import Layer

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 16.0
DEFAULT_CELL_WIDTH = 16.0
DEFAULT_CELL_HEIGHT = DEFAULT_FONT_SIZE * 1.2  # font size plus line spacing


class RainEngine:
    """Dual-layer digital rain animation."""

    def __init__(
        self,
        config: Optional[RainConfig] = None,
        *,
        seed: Optional[int] = None,
        font_size: float = DEFAULT_FONT_SIZE,
        cell_width: float = DEFAULT_CELL_WIDTH,
        cell_height: float = DEFAULT_CELL_HEIGHT,
    ):
        """
        Args:
            config: Rain configuration (defaults to RainConfig())
            seed: Seed for a reproducible animation; None uses system entropy
            font_size: Base glyph size in pixels (background draws at 90%)
            cell_width: Horizontal pixels per column slot
            cell_height: Vertical pixels per character row
        """
        self.font_size = font_size
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.rng = np.random.default_rng(seed)
        self.tick_count = 0

        self._config = config if config is not None else RainConfig()
        self.foreground: Layer
        self.background: Optional[Layer] = None
        self._glyphs: GlyphSource
        self._build()

    def _build(self) -> None:
        config = self._config
        self._glyphs = GlyphSource.for_palette(config.character_palette)
        self.foreground = Layer.build(
            FOREGROUND, config.surface_width, self.cell_width, config.speed_level, self.rng
        )
        self.background = None
        if config.background_enabled:
            self.background = Layer.build(
                BACKGROUND, config.surface_width, self.cell_width, config.speed_level, self.rng
            )
        logger.debug(
            "Built layers for %sx%s: %d foreground, %d background columns",
            config.surface_width,
            config.surface_height,
            len(self.foreground),
            len(self.background) if self.background else 0,
        )

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def config(self) -> RainConfig:
        return self._config

    def set_config(self, config: RainConfig) -> None:
        """Apply a new configuration, discarding and rebuilding both layers."""
        self._config = config
        self._build()

    def set_speed(self, speed: SpeedLevel) -> None:
        """
        Change only the speed level, keeping every column in flight.

        Unlike set_config(), positions and trails survive; each column gets a
        re-randomized fall speed and trail length for the new level.
        """
        self._config = self._config.replace(speed_level=speed)
        for layer in self.layers:
            layer.retune(speed, self.rng)

    @property
    def update_interval_ms(self) -> int:
        return update_interval_ms(self._config.speed_level)

    @property
    def rows(self) -> float:
        """Surface height in character rows."""
        if self.cell_height <= 0:
            return 0.0
        return max(0.0, self._config.surface_height / self.cell_height)

    @property
    def layers(self) -> list[Layer]:
        """Layers in paint order (background first)."""
        if self.background is not None:
            return [self.background, self.foreground]
        return [self.foreground]

    # -------------------------------------------------------------------------
    # Animation
    # -------------------------------------------------------------------------

    def update(self) -> None:
        """Advance every column in both layers by one tick."""
        rows = self.rows
        self.foreground.update(rows, self._glyphs, self.rng)
        if self.background is not None:
            self.background.update(rows, self._glyphs, self.rng)
        self.tick_count += 1

    def snapshot(self) -> Frame:
        """Drawable glyphs for the current frame, background before foreground."""
        config = self._config
        glyphs = []
        for layer in self.layers:
            glyphs.extend(
                layer.emit(
                    config.color_scheme,
                    config.surface_width,
                    config.surface_height,
                    self.cell_width,
                    self.cell_height,
                    self.font_size,
                )
            )
        return tuple(glyphs)

    def render_batch(self) -> np.ndarray:
        """The snapshot packed into the boundary's structured array layout."""
        return to_render_batch(self.snapshot())

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    @property
    def active_columns(self) -> int:
        return self.foreground.active_count

    @property
    def total_columns(self) -> int:
        return len(self.foreground)
