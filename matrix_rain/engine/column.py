"""
Column state machine - one falling stream of glyphs.

A column lives in one of four states:
- Approaching: above the surface, waiting to enter
- Falling: head within the surface
- Exiting: head below the surface, tail still visible
- Inactive: parked until a reactivation roll succeeds

Positions are in character rows. The trail is stored head first, so the
glyph at index i sits at row ``vertical_position - i``.
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Iterator

import numpy as np

from ..core.tables import GlyphSource, LayerProfile

# Rows above the surface a reset column starts at (inclusive)
START_OFFSET_RANGE = (5, 20)

# Per-column fall speed jitter around the layer's base speed
SPEED_JITTER = (0.7, 1.3)


class ColumnState(Enum):
    APPROACHING = "approaching"
    FALLING = "falling"
    EXITING = "exiting"
    INACTIVE = "inactive"


class Column:
    """A single rain column at a fixed horizontal slot."""

    __slots__ = ("slot_index", "vertical_position", "trail", "fall_speed", "max_trail_length", "active")

    def __init__(self, slot_index: int):
        self.slot_index = slot_index
        self.vertical_position = -float(START_OFFSET_RANGE[0])
        self.trail: deque[str] = deque()
        self.fall_speed = 1.0
        self.max_trail_length = 1
        self.active = True

    @classmethod
    def spawn(
        cls,
        slot_index: int,
        base_speed: float,
        max_trail: int,
        rng: np.random.Generator,
    ) -> "Column":
        """Create a column in its reset state with a staggered start."""
        column = cls(slot_index)
        column.reset(base_speed, max_trail, rng)
        return column

    def __repr__(self) -> str:
        return (
            f"Column(slot={self.slot_index}, y={self.vertical_position:.2f}, "
            f"trail={len(self.trail)}/{self.max_trail_length}, active={self.active})"
        )

    def state_at(self, rows: float) -> ColumnState:
        """Lifecycle state relative to a surface that is ``rows`` tall."""
        if not self.active:
            return ColumnState.INACTIVE
        if self.vertical_position < 0:
            return ColumnState.APPROACHING
        if self.vertical_position <= rows:
            return ColumnState.FALLING
        return ColumnState.EXITING

    def _randomize(self, base_speed: float, max_trail: int, rng: np.random.Generator) -> None:
        low, high = SPEED_JITTER
        self.fall_speed = base_speed * float(rng.uniform(low, high))
        max_trail = max(1, int(max_trail))
        self.max_trail_length = int(rng.integers(max(1, max_trail // 2), max_trail, endpoint=True))

    def reset(self, base_speed: float, max_trail: int, rng: np.random.Generator) -> None:
        """Return to Approaching with fresh speed, trail length and start offset."""
        low, high = START_OFFSET_RANGE
        self.vertical_position = -float(rng.integers(low, high, endpoint=True))
        self._randomize(base_speed, max_trail, rng)
        self.trail.clear()
        self.active = True

    def retune(self, base_speed: float, max_trail: int, rng: np.random.Generator) -> None:
        """Re-randomize speed and trail length in place, keeping position."""
        self._randomize(base_speed, max_trail, rng)
        while len(self.trail) > self.max_trail_length:
            self.trail.pop()

    def tick(
        self,
        rows: float,
        glyphs: GlyphSource,
        profile: LayerProfile,
        base_speed: float,
        max_trail: int,
        rng: np.random.Generator,
    ) -> None:
        """Advance one animation step."""
        if not self.active:
            if rng.random() < profile.p_reactivate:
                self.reset(base_speed, max_trail, rng)
            return

        self.vertical_position += self.fall_speed

        if len(self.trail) < self.max_trail_length and rng.random() < profile.p_grow:
            self.trail.appendleft(glyphs.draw(rng))

        # Glitch: each glyph flips independently
        if self.trail:
            hits = np.flatnonzero(rng.random(len(self.trail)) < profile.p_glitch)
            for i in hits:
                self.trail[int(i)] = glyphs.draw(rng)

        if self.vertical_position > rows + self.max_trail_length:
            if rng.random() < profile.p_reset:
                self.reset(base_speed, max_trail, rng)
            else:
                self.active = False

    def trail_positions(self) -> Iterator[tuple[str, float, float]]:
        """
        Yield (glyph, row, t) for each glyph, head first.

        t is the normalized trail position: 0.0 at the head, 1.0 at the tail.
        """
        n = len(self.trail)
        denom = max(n - 1, 1)
        for i, glyph in enumerate(self.trail):
            yield glyph, self.vertical_position - i, i / denom
