"""Opaque handle registry for embedding the engine in a host application.

Hosts that cannot hold Python objects work with integer handles. Every call
is total: selector bytes outside the known range clamp to defaults and
unknown handles are ignored, because the host side cannot receive rich
errors.

Render batches are cached per handle and stay valid until the next
update() or set_config() on that handle.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .core.colors import ColorScheme
from .core.config import RainConfig
from .core.tables import CharacterPalette, SpeedLevel, update_interval_ms
from .engine.frame import RENDER_DTYPE
from .engine.rain import RainEngine

logger = logging.getLogger(__name__)


def _selector(enum_cls, value: int):
    member = enum_cls.from_index(int(value))
    if member.index != value:
        logger.debug("Clamped %s selector %r to %s", enum_cls.label(), value, member.value)
    return member


def config_from_bytes(
    width: int,
    height: int,
    charset: int,
    color: int,
    speed: int,
    background: bool = True,
) -> RainConfig:
    """Build a config from raw host values, clamping anything out of range."""
    return RainConfig(
        character_palette=_selector(CharacterPalette, charset),
        color_scheme=_selector(ColorScheme, color),
        speed_level=_selector(SpeedLevel, speed),
        surface_width=max(1, int(width)),
        surface_height=max(1, int(height)),
        background_enabled=bool(background),
    )


@dataclass
class _Entry:
    engine: RainEngine
    batch: Optional[np.ndarray] = None


class HandleRegistry:
    """Arena of engines keyed by opaque integer handles."""

    def __init__(self):
        self._entries: dict[int, _Entry] = {}
        self._next_handle = 1
        self._lock = threading.Lock()

    def create(
        self,
        width: int,
        height: int,
        charset: int,
        color: int,
        speed: int,
        background: bool = True,
        seed: Optional[int] = None,
    ) -> int:
        """Create an engine and return its handle."""
        config = config_from_bytes(width, height, charset, color, speed, background)
        engine = RainEngine(config, seed=seed)
        with self._lock:
            handle = self._next_handle
            self._next_handle += 1
            self._entries[handle] = _Entry(engine)
        logger.debug("Created engine handle %d (%sx%s)", handle, config.surface_width, config.surface_height)
        return handle

    def destroy(self, handle: int) -> bool:
        """Release a handle. Returns False if it was not live."""
        with self._lock:
            entry = self._entries.pop(handle, None)
        if entry is None:
            return False
        logger.debug("Destroyed engine handle %d", handle)
        return True

    def _get(self, handle: int) -> Optional[_Entry]:
        with self._lock:
            return self._entries.get(handle)

    def engine(self, handle: int) -> Optional[RainEngine]:
        entry = self._get(handle)
        return entry.engine if entry else None

    def update(self, handle: int) -> None:
        entry = self._get(handle)
        if entry is None:
            return
        entry.engine.update()
        entry.batch = None

    def set_config(
        self,
        handle: int,
        width: int,
        height: int,
        charset: int,
        color: int,
        speed: int,
        background: bool = True,
    ) -> None:
        entry = self._get(handle)
        if entry is None:
            return
        entry.engine.set_config(config_from_bytes(width, height, charset, color, speed, background))
        entry.batch = None

    def get_render_batch(self, handle: int) -> tuple[np.ndarray, int]:
        """Structured render array and its length; empty for unknown handles."""
        entry = self._get(handle)
        if entry is None:
            return np.zeros(0, dtype=RENDER_DTYPE), 0
        if entry.batch is None:
            batch = entry.engine.render_batch()
            batch.flags.writeable = False
            entry.batch = batch
        return entry.batch, len(entry.batch)

    @staticmethod
    def get_update_interval(speed: int) -> int:
        """Tick interval in milliseconds for a speed byte."""
        return update_interval_ms(_selector(SpeedLevel, speed))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, handle: int) -> bool:
        with self._lock:
            return handle in self._entries


# Global instance
_registry: HandleRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> HandleRegistry:
    """Get or create the global handle registry."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = HandleRegistry()
    return _registry


def reset_registry() -> None:
    """Drop the global registry and every engine in it. Used for testing."""
    global _registry
    with _registry_lock:
        _registry = None
