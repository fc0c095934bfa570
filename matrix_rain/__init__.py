"""Digital rain engine - falling glyph columns composited over two layers."""

from .core import (
    CharacterPalette,
    ColorScheme,
    ConfigError,
    RainConfig,
    SpeedLevel,
)
from .engine import Glyph, RainEngine
from .bridge import HandleRegistry, get_registry, reset_registry

__version__ = "0.1.0"

__all__ = [
    "RainEngine",
    "RainConfig",
    "ConfigError",
    "CharacterPalette",
    "ColorScheme",
    "SpeedLevel",
    "Glyph",
    "HandleRegistry",
    "get_registry",
    "reset_registry",
]
