"""Parameter tables, color fade mapping and configuration."""

from .tables import (
    BACKGROUND,
    FOREGROUND,
    CharacterPalette,
    ConfigError,
    GlyphSource,
    LayerProfile,
    SpeedLevel,
    SpeedParams,
    palette_glyphs,
    speed_params,
    update_interval_ms,
)
from .colors import ColorRamp, ColorScheme, trail_color
from .config import RainConfig

__all__ = [
    # Tables
    "CharacterPalette",
    "SpeedLevel",
    "SpeedParams",
    "LayerProfile",
    "FOREGROUND",
    "BACKGROUND",
    "GlyphSource",
    "palette_glyphs",
    "speed_params",
    "update_interval_ms",
    # Colors
    "ColorScheme",
    "ColorRamp",
    "trail_color",
    # Config
    "RainConfig",
    "ConfigError",
]
