"""Color schemes and the trail fade mapping.

Each scheme defines one primary RGB color (0-255). The three-stage ramp is
derived from it:
- primary: leading glyphs right behind the head
- secondary: 60% intensity, mid trail
- tertiary: 30% intensity, fading tail

The head glyph of a foreground trail is drawn white.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .tables import _Selector

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)

SECONDARY_SCALE = 0.6
TERTIARY_SCALE = 0.3

# Trail position stage boundaries (t = 0 is the head, t = 1 the tail)
LEADER_END = 0.05
PRIMARY_END = 0.15
SECONDARY_END = 0.5

# Alpha at the secondary/tertiary boundary; both fades are linear
MID_ALPHA = 0.5


class ColorScheme(_Selector):
    """Named color scheme for the rain."""
    MATRIX_GREEN = "matrix-green"
    DARK_BLUE = "dark-blue"
    PURPLE = "purple"
    ORANGE = "orange"
    RED = "red"
    CYAN = "cyan"
    YELLOW = "yellow"
    PINK = "pink"
    WHITE = "white"
    LIME_GREEN = "lime-green"
    TEAL = "teal"

    @classmethod
    def default(cls) -> "ColorScheme":
        return cls.MATRIX_GREEN

    @classmethod
    def _aliases(cls) -> dict[str, "ColorScheme"]:
        return {
            "green": cls.MATRIX_GREEN,
            "blue": cls.DARK_BLUE,
            "lime": cls.LIME_GREEN,
        }

    @classmethod
    def label(cls) -> str:
        return "color scheme"

    @property
    def ramp(self) -> "ColorRamp":
        return RAMPS[self]

    @property
    def primary(self) -> RGB:
        return SCHEME_PRIMARY[self]

    @property
    def secondary(self) -> RGB:
        return RAMPS[self].secondary

    @property
    def tertiary(self) -> RGB:
        return RAMPS[self].tertiary


SCHEME_PRIMARY: dict[ColorScheme, RGB] = {
    ColorScheme.MATRIX_GREEN: (0, 255, 70),
    ColorScheme.DARK_BLUE: (0, 150, 255),
    ColorScheme.PURPLE: (200, 100, 255),
    ColorScheme.ORANGE: (255, 165, 0),
    ColorScheme.RED: (255, 50, 50),
    ColorScheme.CYAN: (0, 255, 255),
    ColorScheme.YELLOW: (255, 255, 0),
    ColorScheme.PINK: (255, 105, 180),
    ColorScheme.WHITE: (255, 255, 255),
    ColorScheme.LIME_GREEN: (50, 255, 50),
    ColorScheme.TEAL: (0, 200, 200),
}


def scale_rgb(rgb: RGB, factor: float) -> RGB:
    """Multiply each channel by factor, truncating to int."""
    r, g, b = rgb
    return (int(r * factor), int(g * factor), int(b * factor))


@dataclass(frozen=True)
class ColorRamp:
    """Three intensity stages of one scheme."""
    primary: RGB
    secondary: RGB
    tertiary: RGB

    @classmethod
    def from_primary(cls, rgb: RGB) -> "ColorRamp":
        return cls(rgb, scale_rgb(rgb, SECONDARY_SCALE), scale_rgb(rgb, TERTIARY_SCALE))

    @property
    def hex(self) -> str:
        """Primary color as a hex string."""
        r, g, b = self.primary
        return f"#{r:02x}{g:02x}{b:02x}"


RAMPS: dict[ColorScheme, ColorRamp] = {
    scheme: ColorRamp.from_primary(rgb) for scheme, rgb in SCHEME_PRIMARY.items()
}


def stage_alpha(t: float) -> float:
    """Alpha before layer scaling; non-increasing in t."""
    if t < PRIMARY_END:
        return 1.0
    if t < SECONDARY_END:
        span = (t - PRIMARY_END) / (SECONDARY_END - PRIMARY_END)
        return 1.0 - span * (1.0 - MID_ALPHA)
    return MID_ALPHA * (1.0 - t) / (1.0 - SECONDARY_END)


def trail_color(
    scheme: ColorScheme,
    t: float,
    white_leader: bool = True,
    alpha_scale: float = 1.0,
) -> tuple[int, int, int, float]:
    """
    Color and alpha for a glyph at normalized trail position t.

    Args:
        scheme: Active color scheme
        t: Trail position, 0.0 = head (newest), 1.0 = tail (oldest)
        white_leader: Draw the head glyph white (foreground only)
        alpha_scale: Layer opacity multiplier

    Returns (r, g, b, alpha) with RGB in 0-255 and alpha in 0.0-1.0.
    """
    t = min(max(t, 0.0), 1.0)
    ramp = RAMPS[scheme]

    if t < LEADER_END:
        rgb = WHITE if white_leader else ramp.primary
    elif t < PRIMARY_END:
        rgb = ramp.primary
    elif t < SECONDARY_END:
        rgb = ramp.secondary
    else:
        rgb = ramp.tertiary

    r, g, b = rgb
    return r, g, b, stage_alpha(t) * alpha_scale


def ansi_fg(rgb: RGB) -> str:
    """Truecolor ANSI foreground escape code."""
    r, g, b = rgb
    return f"\033[38;2;{r};{g};{b}m"


def ansi_bg(rgb: RGB) -> str:
    """Truecolor ANSI background escape code."""
    r, g, b = rgb
    return f"\033[48;2;{r};{g};{b}m"
