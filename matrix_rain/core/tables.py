"""Static parameter tables for the rain effect.

Single source of truth for every tunable the engine resolves at
configuration time:
- CharacterPalette: script selector -> glyph pool
- SpeedLevel: speed selector -> (interval, fall-speed multiplier, max trail)
- LayerProfile: foreground / background behaviour

Nothing in here holds state. Randomness is always supplied by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    import numpy as np


class ConfigError(ValueError):
    """Raised when a selector name or configuration value is not acceptable."""


class _Selector(Enum):
    """Enum with stable persisted names, CLI aliases and byte indices."""

    @classmethod
    def default(cls):
        raise NotImplementedError

    @classmethod
    def _aliases(cls) -> dict[str, "_Selector"]:
        return {}

    @classmethod
    def parse(cls, name: str):
        """Resolve a persisted name or short alias (case-insensitive)."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("_", "-")
        for member in cls:
            if member.value == key:
                return member
        alias = cls._aliases().get(key)
        if alias is not None:
            return alias
        choices = ", ".join(m.value for m in cls)
        raise ConfigError(f"Unknown {cls.label()}: {name!r} (expected one of: {choices})")

    @classmethod
    def from_index(cls, index: int):
        """Map a host byte to a member; out-of-range bytes fall back to the default."""
        members = list(cls)
        if isinstance(index, int) and 0 <= index < len(members):
            return members[index]
        return cls.default()

    @property
    def index(self) -> int:
        return list(type(self)).index(self)

    @classmethod
    def label(cls) -> str:
        return cls.__name__


# =============================================================================
# Character palettes
# =============================================================================

class CharacterPalette(_Selector):
    """Script used for the falling glyphs."""
    JAPANESE = "japanese"
    HINDI = "hindi"
    TAMIL = "tamil"
    SINHALA = "sinhala"
    KOREAN = "korean"
    JAWI = "jawi"
    MIXED = "mixed"

    @classmethod
    def default(cls) -> "CharacterPalette":
        return cls.JAPANESE

    @classmethod
    def _aliases(cls) -> dict[str, "CharacterPalette"]:
        return {
            "jp": cls.JAPANESE,
            "hi": cls.HINDI,
            "ta": cls.TAMIL,
            "si": cls.SINHALA,
            "ko": cls.KOREAN,
            "jw": cls.JAWI,
            "mix": cls.MIXED,
        }

    @classmethod
    def label(cls) -> str:
        return "character palette"


# Inclusive code point ranges, optionally strided: (start, end[, step])
PALETTE_RANGES: dict[CharacterPalette, tuple[tuple[int, ...], ...]] = {
    CharacterPalette.JAPANESE: ((0x30A0, 0x30FF), (0xFF65, 0xFF9F)),
    CharacterPalette.HINDI: ((0x0900, 0x097F), (0xA8E0, 0xA8FF)),
    CharacterPalette.TAMIL: ((0x0B80, 0x0BFF),),
    CharacterPalette.SINHALA: ((0x0D80, 0x0DFF), (0x111E0, 0x111FF)),
    # Hangul syllables are thinned to every 10th code point
    CharacterPalette.KOREAN: ((0xAC00, 0xD7AF, 10), (0x3130, 0x318F)),
    CharacterPalette.JAWI: ((0x0600, 0x06FF), (0x0750, 0x077F), (0x08A0, 0x08FF)),
}

PALETTE_EXTRAS: dict[CharacterPalette, str] = {
    CharacterPalette.JAPANESE: "0123456789.:=*+-<>¦|ﾊﾐﾋｰｳｼﾅﾓﾆｻﾜﾂｵﾘｱﾎﾃﾏｹﾒｴｶｷﾑﾕﾗｾﾈｽﾀﾇﾍ",
}

# Mixed draws half its glyphs from Japanese and the rest evenly from the others
MIXED_WEIGHTS: tuple[tuple[CharacterPalette, float], ...] = (
    (CharacterPalette.JAPANESE, 0.5),
    (CharacterPalette.HINDI, 0.1),
    (CharacterPalette.TAMIL, 0.1),
    (CharacterPalette.SINHALA, 0.1),
    (CharacterPalette.KOREAN, 0.1),
    (CharacterPalette.JAWI, 0.1),
)


def _expand(ranges: Iterable[tuple[int, ...]]) -> list[str]:
    chars = []
    for entry in ranges:
        start, end = entry[0], entry[1]
        step = entry[2] if len(entry) > 2 else 1
        chars.extend(chr(cp) for cp in range(start, end + 1, step))
    return chars


@lru_cache(maxsize=None)
def palette_glyphs(palette: CharacterPalette) -> tuple[str, ...]:
    """Glyph pool for a single-script palette (Mixed returns the union)."""
    if palette is CharacterPalette.MIXED:
        pool: list[str] = []
        for member, _ in MIXED_WEIGHTS:
            pool.extend(palette_glyphs(member))
        return tuple(pool)
    chars = _expand(PALETTE_RANGES[palette])
    chars.extend(PALETTE_EXTRAS.get(palette, ""))
    return tuple(chars)


@dataclass(frozen=True)
class GlyphSource:
    """Weighted set of glyph pools a column draws from."""
    pools: tuple[tuple[str, ...], ...]
    weights: tuple[float, ...]

    @classmethod
    def for_palette(cls, palette: CharacterPalette) -> "GlyphSource":
        if palette is CharacterPalette.MIXED:
            return cls(
                pools=tuple(palette_glyphs(p) for p, _ in MIXED_WEIGHTS),
                weights=tuple(w for _, w in MIXED_WEIGHTS),
            )
        return cls(pools=(palette_glyphs(palette),), weights=(1.0,))

    def draw(self, rng: "np.random.Generator") -> str:
        """Pick one glyph using the caller's generator."""
        pool = self.pools[0]
        if len(self.pools) > 1:
            pool = self.pools[int(rng.choice(len(self.pools), p=self.weights))]
        return pool[int(rng.integers(len(pool)))]

    def __contains__(self, glyph: str) -> bool:
        return any(glyph in pool for pool in self.pools)


# =============================================================================
# Speed levels
# =============================================================================

@dataclass(frozen=True)
class SpeedParams:
    """Numeric parameters a speed level resolves to."""
    interval_ms: int
    speed_multiplier: float
    max_trail_length: int


class SpeedLevel(_Selector):
    """Animation speed; faster levels get shorter trails."""
    VERY_SLOW = "very-slow"
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"
    VERY_FAST = "very-fast"

    @classmethod
    def default(cls) -> "SpeedLevel":
        return cls.MEDIUM

    @classmethod
    def _aliases(cls) -> dict[str, "SpeedLevel"]:
        return {
            "veryslow": cls.VERY_SLOW,
            "vs": cls.VERY_SLOW,
            "s": cls.SLOW,
            "med": cls.MEDIUM,
            "m": cls.MEDIUM,
            "f": cls.FAST,
            "veryfast": cls.VERY_FAST,
            "vf": cls.VERY_FAST,
        }

    @classmethod
    def label(cls) -> str:
        return "speed level"

    @property
    def params(self) -> SpeedParams:
        return SPEED_TABLE[self]


SPEED_TABLE: dict[SpeedLevel, SpeedParams] = {
    SpeedLevel.VERY_SLOW: SpeedParams(150, 0.5, 30),
    SpeedLevel.SLOW: SpeedParams(100, 0.75, 25),
    SpeedLevel.MEDIUM: SpeedParams(50, 1.0, 20),
    SpeedLevel.FAST: SpeedParams(30, 1.5, 15),
    SpeedLevel.VERY_FAST: SpeedParams(15, 2.0, 12),
}


def speed_params(level: SpeedLevel) -> SpeedParams:
    """Resolve a speed level to its numeric parameters."""
    return SPEED_TABLE[level]


def update_interval_ms(level: SpeedLevel) -> int:
    """Milliseconds between ticks for a speed level."""
    return SPEED_TABLE[level].interval_ms


# =============================================================================
# Layer profiles
# =============================================================================

@dataclass(frozen=True)
class LayerProfile:
    """Per-layer parameters; both layers share one column state machine."""
    name: str
    stride: int
    speed_scale: float
    trail_scale: float
    alpha_scale: float
    font_scale: float
    p_grow: float
    p_glitch: float
    p_reset: float
    p_reactivate: float
    white_leader: bool


FOREGROUND = LayerProfile(
    name="foreground",
    stride=1,
    speed_scale=1.0,
    trail_scale=1.0,
    alpha_scale=1.0,
    font_scale=1.0,
    p_grow=0.80,
    p_glitch=0.05,
    p_reset=0.10,
    p_reactivate=0.01,
    white_leader=True,
)

# Sparser, slower, dimmer, smaller: reads as depth behind the foreground
BACKGROUND = LayerProfile(
    name="background",
    stride=3,
    speed_scale=0.6,
    trail_scale=0.5,
    alpha_scale=0.3,
    font_scale=0.9,
    p_grow=0.80,
    p_glitch=0.05,
    p_reset=0.05,
    p_reactivate=0.005,
    white_leader=False,
)
