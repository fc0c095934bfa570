"""Rain configuration record and its persisted JSON form."""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .colors import ColorScheme
from .tables import CharacterPalette, ConfigError, SpeedLevel

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080

# Persisted field names; renaming any of these breaks saved preferences
FIELDS = (
    "character_palette",
    "color_scheme",
    "speed_level",
    "surface_width",
    "surface_height",
    "background_enabled",
)


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


@dataclass
class RainConfig:
    """Everything the engine needs to build its layers."""
    character_palette: CharacterPalette = CharacterPalette.JAPANESE
    color_scheme: ColorScheme = ColorScheme.MATRIX_GREEN
    speed_level: SpeedLevel = SpeedLevel.MEDIUM
    surface_width: int = DEFAULT_WIDTH
    surface_height: int = DEFAULT_HEIGHT
    background_enabled: bool = True

    def validate(self) -> "RainConfig":
        """Check field types and dimensions, returning self."""
        if not isinstance(self.character_palette, CharacterPalette):
            raise ConfigError(f"character_palette must be a CharacterPalette, got {self.character_palette!r}")
        if not isinstance(self.color_scheme, ColorScheme):
            raise ConfigError(f"color_scheme must be a ColorScheme, got {self.color_scheme!r}")
        if not isinstance(self.speed_level, SpeedLevel):
            raise ConfigError(f"speed_level must be a SpeedLevel, got {self.speed_level!r}")
        _positive_int("surface_width", self.surface_width)
        _positive_int("surface_height", self.surface_height)
        if not isinstance(self.background_enabled, bool):
            raise ConfigError(f"background_enabled must be a boolean, got {self.background_enabled!r}")
        return self

    def replace(self, **changes) -> "RainConfig":
        """Copy with some fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "character_palette": self.character_palette.value,
            "color_scheme": self.color_scheme.value,
            "speed_level": self.speed_level.value,
            "surface_width": self.surface_width,
            "surface_height": self.surface_height,
            "background_enabled": self.background_enabled,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "RainConfig":
        """
        Build a config from its persisted form.

        Missing keys fall back to defaults and unknown keys are ignored so
        older and newer preference files both load. Invalid values raise
        ConfigError.
        """
        if not isinstance(d, dict):
            raise ConfigError(f"Expected a mapping, got {type(d).__name__}")

        unknown = set(d) - set(FIELDS)
        if unknown:
            logger.debug("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))

        defaults = cls()
        config = cls(
            character_palette=CharacterPalette.parse(
                d.get("character_palette", defaults.character_palette.value)
            ),
            color_scheme=ColorScheme.parse(d.get("color_scheme", defaults.color_scheme.value)),
            speed_level=SpeedLevel.parse(d.get("speed_level", defaults.speed_level.value)),
            surface_width=d.get("surface_width", defaults.surface_width),
            surface_height=d.get("surface_height", defaults.surface_height),
            background_enabled=d.get("background_enabled", defaults.background_enabled),
        )
        return config.validate()

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "RainConfig":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Malformed configuration JSON: {e}") from e
        return cls.from_dict(data)

    def save(self, path: Path) -> None:
        path = Path(path)
        temp = path.with_suffix(".tmp")
        temp.write_text(self.to_json())
        temp.rename(path)

    @classmethod
    def load(cls, path: Path) -> "RainConfig":
        """Load from disk; a missing file yields defaults."""
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            text = path.read_text()
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e
        return cls.from_json(text)
