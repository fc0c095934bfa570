"""Tests for RainConfig validation and persistence."""

import json

import pytest

from matrix_rain.core.colors import ColorScheme
from matrix_rain.core.config import FIELDS, RainConfig
from matrix_rain.core.tables import CharacterPalette, ConfigError, SpeedLevel


class TestRainConfigDefaults:
    """Tests for default values."""

    def test_defaults(self):
        """Should default to Japanese, Matrix green, Medium at 1920x1080."""
        config = RainConfig()
        assert config.character_palette is CharacterPalette.JAPANESE
        assert config.color_scheme is ColorScheme.MATRIX_GREEN
        assert config.speed_level is SpeedLevel.MEDIUM
        assert (config.surface_width, config.surface_height) == (1920, 1080)
        assert config.background_enabled is True

    def test_defaults_validate(self):
        """Defaults should pass validation."""
        config = RainConfig()
        assert config.validate() is config

    def test_replace_returns_copy(self):
        """Should leave the original untouched."""
        config = RainConfig()
        other = config.replace(speed_level=SpeedLevel.FAST)
        assert other.speed_level is SpeedLevel.FAST
        assert config.speed_level is SpeedLevel.MEDIUM


class TestRainConfigValidation:
    """Tests for rejected values."""

    @pytest.mark.parametrize("width", [0, -10, "wide", 1.5, True])
    def test_bad_width(self, width):
        """Should reject non-positive or non-integer widths."""
        with pytest.raises(ConfigError):
            RainConfig(surface_width=width).validate()

    def test_bad_height(self):
        """Should name the offending field."""
        with pytest.raises(ConfigError, match="surface_height"):
            RainConfig(surface_height=-1).validate()

    def test_raw_string_palette(self):
        """Should reject raw strings in enum fields."""
        with pytest.raises(ConfigError):
            RainConfig(character_palette="japanese").validate()

    def test_background_must_be_bool(self):
        """Should reject a non-boolean background flag."""
        with pytest.raises(ConfigError):
            RainConfig(background_enabled="yes").validate()

    def test_config_error_is_value_error(self):
        """ConfigError should be a ValueError."""
        assert issubclass(ConfigError, ValueError)


class TestRainConfigSerialization:
    """Tests for to_dict/from_dict and JSON."""

    def test_to_dict(self):
        """Should use stable field names and persisted enum names."""
        d = RainConfig(color_scheme=ColorScheme.TEAL).to_dict()
        assert tuple(d) == FIELDS
        assert d["character_palette"] == "japanese"
        assert d["color_scheme"] == "teal"
        assert d["speed_level"] == "medium"

    def test_from_dict_roundtrip(self):
        """Should rebuild an equal config."""
        config = RainConfig(
            character_palette=CharacterPalette.JAWI,
            color_scheme=ColorScheme.PINK,
            speed_level=SpeedLevel.VERY_SLOW,
            surface_width=800,
            surface_height=600,
            background_enabled=False,
        )
        assert RainConfig.from_dict(config.to_dict()) == config

    def test_from_dict_missing_keys_use_defaults(self):
        """Should default missing keys."""
        config = RainConfig.from_dict({"speed_level": "fast"})
        assert config.speed_level is SpeedLevel.FAST
        assert config.character_palette is CharacterPalette.JAPANESE
        assert config.surface_width == 1920

    def test_from_dict_ignores_unknown_keys(self):
        """Should ignore keys it does not know."""
        config = RainConfig.from_dict({"color_scheme": "red", "glow": True})
        assert config.color_scheme is ColorScheme.RED

    def test_from_dict_accepts_aliases(self):
        """Should accept short aliases."""
        assert RainConfig.from_dict({"character_palette": "ko"}).character_palette is CharacterPalette.KOREAN

    def test_from_dict_unknown_name(self):
        """Should reject unknown enum names."""
        with pytest.raises(ConfigError, match="klingon"):
            RainConfig.from_dict({"character_palette": "klingon"})

    def test_from_dict_bad_width(self):
        """Should reject a zero width."""
        with pytest.raises(ConfigError):
            RainConfig.from_dict({"surface_width": 0})

    def test_from_dict_not_a_mapping(self):
        """Should reject non-mapping input."""
        with pytest.raises(ConfigError):
            RainConfig.from_dict(["japanese"])

    def test_json_roundtrip(self):
        """Should survive a JSON round trip."""
        config = RainConfig(speed_level=SpeedLevel.VERY_FAST)
        assert RainConfig.from_json(config.to_json()) == config

    def test_json_is_plain(self):
        """Should write plain JSON types."""
        data = json.loads(RainConfig().to_json())
        assert data["background_enabled"] is True

    def test_malformed_json(self):
        """Should raise ConfigError on bad JSON."""
        with pytest.raises(ConfigError):
            RainConfig.from_json("{not json")


class TestRainConfigPersistence:
    """Tests for save/load."""

    def test_save_and_load(self, tmp_path):
        """Should load what it saved."""
        path = tmp_path / "rain.json"
        config = RainConfig(character_palette=CharacterPalette.MIXED, surface_width=640)
        config.save(path)
        assert RainConfig.load(path) == config

    def test_save_leaves_no_temp_file(self, tmp_path):
        """Should rename the temp file into place."""
        path = tmp_path / "rain.json"
        RainConfig().save(path)
        assert [p.name for p in tmp_path.iterdir()] == ["rain.json"]

    def test_load_missing_file_gives_defaults(self, tmp_path):
        """Should fall back to defaults for a missing file."""
        assert RainConfig.load(tmp_path / "absent.json") == RainConfig()

    def test_load_malformed_file(self, tmp_path):
        """Should raise ConfigError for a corrupt file."""
        path = tmp_path / "rain.json"
        path.write_text("[1, 2")
        with pytest.raises(ConfigError):
            RainConfig.load(path)
