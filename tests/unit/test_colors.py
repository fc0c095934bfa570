"""Tests for color schemes and the trail fade."""

import numpy as np
import pytest

from matrix_rain.core.colors import (
    RAMPS,
    WHITE,
    ColorRamp,
    ColorScheme,
    ansi_bg,
    ansi_fg,
    scale_rgb,
    stage_alpha,
    trail_color,
)
from matrix_rain.core.tables import ConfigError


class TestColorSchemes:
    """Tests for scheme definitions."""

    def test_eleven_schemes(self):
        """Should define a ramp for all eleven schemes."""
        assert len(ColorScheme) == 11
        assert set(RAMPS) == set(ColorScheme)

    def test_matrix_green_primary(self):
        """Should use the classic green."""
        assert ColorScheme.MATRIX_GREEN.primary == (0, 255, 70)
        assert ColorScheme.MATRIX_GREEN.ramp.hex == "#00ff46"

    def test_ramp_dims_toward_tail(self):
        """Should never brighten from primary to tertiary."""
        for scheme in ColorScheme:
            ramp = scheme.ramp
            for p, s, t in zip(ramp.primary, ramp.secondary, ramp.tertiary):
                assert p >= s >= t

    def test_ramp_from_primary(self):
        """Should derive secondary and tertiary at 60% and 30%."""
        ramp = ColorRamp.from_primary((100, 200, 50))
        assert ramp.secondary == scale_rgb((100, 200, 50), 0.6)
        assert ramp.tertiary == scale_rgb((100, 200, 50), 0.3)

    def test_scale_rgb_truncates(self):
        """Should truncate scaled channels."""
        assert scale_rgb((100, 100, 100), 0.5) == (50, 50, 50)
        assert scale_rgb((255, 0, 3), 0.5) == (127, 0, 1)

    def test_parse(self):
        """Should resolve names, underscores and aliases."""
        assert ColorScheme.parse("matrix_green") is ColorScheme.MATRIX_GREEN
        assert ColorScheme.parse("green") is ColorScheme.MATRIX_GREEN
        assert ColorScheme.parse("Teal") is ColorScheme.TEAL

    def test_parse_unknown(self):
        """Should reject unknown scheme names."""
        with pytest.raises(ConfigError):
            ColorScheme.parse("ultraviolet")

    def test_from_index(self):
        """Should clamp out-of-range bytes to Matrix green."""
        assert ColorScheme.from_index(10) is ColorScheme.TEAL
        assert ColorScheme.from_index(11) is ColorScheme.MATRIX_GREEN


class TestTrailColor:
    """Tests for the position -> (rgb, alpha) mapping."""

    def test_head_is_white(self):
        """Should draw the foreground head white."""
        assert trail_color(ColorScheme.MATRIX_GREEN, 0.0) == (255, 255, 255, 1.0)

    def test_head_without_white_leader(self):
        """Should start at the primary color without a white leader."""
        r, g, b, alpha = trail_color(ColorScheme.MATRIX_GREEN, 0.0, white_leader=False)
        assert (r, g, b) == (0, 255, 70)
        assert alpha == 1.0

    def test_primary_stage(self):
        """Should use the primary color at full alpha."""
        r, g, b, alpha = trail_color(ColorScheme.RED, 0.1)
        assert (r, g, b) == ColorScheme.RED.primary
        assert alpha == 1.0

    def test_secondary_stage(self):
        """Should use the secondary color while fading."""
        r, g, b, alpha = trail_color(ColorScheme.CYAN, 0.3)
        assert (r, g, b) == ColorScheme.CYAN.secondary
        assert 0.5 < alpha < 1.0

    def test_tertiary_stage(self):
        """Should use the tertiary color from the midpoint."""
        r, g, b, alpha = trail_color(ColorScheme.PURPLE, 0.5)
        assert (r, g, b) == ColorScheme.PURPLE.tertiary
        assert alpha == pytest.approx(0.5)

    def test_tail_is_transparent(self):
        """Should fade to zero alpha at the tail."""
        assert trail_color(ColorScheme.MATRIX_GREEN, 1.0)[3] == pytest.approx(0.0)

    def test_stage_boundaries(self):
        """Should hit the documented alpha at stage edges."""
        assert stage_alpha(0.15) == 1.0
        assert stage_alpha(0.5) == pytest.approx(0.5)

    def test_alpha_non_increasing(self):
        """Should never get more opaque toward the tail."""
        alphas = [trail_color(ColorScheme.ORANGE, float(t))[3] for t in np.linspace(0.0, 1.0, 201)]
        assert all(a >= b for a, b in zip(alphas, alphas[1:]))

    def test_alpha_scale(self):
        """Should multiply alpha by the layer scale."""
        assert trail_color(ColorScheme.MATRIX_GREEN, 0.0, alpha_scale=0.3)[3] == pytest.approx(0.3)

    def test_out_of_range_t_is_clamped(self):
        """Should clamp t into [0, 1]."""
        scheme = ColorScheme.YELLOW
        assert trail_color(scheme, -1.0) == trail_color(scheme, 0.0)
        assert trail_color(scheme, 2.0) == trail_color(scheme, 1.0)

    def test_background_head_never_white(self):
        """Background trails should never emit white."""
        for scheme in ColorScheme:
            if scheme is ColorScheme.WHITE:
                continue
            rgb = trail_color(scheme, 0.0, white_leader=False)[:3]
            assert rgb != WHITE


class TestAnsi:
    """Tests for truecolor escapes."""

    def test_foreground(self):
        """Should return a truecolor foreground escape."""
        assert ansi_fg((1, 2, 3)) == "\033[38;2;1;2;3m"

    def test_background(self):
        """Should return a truecolor background escape."""
        assert ansi_bg((0, 0, 0)) == "\033[48;2;0;0;0m"
