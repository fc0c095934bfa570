"""Shared test fixtures."""

import numpy as np
import pytest
from typer.testing import CliRunner

from matrix_rain.core.colors import RGB
from matrix_rain.core.config import RainConfig
from matrix_rain.engine.rain import RainEngine


class RecordingRenderer:
    """Renderer that keeps every call for inspection."""

    def __init__(self, width: int = 1920, height: int = 1080):
        self._width = width
        self._height = height
        self.cleared_with: list[RGB] = []
        self.drawn = []
        self.presented = 0

    def clear(self, color):
        self.cleared_with.append(color)
        self.drawn = []

    def draw_glyphs(self, glyphs):
        self.drawn.extend(glyphs)

    def present(self):
        self.presented += 1

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height


@pytest.fixture
def rng():
    """Seeded generator for deterministic column tests."""
    return np.random.default_rng(1234)


@pytest.fixture
def default_config():
    return RainConfig()


@pytest.fixture
def engine(default_config):
    """Seeded engine on a 1920x1080 surface with the background layer on."""
    return RainEngine(default_config, seed=42)


@pytest.fixture
def recording_renderer():
    return RecordingRenderer()


@pytest.fixture
def runner():
    return CliRunner()
