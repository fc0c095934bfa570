"""ANSI truecolor terminal renderer.

Pixel coordinates from the engine are mapped onto terminal cells using a
nominal cell size. Terminals have no per-glyph alpha, so opacity is folded
into brightness in three steps.
"""

from __future__ import annotations

import shutil
import sys
from typing import Sequence, TextIO

from ..core.colors import RGB, ansi_bg, ansi_fg, scale_rgb
from ..engine.frame import Glyph

CSI = "\033["
RESET = f"{CSI}0m"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
ENTER_ALT_SCREEN = f"{CSI}?1049h"
LEAVE_ALT_SCREEN = f"{CSI}?1049l"
CLEAR_SCREEN = f"{CSI}2J"

# Nominal pixel size of one terminal cell
TERM_CELL_WIDTH = 8
TERM_CELL_HEIGHT = 16


def alpha_to_brightness(rgb: RGB, alpha: float) -> RGB:
    """Approximate alpha by dimming: <0.3 -> 30%, <0.7 -> 60%, else full."""
    if alpha < 0.3:
        return scale_rgb(rgb, 0.3)
    if alpha < 0.7:
        return scale_rgb(rgb, 0.6)
    return rgb


def move_to(col: int, row: int) -> str:
    """Cursor position escape (0-based in, 1-based out)."""
    return f"{CSI}{row + 1};{col + 1}H"


class TerminalRenderer:
    """Renders glyph batches to a text stream with ANSI escapes."""

    def __init__(
        self,
        stream: TextIO | None = None,
        cell_width: int = TERM_CELL_WIDTH,
        cell_height: int = TERM_CELL_HEIGHT,
        size: tuple[int, int] | None = None,
    ):
        """
        Args:
            stream: Output stream (defaults to stdout)
            cell_width, cell_height: Pixels per terminal cell
            size: Fixed (columns, rows); None queries the terminal each time
        """
        self.stream = stream if stream is not None else sys.stdout
        self.cell_width = cell_width
        self.cell_height = cell_height
        self._fixed_size = size
        self._frame_size: tuple[int, int] | None = None
        self._buffer: list[str] = []

    @property
    def size(self) -> tuple[int, int]:
        """Terminal size in (columns, rows)."""
        if self._fixed_size is not None:
            return self._fixed_size
        cols, rows = shutil.get_terminal_size()
        return cols, rows

    @property
    def width(self) -> int:
        return self.size[0] * self.cell_width

    @property
    def height(self) -> int:
        return self.size[1] * self.cell_height

    def init(self) -> None:
        """Switch to the alternate screen and hide the cursor."""
        self.stream.write(ENTER_ALT_SCREEN + HIDE_CURSOR + CLEAR_SCREEN)
        self.stream.flush()

    def cleanup(self) -> None:
        """Restore the terminal."""
        self.stream.write(RESET + SHOW_CURSOR + LEAVE_ALT_SCREEN)
        self.stream.flush()

    def clear(self, color: RGB) -> None:
        """Start a frame; the terminal size is sampled once here for the whole frame."""
        self._frame_size = self.size
        self._buffer = [ansi_bg(color), CLEAR_SCREEN]

    def draw_glyph(self, glyph: Glyph) -> None:
        col = int(glyph.x / self.cell_width)
        row = int(glyph.y / self.cell_height)
        if self._frame_size is None:
            self._frame_size = self.size
        cols, rows = self._frame_size
        if not (0 <= col < cols and 0 <= row < rows):
            return
        rgb = alpha_to_brightness(glyph.rgb, glyph.alpha)
        self._buffer.append(f"{move_to(col, row)}{ansi_fg(rgb)}{glyph.char}")

    def draw_glyphs(self, glyphs: Sequence[Glyph]) -> None:
        for glyph in glyphs:
            self.draw_glyph(glyph)

    def present(self) -> None:
        self._buffer.append(RESET)
        self.stream.write("".join(self._buffer))
        self.stream.flush()
        self._buffer = []
        self._frame_size = None
