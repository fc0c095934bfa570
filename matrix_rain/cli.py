"""Terminal demo for the rain engine."""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Callable, Optional

import typer

from .core.colors import ColorScheme
from .core.config import RainConfig
from .core.tables import CharacterPalette, ConfigError, SpeedLevel, speed_params
from .engine.rain import RainEngine
from .render.base import present_frame
from .render.terminal import TerminalRenderer

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="matrix-rain",
    help="Digital rain in your terminal.",
    add_completion=False,
    no_args_is_help=True,
)

PALETTE_HELP = {
    CharacterPalette.JAPANESE: "Japanese Katakana (default)",
    CharacterPalette.HINDI: "Hindi Devanagari script",
    CharacterPalette.TAMIL: "Tamil script",
    CharacterPalette.SINHALA: "Sinhala script",
    CharacterPalette.KOREAN: "Korean Hangul",
    CharacterPalette.JAWI: "Malaysian Jawi (Arabic-based)",
    CharacterPalette.MIXED: "Mixed scripts (50% Japanese, 10% each other)",
}

SPEED_HELP = {
    SpeedLevel.VERY_SLOW: "Contemplative pace",
    SpeedLevel.SLOW: "Relaxed viewing",
    SpeedLevel.MEDIUM: "Balanced (default)",
    SpeedLevel.FAST: "Energetic movement",
    SpeedLevel.VERY_FAST: "High intensity",
}


def _parse(enum_cls, value: Optional[str]):
    if value is None:
        return None
    try:
        return enum_cls.parse(value)
    except ConfigError as e:
        raise typer.BadParameter(str(e)) from e


def _sync_size(engine: RainEngine, renderer: TerminalRenderer) -> bool:
    """Rebuild the engine when the terminal was resized. Returns True if it was."""
    width, height = renderer.width, renderer.height
    config = engine.config
    if (width, height) == (config.surface_width, config.surface_height):
        return False
    logger.debug("Terminal resized to %sx%s px", width, height)
    engine.set_config(config.replace(surface_width=max(1, width), surface_height=max(1, height)))
    return True


def run_loop(
    engine: RainEngine,
    renderer: TerminalRenderer,
    duration: Optional[float] = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Tick and draw until duration elapses (forever when None). Returns frames drawn."""
    start = clock()
    frames = 0
    while duration is None or clock() - start < duration:
        frame_start = clock()
        _sync_size(engine, renderer)
        engine.update()
        present_frame(engine, renderer)
        frames += 1
        remaining = engine.update_interval_ms / 1000.0 - (clock() - frame_start)
        if remaining > 0:
            sleep(remaining)
    return frames


@app.command("run")
def run(
    charset: Optional[str] = typer.Option(None, "--charset", "-c", help="Character set (name or alias)."),
    color: Optional[str] = typer.Option(None, "--color", "-o", help="Color scheme."),
    speed: Optional[str] = typer.Option(None, "--speed", "-s", help="Speed level."),
    duration: Optional[float] = typer.Option(None, "--duration", "-d", help="Stop after this many seconds."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible animation."),
    no_background: bool = typer.Option(False, "--no-background", help="Disable the background depth layer."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Load saved preferences from this file."),
    save_config: Optional[Path] = typer.Option(None, "--save-config", help="Write the effective preferences here."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
) -> None:
    """Run the rain animation. Press Ctrl+C to exit."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(name)s %(levelname)s: %(message)s",
    )

    try:
        config = RainConfig.load(config_path) if config_path else RainConfig()
    except ConfigError as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e

    changes = {
        "character_palette": _parse(CharacterPalette, charset),
        "color_scheme": _parse(ColorScheme, color),
        "speed_level": _parse(SpeedLevel, speed),
    }
    if no_background:
        changes["background_enabled"] = False
    config = config.replace(**{k: v for k, v in changes.items() if v is not None})

    renderer = TerminalRenderer()
    config = config.replace(
        surface_width=max(1, renderer.width),
        surface_height=max(1, renderer.height),
    )

    if save_config:
        config.save(save_config)
        logger.info("Saved preferences to %s", save_config)

    engine = RainEngine(config, seed=seed)
    renderer.init()
    try:
        run_loop(engine, renderer, duration)
    except KeyboardInterrupt:
        pass
    finally:
        renderer.cleanup()


@app.command("list")
def list_options() -> None:
    """Show available character sets, color schemes and speeds."""
    typer.echo("Character Sets:")
    for palette in CharacterPalette:
        typer.echo(f"  {palette.value:<14} {PALETTE_HELP[palette]}")

    typer.echo("\nColor Schemes:")
    for scheme in ColorScheme:
        typer.echo(f"  {scheme.value:<14} {scheme.ramp.hex}")

    typer.echo("\nSpeed Settings:")
    for level in SpeedLevel:
        params = speed_params(level)
        typer.echo(
            f"  {level.value:<14} {SPEED_HELP[level]} "
            f"({params.interval_ms}ms, {params.speed_multiplier}x, trail {params.max_trail_length})"
        )


def main() -> None:
    app()
