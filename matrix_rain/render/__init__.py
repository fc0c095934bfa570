"""Renderer contract and the terminal adapter."""

from .base import Renderer, present_frame
from .terminal import TerminalRenderer

__all__ = [
    "Renderer",
    "present_frame",
    "TerminalRenderer",
]
