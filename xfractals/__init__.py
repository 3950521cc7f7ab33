"""Escape-time fractal rendering with pointer-driven zoom and pan."""

from .iterators import ITERATION_CAP, EscapeResult, FractalKind, escape_counts, evaluate, iterate_orbit
from .coloring import SCHEMES, color_of, colorize
from .viewport import DEFAULT_VIEWPORTS, PixelSelection, Viewport, default_viewport, pixel_to_plane, resolve
from .render import FrameBuffer, build_frame
from .session import FractalSession

__all__ = [
    "DEFAULT_VIEWPORTS",
    "EscapeResult",
    "FractalKind",
    "FractalSession",
    "FrameBuffer",
    "ITERATION_CAP",
    "PixelSelection",
    "SCHEMES",
    "Viewport",
    "build_frame",
    "color_of",
    "colorize",
    "default_viewport",
    "escape_counts",
    "evaluate",
    "iterate_orbit",
    "pixel_to_plane",
    "resolve",
]
