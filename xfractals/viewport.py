"""
Viewport bounds and the pixel-selection -> viewport resolver.

A viewport is the rectangle of the complex plane mapped onto the pixel grid.
Pixel x grows left to right over [x_min, x_max]; pixel y grows downward, so
row 0 sits on y_max and the last row approaches y_min.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from xfractals.iterators import FractalKind

GRID_WIDTH = 250
GRID_HEIGHT = 250

Pixel = Tuple[int, int]


@dataclass(frozen=True)
class Viewport:
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self):
        if not (self.x_min < self.x_max and self.y_min < self.y_max):
            raise ValueError(
                f"Invalid viewport bounds: x=[{self.x_min}, {self.x_max}], y=[{self.y_min}, {self.y_max}]"
            )

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def as_tuple(self):
        return self.x_min, self.x_max, self.y_min, self.y_max


@dataclass(frozen=True)
class PixelSelection:
    """Press/release pixel pair from a pointer gesture."""

    p1: Pixel
    p2: Pixel

    @property
    def is_pan(self) -> bool:
        return self.p1[0] == self.p2[0] or self.p1[1] == self.p2[1]

    def corners(self):
        """((px_min, py_min), (px_max, py_max)), each axis sorted on its own."""
        (x1, y1), (x2, y2) = self.p1, self.p2
        return (min(x1, x2), min(y1, y2)), (max(x1, x2), max(y1, y2))


DEFAULT_VIEWPORTS = {
    FractalKind.MANDELBROT: Viewport(-2.5, 1.5, -1.5, 1.5),
    FractalKind.JULIA: Viewport(-0.241001, 0.222222, 0.413542, 0.760960),
    FractalKind.LAMBDA: Viewport(-1.5, 2.5, -1.5, 1.5),
}


def default_viewport(kind: FractalKind) -> Viewport:
    return DEFAULT_VIEWPORTS.get(kind, DEFAULT_VIEWPORTS[FractalKind.LAMBDA])


def pixel_scale(viewport: Viewport, grid_width: int, grid_height: int):
    """Plane units per pixel on each axis."""
    return viewport.width / grid_width, viewport.height / grid_height


def pixel_to_plane(viewport: Viewport, px, py, grid_width: int = GRID_WIDTH, grid_height: int = GRID_HEIGHT):
    """
    Plane coordinate (x, y) of pixel (px, py). Accepts scalars or arrays.
    """
    x_step, y_step = pixel_scale(viewport, grid_width, grid_height)
    return viewport.x_min + px * x_step, viewport.y_max - py * y_step


def _bounded(current: Viewport, x_min, x_max, y_min, y_max) -> Viewport:
    """New viewport, or current when the bounds collapsed below float resolution."""
    if not (x_min < x_max and y_min < y_max):
        return current
    return Viewport(x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)


def resolve(
    kind: FractalKind,
    current: Optional[Viewport],
    selection: Optional[PixelSelection],
    grid_width: int = GRID_WIDTH,
    grid_height: int = GRID_HEIGHT,
) -> Viewport:
    """
    Compute the viewport that follows a pointer selection.

    - no current viewport, or no selection  -> the kind's default view
    - rectangle (both axes differ)          -> zoom onto the rectangle
    - click or a line (an axis repeats)     -> recenter on p1, same spans

    A zoom or pan whose bounds would no longer be distinct floats leaves
    the current viewport in place.
    """
    if current is None or selection is None:
        return default_viewport(kind)

    x_step, y_step = pixel_scale(current, grid_width, grid_height)

    if not selection.is_pan:
        (px_min, py_min), (px_max, py_max) = selection.corners()
        return _bounded(
            current,
            current.x_min + px_min * x_step,
            current.x_min + px_max * x_step,
            current.y_max - py_max * y_step,
            current.y_max - py_min * y_step,
        )

    cx, cy = pixel_to_plane(current, selection.p1[0], selection.p1[1], grid_width, grid_height)
    half_w = current.width / 2
    half_h = current.height / 2
    return _bounded(current, cx - half_w, cx + half_w, cy - half_h, cy + half_h)
