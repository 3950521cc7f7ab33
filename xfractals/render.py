"""
Frame builder: evaluates and colors every pixel of a grid for one viewport.

Row 0 of every grid is the top of the viewport (y_max); column 0 is x_min.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from xfractals.coloring import colorize, scheme_name, unpack_rgb
from xfractals.iterators import ITERATION_CAP, FractalKind, escape_counts
from xfractals.viewport import GRID_HEIGHT, GRID_WIDTH, Viewport, pixel_to_plane


@dataclass(frozen=True)
class FrameBuffer:
    """
    One rendered frame. All grids are indexed [py, px], row 0 at the top.

    pixels      -> packed 24-bit colors (uint32)
    iterations  -> escape counts (int32)
    escaped     -> True where the point reached the escape radius
    """

    pixels: np.ndarray
    iterations: np.ndarray
    escaped: np.ndarray
    viewport: Viewport

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def at(self, px: int, py: int) -> int:
        return int(self.pixels[py, px])

    def to_rgb(self) -> np.ndarray:
        """(height, width, 3) uint8 image for display or saving."""
        return unpack_rgb(self.pixels)


def plane_grid(viewport: Viewport, width: int, height: int):
    """Starting coordinates of every pixel, as (re, im) arrays of shape (height, width)."""
    px = np.arange(width, dtype=np.float64)
    py = np.arange(height, dtype=np.float64)
    xs, ys = pixel_to_plane(viewport, px, py, width, height)
    re = np.broadcast_to(xs[None, :], (height, width))
    im = np.broadcast_to(ys[:, None], (height, width))
    return re, im


def _row_bands(height: int, workers: int):
    n = max(1, min(workers, height))
    edges = np.linspace(0, height, n + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def build_frame(
    kind: FractalKind,
    viewport: Viewport,
    grid_width: int = GRID_WIDTH,
    grid_height: int = GRID_HEIGHT,
    iteration_cap: int = ITERATION_CAP,
    *,
    scheme: str = "grey",
    workers: int = 1,
) -> FrameBuffer:
    """
    Evaluate and color every pixel of the grid for the given viewport.

    workers > 1 splits the rows into bands evaluated on a thread pool; each
    pixel depends only on its own coordinate, so the result is the same for
    any worker count.
    """
    if grid_width <= 0 or grid_height <= 0:
        raise ValueError(f"Grid size must be positive, got {grid_width}x{grid_height}")

    scheme = scheme_name(scheme)
    radius = kind.escape_radius
    re, im = plane_grid(viewport, grid_width, grid_height)

    iters = np.zeros((grid_height, grid_width), dtype=np.int32)
    moduli = np.zeros((grid_height, grid_width), dtype=np.float64)

    def _band(rows):
        start, stop = rows
        counts, mods = escape_counts(kind, re[start:stop], im[start:stop], iteration_cap, radius)
        iters[start:stop] = counts
        moduli[start:stop] = mods

    bands = _row_bands(grid_height, workers)
    if len(bands) == 1:
        _band(bands[0])
    else:
        with ThreadPoolExecutor(max_workers=len(bands)) as executor:
            # list() re-raises any worker exception here
            list(executor.map(_band, bands))

    return FrameBuffer(
        pixels=colorize(iters, moduli, radius, scheme),
        iterations=iters,
        escaped=moduli >= radius,
        viewport=viewport,
    )
