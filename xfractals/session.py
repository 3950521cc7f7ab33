"""
Session controller: owns the current viewport and frame for one fractal
kind and turns pointer selections into fresh frames.
"""

from __future__ import annotations

from typing import Optional

from xfractals.iterators import ITERATION_CAP, FractalKind
from xfractals.render import FrameBuffer, build_frame
from xfractals.utils import clamp_pixel
from xfractals.viewport import GRID_HEIGHT, GRID_WIDTH, PixelSelection, Viewport, resolve


class FractalSession:
    def __init__(
        self,
        kind: FractalKind,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        iteration_cap: int = ITERATION_CAP,
        scheme: str = "grey",
        workers: int = 1,
    ):
        self.kind = kind
        self.width = width
        self.height = height
        self.iteration_cap = iteration_cap
        self.scheme = scheme
        self.workers = workers

        self.viewport: Optional[Viewport] = None
        self.frame: Optional[FrameBuffer] = None

    def _render(self, selection: Optional[PixelSelection]) -> FrameBuffer:
        self.viewport = resolve(self.kind, self.viewport, selection, self.width, self.height)
        self.frame = build_frame(
            self.kind,
            self.viewport,
            self.width,
            self.height,
            self.iteration_cap,
            scheme=self.scheme,
            workers=self.workers,
        )
        return self.frame

    def start(self) -> FrameBuffer:
        """First view: the kind's default viewport."""
        self.viewport = None
        return self._render(None)

    reset = start

    def select(self, p1, p2) -> FrameBuffer:
        """
        Zoom onto the rectangle p1-p2, or pan to p1 when the gesture was a
        click. Points are clamped into the grid first.
        """
        if self.viewport is None:
            return self.start()
        selection = PixelSelection(
            clamp_pixel(p1, self.width, self.height),
            clamp_pixel(p2, self.width, self.height),
        )
        return self._render(selection)
