"""
Escape-time iteration for the three supported fractal kinds.

Kinds:
    MANDELBROT -> z_{n+1} = z_n^2 + p        (p is the pixel's own coordinate)
    JULIA      -> z_{n+1} = z_n^2 + c        (c fixed at 0.3 + 0.6i)
    LAMBDA     -> z_{n+1} = c z_n (1 - z_n)   expanded by components,
                                             c fixed at 0.85 + 0.6i

All recurrences are written on (re, im) pairs so the same step works on
plain floats and on numpy arrays.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

ITERATION_CAP = 155


class FractalKind(Enum):
    MANDELBROT = 1
    JULIA = 2
    LAMBDA = 3

    @property
    def constant(self):
        return _CONSTANTS[self]

    @property
    def escape_radius(self) -> float:
        return _ESCAPE_RADII[self]

    @property
    def title(self) -> str:
        return _TITLES[self]

    @classmethod
    def from_choice(cls, choice: int) -> "FractalKind":
        """Menu number -> kind. Anything that is not 1 or 2 becomes LAMBDA."""
        if choice == 1:
            return cls.MANDELBROT
        if choice == 2:
            return cls.JULIA
        return cls.LAMBDA


_CONSTANTS = {
    FractalKind.MANDELBROT: None,
    FractalKind.JULIA: complex(0.3, 0.6),
    FractalKind.LAMBDA: complex(0.85, 0.6),
}

# Lambda escapes at 4, not 2.
_ESCAPE_RADII = {
    FractalKind.MANDELBROT: 2.0,
    FractalKind.JULIA: 2.0,
    FractalKind.LAMBDA: 4.0,
}

_TITLES = {
    FractalKind.MANDELBROT: "Mandelbrot",
    FractalKind.JULIA: "Julia",
    FractalKind.LAMBDA: "Spiral",
}


@dataclass(frozen=True)
class EscapeResult:
    count: int
    modulus: float

    def escaped(self, escape_radius: float) -> bool:
        return self.modulus >= escape_radius


def step(kind: FractalKind, re, im, p_re, p_im):
    """
    Apply one recurrence step to (re, im).

    p_re/p_im is the starting plane coordinate; only Mandelbrot reads it.
    Works elementwise when given numpy arrays.
    """
    if kind is FractalKind.MANDELBROT:
        return re * re - im * im + p_re, 2 * re * im + p_im

    if kind is FractalKind.JULIA:
        c = kind.constant
        return re * re - im * im + c.real, 2 * re * im + c.imag

    if kind is FractalKind.LAMBDA:
        c_re, c_im = kind.constant.real, kind.constant.imag
        re_next = c_re * re - c_re * re * re + c_re * im * im - c_im * im + 2 * c_im * re * im
        im_next = c_re * im + c_im * re - c_im * re * re + c_im * im * im - 2 * c_re * re * im
        return re_next, im_next

    raise ValueError(f"Unknown fractal kind: {kind}")


def evaluate(
    kind: FractalKind,
    plane_point: complex,
    iteration_cap: int = ITERATION_CAP,
    escape_radius: float | None = None,
) -> EscapeResult:
    """
    Iterate a single plane point until |z| reaches escape_radius or the
    count passes iteration_cap.

    A point that starts on or outside the radius returns count 0. A bounded
    point returns iteration_cap + 1 with a modulus below the radius.
    """
    if escape_radius is None:
        escape_radius = kind.escape_radius

    p_re, p_im = float(plane_point.real), float(plane_point.imag)
    re, im = p_re, p_im
    modulus = math.sqrt(re * re + im * im)
    count = 0

    while count <= iteration_cap and modulus < escape_radius:
        re, im = step(kind, re, im, p_re, p_im)
        modulus = math.sqrt(re * re + im * im)
        count += 1

    return EscapeResult(count=count, modulus=modulus)


def escape_counts(
    kind: FractalKind,
    re0: np.ndarray,
    im0: np.ndarray,
    iteration_cap: int = ITERATION_CAP,
    escape_radius: float | None = None,
):
    """
    Vectorised form of evaluate() over arrays of starting coordinates.

    Returns (counts, moduli) with the shape of re0. Each element goes through
    exactly the arithmetic evaluate() would apply to it, so the results match
    pixel for pixel.
    """
    if escape_radius is None:
        escape_radius = kind.escape_radius

    re0 = np.asarray(re0, dtype=np.float64)
    im0 = np.asarray(im0, dtype=np.float64)
    re = re0.copy()
    im = im0.copy()

    counts = np.zeros(re0.shape, dtype=np.int32)
    moduli = np.sqrt(re * re + im * im)
    active = moduli < escape_radius

    for _ in range(iteration_cap + 1):
        if not active.any():
            break
        r_next, i_next = step(kind, re[active], im[active], re0[active], im0[active])
        re[active] = r_next
        im[active] = i_next
        moduli[active] = np.sqrt(r_next * r_next + i_next * i_next)
        counts[active] += 1
        active &= moduli < escape_radius

    return counts, moduli


def iterate_orbit(kind: FractalKind, z0: complex, max_iter: int = ITERATION_CAP, escape_radius: float | None = None):
    """
    Trajectory of z0 under the kind's recurrence, stopping after the first
    point that reaches escape_radius. The initial point is not included.
    """
    if escape_radius is None:
        escape_radius = kind.escape_radius

    p_re, p_im = float(z0.real), float(z0.imag)
    re, im = p_re, p_im
    traj = []

    for _ in range(max_iter):
        re, im = step(kind, re, im, p_re, p_im)
        traj.append(complex(re, im))
        if math.sqrt(re * re + im * im) >= escape_radius:
            break

    return np.array(traj, dtype=np.complex128)
