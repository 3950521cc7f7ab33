# xfractals/utils.py
from xfractals.iterators import FractalKind

_KIND_NAMES = {
    "mandelbrot": FractalKind.MANDELBROT,
    "julia": FractalKind.JULIA,
    "lambda": FractalKind.LAMBDA,
    "spiral": FractalKind.LAMBDA,
}


def parse_kind(value) -> FractalKind:
    """
    Parse '1', 2, 'julia', 'Spiral' ... into a FractalKind.

    Numbers follow the menu rule (1, 2, anything else -> LAMBDA); unknown
    names raise ValueError.
    """
    if isinstance(value, FractalKind):
        return value
    if isinstance(value, int):
        return FractalKind.from_choice(value)

    s = str(value).strip().lower()
    if s.lstrip("-").isdigit():
        return FractalKind.from_choice(int(s))
    if s in _KIND_NAMES:
        return _KIND_NAMES[s]
    raise ValueError(f"Unknown fractal kind: {value}")


def clamp(v, vmin, vmax):
    return max(vmin, min(v, vmax))


def clamp_pixel(p, width: int, height: int):
    """Keep a pointer position inside [0, width) x [0, height)."""
    return clamp(int(p[0]), 0, width - 1), clamp(int(p[1]), 0, height - 1)
