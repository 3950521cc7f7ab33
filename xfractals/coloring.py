# xfractals/coloring.py
import numpy as np

from xfractals.iterators import EscapeResult

INTERIOR = 0

# Menu order of the interactive prompt; 0 is the plain grey ramp.
SCHEMES = (
    "grey",
    "banded",
    "blue-dark",
    "purple-dark",
    "blue-light",
    "red-dark",
    "green-light",
    "green-banded",
    "bluegreen-banded",
)


def scheme_name(choice) -> str:
    """
    Accept a scheme name or its menu number and return the canonical name.
    """
    if isinstance(choice, (int, np.integer)) and not isinstance(choice, bool):
        if 0 <= choice < len(SCHEMES):
            return SCHEMES[choice]
        raise ValueError(f"Unknown color scheme number: {choice}")

    name = str(choice).strip().lower().replace("_", "-")
    if name.isdigit():
        return scheme_name(int(name))
    if name in ("gray", "default"):
        name = "grey"
    if name not in SCHEMES:
        raise ValueError(f"Unknown color scheme: {choice}")
    return name


def pack_rgb(r, g, b):
    """Pack channel values into a 24-bit int, red in the low byte."""
    return r + (g << 8) + (b << 16)


def unpack_rgb(packed):
    packed = np.asarray(packed, dtype=np.uint32)
    r = (packed & 0xFF).astype(np.uint8)
    g = ((packed >> 8) & 0xFF).astype(np.uint8)
    b = ((packed >> 16) & 0xFF).astype(np.uint8)
    return np.stack([r, g, b], axis=-1)


def scheme_channels(counts, scheme: str = "grey"):
    """
    Channel values for escaped points, as a function of the count only.

    counts may be an int or an integer array; returns (r, g, b) of the same
    shape, each in [0, 255]. At least one channel is non-zero for every
    count, so an escaped point never packs to the interior black.
    """
    n = np.clip(np.asarray(counts, dtype=np.int64), 1, 255)
    zero = np.zeros_like(n)
    full = np.full_like(n, 255)

    if scheme == "grey":
        return n, n, n
    if scheme == "banded":
        return (n * 7) % 256, (n * 13) % 256, (n * 29) % 256
    if scheme == "blue-dark":
        return zero, n // 2, n
    if scheme == "purple-dark":
        return n // 2, zero, n
    if scheme == "blue-light":
        return n, np.minimum(n + 64, 255), full
    if scheme == "red-dark":
        return n, zero, zero
    if scheme == "green-light":
        return n, full, n
    if scheme == "green-banded":
        return zero, 16 + (n * 16) % 240, zero
    if scheme == "bluegreen-banded":
        return zero, 16 + (n * 8) % 240, 16 + (n * 16) % 240

    raise ValueError(f"Unknown color scheme: {scheme}")


def color_of(result: EscapeResult, escape_radius: float, scheme: str = "grey") -> int:
    """
    Packed color of one evaluated point. Points that never reached the
    escape radius are black in every scheme.
    """
    if result.modulus < escape_radius:
        return INTERIOR
    r, g, b = scheme_channels(result.count, scheme)
    return int(pack_rgb(int(r), int(g), int(b)))


def colorize(counts, moduli, escape_radius: float, scheme: str = "grey") -> np.ndarray:
    """
    Vectorised color_of(): packed uint32 grid from count and modulus grids.
    """
    counts = np.asarray(counts)
    moduli = np.asarray(moduli)
    r, g, b = scheme_channels(counts, scheme)
    packed = pack_rgb(r.astype(np.uint32), g.astype(np.uint32), b.astype(np.uint32))
    return np.where(moduli < escape_radius, np.uint32(INTERIOR), packed).astype(np.uint32)
