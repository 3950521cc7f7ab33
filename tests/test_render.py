import numpy as np
import pytest

from xfractals.coloring import color_of
from xfractals.iterators import FractalKind, evaluate
from xfractals.render import build_frame, plane_grid
from xfractals.viewport import Viewport, default_viewport, pixel_to_plane, resolve


@pytest.fixture(scope="module")
def mandelbrot_first_view():
    kind = FractalKind.MANDELBROT
    viewport = resolve(kind, None, None)
    return build_frame(kind, viewport, 250, 250, 155)


def test_end_to_end_first_view(mandelbrot_first_view):
    frame = mandelbrot_first_view
    assert frame.viewport.as_tuple() == (-2.5, 1.5, -1.5, 1.5)
    assert frame.pixels.shape == (250, 250)

    # top-left (-2.5, 1.5) is outside |z| < 2
    assert frame.escaped[0, 0]
    assert frame.iterations[0, 0] == 0
    assert frame.at(0, 0) != 0

    # center (-0.5, 0) is inside the set
    assert not frame.escaped[125, 125]
    assert frame.at(125, 125) == 0
    assert frame.iterations[125, 125] == 156


def test_frame_is_deterministic():
    kind = FractalKind.JULIA
    vp = default_viewport(kind)
    a = build_frame(kind, vp, 40, 30, 80, scheme="banded")
    b = build_frame(kind, vp, 40, 30, 80, scheme="banded")
    assert np.array_equal(a.pixels, b.pixels)
    assert np.array_equal(a.iterations, b.iterations)
    assert a.pixels.tobytes() == b.pixels.tobytes()


@pytest.mark.parametrize("kind", list(FractalKind))
def test_frame_matches_per_pixel_evaluation(kind):
    vp = default_viewport(kind)
    w, h = 11, 7
    frame = build_frame(kind, vp, w, h, 50, scheme="blue-dark")

    for py in range(h):
        for px in range(w):
            x, y = pixel_to_plane(vp, px, py, w, h)
            res = evaluate(kind, complex(x, y), 50)
            assert frame.iterations[py, px] == res.count
            assert frame.at(px, py) == color_of(res, kind.escape_radius, "blue-dark")


@pytest.mark.parametrize("workers", [2, 3, 8, 64])
def test_worker_count_does_not_change_output(workers):
    kind = FractalKind.LAMBDA
    vp = default_viewport(kind)
    single = build_frame(kind, vp, 23, 17, 40)
    multi = build_frame(kind, vp, 23, 17, 40, workers=workers)
    assert np.array_equal(single.pixels, multi.pixels)
    assert np.array_equal(single.iterations, multi.iterations)


def test_grey_frame_packs_counts(mandelbrot_first_view):
    frame = mandelbrot_first_view
    esc = frame.escaped
    counts = np.maximum(frame.iterations[esc], 1).astype(np.uint32)
    np.testing.assert_array_equal(frame.pixels[esc], counts | (counts << 8) | (counts << 16))
    assert np.all(frame.pixels[~esc] == 0)


def test_row_zero_is_top():
    vp = Viewport(-1.0, 1.0, -2.0, 2.0)
    re, im = plane_grid(vp, 4, 4)
    np.testing.assert_allclose(re[0], [-1.0, -0.5, 0.0, 0.5])
    np.testing.assert_allclose(im[:, 0], [2.0, 1.0, 0.0, -1.0])


def test_to_rgb_shape(mandelbrot_first_view):
    rgb = mandelbrot_first_view.to_rgb()
    assert rgb.shape == (250, 250, 3)
    assert rgb.dtype == np.uint8
    assert tuple(rgb[125, 125]) == (0, 0, 0)


def test_non_square_grid():
    kind = FractalKind.MANDELBROT
    frame = build_frame(kind, default_viewport(kind), 30, 12, 20)
    assert (frame.width, frame.height) == (30, 12)
    assert frame.iterations.shape == (12, 30)


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-3, 5)])
def test_bad_grid_size_raises(size):
    kind = FractalKind.MANDELBROT
    with pytest.raises(ValueError):
        build_frame(kind, default_viewport(kind), *size)


def test_unknown_scheme_raises():
    kind = FractalKind.MANDELBROT
    with pytest.raises(ValueError):
        build_frame(kind, default_viewport(kind), 4, 4, scheme="rainbow")
