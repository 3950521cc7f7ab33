import numpy as np
import pytest

from xfractals.iterators import (
    ITERATION_CAP,
    FractalKind,
    escape_counts,
    evaluate,
    iterate_orbit,
    step,
)


def test_kind_constants():
    assert FractalKind.MANDELBROT.constant is None
    assert FractalKind.JULIA.constant == complex(0.3, 0.6)
    assert FractalKind.LAMBDA.constant == complex(0.85, 0.6)

    assert FractalKind.MANDELBROT.escape_radius == 2.0
    assert FractalKind.JULIA.escape_radius == 2.0
    assert FractalKind.LAMBDA.escape_radius == 4.0


@pytest.mark.parametrize("choice, expected", [
    (1, FractalKind.MANDELBROT),
    (2, FractalKind.JULIA),
    (3, FractalKind.LAMBDA),
    (7, FractalKind.LAMBDA),
    (-1, FractalKind.LAMBDA),
])
def test_from_choice_normalizes_to_lambda(choice, expected):
    assert FractalKind.from_choice(choice) is expected


@pytest.mark.parametrize("kind", list(FractalKind))
def test_point_outside_radius_returns_zero(kind):
    """A start point on or beyond the escape radius never iterates."""
    r = kind.escape_radius
    for z0 in (complex(r, 0.0), complex(0.0, -r), complex(r, r), complex(-10.0, 3.0)):
        res = evaluate(kind, z0, ITERATION_CAP, r)
        assert res.count == 0
        assert res.escaped(r)


@pytest.mark.parametrize("cap", [1, 2, 10, ITERATION_CAP, 500])
def test_mandelbrot_origin_is_bounded(cap):
    res = evaluate(FractalKind.MANDELBROT, 0j, cap)
    assert res.count == cap + 1
    assert res.modulus == 0.0
    assert not res.escaped(2.0)


def test_julia_far_point_diverges_quickly():
    res = evaluate(FractalKind.JULIA, complex(5, 5))
    assert res.count <= 3
    assert res.escaped(FractalKind.JULIA.escape_radius)


def test_mandelbrot_escape_count_by_hand():
    """
    p = 1: z = 1 -> 1^2 + 1 = 2 (|z| = 2, escaped on step 1).
    """
    res = evaluate(FractalKind.MANDELBROT, complex(1.0, 0.0))
    assert res.count == 1
    assert res.modulus == 2.0


def test_default_radius_comes_from_kind():
    z0 = complex(2.5, 0.0)
    assert evaluate(FractalKind.MANDELBROT, z0).count == 0
    assert evaluate(FractalKind.LAMBDA, z0).count > 0


def test_lambda_step_matches_complex_form():
    """The component formulas are c z (1 - z)."""
    c = FractalKind.LAMBDA.constant
    for z in (complex(0.3, -0.2), complex(-1.1, 0.7), complex(0.0, 1.5)):
        re, im = step(FractalKind.LAMBDA, z.real, z.imag, z.real, z.imag)
        expected = c * z * (1 - z)
        np.testing.assert_allclose(complex(re, im), expected, rtol=1e-12)


def test_julia_step_ignores_start_point():
    a = step(FractalKind.JULIA, 0.5, 0.25, 0.5, 0.25)
    b = step(FractalKind.JULIA, 0.5, 0.25, 9.0, -9.0)
    assert a == b
    assert a == pytest.approx((0.5 ** 2 - 0.25 ** 2 + 0.3, 2 * 0.5 * 0.25 + 0.6))


@pytest.mark.parametrize("kind", list(FractalKind))
def test_escape_counts_matches_scalar(kind):
    rng = np.random.default_rng(7)
    re0 = rng.uniform(-2.5, 2.5, size=(6, 9))
    im0 = rng.uniform(-1.8, 1.8, size=(6, 9))

    counts, moduli = escape_counts(kind, re0, im0, 60)

    for j in range(re0.shape[0]):
        for i in range(re0.shape[1]):
            res = evaluate(kind, complex(re0[j, i], im0[j, i]), 60)
            assert counts[j, i] == res.count
            assert moduli[j, i] == res.modulus


def test_iterate_orbit_period_two():
    """p = -1 cycles 0, -1, 0, -1 ... under the Mandelbrot map."""
    traj = iterate_orbit(FractalKind.MANDELBROT, complex(-1.0, 0.0), max_iter=6)
    np.testing.assert_allclose(traj, [0, -1, 0, -1, 0, -1])


def test_iterate_orbit_stops_after_escape():
    traj = iterate_orbit(FractalKind.JULIA, complex(1.5, 1.5), max_iter=50)
    assert len(traj) >= 1
    assert abs(traj[-1]) >= 2.0
    assert np.all(np.abs(traj[:-1]) < 2.0)
