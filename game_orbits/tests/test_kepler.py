"""Tests for the scalar and vectorized Kepler solvers."""
import logging
import math
import unittest

import numpy as np
import pytest
from numpy.testing import assert_allclose

from game_orbits.errors import InvalidElements, NumericalDivergence
from game_orbits.kepler import (
    kepler_residual,
    kepler_residual_vec,
    mean_to_true_anomaly,
    normalize_angle,
    orbital_radius,
    solve_kepler,
    solve_kepler_vec,
    true_anomaly,
)


class TestSolveKepler(unittest.TestCase):
    """Convergence of the guarded Newton / bisection solver."""

    def test_residual_below_tolerance(self):
        """The residual stays below tolerance across eccentricities and mean anomalies."""
        tol = 1.0e-12
        for e in (0.0, 0.1, 0.5, 0.8, 0.9, 0.99, 0.999):
            for M in np.linspace(-20.0, 20.0, 81):
                E = solve_kepler(M, e, tol=tol)
                res = abs(kepler_residual(normalize_angle(M), E, e))
                self.assertLess(res, tol, f"e={e}, M={M}: residual {res:.3e}")
                self.assertTrue(-math.pi <= E <= math.pi)

    def test_circular_orbit(self):
        """With e = 0 the eccentric anomaly equals the wrapped mean anomaly."""
        for M in (-3.0, -1.0, 0.0, 0.5, 2.0, 7.0):
            self.assertAlmostEqual(solve_kepler(M, 0.0), normalize_angle(M), places=14)

    def test_known_solution(self):
        """M = 235.4 deg, e = 0.4 gives E = 220.512 deg (textbook example)."""
        E = solve_kepler(np.deg2rad(235.4), 0.4)
        assert_allclose(np.rad2deg(E) % 360.0, 220.512074767522, atol=1.0e-4)

    def test_invalid_eccentricity(self):
        for e in (-0.1, 1.0, 1.5):
            with self.assertRaises(InvalidElements):
                solve_kepler(1.0, e)

    def test_invalid_mean_anomaly(self):
        with self.assertRaises(InvalidElements):
            solve_kepler(float('nan'), 0.1)
        with self.assertRaises(InvalidElements):
            solve_kepler(float('inf'), 0.1)

    def test_invalid_elements_is_value_error(self):
        with self.assertRaises(ValueError):
            solve_kepler(1.0, 2.0)


def test_bisection_fallback(caplog):
    """When Newton runs out of steps, bisection still reaches the tolerance."""
    caplog.set_level(logging.DEBUG, logger="game_orbits.kepler")
    E = solve_kepler(0.3, 0.9, tol=1.0e-12, max_iter=1, max_bisect=100)
    assert abs(kepler_residual(0.3, E, 0.9)) < 1.0e-12
    assert "bisection" in caplog.text


def test_divergence_carries_best_estimate():
    """Exhausting both budgets raises NumericalDivergence with the best estimate."""
    with pytest.raises(NumericalDivergence) as excinfo:
        solve_kepler(0.3, 0.9, tol=1.0e-12, max_iter=1, max_bisect=0)

    exc = excinfo.value
    assert exc.estimate is not None
    assert math.isfinite(exc.estimate)
    assert exc.residual > 1.0e-12
    assert exc.residual == pytest.approx(abs(kepler_residual(0.3, exc.estimate, 0.9)))
    assert exc.iterations == 1


def test_true_anomaly_circular():
    """With e = 0 the true anomaly equals the mean anomaly."""
    for M in np.linspace(-3.0, 3.0, 13):
        assert mean_to_true_anomaly(M, 0.0) == pytest.approx(M, abs=1.0e-14)


def test_true_anomaly_periapsis_apoapsis():
    assert true_anomaly(0.0, 0.5) == pytest.approx(0.0)
    assert abs(true_anomaly(math.pi, 0.5)) == pytest.approx(math.pi)


def test_true_anomaly_ahead_of_mean_anomaly():
    """On the way out from periapsis the true anomaly leads the mean anomaly."""
    M = 0.5
    nu = mean_to_true_anomaly(M, 0.3)
    assert nu > M


def test_orbital_radius():
    assert orbital_radius(2.0, 0.25, 0.0) == pytest.approx(1.5)
    assert orbital_radius(2.0, 0.25, math.pi) == pytest.approx(2.5)


def test_solve_kepler_vec_matches_scalar():
    """The fixed-iteration jax solver agrees with the scalar solver."""
    M = np.linspace(-10.0, 10.0, 41)
    for e in (0.0, 0.1, 0.3, 0.5, 0.7, 0.9):
        E_vec = np.asarray(solve_kepler_vec(M, np.full_like(M, e)))
        E_ref = np.array([solve_kepler(m, e) for m in M])
        assert_allclose(E_vec, E_ref, atol=1.0e-10)

        residual = np.asarray(kepler_residual_vec(M, E_vec, np.full_like(M, e)))
        assert np.all(residual < 1.0e-12)


def test_solve_kepler_vec_mixed_eccentricity():
    M = np.array([0.1, 1.0, -2.0, 3.0])
    e = np.array([0.0, 0.2, 0.85, 0.95])
    E = np.asarray(solve_kepler_vec(M, e))
    for m, ecc, E_k in zip(M, e, E):
        assert abs(kepler_residual(m, E_k, ecc)) < 1.0e-12
