"""Tests for orbital element validation, drift and mean motion."""
import math
import unittest

import numpy as np
import pytest

from game_orbits.errors import InvalidElements
from game_orbits.orbital_elements import (
    ElementRates,
    OrbitalElements,
    drifting_mean_anomaly,
    elements_at,
    mean_anomaly_at,
    mean_motion,
    orbital_period,
    validate_elements,
)


def _elements(**changes):
    base = OrbitalElements(a=1.0, e=0.1, i=0.2, Omega=0.3, omega=0.4, M0=0.5)
    return base._replace(**changes)


class TestValidateElements(unittest.TestCase):

    def test_valid_elements_pass_through(self):
        elements = _elements()
        self.assertIs(validate_elements(elements), elements)

    def test_circular_orbit_is_valid(self):
        validate_elements(_elements(e=0.0))

    def test_nonpositive_semi_major_axis(self):
        for a in (0.0, -1.0):
            with self.assertRaises(InvalidElements):
                validate_elements(_elements(a=a))

    def test_eccentricity_out_of_range(self):
        """Parabolic and hyperbolic orbits are rejected."""
        for e in (-0.01, 1.0, 1.2):
            with self.assertRaises(InvalidElements):
                validate_elements(_elements(e=e))

    def test_non_finite(self):
        with self.assertRaises(InvalidElements) as cm:
            validate_elements(_elements(Omega=float('nan')))
        self.assertIn("Omega", str(cm.exception))
        with self.assertRaises(InvalidElements):
            validate_elements(_elements(epoch=float('inf')))


class TestFromDegrees(unittest.TestCase):

    def test_conversion(self):
        elements = OrbitalElements.from_degrees(2.0, 0.1, 90.0, 180.0, 45.0, 360.0, epoch=10.0)
        self.assertAlmostEqual(elements.i, math.pi / 2)
        self.assertAlmostEqual(elements.Omega, math.pi)
        self.assertAlmostEqual(elements.omega, math.pi / 4)
        self.assertAlmostEqual(elements.M0, 2 * math.pi)
        self.assertEqual(elements.epoch, 10.0)


def test_elements_at_without_rates_is_identity():
    elements = _elements()
    assert elements_at(elements, 123.0) is elements
    assert elements_at(elements, 123.0, ElementRates()) is elements


def test_elements_at_drifts_from_epoch():
    elements = _elements(epoch=10.0)
    rates = ElementRates(Omega=0.01, omega=-0.02, a=0.001)
    drifted = elements_at(elements, 20.0, rates)

    assert drifted.Omega == pytest.approx(0.3 + 0.1)
    assert drifted.omega == pytest.approx(0.4 - 0.2)
    assert drifted.a == pytest.approx(1.01)
    assert drifted.e == elements.e
    assert drifted.M0 == elements.M0
    assert drifted.epoch == elements.epoch

    assert elements_at(elements, 10.0, rates) == elements


def test_elements_at_rejects_drift_out_of_range():
    elements = _elements(e=0.9)
    with pytest.raises(InvalidElements):
        elements_at(elements, 100.0, ElementRates(e=0.01))


def test_mean_motion_and_period():
    assert mean_motion(1.0, 1.0) == pytest.approx(1.0)
    assert orbital_period(1.0, 1.0) == pytest.approx(2 * np.pi)
    assert orbital_period(4.0, 1.0) == pytest.approx(16 * np.pi)


def test_mean_motion_needs_positive_mu():
    with pytest.raises(ValueError):
        mean_motion(1.0, 0.0)


def test_mean_anomaly_at():
    elements = _elements(M0=0.5, epoch=2.0)
    assert mean_anomaly_at(elements, 0.25, 2.0) == 0.5
    assert mean_anomaly_at(elements, 0.25, 6.0) == pytest.approx(1.5)
    assert mean_anomaly_at(elements, 0.25, 0.0) == pytest.approx(0.0)


def test_drifting_mean_anomaly_without_drift_is_linear():
    elements = _elements(a=2.0, M0=0.5, epoch=1.0)
    n = mean_motion(2.0, 3.0)
    assert drifting_mean_anomaly(elements, 3.0, 2.0, 11.0) == pytest.approx(0.5 + 10.0 * n)
    assert drifting_mean_anomaly(elements, 3.0, 2.0, 1.0) == 0.5


def test_drifting_mean_anomaly_advances_at_current_mean_motion():
    elements = _elements(a=1.0, M0=0.0)
    rate = 0.02
    h = 1.0e-4
    for t in (5.0, 50.0, -20.0):
        M_plus = drifting_mean_anomaly(elements, 1.0, 1.0 + rate * (t + h), t + h)
        M_minus = drifting_mean_anomaly(elements, 1.0, 1.0 + rate * (t - h), t - h)
        assert (M_plus - M_minus) / (2 * h) == pytest.approx(mean_motion(1.0 + rate * t, 1.0), rel=1.0e-7)


def test_drifting_mean_anomaly_needs_positive_mu():
    with pytest.raises(ValueError):
        drifting_mean_anomaly(_elements(), 0.0, 1.5, 10.0)
