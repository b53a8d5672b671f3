"""
Worked orbital mechanics problems for an Earth satellite, in SI units.

The reference values are the ones found in the usual introductory
rocket and space technology problem sets (GM = 3.986005e14 m^3/s^2,
Earth radius 6,378.14 km).
"""
import math
import unittest

import numpy as np
from numpy.testing import assert_allclose

from game_orbits.bodies import Body
from game_orbits.database import BodyDatabase
from game_orbits.orbital_elements import OrbitalElements, orbital_period

GM_EARTH = 3.986005e14  # m^3/s^2
R_EARTH = 6378140.0  # m


class TestEarthSatellite(unittest.TestCase):

    def setUp(self):
        self.earth = Body(id='earth', mu=GM_EARTH, radius_equator=R_EARTH)

    def test_circular_velocity(self):
        """Satellite in a circular orbit 200 km above the surface: v = 7,784 m/s."""
        self.assertAlmostEqual(self.earth.circular_velocity(200000.0), 7784.0, delta=1.0)

    def test_circular_period(self):
        """Period of the same orbit: 5,310 s."""
        period = orbital_period(R_EARTH + 200000.0, GM_EARTH)
        self.assertAlmostEqual(period, 5310.0, delta=1.0)

    def test_geosynchronous_radius(self):
        """A 42,164 km orbit completes once per sidereal day (86,164.1 s)."""
        self.assertAlmostEqual(orbital_period(42164170.0, GM_EARTH), 86164.1, delta=1.0)

    def test_surface_gravity(self):
        self.assertAlmostEqual(self.earth.gravity_at_distance(R_EARTH), 9.80, delta=0.01)


class TestEllipticalOrbit(unittest.TestCase):
    """
    Satellite with perigee 250 km and apogee 500 km above the surface.
    """

    def setUp(self):
        self.rp = R_EARTH + 250000.0
        self.ra = R_EARTH + 500000.0
        a = 0.5 * (self.rp + self.ra)
        e = (self.ra - self.rp) / (self.ra + self.rp)
        self.elements = OrbitalElements.from_degrees(a, e, 28.5, 0.0, 0.0, 0.0)
        self.db = BodyDatabase([
            Body(id='earth', mu=GM_EARTH, radius_equator=R_EARTH),
            Body(id='sat', parent='earth', elements=self.elements),
        ])

    def test_eccentricity(self):
        self.assertAlmostEqual(self.elements.e, 0.018, delta=0.001)

    def test_perigee_at_epoch(self):
        r = np.linalg.norm(self.db.position_at('sat', 0.0))
        self.assertAlmostEqual(r, self.rp, delta=1.0e-6)

    def test_apogee_after_half_period(self):
        half = 0.5 * self.db.orbital_period('sat')
        position = self.db.position_at('sat', half)
        self.assertAlmostEqual(np.linalg.norm(position), self.ra, delta=1.0e-3)
        assert_allclose(position / np.linalg.norm(position), [-1.0, 0.0, 0.0], atol=1.0e-9)

    def test_period(self):
        """Period about 5,523 s."""
        self.assertAlmostEqual(self.db.orbital_period('sat'), 5523.0, delta=2.0)

    def test_inclination_limits_latitude(self):
        """Ground track latitude never exceeds the inclination."""
        period = self.db.orbital_period('sat')
        max_lat = 0.0
        for t in np.linspace(0.0, period, 97):
            x, y, z = self.db.position_at('sat', t)
            max_lat = max(max_lat, math.degrees(math.asin(z / math.sqrt(x**2 + y**2 + z**2))))
        self.assertLessEqual(max_lat, 28.5 + 1.0e-9)
        self.assertGreater(max_lat, 28.0)
