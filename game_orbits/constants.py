"""
Physical constants and unit conversions for game_orbits.

The database itself is unit-agnostic; these constants are used by the
bundled solar system preset, which works in kilometers and seconds.
"""
import math

# Gravitational constant (m^3 / (kg s^2))
G = 6.6743015e-11

# Distance conversions
KM_TO_M = 1000.0
M_TO_KM = 1.0 / KM_TO_M
KMPAU = 149597870.691  # km per AU

# Time
DAY = 86400.0  # seconds per day
YEAR = 365.25 * DAY  # seconds per year

# Angles
DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi
TWO_PI = 2.0 * math.pi

# Earth
MASS_EARTH_KG = 5.972168e24
RADIUS_EARTH_EQUATOR_KM = 6378.137
RADIUS_EARTH_POLAR_KM = 6356.752
RADIUS_EARTH_MEAN_KM = 6371.0

# Sun
MASS_SUN_KG = 1.98847e30
RADIUS_SUN_KM = 695700.0


def mu_from_mass(mass_kg: float, distance_unit_m: float = 1.0) -> float:
    """
    Gravitational parameter GM of a body with the given mass.

    Args:
        mass_kg: Mass in kilograms
        distance_unit_m: Length of one distance unit in meters (1000.0 for km)

    Returns:
        GM in distance_unit^3/s^2
    """
    return G * mass_kg / distance_unit_m**3

# Gravity below which a root body's sphere of influence ends (m/s^2 in an SI database)
MIN_SOI_ACCELERATION = 5.0e-7
