"""
Orbital elements representation for orbiting bodies.
"""
import math
from typing import NamedTuple, Optional

from game_orbits.constants import DEG_TO_RAD, TWO_PI
from game_orbits.errors import InvalidElements


class OrbitalElements(NamedTuple):
    """
    Keplerian orbital elements of a body around its parent.

    All angular quantities are in radians. Distances are in whatever unit the
    owning database uses; time is a continuous scalar measured on the same
    clock as ``epoch``.

    Attributes:
        a: Semi-major axis (distance units, > 0)
        e: Eccentricity (dimensionless, 0 ≤ e < 1)
        i: Inclination relative to the parent's reference plane (radians)
        Omega: Longitude of the ascending node (radians)
        omega: Argument of periapsis (radians)
        M0: Mean anomaly at epoch (radians)
        epoch: Time at which the body is at M0

    Note:
        Only elliptical orbits are supported; parabolic (e = 1) and
        hyperbolic (e > 1) trajectories are rejected by validate_elements.
    """
    a: float  # semi-major axis
    e: float  # eccentricity
    i: float  # inclination (rad)
    Omega: float  # longitude of ascending node (rad)
    omega: float  # argument of periapsis (rad)
    M0: float  # mean anomaly at epoch (rad)
    epoch: float = 0.0

    @classmethod
    def from_degrees(cls, a, e, i_deg, Omega_deg, omega_deg, M0_deg, epoch=0.0) -> "OrbitalElements":
        """Build elements from angles given in degrees."""
        return cls(
            a=float(a),
            e=float(e),
            i=i_deg * DEG_TO_RAD,
            Omega=Omega_deg * DEG_TO_RAD,
            omega=omega_deg * DEG_TO_RAD,
            M0=M0_deg * DEG_TO_RAD,
            epoch=float(epoch),
        )


class ElementRates(NamedTuple):
    """
    Linear rates of change of the orbital elements, per unit time.

    Used for slowly precessing orbits. The mean anomaly is not listed here;
    it always advances with the mean motion of the current semi-major axis.
    """
    a: float = 0.0
    e: float = 0.0
    i: float = 0.0
    Omega: float = 0.0
    omega: float = 0.0


def validate_elements(elements: OrbitalElements) -> OrbitalElements:
    """
    Check that elements describe a closed orbit the solver can handle.

    Raises:
        InvalidElements: if a value is not finite, a <= 0 or e is outside [0, 1)
    """
    for name, value in zip(elements._fields, elements):
        if not math.isfinite(value):
            raise InvalidElements(f"Orbital element '{name}' must be finite, got {value}")
    if elements.a <= 0.0:
        raise InvalidElements(f"Semi-major axis must be positive, got {elements.a}")
    if not 0.0 <= elements.e < 1.0:
        raise InvalidElements(f"Eccentricity must be in [0, 1) for an elliptical orbit, got {elements.e}")
    return elements


def elements_at(elements: OrbitalElements, t: float, rates: Optional[ElementRates] = None) -> OrbitalElements:
    """
    Orbital elements at time t after applying linear element rates.

    The elements are drifted by (t - epoch) * rate. M0 and the epoch are left
    untouched so that mean_anomaly_at keeps measuring from the same reference.
    """
    if rates is None or not any(rates):
        return elements
    dt = t - elements.epoch
    drifted = elements._replace(
        a=elements.a + rates.a * dt,
        e=elements.e + rates.e * dt,
        i=elements.i + rates.i * dt,
        Omega=elements.Omega + rates.Omega * dt,
        omega=elements.omega + rates.omega * dt,
    )
    return validate_elements(drifted)


def mean_motion(a: float, mu: float) -> float:
    """Mean motion n = sqrt(mu / a^3) of an orbit around a body with parameter mu."""
    if mu <= 0.0:
        raise ValueError(f"Gravitational parameter must be positive to derive a mean motion, got {mu}")
    return math.sqrt(mu / a**3)


def orbital_period(a: float, mu: float) -> float:
    """
    Orbital period from Kepler's third law: T = 2π√(a³/μ)
    """
    return TWO_PI / mean_motion(a, mu)


def mean_anomaly_at(elements: OrbitalElements, n: float, t: float) -> float:
    """
    Mean anomaly at time t, unnormalized.

    At t == epoch the body is at M0; with M0 = 0 it sits at periapsis.
    """
    return elements.M0 + n * (t - elements.epoch)


def drifting_mean_anomaly(elements: OrbitalElements, mu: float, a_t: float, t: float) -> float:
    """
    Mean anomaly at time t for a semi-major axis drifting linearly from
    elements.a (at the epoch) to a_t (at t).

    The mean motion n = sqrt(mu / a^3) is integrated over the drift,

        M = M0 + 2√μ (a0^(-1/2) - a^(-1/2)) / ȧ
          = M0 + 2√μ Δt / (√a0 √a (√a0 + √a))

    The second form has no division by the rate and reduces to n Δt when
    a_t == elements.a, so M always advances with the instantaneous mean
    motion.
    """
    if mu <= 0.0:
        raise ValueError(f"Gravitational parameter must be positive to derive a mean motion, got {mu}")
    sqrt_a0 = math.sqrt(elements.a)
    sqrt_a = math.sqrt(a_t)
    return elements.M0 + 2.0 * math.sqrt(mu) * (t - elements.epoch) / (sqrt_a0 * sqrt_a * (sqrt_a0 + sqrt_a))
