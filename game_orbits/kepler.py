"""
Solvers for Kepler's equation M = E - e*sin(E) on elliptical orbits.
"""
import logging
import math
from functools import partial

import jax
import jax.numpy as jnp

from game_orbits.config import DEFAULT_MAX_BISECT, DEFAULT_MAX_ITER, DEFAULT_TOLERANCE
from game_orbits.constants import TWO_PI
from game_orbits.errors import InvalidElements, NumericalDivergence

logger = logging.getLogger(__name__)


def normalize_angle(x: float) -> float:
    """Wrap an angle to [-π, π]."""
    return math.remainder(x, TWO_PI)


def kepler_residual(M: float, E: float, e: float) -> float:
    """Signed residual (E - e*sin(E)) - M of Kepler's equation."""
    return E - e * math.sin(E) - M


def solve_kepler(M: float, e: float, tol: float = DEFAULT_TOLERANCE, max_iter: int = DEFAULT_MAX_ITER,
                 max_bisect: int = DEFAULT_MAX_BISECT) -> float:
    """
    Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly E.

    M is first wrapped to [-π, π], where the root is bracketed by [-π, π]
    because E - e*sin(E) is monotonic for e < 1. Newton-Raphson iterations
    are guarded to stay inside the shrinking bracket. If Newton has not
    reached the tolerance after max_iter steps the solver falls back to
    bisection on the bracket for up to max_bisect steps.

    Args:
        M: Mean anomaly (radians, any real value)
        e: Eccentricity, 0 ≤ e < 1
        tol: Convergence tolerance on |M - (E - e*sin(E))| (radians)
        max_iter: Newton-Raphson iteration budget
        max_bisect: Bisection iteration budget after Newton

    Returns:
        Eccentric anomaly E in [-π, π]

    Raises:
        InvalidElements: if e is outside [0, 1) or M is not finite
        NumericalDivergence: if neither stage reaches the tolerance. The
            exception carries the best estimate and its residual.
    """
    if not 0.0 <= e < 1.0:
        raise InvalidElements(f"Eccentricity must be in [0, 1), got {e}")
    if not math.isfinite(M):
        raise InvalidElements(f"Mean anomaly must be finite, got {M}")

    M = normalize_angle(M)
    lo, hi = -math.pi, math.pi
    best_E, best_res = M, math.inf

    # Initial guess
    E = M if e < 0.8 else math.copysign(math.pi, M)

    for iteration in range(max_iter + 1):
        f = kepler_residual(M, E, e)
        if abs(f) < best_res:
            best_E, best_res = E, abs(f)
        if best_res < tol:
            return best_E
        if iteration == max_iter:
            break
        if f > 0.0:
            hi = E
        else:
            lo = E
        fp = 1.0 - e * math.cos(E)
        E_new = E - f / fp
        # Keep Newton inside the bracket; step to the midpoint when it overshoots
        if not lo < E_new < hi:
            E_new = 0.5 * (lo + hi)
        E = E_new

    if max_bisect > 0:
        logger.debug("Newton did not converge for M=%r e=%r after %d steps, falling back to bisection",
                     M, e, max_iter)
    for _ in range(max_bisect):
        E = 0.5 * (lo + hi)
        f = kepler_residual(M, E, e)
        if abs(f) < best_res:
            best_E, best_res = E, abs(f)
        if best_res < tol:
            return best_E
        if f > 0.0:
            hi = E
        else:
            lo = E

    raise NumericalDivergence(
        f"Kepler's equation did not converge for M={M}, e={e}: residual {best_res:.3e} > {tol:.3e}",
        estimate=best_E,
        residual=best_res,
        iterations=max_iter + max_bisect,
    )


def true_anomaly(E: float, e: float) -> float:
    """
    True anomaly from eccentric anomaly via the half-angle relation
    tan(ν/2) = sqrt((1+e)/(1-e)) * tan(E/2).
    """
    return 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(E / 2.0),
        math.sqrt(1.0 - e) * math.cos(E / 2.0),
    )


def orbital_radius(a: float, e: float, E: float) -> float:
    """Distance from the focus, r = a(1 - e*cos(E))."""
    return a * (1.0 - e * math.cos(E))


def mean_to_true_anomaly(M: float, e: float, tol: float = DEFAULT_TOLERANCE, max_iter: int = DEFAULT_MAX_ITER,
                         max_bisect: int = DEFAULT_MAX_BISECT) -> float:
    """True anomaly reached at mean anomaly M."""
    E = solve_kepler(M, e, tol=tol, max_iter=max_iter, max_bisect=max_bisect)
    return true_anomaly(E, e)


def _newton_scan(M, e, max_iter):
    """
    Fixed-length Newton-Raphson for one (M, e) pair using jax.lax.scan.
    """
    M = jnp.remainder(M + jnp.pi, 2.0 * jnp.pi) - jnp.pi
    E0 = jnp.where(e < 0.8, M, jnp.pi * jnp.sign(M))

    def body_fn(E, _):
        f = E - e * jnp.sin(E) - M
        fp = 1.0 - e * jnp.cos(E)
        E_new = E - f / fp
        return E_new, None

    E_final, _ = jax.lax.scan(body_fn, E0, None, length=max_iter)
    return E_final


@partial(jax.jit, static_argnames=("max_iter",))
def solve_kepler_vec(M, e, max_iter=DEFAULT_MAX_ITER):
    """
    Vectorized Kepler solver over arrays of mean anomaly and eccentricity.

    Runs a fixed number of Newton-Raphson iterations and performs no
    convergence check; callers should compare kepler_residual_vec against
    their tolerance and fall back to solve_kepler where it is missed.

    Parameters
    ----------
    M : jnp.ndarray
        Array of mean anomalies (radians)
    e : jnp.ndarray
        Array of eccentricities
    max_iter : int, optional
        Number of Newton iterations

    Returns
    -------
    E : jnp.ndarray
        Array of eccentric anomalies in [-π, π]
    """
    M = jnp.asarray(M, dtype=jnp.float64)
    e = jnp.asarray(e, dtype=jnp.float64)
    return jax.vmap(lambda m, ecc: _newton_scan(m, ecc, max_iter))(M, e)


@jax.jit
def kepler_residual_vec(M, E, e):
    """Absolute residual of Kepler's equation, with M wrapped to [-π, π]."""
    M = jnp.remainder(M + jnp.pi, 2.0 * jnp.pi) - jnp.pi
    return jnp.abs(E - e * jnp.sin(E) - M)
