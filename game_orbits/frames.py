"""
Rotation of orbital-plane positions into the parent body's reference frame.

Conventions for ill-conditioned orbits
--------------------------------------
No quantity here is obtained by dividing by e or sin(i), so circular and
equatorial orbits are evaluated like any other:

- When e ≈ 0 the periapsis direction is undefined. omega is still applied
  as an angle measured from the ascending node, and only the argument of
  latitude omega + nu is physically meaningful.
- When i ≈ 0 the line of nodes is undefined. Omega is still applied as an
  angle about the polar (z) axis, and only the longitude of periapsis
  Omega + omega is physically meaningful.

Satellite elements are measured against the parent's equator. The database
tilts them into the parent's own frame with equatorial_to_parent, so a
parent with zero axial tilt leaves its satellites' offsets unchanged.
"""
from functools import partial

import jax
import jax.numpy as jnp
import numpy as np

from game_orbits.config import DEFAULT_MAX_BISECT, DEFAULT_MAX_ITER, DEFAULT_TOLERANCE
from game_orbits.kepler import (
    kepler_residual_vec,
    orbital_radius,
    solve_kepler,
    solve_kepler_vec,
    true_anomaly,
)
from game_orbits.orbital_elements import OrbitalElements


def rotation_x(angle: float) -> np.ndarray:
    """Active rotation about the x axis."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[1.0, 0.0, 0.0],
                     [0.0, c, -s],
                     [0.0, s, c]])


def rotation_z(angle: float) -> np.ndarray:
    """Active rotation about the z axis."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, -s, 0.0],
                     [s, c, 0.0],
                     [0.0, 0.0, 1.0]])


def orientation_matrix(i: float, Omega: float, omega: float) -> np.ndarray:
    """
    Matrix taking perifocal coordinates (x towards periapsis, z along the
    orbit normal) into the parent frame.

    Composition: rotate by omega in the orbital plane, tilt by i about the
    line of nodes, then rotate by Omega about the parent's polar axis,
    i.e. R = Rz(Omega) @ Rx(i) @ Rz(omega).
    """
    return rotation_z(Omega) @ rotation_x(i) @ rotation_z(omega)


def orbit_to_parent(r: float, nu: float, i: float, Omega: float, omega: float) -> np.ndarray:
    """
    Position in the parent frame of a point at radius r and true anomaly nu.

    Equivalent to orientation_matrix(i, Omega, omega) @ [r cos(nu), r sin(nu), 0]
    written out in terms of the argument of latitude.
    """
    cos_u = np.cos(nu + omega)
    sin_u = np.sin(nu + omega)
    cos_Omega = np.cos(Omega)
    sin_Omega = np.sin(Omega)
    cos_i = np.cos(i)
    sin_i = np.sin(i)

    x = r * (cos_u * cos_Omega - sin_u * cos_i * sin_Omega)
    y = r * (cos_u * sin_Omega + sin_u * cos_i * cos_Omega)
    z = r * sin_u * sin_i
    return np.array([x, y, z])


def equatorial_to_parent(offset: np.ndarray, axial_tilt) -> np.ndarray:
    """
    Rotate offsets measured in a parent's equatorial frame by the parent's
    axial tilt about x, i.e. rotation_x(axial_tilt) @ offset.

    Works on a single (3,) offset or a stack of shape (n, 3), with
    axial_tilt a scalar or an array of shape (n,).
    """
    offset = np.asarray(offset, dtype=float)
    c = np.cos(axial_tilt)
    s = np.sin(axial_tilt)
    y = offset[..., 1]
    z = offset[..., 2]
    return np.stack([offset[..., 0], c * y - s * z, s * y + c * z], axis=-1)


def offset_from_eccentric_anomaly(elements: OrbitalElements, E: float) -> np.ndarray:
    """Position relative to the parent for a body at eccentric anomaly E."""
    nu = true_anomaly(E, elements.e)
    r = orbital_radius(elements.a, elements.e, E)
    return orbit_to_parent(r, nu, elements.i, elements.Omega, elements.omega)


def local_offset(elements: OrbitalElements, M: float, tol: float = DEFAULT_TOLERANCE,
                 max_iter: int = DEFAULT_MAX_ITER, max_bisect: int = DEFAULT_MAX_BISECT) -> np.ndarray:
    """
    Position of a body relative to its parent at mean anomaly M.

    Raises NumericalDivergence if Kepler's equation cannot be solved.
    """
    E = solve_kepler(M, elements.e, tol=tol, max_iter=max_iter, max_bisect=max_bisect)
    return offset_from_eccentric_anomaly(elements, E)


def orbit_path(elements: OrbitalElements, segments: int = 100) -> np.ndarray:
    """
    Closed polyline of the orbit ellipse in the parent frame, for drawing.

    The points are sampled uniformly in eccentric anomaly starting at
    periapsis; the last point repeats the first.

    Returns:
        Array of shape (segments + 1, 3)
    """
    if segments < 3:
        raise ValueError(f"An orbit path needs at least 3 segments, got {segments}")
    E = np.linspace(0.0, 2.0 * np.pi, segments + 1)
    a, e = elements.a, elements.e
    b = a * np.sqrt(1.0 - e**2)
    perifocal = np.stack([a * (np.cos(E) - e), b * np.sin(E), np.zeros_like(E)], axis=1)
    R = orientation_matrix(elements.i, elements.Omega, elements.omega)
    return perifocal @ R.T


@partial(jax.jit, static_argnames=("max_iter",))
def local_offsets_vec(elements: jnp.ndarray, M: jnp.ndarray, max_iter: int = DEFAULT_MAX_ITER):
    """
    Positions relative to their parents for many bodies at once.

    Parameters
    ----------
    elements : jnp.ndarray
        Array of shape (n, 5) holding a, e, i, Omega, omega for each body
    M : jnp.ndarray
        Array of shape (n,) of mean anomalies (radians)
    max_iter : int, optional
        Number of Newton iterations for Kepler's equation

    Returns
    -------
    r : jnp.ndarray
        Array of shape (n, 3), each row the [x, y, z] offset of one body
    residual : jnp.ndarray
        Array of shape (n,) with |M - (E - e*sin(E))| for each body
    """
    elements = jnp.asarray(elements, dtype=jnp.float64)
    M = jnp.asarray(M, dtype=jnp.float64)
    a, e, inc, Omega, omega = (elements[:, k] for k in range(5))

    E = solve_kepler_vec(M, e, max_iter=max_iter)
    residual = kepler_residual_vec(M, E, e)

    theta = 2.0 * jnp.arctan2(
        jnp.sqrt(1.0 + e) * jnp.sin(E / 2.0),
        jnp.sqrt(1.0 - e) * jnp.cos(E / 2.0),
    )
    r_mag = a * (1.0 - e * jnp.cos(E))

    cos_u = jnp.cos(theta + omega)
    sin_u = jnp.sin(theta + omega)
    cos_O = jnp.cos(Omega)
    sin_O = jnp.sin(Omega)
    cos_i = jnp.cos(inc)
    sin_i = jnp.sin(inc)

    x = r_mag * (cos_u * cos_O - sin_u * cos_i * sin_O)
    y = r_mag * (cos_u * sin_O + sin_u * cos_i * cos_O)
    z = r_mag * sin_u * sin_i

    return jnp.stack([x, y, z], axis=1), residual
