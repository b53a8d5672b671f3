"""
Hierarchical database of orbiting bodies.

Bodies are stored in a flat mapping keyed by identifier, with parentage held
as identifiers rather than object references. Every mutation builds a new
immutable DatabaseSnapshot and swaps it in under a lock, so queries running
against an older snapshot (for example on a render thread) never observe a
half-applied change.
"""
from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import numpy as np

from game_orbits.bodies import Body, BodyId
from game_orbits.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from game_orbits.constants import MIN_SOI_ACCELERATION, TWO_PI
from game_orbits.errors import (
    CyclicParentage,
    DegenerateDirection,
    InvalidHierarchy,
    NumericalDivergence,
    UnknownBody,
)
from game_orbits.frames import equatorial_to_parent, local_offsets_vec, offset_from_eccentric_anomaly, orbit_path
from game_orbits.kepler import solve_kepler
from game_orbits.orbital_elements import (
    OrbitalElements,
    elements_at,
    drifting_mean_anomaly,
    mean_anomaly_at,
    mean_motion,
    validate_elements,
)

logger = logging.getLogger(__name__)

Vec3 = np.ndarray

_UNCHANGED = object()

# Fields that change the hierarchy or the orbit and have dedicated mutators
_STRUCTURAL_FIELDS = frozenset({'id', 'parent', 'elements', 'rates'})


def _sorted_ids(ids: Iterable[BodyId]) -> Tuple[BodyId, ...]:
    ids = tuple(ids)
    try:
        return tuple(sorted(ids))
    except TypeError:
        # mixed int/str identifiers keep insertion order
        return ids


def _build_children(bodies: Mapping[BodyId, Body]) -> Dict[BodyId, Tuple[BodyId, ...]]:
    children: Dict[BodyId, list] = {}
    for body in bodies.values():
        if body.parent is not None:
            children.setdefault(body.parent, []).append(body.id)
    return {parent: _sorted_ids(ids) for parent, ids in children.items()}


# ---------------------------------------------------------------------------
# Frame composition
# ---------------------------------------------------------------------------


class _FrameResolver:
    """
    Memo of local and world positions of bodies at a single time instant.

    World positions are built top-down from the root, so when many bodies are
    queried at the same instant each ancestor is solved only once.
    """

    def __init__(self, snapshot: DatabaseSnapshot, t: float):
        self.snapshot = snapshot
        self.t = t
        self._local: Dict[BodyId, Vec3] = {}
        self._world: Dict[BodyId, Vec3] = {}

    def seed_local(self, body_id: BodyId, offset: Vec3) -> None:
        self._local[body_id] = offset

    def local(self, body_id: BodyId) -> Vec3:
        offset = self._local.get(body_id)
        if offset is None:
            offset = self.snapshot._local_offset(self.snapshot.get(body_id), self.t)
            self._local[body_id] = offset
        return offset

    def world(self, body_id: BodyId) -> Vec3:
        position = self._world.get(body_id)
        if position is not None:
            return position
        position = np.zeros(3)
        for ancestor in reversed(self.snapshot._chain(body_id)):
            cached = self._world.get(ancestor)
            if cached is not None:
                position = cached
                continue
            position = position + self.local(ancestor)
            self._world[ancestor] = position
        return position

    def offset_below(self, ancestor: Optional[BodyId], chain: List[BodyId]) -> Vec3:
        """Sum of local offsets from just below ancestor down to chain[0]."""
        position = np.zeros(3)
        for body_id in reversed(chain):
            if body_id == ancestor:
                position = np.zeros(3)
                continue
            position = position + self.local(body_id)
        return position

    def relative(self, origin: BodyId, target: BodyId) -> Vec3:
        """Position of target as seen from origin, summed from their lowest common ancestor."""
        chain_origin = self.snapshot._chain(origin)
        chain_target = self.snapshot._chain(target)
        ancestors = set(chain_origin)
        common = next((body_id for body_id in chain_target if body_id in ancestors), None)
        return self.offset_below(common, chain_target) - self.offset_below(common, chain_origin)


# ---------------------------------------------------------------------------
# Snapshot (read side)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DatabaseSnapshot:
    """
    Immutable view of the database at one point in its history.

    All position queries live here. A snapshot can be shared freely between
    threads; it never changes after construction.
    """

    bodies: Mapping[BodyId, Body]
    children: Mapping[BodyId, Tuple[BodyId, ...]]
    config: SolverConfig = DEFAULT_SOLVER_CONFIG

    @classmethod
    def from_bodies(cls, bodies: Dict[BodyId, Body], config: SolverConfig = DEFAULT_SOLVER_CONFIG) -> DatabaseSnapshot:
        return cls(
            bodies=MappingProxyType(dict(bodies)),
            children=MappingProxyType(_build_children(bodies)),
            config=config,
        )

    def with_config(self, config: SolverConfig) -> DatabaseSnapshot:
        return replace(self, config=config)

    # -- lookup ---------------------------------------------------------------

    def get(self, body_id: BodyId) -> Body:
        try:
            return self.bodies[body_id]
        except KeyError:
            raise UnknownBody(body_id) from None

    def __contains__(self, body_id) -> bool:
        return body_id in self.bodies

    def __len__(self) -> int:
        return len(self.bodies)

    def __iter__(self) -> Iterator[BodyId]:
        return iter(self.bodies)

    def roots(self) -> Tuple[BodyId, ...]:
        return _sorted_ids(body.id for body in self.bodies.values() if body.parent is None)

    def satellites(self, body_id: BodyId) -> Tuple[BodyId, ...]:
        """Identifiers of the bodies directly orbiting body_id."""
        self.get(body_id)
        return self.children.get(body_id, ())

    def descendants(self, body_id: BodyId) -> List[BodyId]:
        """All bodies orbiting body_id directly or indirectly, breadth first."""
        result = []
        queue = list(self.satellites(body_id))
        while queue:
            child = queue.pop(0)
            result.append(child)
            queue.extend(self.children.get(child, ()))
        return result

    def _chain(self, body_id: BodyId) -> List[BodyId]:
        """Identifiers from body_id up to its root, inclusive."""
        chain = []
        seen = set()
        current = body_id
        while current is not None:
            if current in seen:
                raise CyclicParentage(f"Parent chain of {body_id!r} loops back through {current!r}")
            seen.add(current)
            chain.append(current)
            current = self.get(current).parent
        return chain

    def parents(self, body_id: BodyId) -> List[BodyId]:
        """Hierarchy from the root down to body_id, inclusive."""
        return list(reversed(self._chain(body_id)))

    # -- orbit parameters -----------------------------------------------------

    def elements_at(self, body_id: BodyId, t: float) -> OrbitalElements:
        """Orbital elements of body_id at time t, including element rates."""
        body = self.get(body_id)
        if body.elements is None:
            raise ValueError(f"Root body {body_id!r} has no orbit")
        return elements_at(body.elements, t, body.rates)

    def _mean_motion(self, body: Body, elements: OrbitalElements) -> float:
        if body.period is not None:
            return TWO_PI / body.period
        return mean_motion(elements.a, self.get(body.parent).mu)

    def mean_motion(self, body_id: BodyId, t: Optional[float] = None) -> float:
        """
        Mean motion of body_id around its parent (rad per time unit).

        Taken from the body's supplied period when present, otherwise from
        the parent's gravitational parameter and the semi-major axis at t
        (at the epoch when t is None).
        """
        body = self.get(body_id)
        if body.elements is None:
            raise ValueError(f"Root body {body_id!r} has no orbit")
        elements = body.elements if t is None else self.elements_at(body_id, t)
        return self._mean_motion(body, elements)

    def orbital_period(self, body_id: BodyId) -> float:
        return TWO_PI / self.mean_motion(body_id)

    def _mean_anomaly(self, body: Body, elements: OrbitalElements, t: float) -> float:
        """Mean anomaly at t, given the body's elements already drifted to t."""
        if body.period is None and elements.a != body.elements.a:
            # the mean motion changes along the drift, so integrate it
            return drifting_mean_anomaly(body.elements, self.get(body.parent).mu, elements.a, t)
        return mean_anomaly_at(body.elements, self._mean_motion(body, elements), t)

    def mean_anomaly_at(self, body_id: BodyId, t: float) -> float:
        """
        Unwrapped mean anomaly of body_id at time t (0 for a root).

        With a drifting semi-major axis and no supplied period, the mean
        motion is integrated over the drift so the anomaly keeps advancing.
        """
        body = self.get(body_id)
        if body.elements is None:
            return 0.0
        return self._mean_anomaly(body, elements_at(body.elements, t, body.rates), t)

    # -- solving --------------------------------------------------------------

    def _eccentric_anomaly(self, body: Body, M: float, e: float) -> float:
        config = self.config
        try:
            return solve_kepler(M, e, tol=config.tolerance, max_iter=config.max_iter, max_bisect=config.max_bisect)
        except NumericalDivergence as exc:
            if not config.accept_divergence:
                raise
            logger.warning("Accepting unconverged eccentric anomaly for body %r (residual %.3e)",
                           body.id, exc.residual)
            return exc.estimate

    def _local_offset(self, body: Body, t: float) -> Vec3:
        if body.elements is None:
            return np.zeros(3)
        elements = elements_at(body.elements, t, body.rates)
        M = self._mean_anomaly(body, elements, t)
        E = self._eccentric_anomaly(body, M, elements.e)
        return self._tilted(body, offset_from_eccentric_anomaly(elements, E))

    def _tilted(self, body: Body, offset: np.ndarray) -> np.ndarray:
        """Rotate an offset from the parent's equatorial frame by the parent's axial tilt."""
        tilt = self.get(body.parent).axial_tilt
        if tilt == 0.0:
            return offset
        return equatorial_to_parent(offset, tilt)

    # -- position queries -----------------------------------------------------

    def local_position_at(self, body_id: BodyId, t: float) -> Vec3:
        """
        Position of body_id relative to its parent at time t (zero for a root).

        The orbit is laid out in the parent's equatorial plane and then
        rotated by the parent's axial tilt.
        """
        return self._local_offset(self.get(body_id), t)

    def position_at(self, body_id: BodyId, t: float) -> Vec3:
        """
        World position of body_id at time t.

        The parent chain is resolved from the root down, adding each body's
        offset from its parent. Roots sit at the origin.

        Raises:
            UnknownBody: if body_id is not in the database
            CyclicParentage: if the parent chain loops
            NumericalDivergence: if Kepler's equation fails and the config
                does not accept approximate solutions
        """
        return _FrameResolver(self, t).world(body_id).copy()

    def positions_at(self, t: float, ids: Optional[Iterable[BodyId]] = None) -> Dict[BodyId, Vec3]:
        """
        World positions of many bodies at time t.

        The offsets of all the bodies involved are solved in one vectorized
        batch. Any body whose batch solution misses the configured tolerance
        is solved again with the bounded scalar solver.

        Args:
            t: Time of the query
            ids: Bodies to return (every body in the database when None)

        Returns:
            Dictionary mapping body id to world position
        """
        if ids is None:
            wanted = list(self.bodies)
            involved = wanted
        else:
            wanted = list(ids)
            involved = []
            seen = set()
            for body_id in wanted:
                for ancestor in self._chain(body_id):
                    if ancestor not in seen:
                        seen.add(ancestor)
                        involved.append(ancestor)

        orbiting = [self.bodies[body_id] for body_id in involved if self.bodies[body_id].elements is not None]
        resolver = _FrameResolver(self, t)

        if orbiting:
            elements = []
            M = []
            tilts = []
            for body in orbiting:
                el = elements_at(body.elements, t, body.rates)
                elements.append([el.a, el.e, el.i, el.Omega, el.omega])
                M.append(self._mean_anomaly(body, el, t))
                tilts.append(self.get(body.parent).axial_tilt)
            offsets, residual = local_offsets_vec(np.array(elements), np.array(M), max_iter=self.config.max_iter)
            offsets = np.asarray(offsets)
            residual = np.asarray(residual)
            tilted = equatorial_to_parent(offsets, np.array(tilts))
            for k, body in enumerate(orbiting):
                if residual[k] < self.config.tolerance:
                    resolver.seed_local(body.id, tilted[k] if tilts[k] != 0.0 else offsets[k])
                else:
                    logger.debug("Batch solution for body %r missed tolerance (residual %.3e), re-solving",
                                 body.id, residual[k])

        return {body_id: resolver.world(body_id).copy() for body_id in wanted}

    def relative_position(self, origin: BodyId, target: BodyId, t: float) -> Vec3:
        """
        Position of target relative to origin at time t,
        i.e. position_at(target) - position_at(origin).

        Offsets are only summed below the lowest common ancestor of the two
        bodies, which keeps precision when both are far from the root.
        """
        return _FrameResolver(self, t).relative(origin, target)

    def positions_relative_to(self, origin: BodyId, t: float,
                              ids: Optional[Iterable[BodyId]] = None) -> Dict[BodyId, Vec3]:
        """Positions of many bodies with origin placed at the scene origin."""
        resolver = _FrameResolver(self, t)
        wanted = list(self.bodies) if ids is None else list(ids)
        return {body_id: resolver.relative(origin, body_id) for body_id in wanted}

    def direction_at(self, origin: BodyId, target: BodyId, t: float, min_distance: float = 0.0) -> Vec3:
        """
        Unit vector pointing from origin towards target at time t.

        Raises:
            DegenerateDirection: if the bodies are within min_distance of each other
        """
        relative = self.relative_position(origin, target, t)
        distance = float(np.linalg.norm(relative))
        if not distance > min_distance:
            raise DegenerateDirection(
                f"No direction from {origin!r} to {target!r} at t={t}: distance {distance} <= {min_distance}"
            )
        return relative / distance

    def orbit_path(self, body_id: BodyId, t: Optional[float] = None, segments: int = 100) -> np.ndarray:
        """Closed polyline of body_id's orbit relative to its parent, for drawing."""
        body = self.get(body_id)
        if body.elements is None:
            raise ValueError(f"Root body {body_id!r} has no orbit")
        elements = body.elements if t is None else self.elements_at(body_id, t)
        return self._tilted(body, orbit_path(elements, segments))

    # -- mass and influence ---------------------------------------------------

    def combined_mass_kg(self, body_id: BodyId) -> float:
        """Mass of body_id plus all of its satellites."""
        body = self.get(body_id)
        return body.mass_kg + sum(self.get(child).mass_kg for child in self.descendants(body_id))

    def combined_mu(self, body_id: BodyId) -> float:
        """Gravitational parameter of body_id plus all of its satellites."""
        body = self.get(body_id)
        return body.mu + sum(self.get(child).mu for child in self.descendants(body_id))

    def sphere_of_influence(self, body_id: BodyId,
                            min_acceleration: Optional[float] = MIN_SOI_ACCELERATION) -> float:
        """
        Radius of the sphere of influence of body_id.

        For an orbiting body this is the Laplace radius a * (μ_body / μ_parent)^(2/5),
        with μ_body including all satellites. A root has no parent to compete
        with, so its sphere extends to where its gravity falls to
        min_acceleration (in the database's distance unit per second squared;
        5e-7 by default, which is m/s² for an SI database). Passing None makes
        a root's sphere unbounded.
        """
        body = self.get(body_id)
        if body.elements is None:
            if min_acceleration is None:
                return math.inf
            return body.distance_of_gravity(min_acceleration)
        parent = self.get(body.parent)
        if parent.mu <= 0.0:
            raise ValueError(f"Parent {parent.id!r} of {body_id!r} has no gravitational parameter")
        return body.elements.a * (self.combined_mu(body_id) / parent.mu) ** 0.4


# ---------------------------------------------------------------------------
# Database (write side)
# ---------------------------------------------------------------------------


def _check_acyclic(bodies: Mapping[BodyId, Body], start_ids: Iterable[BodyId]) -> None:
    for start in start_ids:
        seen = set()
        current = start
        while current is not None:
            if current in seen:
                raise InvalidHierarchy(f"Body {start!r} would have cyclic parentage through {current!r}")
            seen.add(current)
            current = bodies[current].parent


def _check_mean_motion(bodies: Mapping[BodyId, Body], body: Body) -> None:
    if body.parent is None or body.period is not None:
        return
    if bodies[body.parent].mu <= 0.0:
        raise InvalidHierarchy(
            f"Body {body.id!r} needs a period because its parent {body.parent!r} has no gravitational parameter"
        )


class BodyDatabase:
    """
    Holds the data for all the bodies being simulated.

    This is the sole mutation surface: bodies are added, removed and updated
    only through its methods, each of which validates the hierarchy before
    publishing a new snapshot. Queries are answered by the snapshot that is
    current when they are called; use snapshot() to pin one explicitly, e.g.
    for a whole frame.

    Examples:
        >>> db = BodyDatabase()
        >>> db.add_body(Body(id='sun', mu=1.0))
        >>> db.add_body(Body(id='planet', parent='sun',
        ...                  elements=OrbitalElements(a=1.0, e=0.0, i=0.0, Omega=0.0, omega=0.0, M0=0.0)))
        >>> db.position_at('planet', 0.0)
        array([1., 0., 0.])
    """

    def __init__(self, bodies: Iterable[Body] = (), config: Optional[SolverConfig] = None):
        self._lock = threading.Lock()
        self._snapshot = DatabaseSnapshot.from_bodies({}, config or DEFAULT_SOLVER_CONFIG)
        bodies = list(bodies)
        if bodies:
            self.add_bodies(bodies)

    def snapshot(self) -> DatabaseSnapshot:
        return self._snapshot

    @property
    def config(self) -> SolverConfig:
        return self._snapshot.config

    def set_config(self, config: SolverConfig) -> None:
        with self._lock:
            self._snapshot = self._snapshot.with_config(config)

    def with_config(self, config: SolverConfig) -> DatabaseSnapshot:
        """The current snapshot evaluated under another solver config; the database is unchanged."""
        return self._snapshot.with_config(config)

    def _publish(self, bodies: Dict[BodyId, Body]) -> None:
        self._snapshot = DatabaseSnapshot.from_bodies(bodies, self._snapshot.config)

    # -- mutation -------------------------------------------------------------

    def add_body(self, body: Body) -> None:
        """Insert a body whose parent is already in the database."""
        self.add_bodies([body])

    def add_bodies(self, bodies: Iterable[Body]) -> None:
        """
        Insert several bodies at once, in any order.

        Parents may be defined later in the same batch. The batch is applied
        atomically: if any body is rejected, none are inserted.

        Raises:
            InvalidHierarchy: on duplicate ids, missing parents, cycles, or a
                body whose mean motion can't be derived
        """
        with self._lock:
            merged = dict(self._snapshot.bodies)
            new_ids = []
            for body in bodies:
                if not isinstance(body, Body):
                    body = Body.model_validate(body)
                if body.id in merged:
                    raise InvalidHierarchy(f"Body id {body.id!r} is already in use")
                merged[body.id] = body
                new_ids.append(body.id)

            for body_id in new_ids:
                parent = merged[body_id].parent
                if parent is not None and parent not in merged:
                    raise InvalidHierarchy(f"Parent {parent!r} of body {body_id!r} does not exist")
            _check_acyclic(merged, new_ids)
            for body_id in new_ids:
                _check_mean_motion(merged, merged[body_id])

            self._publish(merged)
        logger.debug("Added %d bodies", len(new_ids))

    def remove_body(self, body_id: BodyId, reparent_to: Optional[BodyId] = None) -> List[BodyId]:
        """
        Remove a body from the database.

        Without reparent_to, every body orbiting it (directly or indirectly)
        is removed as well. With reparent_to, its direct satellites are moved
        to that body, keeping their orbital elements. Their supplied periods
        and element rates belonged to the removed body and are dropped.

        Returns:
            Identifiers of the removed bodies
        """
        with self._lock:
            snapshot = self._snapshot
            snapshot.get(body_id)
            subtree = snapshot.descendants(body_id)
            bodies = dict(snapshot.bodies)

            if reparent_to is None:
                removed = [body_id] + subtree
            else:
                if reparent_to == body_id or reparent_to in subtree:
                    raise InvalidHierarchy(f"Cannot move satellites of {body_id!r} into its own subtree")
                snapshot.get(reparent_to)
                for child_id in snapshot.satellites(body_id):
                    bodies[child_id] = bodies[child_id].with_changes(parent=reparent_to, period=None, rates=None)
                    _check_mean_motion(bodies, bodies[child_id])
                removed = [body_id]

            for removed_id in removed:
                del bodies[removed_id]
            self._publish(bodies)
        logger.debug("Removed bodies %r", removed)
        return removed

    def update_elements(self, body_id: BodyId, elements: OrbitalElements, rates=_UNCHANGED) -> None:
        """
        Replace the orbital elements (and optionally the element rates) of a body.

        Raises:
            InvalidElements: if the elements are out of range
            InvalidHierarchy: if the body is a root
        """
        validate_elements(elements)
        with self._lock:
            body = self._snapshot.get(body_id)
            if body.parent is None:
                raise InvalidHierarchy(f"Root body {body_id!r} cannot have orbital elements")
            changes = {'elements': elements}
            if rates is not _UNCHANGED:
                changes['rates'] = rates
            bodies = dict(self._snapshot.bodies)
            bodies[body_id] = body.with_changes(**changes)
            self._publish(bodies)

    def reparent(self, body_id: BodyId, new_parent: Optional[BodyId],
                 elements: Optional[OrbitalElements] = None, *,
                 period: Optional[float] = None, rates=None) -> None:
        """
        Move a body to orbit a different parent.

        Passing new_parent=None turns the body into a root and drops its
        orbit. Otherwise the body keeps its current elements unless new ones
        are given; a root being attached must be given elements.

        A supplied period and element rates describe the orbit around the old
        parent, so they are dropped unless new ones are passed here. Without
        a period the new parent must have a gravitational parameter.

        Raises:
            InvalidHierarchy: if the move would create a cycle or leave the body without an orbit
        """
        with self._lock:
            snapshot = self._snapshot
            body = snapshot.get(body_id)
            bodies = dict(snapshot.bodies)
            if new_parent is None:
                bodies[body_id] = body.with_changes(parent=None, elements=None, rates=None, period=None)
            else:
                snapshot.get(new_parent)
                if new_parent == body_id or new_parent in snapshot.descendants(body_id):
                    raise InvalidHierarchy(f"Moving {body_id!r} under {new_parent!r} would create a cycle")
                orbit = elements if elements is not None else body.elements
                if orbit is None:
                    raise InvalidHierarchy(f"Body {body_id!r} needs orbital elements to orbit {new_parent!r}")
                validate_elements(orbit)
                bodies[body_id] = body.with_changes(parent=new_parent, elements=orbit, period=period, rates=rates)
                _check_acyclic(bodies, [body_id])
                _check_mean_motion(bodies, bodies[body_id])
            self._publish(bodies)

    def update_body(self, body_id: BodyId, **changes) -> None:
        """
        Change metadata of a body (name, mu, mass_kg, radii, axial_tilt, scale, period).

        Raises:
            ValueError: if a structural field is passed; use the dedicated mutators
            InvalidHierarchy: if a satellite would lose its mean motion
        """
        structural = _STRUCTURAL_FIELDS.intersection(changes)
        if structural:
            raise ValueError(f"Fields {sorted(structural)} can't be changed with update_body")
        with self._lock:
            snapshot = self._snapshot
            body = snapshot.get(body_id)
            bodies = dict(snapshot.bodies)
            bodies[body_id] = body.with_changes(**changes)
            _check_mean_motion(bodies, bodies[body_id])
            for child_id in snapshot.satellites(body_id):
                _check_mean_motion(bodies, bodies[child_id])
            self._publish(bodies)

    # -- queries (answered by the current snapshot) ---------------------------

    def get(self, body_id: BodyId) -> Body:
        return self._snapshot.get(body_id)

    def __contains__(self, body_id) -> bool:
        return body_id in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    def __iter__(self) -> Iterator[BodyId]:
        return iter(self._snapshot)

    def bodies(self) -> List[Body]:
        return list(self._snapshot.bodies.values())

    def roots(self) -> Tuple[BodyId, ...]:
        return self._snapshot.roots()

    def satellites(self, body_id: BodyId) -> Tuple[BodyId, ...]:
        return self._snapshot.satellites(body_id)

    def descendants(self, body_id: BodyId) -> List[BodyId]:
        return self._snapshot.descendants(body_id)

    def parents(self, body_id: BodyId) -> List[BodyId]:
        return self._snapshot.parents(body_id)

    def elements_at(self, body_id: BodyId, t: float) -> OrbitalElements:
        return self._snapshot.elements_at(body_id, t)

    def mean_motion(self, body_id: BodyId, t: Optional[float] = None) -> float:
        return self._snapshot.mean_motion(body_id, t)

    def orbital_period(self, body_id: BodyId) -> float:
        return self._snapshot.orbital_period(body_id)

    def mean_anomaly_at(self, body_id: BodyId, t: float) -> float:
        return self._snapshot.mean_anomaly_at(body_id, t)

    def local_position_at(self, body_id: BodyId, t: float) -> Vec3:
        return self._snapshot.local_position_at(body_id, t)

    def position_at(self, body_id: BodyId, t: float) -> Vec3:
        return self._snapshot.position_at(body_id, t)

    def positions_at(self, t: float, ids: Optional[Iterable[BodyId]] = None) -> Dict[BodyId, Vec3]:
        return self._snapshot.positions_at(t, ids)

    def relative_position(self, origin: BodyId, target: BodyId, t: float) -> Vec3:
        return self._snapshot.relative_position(origin, target, t)

    def positions_relative_to(self, origin: BodyId, t: float,
                              ids: Optional[Iterable[BodyId]] = None) -> Dict[BodyId, Vec3]:
        return self._snapshot.positions_relative_to(origin, t, ids)

    def direction_at(self, origin: BodyId, target: BodyId, t: float, min_distance: float = 0.0) -> Vec3:
        return self._snapshot.direction_at(origin, target, t, min_distance)

    def orbit_path(self, body_id: BodyId, t: Optional[float] = None, segments: int = 100) -> np.ndarray:
        return self._snapshot.orbit_path(body_id, t, segments)

    def combined_mass_kg(self, body_id: BodyId) -> float:
        return self._snapshot.combined_mass_kg(body_id)

    def combined_mu(self, body_id: BodyId) -> float:
        return self._snapshot.combined_mu(body_id)

    def sphere_of_influence(self, body_id: BodyId,
                            min_acceleration: Optional[float] = MIN_SOI_ACCELERATION) -> float:
        return self._snapshot.sphere_of_influence(body_id, min_acceleration)
