import csv
import logging
import math
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pydantic
from pydantic import ConfigDict, Field, field_validator, model_validator

from game_orbits.constants import KM_TO_M, mu_from_mass
from game_orbits.orbital_elements import ElementRates, OrbitalElements, validate_elements

logger = logging.getLogger(__name__)

BodyId = Union[int, str]

DATA_DIR = Path(__file__).parent / 'data'


class Body(pydantic.BaseModel):
    """
    A celestial body represented as an idealized spheroid.

    Bodies reference their parent by identifier only; the owning
    BodyDatabase resolves the hierarchy. Instances are frozen so a body
    handed out by the database can't be used to alter it.

    Attributes:
        id: Unique identifier of the body (int or str)
        name: Display name (defaults to str(id))
        parent: Identifier of the body this one orbits, None for a root
        elements: Orbital elements relative to the parent (None for a root)
        rates: Optional linear rates of change of the elements
        period: Optional orbital period overriding the one derived from the parent's mu
        mu: Gravitational parameter GM (distance^3/time^2 in database units)
        mass_kg: Mass, used for combined-mass and sphere-of-influence queries
        radius_equator: Equatorial radius (distance units)
        radius_polar: Polar radius (distance units, defaults to radius_equator)
        axial_tilt: Tilt of the spin axis relative to the orbital plane (radians)
        scale: Render scale factor for engines that fake body sizes
    """
    model_config = ConfigDict(frozen=True)

    id: BodyId
    name: str = ""
    parent: Optional[BodyId] = None
    elements: Optional[OrbitalElements] = None
    rates: Optional[ElementRates] = None
    period: Optional[float] = Field(default=None, gt=0.0)
    mu: float = Field(default=0.0, ge=0.0)
    mass_kg: float = Field(default=0.0, ge=0.0)
    radius_equator: float = Field(default=0.0, ge=0.0)
    radius_polar: float = Field(default=0.0, ge=0.0)
    axial_tilt: float = 0.0
    scale: float = Field(default=1.0, gt=0.0)

    @model_validator(mode='before')
    @classmethod
    def fill_defaults(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            if not data.get('name') and 'id' in data:
                data['name'] = str(data['id'])
            if data.get('radius_polar') is None:
                data['radius_polar'] = data.get('radius_equator', 0.0)
        return data

    @field_validator('elements')
    @classmethod
    def validate_orbit(cls, v):
        if v is not None:
            validate_elements(v)
        return v

    @model_validator(mode='after')
    def validate_parentage(self):
        if self.parent is not None and self.parent == self.id:
            raise ValueError(f"Body {self.id!r} cannot be its own parent")
        if self.parent is None and self.elements is not None:
            raise ValueError(f"Root body {self.id!r} cannot have orbital elements")
        if self.parent is not None and self.elements is None:
            raise ValueError(f"Body {self.id!r} orbits {self.parent!r} but has no orbital elements")
        if self.parent is None and self.rates is not None:
            raise ValueError(f"Root body {self.id!r} cannot have element rates")
        return self

    def is_root(self) -> bool:
        """Check if this body sits at the top of a hierarchy"""
        return self.parent is None

    @property
    def radius_mean(self) -> float:
        return 0.5 * (self.radius_equator + self.radius_polar)

    def gravity_at_distance(self, distance: float) -> float:
        """
        Gravitational acceleration towards this body at the given distance.

        g = μ/d²
        """
        return self.mu / distance**2

    def distance_of_gravity(self, gravity: float) -> float:
        """
        Distance at which the gravitational acceleration equals the given value.

        d = √(μ/g)
        """
        return math.sqrt(self.mu / gravity)

    def circular_velocity(self, altitude: float = 0.0) -> float:
        """Speed of a circular orbit at the given altitude above the equator."""
        return math.sqrt(self.mu / (self.radius_equator + altitude))

    def with_changes(self, **changes) -> "Body":
        """
        Return a validated copy of this body with some fields replaced.

        A body whose polar radius equals its equatorial radius is treated as
        a sphere: changing radius_equator alone changes both radii.
        """
        if ('radius_equator' in changes and 'radius_polar' not in changes
                and self.radius_polar == self.radius_equator):
            changes['radius_polar'] = changes['radius_equator']
        fields = dict(self)
        fields.update(changes)
        return Body(**fields)

    def __repr__(self) -> str:
        return f"Body(id={self.id!r}, name='{self.name}', parent={self.parent!r})"

    def __str__(self) -> str:
        return f"{self.name} (ID: {self.id})"


def _optional_float(row: dict, key: str) -> Optional[float]:
    value = (row.get(key) or '').strip()
    return float(value) if value else None


def load_bodies_data(filepath: Optional[Union[str, Path]] = None,
                     distance_unit_m: float = KM_TO_M) -> list[Body]:
    """
    Load bodies from a CSV file.

    Distances in the file are in the unit given by distance_unit_m (km by
    default), angles in degrees. The gravitational parameter of each body is
    derived from its mass in the same distance unit, per second squared.
    Rows without a parent are roots and carry no orbital elements.

    Args:
        filepath: CSV file to read (defaults to the bundled solar system)
        distance_unit_m: Length of the file's distance unit in meters

    Returns:
        List of Body objects in file order
    """
    if filepath is None:
        filepath = DATA_DIR / 'solar_system.csv'
    filepath = Path(filepath)

    bodies = []
    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(line for line in f if line.strip())
        for row in reader:
            id_key = next((key for key in ('# Body ID', '#Body ID', 'Body ID') if key in row), None)
            if id_key is None:
                raise ValueError(f"{filepath} has no 'Body ID' column")

            body_id = int(row[id_key])
            parent_value = (row.get('Parent ID') or '').strip()
            parent = int(parent_value) if parent_value else None
            mass_kg = float(row['Mass (kg)'])

            elements = None
            if parent is not None:
                elements = OrbitalElements(
                    a=float(row['Semi-Major Axis (km)']),
                    e=float(row['Eccentricity ()']),
                    i=np.deg2rad(float(row['Inclination (deg)'])),
                    Omega=np.deg2rad(float(row['Longitude of the Ascending Node (deg)'])),
                    omega=np.deg2rad(float(row['Argument of Periapsis (deg)'])),
                    M0=np.deg2rad(float(row['Mean Anomaly at t=0 (deg)'])),
                )

            tilt_deg = _optional_float(row, 'Axial Tilt (deg)') or 0.0
            bodies.append(Body(
                id=body_id,
                name=row['Name'].strip(),
                parent=parent,
                elements=elements,
                mu=mu_from_mass(mass_kg, distance_unit_m),
                mass_kg=mass_kg,
                radius_equator=float(row['Equatorial Radius (km)']),
                radius_polar=_optional_float(row, 'Polar Radius (km)'),
                axial_tilt=np.deg2rad(tilt_deg),
                scale=_optional_float(row, 'Scale') or 1.0,
            ))

    logger.info("Loaded %d bodies from %s", len(bodies), filepath)
    return bodies
