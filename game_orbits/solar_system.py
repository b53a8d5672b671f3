"""
Bundled solar system: the Sun, the planets, their major moons and a few
dwarf planets.

Distances are in km and times in seconds, so mean motions come out in rad/s
from each parent's mass. Mean anomalies are given at t = 0.
"""
from typing import Optional

from game_orbits.bodies import DATA_DIR, Body, load_bodies_data
from game_orbits.config import SolverConfig
from game_orbits.database import BodyDatabase

SOLAR_SYSTEM_CSV = DATA_DIR / 'solar_system.csv'

# Body ids
SOL = 0
MERCURY = 1
VENUS = 2
EARTH = 3
LUNA = 4
MARS = 5
PHOBOS = 6
DEIMOS = 7
JUPITER = 8
IO = 9
EUROPA = 10
GANYMEDE = 11
CALLISTO = 12
SATURN = 105
MIMAS = 106
ENCELADUS = 107
TETHYS = 108
DIONE = 109
RHEA = 110
TITAN = 111
HYPERION = 112
IAPETUS = 113
PHOEBE = 114
URANUS = 253
ARIEL = 254
UMBRIEL = 255
TITANIA = 256
OBERON = 257
MIRANDA = 258
NEPTUNE = 281
TRITON = 282
NEREID = 283
ERIS = 299
DYSNOMIA = 300
HAUMEA = 301
HIIAKA = 302
NAMAKA = 303

PLANETS = (MERCURY, VENUS, EARTH, MARS, JUPITER, SATURN, URANUS, NEPTUNE)
DWARF_PLANETS = (ERIS, HAUMEA)


def load_solar_system() -> list[Body]:
    """Bodies of the bundled solar system, Sun first."""
    return load_bodies_data(SOLAR_SYSTEM_CSV)


def add_solar_system(db: BodyDatabase) -> None:
    """Insert the bundled solar system into an existing database."""
    db.add_bodies(load_solar_system())


def solar_system_database(config: Optional[SolverConfig] = None) -> BodyDatabase:
    """A new database holding only the bundled solar system."""
    return BodyDatabase(load_solar_system(), config=config)
