# Configure JAX to use double precision (64-bit floats) throughout the package
import jax
jax.config.update("jax_enable_x64", True)

from .orbital_elements import (
    OrbitalElements,
    ElementRates,
    validate_elements,
    elements_at,
    mean_motion,
    orbital_period,
    mean_anomaly_at,
    drifting_mean_anomaly,
)

from .constants import (
    # Constants
    G,
    KMPAU,
    KM_TO_M,
    DAY,
    YEAR,
    mu_from_mass,
)

from .config import (
    SolverConfig,
    DEFAULT_SOLVER_CONFIG,
    make_solver_config,
)

from .errors import (
    OrbitsError,
    NumericalDivergence,
    UnknownBody,
    CyclicParentage,
    DegenerateDirection,
    InvalidElements,
    InvalidHierarchy,
)

from .kepler import (
    # Kepler solver
    solve_kepler,
    solve_kepler_vec,
    true_anomaly,
    mean_to_true_anomaly,
)

from .frames import (
    # Frame transform
    orientation_matrix,
    orbit_to_parent,
    equatorial_to_parent,
    local_offset,
    local_offsets_vec,
    orbit_path,
)

from .bodies import (
    # Body class
    Body,
    BodyId,
    load_bodies_data,
)

from .database import (
    BodyDatabase,
    DatabaseSnapshot,
)

from .solar_system import (
    load_solar_system,
    add_solar_system,
    solar_system_database,
)

__all__ = [
    # Constants
    "G",
    "KMPAU",
    "KM_TO_M",
    "DAY",
    "YEAR",
    "mu_from_mass",

    # Config
    "SolverConfig",
    "DEFAULT_SOLVER_CONFIG",
    "make_solver_config",

    # Errors
    "OrbitsError",
    "NumericalDivergence",
    "UnknownBody",
    "CyclicParentage",
    "DegenerateDirection",
    "InvalidElements",
    "InvalidHierarchy",

    # Named tuples
    "OrbitalElements",
    "ElementRates",
    "validate_elements",
    "elements_at",
    "mean_motion",
    "orbital_period",
    "mean_anomaly_at",
    "drifting_mean_anomaly",

    # Kepler solver
    "solve_kepler",
    "solve_kepler_vec",
    "true_anomaly",
    "mean_to_true_anomaly",

    # Frame transform
    "orientation_matrix",
    "orbit_to_parent",
    "equatorial_to_parent",
    "local_offset",
    "local_offsets_vec",
    "orbit_path",

    # Bodies
    "Body",
    "BodyId",
    "load_bodies_data",
    "BodyDatabase",
    "DatabaseSnapshot",

    # Solar system
    "load_solar_system",
    "add_solar_system",
    "solar_system_database",
]
