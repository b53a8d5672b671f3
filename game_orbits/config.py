from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_TOLERANCE = 1.0e-12  # rad, residual of Kepler's equation
DEFAULT_MAX_ITER = 50  # Newton-Raphson iterations
DEFAULT_MAX_BISECT = 100  # bisection iterations after Newton gives up
DEFAULT_ON_DIVERGENCE = "raise"

ON_DIVERGENCE_MODES = ("raise", "accept")


@dataclass(frozen=True, slots=True)
class SolverConfig:
    tolerance: float = DEFAULT_TOLERANCE
    max_iter: int = DEFAULT_MAX_ITER
    max_bisect: int = DEFAULT_MAX_BISECT
    on_divergence: str = DEFAULT_ON_DIVERGENCE

    @property
    def accept_divergence(self) -> bool:
        return self.on_divergence == "accept"


DEFAULT_SOLVER_CONFIG = SolverConfig()


def make_solver_config(
    tolerance: Optional[float] = None,
    max_iter: Optional[int] = None,
    max_bisect: Optional[int] = None,
    *,
    on_divergence: Optional[str] = None,
) -> SolverConfig:
    """Normalize user-style inputs into a SolverConfig, falling back to defaults for None."""
    tol = DEFAULT_TOLERANCE if tolerance is None else float(tolerance)
    if not tol > 0.0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")
    n_newton = DEFAULT_MAX_ITER if max_iter is None else int(max_iter)
    if n_newton < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")
    n_bisect = DEFAULT_MAX_BISECT if max_bisect is None else int(max_bisect)
    if n_bisect < 0:
        raise ValueError(f"max_bisect must be non-negative, got {max_bisect}")
    mode = on_divergence.lower() if on_divergence else DEFAULT_ON_DIVERGENCE
    if mode not in ON_DIVERGENCE_MODES:
        raise ValueError(f"Unknown on_divergence mode '{on_divergence}'. Available: {ON_DIVERGENCE_MODES}")
    return SolverConfig(
        tolerance=tol,
        max_iter=n_newton,
        max_bisect=n_bisect,
        on_divergence=mode,
    )
