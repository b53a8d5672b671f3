"""
Exceptions raised by game_orbits.
"""


class OrbitsError(Exception):
    """Base class for all game_orbits errors."""


class NumericalDivergence(OrbitsError):
    """Raised when Kepler's equation could not be solved within the iteration budget.

    The best estimate found is kept on the exception so callers can decide
    whether to accept it.
    """

    def __init__(self, message, estimate=None, residual=None, iterations=0):
        super().__init__(message)
        self.estimate = estimate
        self.residual = residual
        self.iterations = iterations


class UnknownBody(OrbitsError, LookupError):
    """Raised when a body identifier is not present in the database."""

    def __init__(self, body_id):
        super().__init__(f"Unknown body id {body_id!r}")
        self.body_id = body_id


class CyclicParentage(OrbitsError):
    """Raised when a parent chain loops back on itself while resolving a position."""


class DegenerateDirection(OrbitsError):
    """Raised when a direction is requested between two coincident bodies."""


class InvalidElements(OrbitsError, ValueError):
    """Raised when orbital elements are outside the range the solver supports."""


class InvalidHierarchy(OrbitsError, ValueError):
    """Raised when a mutation would break the parent hierarchy of the database."""
