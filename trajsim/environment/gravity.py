"""Gravity model for point-mass trajectory simulation.

Gravitational acceleration falls off with the inverse square of the
distance from Earth's center. Altitudes are measured above the reference
surface, which sits at the sea-level radius.

Example:
    >>> from trajsim.environment.gravity import gravity_at_altitude
    >>>
    >>> g = gravity_at_altitude(0.0)  # ~9.798 m/s^2
"""

from beartype import beartype
from numba import njit

# =============================================================================
# Constants
# =============================================================================

GRAVITATIONAL_CONSTANT: float = 6.674e-11  # [m^3/(kg·s^2)]
EARTH_GRAVITY_CONSTANT: float = 3.98584628e14  # Earth mu [m^3/s^2]
EARTH_SEA_RADIUS: float = 6378137.0  # Sea-level radius [m]
SURFACE_RADIUS: float = EARTH_SEA_RADIUS  # Reference surface radius [m]


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True)
def _inverse_square(mu: float, radius: float) -> float:
    return mu / (radius * radius)


# =============================================================================
# Public API
# =============================================================================


@beartype
def gravitational_acceleration(radius: float) -> float:
    """Gravity magnitude at a distance from Earth's center.

    Args:
        radius: Distance from Earth's center [m]

    Returns:
        Gravitational acceleration [m/s^2]
    """
    if radius <= 0.0:
        raise ValueError(f"Radius must be positive, got {radius}")
    return _inverse_square(EARTH_GRAVITY_CONSTANT, radius)


@beartype
def gravity_at_altitude(altitude: float) -> float:
    """Gravity magnitude at altitude above the reference surface [m/s^2]."""
    return gravitational_acceleration(altitude + SURFACE_RADIUS)


@beartype
def newtonian_gravity(mass: float, distance: float) -> float:
    """Acceleration toward a point mass.

    Args:
        mass: Attracting mass [kg]
        distance: Distance to the attracting mass [m]

    Returns:
        Acceleration [m/s^2]
    """
    if distance <= 0.0:
        raise ValueError(f"Distance must be positive, got {distance}")
    return _inverse_square(GRAVITATIONAL_CONSTANT * mass, distance)
