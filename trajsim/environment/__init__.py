"""Environment models for trajectory simulation.

Provides the gravity and atmosphere models every vehicle samples once per
physics tick.

Example:
    >>> from trajsim.environment import density_at_altitude, gravity_at_altitude
    >>>
    >>> rho = density_at_altitude(1000.0)  # kg/m^3
    >>> g = gravity_at_altitude(1000.0)  # m/s^2
"""

from trajsim.environment.atmosphere import (
    SURFACE_TEMP,
    AtmosphereResult,
    air_density,
    at_altitude,
    density_at_altitude,
    pressure,
    temperature,
)
from trajsim.environment.gravity import (
    EARTH_GRAVITY_CONSTANT,
    EARTH_SEA_RADIUS,
    SURFACE_RADIUS,
    gravitational_acceleration,
    gravity_at_altitude,
    newtonian_gravity,
)

__all__ = [
    # Constants
    "EARTH_GRAVITY_CONSTANT",
    "EARTH_SEA_RADIUS",
    "SURFACE_RADIUS",
    "SURFACE_TEMP",
    # Gravity
    "gravitational_acceleration",
    "gravity_at_altitude",
    "newtonian_gravity",
    # Atmosphere
    "AtmosphereResult",
    "air_density",
    "at_altitude",
    "density_at_altitude",
    "pressure",
    "temperature",
]
