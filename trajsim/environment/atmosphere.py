"""Simplified barometric atmosphere.

Temperature drops linearly with altitude at the tropospheric lapse rate.
Pressure uses a barometric approximation driven by the local gravitational
acceleration, and density follows from the ideal gas law:

    T(h)   = T0 - 0.0065 * h
    p(r)   = 101325 * (1 - g(r) / 289510.047) ** 3.50057557
    rho    = p / (R_air * T)

The pressure approximation is only defined while its base stays
non-negative (radii above roughly 37 km from Earth's center). Outside that
range pressure is clamped to zero, which means no drag.

Example:
    >>> from trajsim.environment import at_altitude
    >>>
    >>> result = at_altitude(1000.0)
    >>> print(f"Density: {result.density:.4f} kg/m^3")
    >>> print(f"Temperature: {result.temperature:.1f} K")
"""

from dataclasses import dataclass

from beartype import beartype
from numba import njit

from trajsim.environment.gravity import (
    EARTH_SEA_RADIUS,
    SURFACE_RADIUS,
    gravitational_acceleration,
)

# =============================================================================
# Constants
# =============================================================================

SURFACE_TEMP = 288.15  # Temperature at the reference surface [K]
LAPSE_RATE = 0.0065  # Temperature lapse rate [K/m]
P0 = 101325.0  # Sea level pressure [Pa]
R_AIR = 287.05  # Specific gas constant for dry air [J/(kg·K)]

# Barometric fit constants
PRESSURE_GRAVITY_SCALE = 289510.047  # [m/s^2]
PRESSURE_EXPONENT = 3.50057557


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True)
def _barometric_pressure(g: float) -> float:
    base = 1.0 - g / PRESSURE_GRAVITY_SCALE
    if base <= 0.0:
        return 0.0
    return P0 * base**PRESSURE_EXPONENT


@njit(cache=True)
def _ideal_gas_density(pressure: float, temperature: float) -> float:
    if temperature <= 0.0:
        return 0.0
    return pressure / (R_AIR * temperature)


# =============================================================================
# Result Classes
# =============================================================================


@beartype
@dataclass(frozen=True)
class AtmosphereResult:
    """Atmospheric conditions at a given altitude.

    Attributes:
        altitude: Altitude above the reference surface [m]
        temperature: Static temperature [K]
        pressure: Static pressure [Pa]
        density: Air density [kg/m^3]
        gravity: Gravitational acceleration [m/s^2]
    """
    altitude: float
    temperature: float
    pressure: float
    density: float
    gravity: float

    @property
    def is_vacuum(self) -> bool:
        """Check if there is no air left to produce drag."""
        return self.density <= 0.0


# =============================================================================
# Atmosphere Functions
# =============================================================================


@beartype
def temperature(altitude: float) -> float:
    """Get temperature at altitude.

    Args:
        altitude: Altitude above the reference surface [m]

    Returns:
        Temperature [K]
    """
    return SURFACE_TEMP - LAPSE_RATE * (altitude + SURFACE_RADIUS - EARTH_SEA_RADIUS)


@beartype
def pressure(radius: float) -> float:
    """Get pressure at a distance from Earth's center.

    Args:
        radius: Distance from Earth's center [m]

    Returns:
        Pressure [Pa], zero where the barometric fit breaks down
    """
    return _barometric_pressure(gravitational_acceleration(radius))


@beartype
def air_density(radius: float, temp: float) -> float:
    """Get air density from radius and temperature.

    Args:
        radius: Distance from Earth's center [m]
        temp: Static temperature [K]

    Returns:
        Density [kg/m^3], zero for non-positive temperatures
    """
    return _ideal_gas_density(pressure(radius), temp)


@beartype
def density_at_altitude(altitude: float) -> float:
    """Quick density lookup at altitude above the reference surface [m]."""
    return air_density(altitude + SURFACE_RADIUS, temperature(altitude))


@beartype
def at_altitude(altitude: float) -> AtmosphereResult:
    """Get all atmospheric properties at altitude.

    Args:
        altitude: Altitude above the reference surface [m]

    Returns:
        AtmosphereResult with all properties
    """
    radius = altitude + SURFACE_RADIUS
    T = temperature(altitude)
    p = pressure(radius)

    return AtmosphereResult(
        altitude=altitude,
        temperature=T,
        pressure=p,
        density=_ideal_gas_density(p, T),
        gravity=gravitational_acceleration(radius),
    )
