"""trajsim - Interactive point-mass trajectory simulation.

This package integrates the motion of point-mass vehicles (thrust-propelled
rockets and unpowered objects) through a simplified atmosphere under
altitude-dependent gravity and drag. A frame driver ticks the simulation,
feeds it key events and reads back vehicle snapshots for drawing.

Example:
    >>> from trajsim import Key, Viewport, default_scenario
    >>>
    >>> sim = default_scenario()
    >>> sim.tick(0.01)
    >>> sim.handle_key(Key.GRAVITY_TOGGLE)
    >>> scale = sim.update_render_scale(Viewport(640.0, 480.0))
    >>> for snap in sim.snapshots():
    ...     print(snap.name, snap.position, snap.thrust_active)
"""

__version__ = "0.1.0"

from trajsim.config import SimConfig, SimulationParameters

# Environment
from trajsim.environment import (
    AtmosphereResult,
    air_density,
    at_altitude,
    density_at_altitude,
    gravitational_acceleration,
    gravity_at_altitude,
    pressure,
    temperature,
)

# Input
from trajsim.keys import KEYBOARD_BINDINGS, Key, resolve_key

# Simulation loop
from trajsim.simulation import (
    Simulation,
    SimulationResult,
    TickRecord,
    default_scenario,
)

# Vehicles
from trajsim.vehicle import (
    CoastVehicle,
    DragLaw,
    PointMassVehicle,
    Rocket,
    SimObject,
    VehicleSnapshot,
    Viewport,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "SimConfig",
    "SimulationParameters",
    # Environment
    "AtmosphereResult",
    "air_density",
    "at_altitude",
    "density_at_altitude",
    "gravitational_acceleration",
    "gravity_at_altitude",
    "pressure",
    "temperature",
    # Input
    "KEYBOARD_BINDINGS",
    "Key",
    "resolve_key",
    # Vehicles
    "CoastVehicle",
    "DragLaw",
    "PointMassVehicle",
    "Rocket",
    "SimObject",
    "VehicleSnapshot",
    "Viewport",
    # Simulation
    "Simulation",
    "SimulationResult",
    "TickRecord",
    "default_scenario",
]
