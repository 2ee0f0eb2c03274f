"""Default launch scenario.

Two identical model rockets side by side, fired straight up, and an
unpowered object thrown up and to the right from the left of the pad.
All constants are literal; nothing is reloaded at runtime.
"""

import numpy as np
from beartype import beartype

from trajsim.config import SimConfig
from trajsim.simulation.simulator import Simulation
from trajsim.vehicle import CoastVehicle, DragLaw, Rocket, SimObject

# Model rocket
ROCKET_MASS = 0.2  # [kg]
ROCKET_DRAG_COEFFICIENT = 0.1
ROCKET_CROSS_SECTION = 0.01  # [m^2]
ROCKET_EXHAUST_VELOCITY = (0.0, 650.0)  # [m/s]
ROCKET_MASS_FLOW_RATE = 0.01  # [kg/s]
ROCKET_THRUST_TIME = 4.5  # [s]

# Thrown object
IFO_MASS = 1.0  # [kg]
IFO_DRAG_COEFFICIENT = 1.0
IFO_CROSS_SECTION = 0.01  # [m^2]
IFO_VELOCITY = (100.0, 100.0)  # [m/s]


@beartype
def make_rocket(
    x: float = 0.0,
    name: str = "rocket",
    drag_law: DragLaw = DragLaw.OPPOSING,
) -> Rocket:
    """Model rocket standing on the pad at horizontal position x [m]."""
    return Rocket(
        name=name,
        position=np.array([x, 0.0]),
        mass=ROCKET_MASS,
        drag_coefficient=ROCKET_DRAG_COEFFICIENT,
        cross_section=ROCKET_CROSS_SECTION,
        exhaust_velocity=np.array(ROCKET_EXHAUST_VELOCITY),
        mass_flow_rate=ROCKET_MASS_FLOW_RATE,
        thrust_cutoff_time=ROCKET_THRUST_TIME,
        drag_law=drag_law,
    )


@beartype
def make_ifo(
    x: float = -100.0,
    name: str = "ifo",
    drag_law: DragLaw = DragLaw.OPPOSING,
) -> CoastVehicle:
    """Unpowered object thrown from horizontal position x [m]."""
    return CoastVehicle(
        name=name,
        position=np.array([x, 0.0]),
        velocity=np.array(IFO_VELOCITY),
        mass=IFO_MASS,
        drag_coefficient=IFO_DRAG_COEFFICIENT,
        cross_section=IFO_CROSS_SECTION,
        drag_law=drag_law,
    )


@beartype
def default_vehicles(drag_law: DragLaw = DragLaw.OPPOSING) -> list[SimObject]:
    """Vehicles of the default scenario, in update order."""
    return [
        make_rocket(0.0, "rocket-1", drag_law),
        make_rocket(100.0, "rocket-2", drag_law),
        make_ifo(-100.0, "ifo", drag_law),
    ]


@beartype
def default_scenario(
    config: SimConfig | None = None,
    drag_law: DragLaw = DragLaw.OPPOSING,
) -> Simulation:
    """Simulation loaded with the default vehicles."""
    return Simulation(
        vehicles=default_vehicles(drag_law),
        config=config or SimConfig(),
    )
