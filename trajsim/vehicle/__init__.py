"""Vehicle models for trajectory simulation.

Provides the point-mass base model and the two vehicle variants sharing
one simulation loop.

Example:
    >>> import numpy as np
    >>> from trajsim.vehicle import CoastVehicle, Rocket
    >>>
    >>> rocket = Rocket(
    ...     position=np.array([0.0, 0.0]),
    ...     mass=0.2,
    ...     drag_coefficient=0.1,
    ...     cross_section=0.01,
    ...     exhaust_velocity=np.array([0.0, 650.0]),
    ...     mass_flow_rate=0.01,
    ...     thrust_cutoff_time=4.5,
    ... )
"""

from trajsim.vehicle.base import (
    DragLaw,
    PointMassVehicle,
    SimObject,
    VehicleSnapshot,
    Viewport,
    drag_acceleration,
    fit_scale,
)
from trajsim.vehicle.coast import CoastVehicle
from trajsim.vehicle.rocket import Rocket

__all__ = [
    # Shared model
    "DragLaw",
    "PointMassVehicle",
    "SimObject",
    "VehicleSnapshot",
    "Viewport",
    "drag_acceleration",
    "fit_scale",
    # Variants
    "CoastVehicle",
    "Rocket",
]
