"""Unpowered point-mass vehicle.

A coast vehicle is launched with an initial velocity and then only feels
gravity and drag. It has no controls of its own: vehicle-specific keys are
ignored, while the shared toggles live in the simulation loop.
"""

from dataclasses import dataclass

from beartype import beartype

from trajsim.vehicle.base import PointMassVehicle


@beartype
@dataclass(kw_only=True, eq=False)
class CoastVehicle(PointMassVehicle):
    """Falling object without propulsion."""
    name: str = "ifo"
