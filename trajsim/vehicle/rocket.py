"""Thrust-propelled point-mass rocket.

Thrust follows the ideal rocket equation for a constant mass flow:

    a_thrust = mdot * v_e / m
    dm/dt    = -mdot

The engine fires while thrust is enabled and the simulation clock has not
passed the cutoff time. A step that would burn the remaining mass down to
zero or below is skipped, so the mass always stays positive.

DE reference: https://web.mit.edu/16.unified/www/FALL/systems/Lab_Notes/traj.pdf

Example:
    >>> import numpy as np
    >>> from trajsim.vehicle import Rocket
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

import logging
from dataclasses import dataclass, field

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from trajsim.config import SimulationParameters
from trajsim.keys import Key
from trajsim.vehicle.base import PointMassVehicle

logger = logging.getLogger(__name__)

EXHAUST_NUDGE = 100.0  # Horizontal exhaust velocity change per key press [m/s]


@beartype
@dataclass(kw_only=True, eq=False)
class Rocket(PointMassVehicle):
    """Point-mass rocket with a constant mass-flow engine.

    Attributes:
        exhaust_velocity: [horizontal, vertical] exhaust velocity [m/s]
        mass_flow_rate: Propellant mass flow [kg/s]
        thrust_cutoff_time: Simulation time after which the engine is off [s]
        thrust_enabled: Engine master switch, toggled by input
    """
    name: str = "rocket"
    exhaust_velocity: NDArray[np.float64] = field(default_factory=lambda: np.zeros(2))
    mass_flow_rate: float = 0.0
    thrust_cutoff_time: float = 0.0
    thrust_enabled: bool = True

    def __post_init__(self) -> None:
        super().__post_init__()
        self.exhaust_velocity = np.array(self.exhaust_velocity, dtype=np.float64)

        if self.exhaust_velocity.shape != (2,):
            raise ValueError(
                f"Exhaust velocity must be shape (2,), got {self.exhaust_velocity.shape}"
            )
        if self.mass_flow_rate < 0.0:
            raise ValueError(f"Mass flow rate must be non-negative, got {self.mass_flow_rate}")

    def is_thrusting(self, params: SimulationParameters) -> bool:
        """Whether the engine fires over the step described by params.

        The engine is off once the cutoff time has passed, or when burning
        for params.time_step would leave no mass.
        """
        return (
            self.thrust_enabled
            and params.elapsed_time <= self.thrust_cutoff_time
            and self.mass - params.time_step * self.mass_flow_rate > 0.0
        )

    def _thrust_acceleration(self, params: SimulationParameters) -> NDArray[np.float64] | None:
        if not self.is_thrusting(params):
            return None
        return self.mass_flow_rate * self.exhaust_velocity / self.mass

    def _consume_propellant(self, dt: float) -> None:
        self.mass -= dt * self.mass_flow_rate

    def apply_input(self, key: Key) -> None:
        """Nudge the exhaust direction or toggle the engine."""
        if key is Key.EXHAUST_LEFT:
            self.exhaust_velocity[0] -= EXHAUST_NUDGE
        elif key is Key.EXHAUST_RIGHT:
            self.exhaust_velocity[0] += EXHAUST_NUDGE
        elif key is Key.THRUST_TOGGLE:
            self.thrust_enabled = not self.thrust_enabled
            logger.debug("%s thrust %s", self.name, "enabled" if self.thrust_enabled else "disabled")
