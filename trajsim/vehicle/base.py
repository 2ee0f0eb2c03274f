"""Shared point-mass vehicle model.

Every simulated body is a point mass moving in a vertical plane:
``position[0]`` is the horizontal coordinate and ``position[1]`` the
altitude above the reference surface. Each update samples the atmosphere at
the current altitude, builds an acceleration law from gravity, drag and any
vehicle-specific thrust, and advances the state with the semi-implicit
Euler integrator.

A vehicle whose altitude drops below zero has hit the ground. It stops
integrating and keeps its last state until it is reset.

Example:
    >>> import numpy as np
    >>> from trajsim.config import SimulationParameters
    >>> from trajsim.vehicle import CoastVehicle
    >>>
    >>> ball = CoastVehicle(
    ...     position=np.array([0.0, 0.0]),
    ...     velocity=np.array([10.0, 50.0]),
    ...     mass=1.0,
    ...     drag_coefficient=0.5,
    ...     cross_section=0.01,
    ... )
    >>> ball.update(SimulationParameters(time_step=0.01))
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple, Protocol, runtime_checkable

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from trajsim.config import SimulationParameters
from trajsim.dynamics.integrator import AccelerationFunction, semi_implicit_euler_step
from trajsim.environment.atmosphere import density_at_altitude
from trajsim.environment.gravity import gravity_at_altitude
from trajsim.keys import Key

logger = logging.getLogger(__name__)

# =============================================================================
# Render Constants
# =============================================================================

PIXELS_PER_METER = 5.0  # Unscaled drawing units per meter
SIDE_MARGIN = 50.0  # Horizontal room kept free at each side of the viewport
TOP_MARGIN = 75.0  # Vertical room kept free for the sprite and ground strip


# =============================================================================
# Types
# =============================================================================


class DragLaw(Enum):
    """Sign policy for quadratic drag.

    OPPOSING: ``v * |v|``, drag always opposes the direction of motion.
    SQUARED: ``v * v``, drag always points toward negative axis values.
        Kept to reproduce trajectories from the legacy simulator.
    """

    OPPOSING = auto()
    SQUARED = auto()


class Viewport(NamedTuple):
    """Drawable area supplied by the frame driver [drawing units]."""
    width: float
    height: float


class VehicleSnapshot(NamedTuple):
    """Read-only view of a vehicle after a tick.

    Provided to the presentation layer to draw the vehicle.
    """
    name: str
    position: NDArray[np.float64]  # [x, altitude] [m]
    velocity: NDArray[np.float64]  # [vx, vy] [m/s]
    mass: float                    # [kg]
    apoapsis_reached: bool
    thrust_active: bool
    grounded: bool


@runtime_checkable
class SimObject(Protocol):
    """Protocol for objects driven by the simulation loop."""

    def update(self, params: SimulationParameters) -> None:
        """Advance the object by ``params.time_step``."""
        ...

    def reset(self) -> None:
        """Restore the initial state."""
        ...

    def apply_input(self, key: Key) -> None:
        """React to a key event."""
        ...

    def compute_render_scale(self, viewport: Viewport) -> float:
        """Largest scale (<= 1) that keeps the object inside the viewport."""
        ...

    def snapshot(self, params: SimulationParameters) -> VehicleSnapshot:
        """Read-only view of the current state."""
        ...


# =============================================================================
# Force Laws
# =============================================================================


@beartype
def drag_acceleration(
    density: float,
    velocity: NDArray[np.float64],
    drag_coefficient: float,
    cross_section: float,
    mass: float,
    law: DragLaw = DragLaw.OPPOSING,
) -> NDArray[np.float64]:
    """Per-axis quadratic drag deceleration.

    a = -0.5 * rho * v * |v| * Cd * A / m

    Args:
        density: Air density [kg/m^3]
        velocity: Velocity [m/s]
        drag_coefficient: Drag coefficient [-]
        cross_section: Reference area [m^2]
        mass: Vehicle mass [kg]
        law: Drag sign policy

    Returns:
        Drag acceleration per axis [m/s^2], zero for non-positive mass
    """
    if mass <= 0.0 or density <= 0.0:
        return np.zeros_like(velocity)

    magnitude = np.abs(velocity) if law is DragLaw.OPPOSING else velocity
    return -0.5 * density * velocity * magnitude * drag_coefficient * cross_section / mass


@beartype
def fit_scale(position: NDArray[np.float64], viewport: Viewport) -> float:
    """Largest scale factor (<= 1) that keeps a sprite at position on screen.

    Combines a vertical fit (altitude against the viewport height) and a
    horizontal fit (offset from the center against half the width). A zero
    coordinate does not constrain its axis.

    Args:
        position: [x, altitude] [m]
        viewport: Drawable area

    Returns:
        Render scale in (0, 1]
    """
    x, y = float(position[0]), float(position[1])
    scale = 1.0
    if y != 0.0:
        scale = min(scale, abs((viewport.height - TOP_MARGIN) / (PIXELS_PER_METER * y)))
    if x != 0.0:
        scale = min(scale, abs((viewport.width / 2.0 - SIDE_MARGIN) / (PIXELS_PER_METER * abs(x))))
    return scale


# =============================================================================
# Point-Mass Vehicle
# =============================================================================


@beartype
@dataclass(kw_only=True, eq=False)
class PointMassVehicle:
    """Point-mass body under gravity and quadratic drag.

    Attributes:
        name: Label used in logs and snapshots
        position: [x, altitude] [m]
        mass: Current mass [kg]
        drag_coefficient: Drag coefficient [-]
        cross_section: Reference area [m^2]
        velocity: [vx, vy] [m/s]
        drag_law: Drag sign policy
        apoapsis_reached: Latched once the vertical velocity turns from
            positive to non-positive, cleared only by reset
    """
    name: str = "vehicle"
    position: NDArray[np.float64]
    mass: float
    drag_coefficient: float
    cross_section: float
    velocity: NDArray[np.float64] = field(default_factory=lambda: np.zeros(2))
    drag_law: DragLaw = DragLaw.OPPOSING
    apoapsis_reached: bool = field(default=False, init=False)

    initial_position: NDArray[np.float64] = field(init=False, repr=False)
    initial_velocity: NDArray[np.float64] = field(init=False, repr=False)
    initial_mass: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate constants and record the initial state."""
        self.position = np.array(self.position, dtype=np.float64)
        self.velocity = np.array(self.velocity, dtype=np.float64)

        if self.position.shape != (2,):
            raise ValueError(f"Position must be shape (2,), got {self.position.shape}")
        if self.velocity.shape != (2,):
            raise ValueError(f"Velocity must be shape (2,), got {self.velocity.shape}")
        if self.mass <= 0.0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if self.drag_coefficient < 0.0:
            raise ValueError(f"Drag coefficient must be non-negative, got {self.drag_coefficient}")
        if self.cross_section < 0.0:
            raise ValueError(f"Cross section must be non-negative, got {self.cross_section}")

        self.initial_position = self.position.copy()
        self.initial_velocity = self.velocity.copy()
        self.initial_mass = self.mass

    @property
    def altitude(self) -> float:
        """Altitude above the reference surface [m]."""
        return float(self.position[1])

    @property
    def grounded(self) -> bool:
        """True once the vehicle has fallen below the reference surface."""
        return self.altitude < 0.0

    def is_thrusting(self, params: SimulationParameters) -> bool:
        """Whether the engine fires over the step described by params."""
        return False

    def _thrust_acceleration(self, params: SimulationParameters) -> NDArray[np.float64] | None:
        """Thrust acceleration for this tick, or None when the engine is off."""
        return None

    def _consume_propellant(self, dt: float) -> None:
        """Remove the propellant burned over a thrusting step."""

    def _acceleration_law(
        self,
        params: SimulationParameters,
        density: float,
        thrust: NDArray[np.float64] | None,
    ) -> AccelerationFunction:
        """Build a(position, velocity, time) for the current tick.

        Density and thrust are frozen at the start of the tick; gravity is
        sampled at whatever position the integrator passes in.
        """
        def acceleration(
            position: NDArray[np.float64],
            velocity: NDArray[np.float64],
            time: float,
        ) -> NDArray[np.float64]:
            a = np.zeros(2)
            if params.drag_enabled:
                a += drag_acceleration(
                    density,
                    velocity,
                    self.drag_coefficient,
                    self.cross_section,
                    self.mass,
                    self.drag_law,
                )
            if params.gravity_enabled:
                a[1] -= gravity_at_altitude(float(position[1]))
            if thrust is not None:
                a += thrust
            return a

        return acceleration

    def update(self, params: SimulationParameters) -> None:
        """Advance the vehicle by ``params.time_step``.

        Args:
            params: Shared simulation parameters (read only)
        """
        if self.grounded:
            return

        dt = params.time_step
        density = density_at_altitude(self.altitude)
        thrust = self._thrust_acceleration(params)
        ascending = self.velocity[1] > 0.0

        self.position, self.velocity = semi_implicit_euler_step(
            self.position,
            self.velocity,
            self._acceleration_law(params, density, thrust),
            dt,
            params.elapsed_time,
        )

        if thrust is not None:
            self._consume_propellant(dt)

        if ascending and self.velocity[1] <= 0.0 and not self.apoapsis_reached:
            self.apoapsis_reached = True
            logger.info("%s reached apoapsis at height: %.3f m", self.name, self.altitude)

        if self.grounded:
            logger.info(
                "%s hit the ground at t=%.3f s, x=%.3f m",
                self.name,
                params.elapsed_time + dt,
                float(self.position[0]),
            )

    def reset(self) -> None:
        """Restore the initial position, velocity and mass."""
        self.position = self.initial_position.copy()
        self.velocity = self.initial_velocity.copy()
        self.mass = self.initial_mass
        self.apoapsis_reached = False
        logger.debug("%s reset", self.name)

    def apply_input(self, key: Key) -> None:
        """React to a key event. Plain vehicles have no controls."""

    def compute_render_scale(self, viewport: Viewport) -> float:
        """Largest scale (<= 1) that keeps the vehicle inside the viewport."""
        return fit_scale(self.position, viewport)

    def snapshot(self, params: SimulationParameters) -> VehicleSnapshot:
        """Read-only view of the current state."""
        return VehicleSnapshot(
            name=self.name,
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            mass=self.mass,
            apoapsis_reached=self.apoapsis_reached,
            thrust_active=self.is_thrusting(params),
            grounded=self.grounded,
        )
