"""Frame-driven simulation loop for point-mass vehicles.

The simulation owns the vehicle collection and the shared run-time
parameters. An external frame driver (window, game loop or test) controls
the loop and calls:

- sim.tick(dt) -> advance every vehicle by one physics step
- sim.update_render_scale(viewport) -> refresh the shared render scale
- sim.handle_key(key) -> apply a key event
- sim.snapshots() -> read-only vehicle state for drawing

Key events mutate state between ticks, so they take effect on the next tick.

Example:
    >>> from trajsim.simulation import Simulation
    >>> from trajsim.simulation.scenario import default_vehicles
    >>>
    >>> sim = Simulation(vehicles=default_vehicles())
    >>> while not sim.all_grounded:
    ...     sim.tick(0.01)
    ...     for snap in sim.snapshots():
    ...         draw(snap.position, snap.thrust_active)
"""

import logging
import math
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from trajsim.config import SimConfig, SimulationParameters
from trajsim.keys import Key, resolve_key
from trajsim.vehicle.base import SimObject, VehicleSnapshot, Viewport

logger = logging.getLogger(__name__)


class TickRecord(NamedTuple):
    """Vehicle snapshots taken after one tick."""
    time: float                           # Simulation time after the tick [s]
    snapshots: tuple[VehicleSnapshot, ...]


# =============================================================================
# Simulation
# =============================================================================


@beartype
@dataclass
class Simulation:
    """Single-threaded simulation loop.

    Attributes:
        vehicles: Simulated bodies, updated in insertion order
        config: Initial parameters and history recording
        params: Shared run-time parameters passed to every update
        tick_count: Number of ticks executed, including paused ones
    """
    vehicles: list[SimObject] = field(default_factory=list)
    config: SimConfig = field(default_factory=SimConfig)
    params: SimulationParameters = field(init=False)
    tick_count: int = field(default=0, init=False)

    _history: list[TickRecord] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize shared parameters from the configuration."""
        self.params = SimulationParameters.from_config(self.config)

    def add_vehicle(self, vehicle: SimObject) -> None:
        """Add a vehicle to the simulation."""
        self.vehicles.append(vehicle)

    def tick(self, dt: float) -> None:
        """Advance every vehicle by one physics step.

        A paused tick still runs with a zero step so tick counts stay
        consistent; it changes no vehicle state and does not move the clock.

        Args:
            dt: Frame time delta supplied by the driver [s]
        """
        if dt < 0.0:
            raise ValueError(f"Time delta must be non-negative, got {dt}")

        self.params.time_step = 0.0 if self.params.paused else dt
        for vehicle in self.vehicles:
            vehicle.update(self.params)
        self.params.elapsed_time += self.params.time_step
        self.tick_count += 1

        if self.config.record_history:
            self._history.append(self._record())

    def reset_all(self) -> None:
        """Restart the clock and reset every vehicle."""
        self.params.elapsed_time = 0.0
        for vehicle in self.vehicles:
            vehicle.reset()
        self._history.clear()
        logger.debug("Simulation reset")

    def handle_key(self, key: Key | str) -> Key | None:
        """Apply a key event.

        Loop-level keys toggle the shared parameters; every recognized key
        is then forwarded to each vehicle.

        Args:
            key: Key member, symbolic name or keyboard binding

        Returns:
            The resolved Key, or None if the input was ignored
        """
        resolved = resolve_key(key)
        if resolved is None:
            logger.debug("Ignoring unrecognized key %r", key)
            return None

        if resolved is Key.RESET:
            self.reset_all()
        elif resolved is Key.PAUSE_TOGGLE:
            self.params.paused = not self.params.paused
        elif resolved is Key.GRAVITY_TOGGLE:
            self.params.gravity_enabled = not self.params.gravity_enabled
        elif resolved is Key.DRAG_TOGGLE:
            self.params.drag_enabled = not self.params.drag_enabled

        for vehicle in self.vehicles:
            vehicle.apply_input(resolved)

        logger.debug(
            "Key %s: paused=%s gravity=%s drag=%s",
            resolved.value,
            self.params.paused,
            self.params.gravity_enabled,
            self.params.drag_enabled,
        )
        return resolved

    def update_render_scale(self, viewport: Viewport) -> float:
        """Recompute the shared render scale for a frame.

        Args:
            viewport: Drawable area of the frame

        Returns:
            Minimum fit-to-viewport scale over all vehicles, at most 1
        """
        scale = 1.0
        for vehicle in self.vehicles:
            scale = min(scale, vehicle.compute_render_scale(viewport))
        self.params.render_scale = scale
        return scale

    def snapshots(self) -> list[VehicleSnapshot]:
        """Read-only state of every vehicle."""
        return [vehicle.snapshot(self.params) for vehicle in self.vehicles]

    def _record(self) -> TickRecord:
        return TickRecord(time=self.params.elapsed_time, snapshots=tuple(self.snapshots()))

    def run(self, duration: float, dt: float | None = None) -> "SimulationResult":
        """Run headless for a fixed duration.

        Stops early once every vehicle is grounded.

        Args:
            duration: Simulated time to cover [s]
            dt: Step size [s], defaults to config.time_step

        Returns:
            SimulationResult with one record per tick plus the initial state
        """
        step = self.config.time_step if dt is None else dt
        if step <= 0.0:
            raise ValueError(f"Step size must be positive, got {step}")

        records = [self._record()]
        for _ in range(math.ceil(duration / step)):
            if self.all_grounded:
                break
            self.tick(step)
            records.append(self._record())

        return SimulationResult(records=records)

    def get_history(self) -> list[TickRecord]:
        """Get recorded tick history."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear recorded tick history."""
        self._history.clear()

    @property
    def elapsed_time(self) -> float:
        """Current simulation time [s]."""
        return self.params.elapsed_time

    @property
    def all_grounded(self) -> bool:
        """True once every vehicle has hit the ground."""
        return all(snap.grounded for snap in self.snapshots())


# =============================================================================
# Results and Analysis
# =============================================================================


@beartype
@dataclass
class SimulationResult:
    """Results from a simulation run.

    Provides per-vehicle access to trajectory data.
    """
    records: list[TickRecord]

    @classmethod
    def from_simulation(cls, sim: Simulation) -> "SimulationResult":
        """Create result from the recorded history of a simulation."""
        return cls(records=sim.get_history())

    @property
    def time(self) -> NDArray[np.float64]:
        """Time array [s]."""
        return np.array([r.time for r in self.records], dtype=np.float64)

    @property
    def vehicle_names(self) -> list[str]:
        """Names of the recorded vehicles, in update order."""
        if not self.records:
            return []
        return [snap.name for snap in self.records[0].snapshots]

    def _index(self, name: str) -> int:
        names = self.vehicle_names
        if name not in names:
            raise KeyError(f"No vehicle named {name!r}. Available: {names}")
        return names.index(name)

    def position(self, name: str) -> NDArray[np.float64]:
        """Position history [m], shape (N, 2)."""
        i = self._index(name)
        return np.array([r.snapshots[i].position for r in self.records], dtype=np.float64)

    def velocity(self, name: str) -> NDArray[np.float64]:
        """Velocity history [m/s], shape (N, 2)."""
        i = self._index(name)
        return np.array([r.snapshots[i].velocity for r in self.records], dtype=np.float64)

    def altitude(self, name: str) -> NDArray[np.float64]:
        """Altitude history [m]."""
        return self.position(name)[:, 1]

    def mass(self, name: str) -> NDArray[np.float64]:
        """Mass history [kg]."""
        i = self._index(name)
        return np.array([r.snapshots[i].mass for r in self.records], dtype=np.float64)

    def max_altitude(self, name: str) -> float:
        """Highest recorded altitude [m]."""
        return float(np.max(self.altitude(name)))

    def to_dataframe(self):
        """Convert to a long-format Polars DataFrame, one row per vehicle per tick."""
        import polars as pl

        rows = [
            {
                "time": r.time,
                "vehicle": snap.name,
                "x": float(snap.position[0]),
                "altitude": float(snap.position[1]),
                "vx": float(snap.velocity[0]),
                "vy": float(snap.velocity[1]),
                "mass": snap.mass,
                "apoapsis_reached": snap.apoapsis_reached,
                "thrust_active": snap.thrust_active,
                "grounded": snap.grounded,
            }
            for r in self.records
            for snap in r.snapshots
        ]
        return pl.DataFrame(rows)
