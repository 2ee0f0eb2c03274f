"""Simulation configuration and shared run-time parameters.

:class:`SimConfig` holds the values a run starts from and never changes.
:class:`SimulationParameters` is the mutable context the simulation loop
threads through every vehicle update: the clock, the current step size and
the global toggles.
"""

from dataclasses import dataclass

from beartype import beartype


@beartype
@dataclass(frozen=True)
class SimConfig:
    """Simulation configuration.

    Attributes:
        time_step: Default step size for headless runs [s]
        paused: Start paused
        gravity_enabled: Apply gravity
        drag_enabled: Apply atmospheric drag
        record_history: Record a snapshot of every vehicle each tick
    """
    time_step: float = 0.01
    paused: bool = False
    gravity_enabled: bool = True
    drag_enabled: bool = True
    record_history: bool = False

    def __post_init__(self) -> None:
        if self.time_step <= 0.0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")


@beartype
@dataclass
class SimulationParameters:
    """Shared run-time parameters, read by vehicles during an update.

    Attributes:
        elapsed_time: Simulation clock [s]
        time_step: Seconds advanced by the current tick, zero when paused
        paused: Global pause toggle
        gravity_enabled: Global gravity toggle
        drag_enabled: Global drag toggle
        render_scale: Fit-to-viewport scale, recomputed every frame
    """
    elapsed_time: float = 0.0
    time_step: float = 0.01
    paused: bool = False
    gravity_enabled: bool = True
    drag_enabled: bool = True
    render_scale: float = 1.0

    @classmethod
    def from_config(cls, config: SimConfig) -> "SimulationParameters":
        """Create initial parameters from a configuration."""
        return cls(
            time_step=config.time_step,
            paused=config.paused,
            gravity_enabled=config.gravity_enabled,
            drag_enabled=config.drag_enabled,
        )
