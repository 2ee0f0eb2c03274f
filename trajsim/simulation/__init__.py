"""Simulation module for frame-driven trajectory simulation.

Provides the simulation loop that an external frame driver ticks once per
physics step, plus result containers for headless runs.

Example:
    >>> from trajsim.simulation import Simulation, default_scenario
    >>>
    >>> sim = default_scenario()
    >>> result = sim.run(duration=20.0, dt=0.01)
    >>> print(result.max_altitude("rocket-1"))
"""

from trajsim.simulation.scenario import (
    default_scenario,
    default_vehicles,
    make_ifo,
    make_rocket,
)
from trajsim.simulation.simulator import (
    Simulation,
    SimulationResult,
    TickRecord,
)

__all__ = [
    "Simulation",
    "SimulationResult",
    "TickRecord",
    "default_scenario",
    "default_vehicles",
    "make_ifo",
    "make_rocket",
]
