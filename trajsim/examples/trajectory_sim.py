#!/usr/bin/env python
"""Headless run of the default launch scenario.

This example drives the simulation loop the way a frame driver would:
1. Build the default scenario (two model rockets and a thrown object)
2. Tick the loop at a fixed frame time, toggling drag mid-flight
3. Report apoapsis, flight time and impact point for each vehicle
4. Save trajectory plots

Run from the project root:
    python trajsim/examples/trajectory_sim.py
"""

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from trajsim.config import SimConfig
from trajsim.keys import Key
from trajsim.plotting import plot_altitude_history, plot_trajectories
from trajsim.simulation import SimulationResult, default_scenario
from trajsim.vehicle import Viewport

FRAME_TIME = 0.01  # [s]
MAX_TIME = 60.0  # [s]
VIEWPORT = Viewport(width=640.0, height=480.0)


def main() -> None:
    """Run the trajectory simulation example."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("POINT-MASS TRAJECTORY SIMULATION")
    print("=" * 60)

    sim = default_scenario(SimConfig(time_step=FRAME_TIME, record_history=True))

    # Simulated frame loop: one render and one physics tick per frame
    frames = 0
    while not sim.all_grounded and sim.elapsed_time < MAX_TIME:
        sim.update_render_scale(VIEWPORT)
        sim.tick(FRAME_TIME)
        frames += 1

        # Drag off for one second after burnout, as if a user pressed D twice
        if frames == 500 or frames == 600:
            sim.handle_key(Key.DRAG_TOGGLE)

    result = SimulationResult.from_simulation(sim)

    print(f"\nSimulated {sim.elapsed_time:.2f} s in {sim.tick_count} ticks")
    print(f"Final render scale: {sim.params.render_scale:.4f}")
    print()
    print(f"{'vehicle':<10} {'apoapsis [m]':>14} {'impact x [m]':>14} {'mass [kg]':>10}")
    for snap in sim.snapshots():
        print(
            f"{snap.name:<10} {result.max_altitude(snap.name):>14.2f} "
            f"{snap.position[0]:>14.2f} {snap.mass:>10.4f}"
        )

    output_dir = Path("outputs") / "trajectory_sim"
    output_dir.mkdir(parents=True, exist_ok=True)
    plot_trajectories(result).savefig(output_dir / "trajectories.png", dpi=120)
    plot_altitude_history(result).savefig(output_dir / "altitude.png", dpi=120)
    print(f"\nPlots saved to {output_dir}/")


if __name__ == "__main__":
    main()
