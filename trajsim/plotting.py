"""Visualization module for trajsim.

Provides plotting functions for:
- Trajectories in the vertical plane
- Altitude and vertical velocity histories
- The atmosphere profile used by the drag model

All plots use matplotlib with a consistent style.
"""

import matplotlib.pyplot as plt
import numpy as np
from beartype import beartype
from matplotlib.figure import Figure

from trajsim.environment.atmosphere import at_altitude
from trajsim.simulation.simulator import SimulationResult

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "primary": "#2E86AB",  # Steel blue
    "secondary": "#A23B72",  # Berry
    "accent": "#F18F01",  # Orange
    "ground": "#3B8B3B",  # Green ground line
    "text": "#333333",  # Text color
}

CYCLE = [COLORS["primary"], COLORS["secondary"], COLORS["accent"], "#454545"]

DEFAULT_FIGSIZE = (12.0, 6.0)


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.size": 11,
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "legend.fontsize": 10,
            "grid.alpha": 0.5,
        }
    )


# =============================================================================
# Trajectory Plots
# =============================================================================


@beartype
def plot_trajectories(
    result: SimulationResult,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot every vehicle's path in the vertical plane.

    Apoapsis points are marked where the vehicle latched the event.

    Args:
        result: Simulation results
        figsize: Figure size

    Returns:
        matplotlib Figure
    """
    _setup_style()
    fig, ax = plt.subplots(figsize=figsize)

    for i, name in enumerate(result.vehicle_names):
        color = CYCLE[i % len(CYCLE)]
        pos = result.position(name)
        ax.plot(pos[:, 0], pos[:, 1], color=color, linewidth=2, label=name)

        flags = [r.snapshots[i].apoapsis_reached for r in result.records]
        if any(flags):
            k = flags.index(True)
            ax.plot(pos[k, 0], pos[k, 1], marker="^", color=color, markersize=9)

    ax.axhline(0.0, color=COLORS["ground"], linewidth=3)
    ax.set_xlabel("Horizontal position (m)")
    ax.set_ylabel("Altitude (m)")
    ax.set_title("Trajectories")
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.tight_layout()
    return fig


@beartype
def plot_altitude_history(
    result: SimulationResult,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot altitude and vertical velocity against time.

    Args:
        result: Simulation results
        figsize: Figure size

    Returns:
        matplotlib Figure with two subplots
    """
    _setup_style()
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)
    t = result.time

    for i, name in enumerate(result.vehicle_names):
        color = CYCLE[i % len(CYCLE)]
        ax1.plot(t, result.altitude(name), color=color, linewidth=2, label=name)
        ax2.plot(t, result.velocity(name)[:, 1], color=color, linewidth=2, label=name)

    ax1.set_xlabel("Time (s)")
    ax1.set_ylabel("Altitude (m)")
    ax1.set_title("Altitude vs Time")
    ax1.grid(True, alpha=0.3)
    ax1.legend()

    ax2.axhline(0.0, color=COLORS["text"], linestyle=":", alpha=0.7)
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("Vertical velocity (m/s)")
    ax2.set_title("Vertical Velocity vs Time")
    ax2.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


@beartype
def plot_atmosphere_profile(
    max_altitude_km: float = 40.0,
    num_points: int = 200,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot temperature and density of the model atmosphere.

    Args:
        max_altitude_km: Maximum altitude to plot (km)
        num_points: Number of altitude points
        figsize: Figure size

    Returns:
        matplotlib Figure with two subplots
    """
    _setup_style()
    altitudes_km = np.linspace(0.0, max_altitude_km, num_points)
    results = [at_altitude(float(h * 1000.0)) for h in altitudes_km]

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

    ax1.plot([r.temperature for r in results], altitudes_km, color=COLORS["accent"], linewidth=2)
    ax1.set_xlabel("Temperature (K)")
    ax1.set_ylabel("Altitude (km)")
    ax1.set_title("Temperature")
    ax1.grid(True, alpha=0.3)

    ax2.plot([r.density for r in results], altitudes_km, color=COLORS["primary"], linewidth=2)
    ax2.set_xlabel("Density (kg/m³)")
    ax2.set_ylabel("Altitude (km)")
    ax2.set_title("Density")
    ax2.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig
