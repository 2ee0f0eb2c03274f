"""Fixed-step semi-implicit Euler integration for 2D point masses.

The position is advanced first using the velocity at the start of the step,
then the velocity is advanced using the acceleration sampled at the new
position:

    x' = x + dt * v
    v' = v + dt * a(x', v, t)

This ordering is part of the model: changing it changes every trajectory.
There is no sub-stepping and no adaptive step size, so accuracy is bounded
by the frame-driven time step.

Example:
    >>> import numpy as np
    >>> from trajsim.dynamics import semi_implicit_euler_step
    >>>
    >>> def falling(position, velocity, time):
    ...     return np.array([0.0, -9.81])
    >>>
    >>> x, v = semi_implicit_euler_step(
    ...     np.array([0.0, 100.0]), np.array([0.0, 0.0]), falling, dt=0.01,
    ... )
"""

from collections.abc import Callable

import numpy as np
from beartype import beartype
from numpy.typing import NDArray


AccelerationFunction = Callable[
    [NDArray[np.float64], NDArray[np.float64], float],
    NDArray[np.float64],
]
"""Acceleration law a(position, velocity, time) -> acceleration [m/s^2]."""


@beartype
def semi_implicit_euler_step(
    position: NDArray[np.float64],
    velocity: NDArray[np.float64],
    acceleration_fn: AccelerationFunction,
    dt: float,
    time: float = 0.0,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Advance a point mass by one time step.

    Args:
        position: Current position [m]
        velocity: Current velocity [m/s]
        acceleration_fn: Acceleration law a(position, velocity, time)
        dt: Time step [s], zero for a paused step
        time: Simulation time at the start of the step [s]

    Returns:
        (position, velocity) at t + dt as new arrays
    """
    if dt < 0.0:
        raise ValueError(f"Time step must be non-negative, got {dt}")

    new_position = position + dt * velocity
    if dt == 0.0:
        return new_position, velocity.copy()

    acceleration = np.asarray(acceleration_fn(new_position, velocity, time), dtype=np.float64)
    new_velocity = velocity + dt * acceleration
    return new_position, new_velocity


@beartype
def integrate(
    position: NDArray[np.float64],
    velocity: NDArray[np.float64],
    acceleration_fn: AccelerationFunction,
    t_final: float,
    dt: float = 0.01,
    max_steps: int = 1000000,
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Integrate a point mass over time with a fixed step.

    Offline helper for a single acceleration law; the frame-driven
    simulation calls semi_implicit_euler_step once per tick instead.

    Args:
        position: Initial position [m]
        velocity: Initial velocity [m/s]
        acceleration_fn: Acceleration law a(position, velocity, time)
        t_final: Final simulation time [s]
        dt: Time step [s]
        max_steps: Maximum number of steps

    Returns:
        (times, positions, velocities) with shapes (N,), (N, 2), (N, 2)
    """
    if dt <= 0.0:
        raise ValueError(f"Time step must be positive, got {dt}")

    n_steps = min(int(round(t_final / dt)), max_steps)

    times = [0.0]
    positions = [position.copy()]
    velocities = [velocity.copy()]

    t = 0.0
    for _ in range(n_steps):
        position, velocity = semi_implicit_euler_step(position, velocity, acceleration_fn, dt, t)
        t += dt
        times.append(t)
        positions.append(position)
        velocities.append(velocity)

    return np.array(times), np.array(positions), np.array(velocities)
