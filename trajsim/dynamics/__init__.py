"""Dynamics module for 2D point-mass simulation.

Provides the fixed-step integrator shared by every vehicle.

Example:
    >>> from trajsim.dynamics import semi_implicit_euler_step
"""

from trajsim.dynamics.integrator import (
    AccelerationFunction,
    integrate,
    semi_implicit_euler_step,
)

__all__ = [
    "AccelerationFunction",
    "integrate",
    "semi_implicit_euler_step",
]
