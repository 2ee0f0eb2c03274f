"""Unit tests for the point-mass vehicle models.

Covers the force laws, the rocket engine, apoapsis detection, ground
freeze, reset and render scale.
"""

import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose

from trajsim.config import SimulationParameters
from trajsim.environment import gravitational_acceleration, gravity_at_altitude
from trajsim.keys import Key
from trajsim.vehicle import (
    CoastVehicle,
    DragLaw,
    Rocket,
    SimObject,
    Viewport,
    drag_acceleration,
    fit_scale,
)
from trajsim.vehicle.rocket import EXHAUST_NUDGE

DT = 0.01


def make_test_rocket(**overrides) -> Rocket:
    kwargs = dict(
        position=np.array([0.0, 0.0]),
        mass=0.2,
        drag_coefficient=0.1,
        cross_section=0.01,
        exhaust_velocity=np.array([0.0, 650.0]),
        mass_flow_rate=0.01,
        thrust_cutoff_time=4.5,
    )
    kwargs.update(overrides)
    return Rocket(**kwargs)


def make_test_ball(**overrides) -> CoastVehicle:
    kwargs = dict(
        position=np.array([0.0, 0.0]),
        velocity=np.array([10.0, 50.0]),
        mass=1.0,
        drag_coefficient=1.0,
        cross_section=0.01,
    )
    kwargs.update(overrides)
    return CoastVehicle(**kwargs)


def advance(vehicle, params: SimulationParameters, n: int) -> None:
    """Update a vehicle n times, moving the clock like the simulation loop."""
    for _ in range(n):
        vehicle.update(params)
        params.elapsed_time += params.time_step


# =============================================================================
# Force Law Tests
# =============================================================================


class TestDragAcceleration:
    """Test the quadratic drag law."""

    def test_opposes_motion(self):
        """Default drag always points against the velocity."""
        a = drag_acceleration(1.2, np.array([-10.0, 10.0]), 1.0, 1.0, 1.0)
        assert_allclose(a, [60.0, -60.0], rtol=1e-12)

    def test_squared_law_keeps_legacy_sign(self):
        """The legacy law uses v*v, so drag is negative on both axes."""
        a = drag_acceleration(1.2, np.array([-10.0, 10.0]), 1.0, 1.0, 1.0, DragLaw.SQUARED)
        assert_allclose(a, [-60.0, -60.0], rtol=1e-12)

    def test_scales_inversely_with_mass(self):
        v = np.array([3.0, -4.0])
        a1 = drag_acceleration(1.0, v, 0.5, 0.1, 1.0)
        a2 = drag_acceleration(1.0, v, 0.5, 0.1, 2.0)
        assert_allclose(a2, a1 / 2.0, rtol=1e-12)

    def test_zero_mass_guard(self):
        """Zero mass contributes no acceleration instead of dividing by zero."""
        a = drag_acceleration(1.2, np.array([10.0, 10.0]), 1.0, 1.0, 0.0)
        assert_allclose(a, [0.0, 0.0])

    def test_no_air_no_drag(self):
        a = drag_acceleration(0.0, np.array([10.0, 10.0]), 1.0, 1.0, 1.0)
        assert_allclose(a, [0.0, 0.0])


class TestFitScale:
    """Test the fit-to-viewport render scale."""

    VIEWPORT = Viewport(width=640.0, height=480.0)

    def test_origin_unconstrained(self):
        assert fit_scale(np.array([0.0, 0.0]), self.VIEWPORT) == 1.0

    def test_vertical_fit(self):
        # (480 - 75) / (5 * 1000)
        assert fit_scale(np.array([0.0, 1000.0]), self.VIEWPORT) == pytest.approx(0.081)

    def test_horizontal_fit_is_symmetric(self):
        # min(405 / 50, (320 - 50) / (5 * 200))
        right = fit_scale(np.array([200.0, 10.0]), self.VIEWPORT)
        left = fit_scale(np.array([-200.0, 10.0]), self.VIEWPORT)
        assert right == pytest.approx(0.27)
        assert left == right

    def test_never_above_one(self):
        assert fit_scale(np.array([1.0, 1.0]), self.VIEWPORT) == 1.0


# =============================================================================
# Construction Tests
# =============================================================================


class TestConstruction:
    """Test vehicle validation and initial state."""

    def test_satisfies_protocol(self):
        assert isinstance(make_test_rocket(), SimObject)
        assert isinstance(make_test_ball(), SimObject)

    def test_default_names(self):
        assert make_test_rocket().name == "rocket"
        assert make_test_ball().name == "ifo"

    def test_rejects_bad_position_shape(self):
        with pytest.raises(ValueError, match="Position must be shape"):
            make_test_ball(position=np.array([0.0, 0.0, 0.0]))

    def test_rejects_non_positive_mass(self):
        with pytest.raises(ValueError, match="Mass must be positive"):
            make_test_ball(mass=0.0)

    def test_rejects_negative_flow(self):
        with pytest.raises(ValueError, match="Mass flow rate"):
            make_test_rocket(mass_flow_rate=-1.0)

    def test_vectors_are_copied(self):
        """Vehicles built from the same arrays do not share state."""
        exhaust = np.array([0.0, 650.0])
        r1 = make_test_rocket(exhaust_velocity=exhaust)
        r2 = make_test_rocket(exhaust_velocity=exhaust)

        r1.apply_input(Key.EXHAUST_LEFT)

        assert r2.exhaust_velocity[0] == 0.0
        assert exhaust[0] == 0.0

    def test_rocket_starts_at_rest(self):
        rocket = make_test_rocket()
        assert_allclose(rocket.velocity, [0.0, 0.0])
        assert not rocket.apoapsis_reached
        assert not rocket.grounded


# =============================================================================
# Rocket Engine Tests
# =============================================================================


class TestRocketThrust:
    """Test thrust application and propellant consumption."""

    def test_first_tick(self):
        """One tick from the pad: thrust minus surface gravity, no drag yet."""
        rocket = make_test_rocket()
        rocket.update(SimulationParameters(time_step=DT))

        g = gravitational_acceleration(6378137.0)
        assert rocket.mass == pytest.approx(0.1999, rel=1e-12)
        assert_allclose(rocket.position, [0.0, 0.0])
        assert rocket.velocity[0] == 0.0
        assert_allclose(rocket.velocity[1], DT * (0.01 * 650.0 / 0.2 - g), rtol=1e-12)
        assert rocket.velocity[1] == pytest.approx(0.227, abs=1e-3)

    def test_thrust_stops_after_cutoff(self):
        """Mass only drops on ticks that start at or before the cutoff time."""
        rocket = make_test_rocket()
        params = SimulationParameters(time_step=DT)

        burned_after_cutoff = False
        burned_before_cutoff = 0
        for _ in range(600):
            start_time = params.elapsed_time
            mass_before = rocket.mass
            advance(rocket, params, 1)
            burned = rocket.mass < mass_before
            if start_time <= rocket.thrust_cutoff_time:
                assert burned
                burned_before_cutoff += 1
            elif burned:
                burned_after_cutoff = True

        assert not burned_after_cutoff
        assert burned_before_cutoff in (450, 451)
        assert rocket.mass == pytest.approx(0.2 - burned_before_cutoff * DT * 0.01, rel=1e-9)

    def test_mass_monotonic_and_positive(self):
        """Mass never increases and never reaches zero, even when flow outlasts it."""
        rocket = make_test_rocket(mass_flow_rate=0.1, thrust_cutoff_time=100.0)
        params = SimulationParameters(time_step=DT, gravity_enabled=False, drag_enabled=False)

        masses = [rocket.mass]
        for _ in range(400):
            advance(rocket, params, 1)
            masses.append(rocket.mass)

        assert all(b <= a for a, b in zip(masses, masses[1:]))
        assert min(masses) > 0.0
        assert masses[-1] <= 0.002
        # The engine is cut once the next step would empty the tank
        assert masses[-1] == masses[-2]

    def test_snapshot_reports_dry_engine(self):
        """Once the tank cannot cover another step the flame goes out."""
        rocket = make_test_rocket(mass_flow_rate=0.1, thrust_cutoff_time=100.0)
        params = SimulationParameters(time_step=DT, gravity_enabled=False, drag_enabled=False)
        assert rocket.snapshot(params).thrust_active

        advance(rocket, params, 400)
        mass = rocket.mass

        assert params.elapsed_time < rocket.thrust_cutoff_time
        assert not rocket.snapshot(params).thrust_active
        rocket.update(params)
        assert rocket.mass == mass

    def test_thrust_toggle(self):
        rocket = make_test_rocket()
        rocket.apply_input(Key.THRUST_TOGGLE)
        assert not rocket.thrust_enabled

        rocket.update(SimulationParameters(time_step=DT, gravity_enabled=False))
        assert rocket.mass == 0.2
        assert_allclose(rocket.velocity, [0.0, 0.0])

        rocket.apply_input(Key.THRUST_TOGGLE)
        assert rocket.thrust_enabled

    def test_exhaust_nudges(self):
        rocket = make_test_rocket()
        rocket.apply_input(Key.EXHAUST_RIGHT)
        rocket.apply_input(Key.EXHAUST_RIGHT)
        rocket.apply_input(Key.EXHAUST_LEFT)
        assert rocket.exhaust_velocity[0] == EXHAUST_NUDGE
        assert rocket.exhaust_velocity[1] == 650.0

    def test_horizontal_exhaust_pushes_sideways(self):
        rocket = make_test_rocket(exhaust_velocity=np.array([100.0, 650.0]))
        rocket.update(SimulationParameters(time_step=DT))
        assert rocket.velocity[0] > 0.0

    def test_other_keys_ignored(self):
        rocket = make_test_rocket()
        rocket.apply_input(Key.GRAVITY_TOGGLE)
        assert rocket.thrust_enabled
        assert_allclose(rocket.exhaust_velocity, [0.0, 650.0])

    def test_snapshot_thrust_flag(self):
        rocket = make_test_rocket()
        assert rocket.snapshot(SimulationParameters(elapsed_time=0.0)).thrust_active
        assert rocket.snapshot(SimulationParameters(elapsed_time=4.5)).thrust_active
        assert not rocket.snapshot(SimulationParameters(elapsed_time=4.6)).thrust_active

        rocket.apply_input(Key.THRUST_TOGGLE)
        assert not rocket.snapshot(SimulationParameters(elapsed_time=0.0)).thrust_active


# =============================================================================
# Coast Vehicle Tests
# =============================================================================


class TestCoastVehicle:
    """Test unpowered flight."""

    def test_ignores_keys(self):
        ball = make_test_ball()
        for key in Key:
            ball.apply_input(key)
        assert_allclose(ball.velocity, [10.0, 50.0])
        assert_allclose(ball.position, [0.0, 0.0])

    def test_never_thrusts(self):
        ball = make_test_ball()
        assert not ball.snapshot(SimulationParameters()).thrust_active

    def test_toggle_independence(self):
        """With gravity and drag off, motion is uniform and vx stays zero."""
        ball = make_test_ball(velocity=np.array([0.0, 20.0]))
        params = SimulationParameters(time_step=DT, gravity_enabled=False, drag_enabled=False)

        altitudes = []
        for _ in range(100):
            advance(ball, params, 1)
            assert ball.velocity[0] == 0.0
            assert ball.velocity[1] == 20.0
            altitudes.append(ball.altitude)

        assert_allclose(altitudes, 20.0 * DT * np.arange(1, 101), rtol=1e-9)

    def test_gravity_only(self):
        """Gravity pulls down by g * dt per step, sampled at the new altitude."""
        ball = make_test_ball(position=np.array([0.0, 1000.0]), velocity=np.array([0.0, 0.0]))
        ball.update(SimulationParameters(time_step=DT, drag_enabled=False))

        assert_allclose(ball.velocity, [0.0, -DT * gravity_at_altitude(1000.0)], rtol=1e-12)

    def test_drag_slows_horizontal_motion(self):
        ball = make_test_ball(velocity=np.array([50.0, 0.0]), position=np.array([0.0, 100.0]))
        ball.update(SimulationParameters(time_step=DT, gravity_enabled=False))
        assert 0.0 < ball.velocity[0] < 50.0

    def test_legacy_drag_accelerates_a_fall(self):
        """With v*v drag a falling body is pushed down harder than by gravity alone."""
        kwargs = dict(position=np.array([0.0, 1000.0]), velocity=np.array([0.0, -50.0]))
        opposing = make_test_ball(**kwargs)
        squared = make_test_ball(drag_law=DragLaw.SQUARED, **kwargs)
        params = SimulationParameters(time_step=DT)

        opposing.update(params)
        squared.update(params)

        free_fall = -50.0 - DT * gravity_at_altitude(1000.0 - 0.5)
        assert opposing.velocity[1] > free_fall
        assert squared.velocity[1] < free_fall


# =============================================================================
# Lifecycle Tests
# =============================================================================


class TestApoapsis:
    """Test the latched apoapsis event."""

    def test_latches_once(self, caplog):
        caplog.set_level(logging.INFO, logger="trajsim.vehicle.base")
        ball = make_test_ball(name="ball")
        params = SimulationParameters(time_step=DT)

        flags = []
        while not ball.grounded:
            advance(ball, params, 1)
            flags.append(ball.apoapsis_reached)

        transitions = sum(1 for a, b in zip([False] + flags, flags) if a != b)
        assert transitions == 1
        assert flags[-1]
        assert caplog.text.count("ball reached apoapsis") == 1

    def test_latch_happens_near_peak(self):
        ball = make_test_ball()
        params = SimulationParameters(time_step=DT)

        peak = 0.0
        while not ball.apoapsis_reached:
            advance(ball, params, 1)
            peak = max(peak, ball.altitude)

        assert ball.velocity[1] <= 0.0
        assert ball.altitude == pytest.approx(peak, abs=1.0)

    def test_not_latched_on_pad(self):
        """A rocket at rest on the pad has not passed a peak."""
        rocket = make_test_rocket()
        rocket.update(SimulationParameters(time_step=DT))
        assert not rocket.apoapsis_reached

    def test_not_latched_when_falling_from_rest(self):
        ball = make_test_ball(position=np.array([0.0, 100.0]), velocity=np.array([0.0, 0.0]))
        advance(ball, SimulationParameters(time_step=DT), 10)
        assert not ball.apoapsis_reached


class TestGroundFreeze:
    """Test that grounded vehicles stop integrating."""

    def test_below_surface_is_frozen(self):
        ball = make_test_ball(position=np.array([5.0, -1.0]))
        params = SimulationParameters(time_step=DT)

        advance(ball, params, 50)

        assert_allclose(ball.position, [5.0, -1.0])
        assert_allclose(ball.velocity, [10.0, 50.0])

    def test_frozen_after_impact(self, caplog):
        caplog.set_level(logging.INFO, logger="trajsim.vehicle.base")
        ball = make_test_ball()
        params = SimulationParameters(time_step=DT)

        while not ball.grounded:
            advance(ball, params, 1)
        position = ball.position.copy()
        velocity = ball.velocity.copy()

        advance(ball, params, 100)

        assert np.array_equal(ball.position, position)
        assert np.array_equal(ball.velocity, velocity)
        assert "hit the ground" in caplog.text

    def test_rocket_without_thrust_drops(self):
        rocket = make_test_rocket(thrust_cutoff_time=-1.0)
        advance(rocket, SimulationParameters(time_step=DT), 2)
        assert rocket.grounded
        assert rocket.mass == 0.2


class TestReset:
    """Test that reset restores the constructed state."""

    @pytest.mark.parametrize("factory", [make_test_rocket, make_test_ball])
    def test_reset_restores_initial_state(self, factory):
        fresh = factory()
        vehicle = factory()
        advance(vehicle, SimulationParameters(time_step=DT), 1200)
        assert vehicle.apoapsis_reached

        vehicle.reset()

        assert_allclose(vehicle.position, fresh.position)
        assert_allclose(vehicle.velocity, fresh.velocity)
        assert vehicle.mass == fresh.mass
        assert vehicle.apoapsis_reached == fresh.apoapsis_reached

    def test_reset_is_repeatable(self):
        rocket = make_test_rocket()
        params = SimulationParameters(time_step=DT)

        advance(rocket, params, 300)
        rocket.reset()
        params.elapsed_time = 0.0
        advance(rocket, params, 300)
        first = rocket.position.copy()

        rocket.reset()
        params.elapsed_time = 0.0
        advance(rocket, params, 300)

        assert_allclose(rocket.position, first, rtol=1e-12)

    def test_reset_keeps_engine_settings(self):
        """Exhaust nudges and the thrust switch are controls, not state."""
        rocket = make_test_rocket()
        rocket.apply_input(Key.EXHAUST_RIGHT)
        rocket.apply_input(Key.THRUST_TOGGLE)

        rocket.reset()

        assert rocket.exhaust_velocity[0] == EXHAUST_NUDGE
        assert not rocket.thrust_enabled


class TestPause:
    """Test zero-length steps."""

    @pytest.mark.parametrize("factory", [make_test_rocket, make_test_ball])
    def test_zero_step_changes_nothing(self, factory):
        vehicle = factory()
        advance(vehicle, SimulationParameters(time_step=DT), 100)
        position = vehicle.position.copy()
        velocity = vehicle.velocity.copy()
        mass = vehicle.mass

        vehicle.update(SimulationParameters(elapsed_time=1.0, time_step=0.0))

        assert np.array_equal(vehicle.position, position)
        assert np.array_equal(vehicle.velocity, velocity)
        assert vehicle.mass == mass
