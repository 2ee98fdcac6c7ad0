import numpy as np
import pytest

from coldet.bodies import FixedLimitedPlane, FixedPlane, FixedSphere, Frame, Sphere, State
from coldet.galton import (
    DISTRIBUTION_OFFSET,
    RELEASE_BATCH,
    GaltonScenario,
    rotation_axis,
    set_rotation_speed,
    simulate,
    solve,
)
from coldet.types import seconds, vector3

T0 = 0


def make_sphere(position, velocity, radius=1.0):
    return Sphere(velocity=vector3(*velocity), radius=radius, frame=Frame(origin=vector3(*position)))


def test_record_landing_counts_bins():
    scenario = GaltonScenario()
    bins = scenario.record_landing(vector3(0.5, 0.0, 0.5))
    assert bins == (DISTRIBUTION_OFFSET, DISTRIBUTION_OFFSET)
    assert scenario.x_distribution[DISTRIBUTION_OFFSET] == 1
    assert scenario.z_distribution[DISTRIBUTION_OFFSET] == 1
    assert sum(scenario.x_distribution) == 1


def test_record_landing_outside_is_ignored():
    scenario = GaltonScenario()
    assert scenario.record_landing(vector3(100.0, 0.0, 0.0)) is None
    assert scenario.record_landing(vector3(0.0, 0.0, -100.0)) is None
    assert sum(scenario.x_distribution) == 0
    assert sum(scenario.z_distribution) == 0


def test_rotation_axis_is_orthogonal_to_velocity_and_normal():
    sphere = make_sphere((0, 0, 0), (3.0, 0.0, 1.0), radius=2.0)
    axis = rotation_axis(sphere)
    assert np.dot(axis, sphere.velocity) == pytest.approx(0.0)
    assert np.dot(axis, sphere.rotation_normal) == pytest.approx(0.0)


def test_rotation_speed_scales_with_velocity():
    slow = make_sphere((0, 0, 0), (1.0, 0.0, 0.0))
    fast = make_sphere((0, 0, 0), (2.0, 0.0, 0.0))
    set_rotation_speed(slow)
    set_rotation_speed(fast)
    assert slow.rotation_speed > 0.0
    assert fast.rotation_speed == pytest.approx(2.0 * slow.rotation_speed)


def test_simulate_full_step_applies_whole_trajectory():
    sphere = make_sphere((0, 0, 0), (0, 0, 0))
    sphere.timepoint = T0
    ds = vector3(1.0, 2.0, 3.0)
    a = vector3(0.5, 0.0, -0.5)
    trajectories = {sphere: (ds, a)}
    simulate(sphere, trajectories, seconds(1), seconds(1), T0)
    assert np.allclose(sphere.point, ds)
    assert np.allclose(sphere.velocity, a)


def test_simulate_skips_resting_sphere():
    sphere = make_sphere((1, 1, 1), (0, 0, 0))
    sphere.state = State.RESTING
    trajectories = {sphere: (vector3(5.0, 5.0, 5.0), vector3(1.0, 1.0, 1.0))}
    simulate(sphere, trajectories, seconds(1), seconds(1), T0)
    assert np.allclose(sphere.point, vector3(1, 1, 1))
    assert np.allclose(sphere.velocity, np.zeros(3))


def test_free_flight_without_collisions():
    sphere = make_sphere((0, 0, 0), (1.0, 0.0, 0.0))
    scenario = GaltonScenario(spheres=[sphere])
    done = solve(scenario, seconds(1), T0)
    assert done is False
    assert np.allclose(sphere.point, vector3(1.0, 0.0, 0.0))
    assert np.allclose(sphere.velocity, vector3(1.0, 0.0, 0.0))


def test_inactive_spheres_stay_put():
    sphere = make_sphere((0, 0, 0), (1.0, 0.0, 0.0))
    scenario = GaltonScenario(spheres=[sphere], active_count=0)
    solve(scenario, seconds(1), T0)
    assert np.allclose(sphere.point, np.zeros(3))
    assert sphere.timepoint == T0


def test_release_timer_adds_batch():
    scenario = GaltonScenario(time=6.5, active_count=0)
    solve(scenario, seconds(1), T0)
    assert scenario.time == 0.0
    assert scenario.active_count == RELEASE_BATCH


def test_empty_scenario_is_done():
    assert solve(GaltonScenario(), seconds(1), T0) is True


def test_sphere_lands_on_floor(capsys):
    sphere = make_sphere((0.0, 1.5, 0.0), (0.0, -10.0, 0.0))
    floor = FixedPlane(normal_local=vector3(0.0, 1.0, 0.0))
    scenario = GaltonScenario(
        spheres=[sphere], fixed_planes=[floor], gravity=vector3(0.0, -10.0, 0.0)
    )
    done = solve(scenario, seconds(1), T0)
    assert done is True
    assert sphere.state is State.RESTING
    assert np.allclose(sphere.velocity, np.zeros(3))
    assert sphere.point[1] == pytest.approx(1.0, abs=1e-6)
    assert scenario.attachments[sphere] is floor
    assert scenario.landed == 1
    assert scenario.x_distribution[DISTRIBUTION_OFFSET] == 1
    assert scenario.z_distribution[DISTRIBUTION_OFFSET] == 1
    assert capsys.readouterr().out == "0.000000|0.000000\n"


def test_head_on_spheres_swap_velocities():
    s1 = make_sphere((-2.0, 0.0, 0.0), (2.0, 0.0, 0.0))
    s2 = make_sphere((2.0, 0.0, 0.0), (-2.0, 0.0, 0.0))
    scenario = GaltonScenario(spheres=[s1, s2])
    solve(scenario, seconds(1), T0)
    assert np.allclose(s1.velocity, vector3(-2.0, 0.0, 0.0))
    assert np.allclose(s2.velocity, vector3(2.0, 0.0, 0.0))
    assert np.allclose(s1.point, vector3(-2.0, 0.0, 0.0))
    assert np.allclose(s2.point, vector3(2.0, 0.0, 0.0))
    assert np.allclose(s1.velocity * s1.mass + s2.velocity * s2.mass, np.zeros(3))


def test_bounce_off_fixed_sphere():
    sphere = make_sphere((0.0, 3.0, 0.0), (0.0, -2.0, 0.0))
    peg = FixedSphere(radius=1.0)
    scenario = GaltonScenario(spheres=[sphere], fixed_spheres=[peg], pyramid_top=10.0)
    solve(scenario, seconds(1), T0)
    assert np.allclose(sphere.velocity, vector3(0.0, 2.0, 0.0))
    assert np.allclose(sphere.point, vector3(0.0, 3.0, 0.0))


def test_fixed_sphere_ignored_above_pyramid():
    sphere = make_sphere((0.0, 3.0, 0.0), (0.0, -2.0, 0.0))
    peg = FixedSphere(radius=1.0)
    scenario = GaltonScenario(spheres=[sphere], fixed_spheres=[peg], pyramid_top=-10.0)
    solve(scenario, seconds(1), T0)
    assert np.allclose(sphere.velocity, vector3(0.0, -2.0, 0.0))
    assert np.allclose(sphere.point, vector3(0.0, 1.0, 0.0))


def test_bounce_off_limited_plane():
    sphere = make_sphere((0.0, 3.0, 0.0), (0.0, -4.0, 0.0))
    plate = FixedLimitedPlane(
        point_local=vector3(-1.0, 0.0, -1.0),
        u_axis_local=vector3(0.0, 0.0, 2.0),
        v_axis_local=vector3(2.0, 0.0, 0.0),
    )
    scenario = GaltonScenario(spheres=[sphere], limited_planes=[plate])
    solve(scenario, seconds(1), T0)
    assert np.allclose(sphere.velocity, vector3(0.0, 4.0, 0.0))
    assert np.allclose(sphere.point, vector3(0.0, 3.0, 0.0))
    assert sphere.state is State.FREE