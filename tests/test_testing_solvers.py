from types import SimpleNamespace

import numpy as np
import pytest

from coldet.bodies import FixedPlane, Frame, Sphere
from coldet.testing_solvers import passive_solver, rotate_specific_objects
from coldet.types import milliseconds, seconds, vector3

AXES = [(1, 0, 0), (0, 1, 0), (0, 0, 1), (1, 0, 1)] * 3


def make_scenario(count=12):
    spheres = [Sphere(frame=Frame(origin=vector3(i, 0, 0))) for i in range(count)]
    planes = [FixedPlane(frame=Frame(origin=vector3(0, i, 0))) for i in range(count)]
    return SimpleNamespace(spheres=spheres, fixed_planes=planes)


def all_objects(scenario):
    return [*scenario.spheres, *scenario.fixed_planes]


def test_passive_solver_changes_nothing():
    scenario = make_scenario()
    before = [(o.frame.origin.copy(), o.frame.orientation.copy()) for o in all_objects(scenario)]
    assert passive_solver(scenario, seconds(1)) is None
    for obj, (origin, orientation) in zip(all_objects(scenario), before):
        assert np.array_equal(obj.frame.origin, origin)
        assert np.array_equal(obj.frame.orientation, orientation)


def test_rotation_axes_are_kept():
    scenario = make_scenario()
    rotate_specific_objects(scenario, milliseconds(300))
    for group in (scenario.spheres, scenario.fixed_planes):
        for obj, axis in zip(group, AXES):
            a = np.asarray(axis, dtype=float)
            assert np.allclose(obj.frame.orientation @ a, a)


def test_orientations_stay_orthonormal_and_origins_fixed():
    scenario = make_scenario()
    origins = [o.frame.origin.copy() for o in all_objects(scenario)]
    rotate_specific_objects(scenario, milliseconds(700))
    for obj, origin in zip(all_objects(scenario), origins):
        m = obj.frame.orientation
        assert np.allclose(m.T @ m, np.eye(3))
        assert np.linalg.det(m) == pytest.approx(1.0)
        assert np.allclose(obj.frame.origin, origin)


def test_two_seconds_is_a_full_turn():
    scenario = make_scenario()
    rotate_specific_objects(scenario, seconds(2))
    for obj in all_objects(scenario):
        assert np.allclose(obj.frame.orientation, np.eye(3))


def test_two_half_steps_equal_one_step():
    whole = make_scenario()
    halves = make_scenario()
    rotate_specific_objects(whole, seconds(1))
    rotate_specific_objects(halves, milliseconds(500))
    rotate_specific_objects(halves, milliseconds(500))
    for a, b in zip(all_objects(whole), all_objects(halves)):
        assert np.allclose(a.frame.orientation, b.frame.orientation)


def test_objects_beyond_twelve_are_untouched():
    scenario = make_scenario(count=13)
    rotate_specific_objects(scenario, seconds(1))
    assert np.array_equal(scenario.spheres[12].frame.orientation, np.eye(3))
    assert np.array_equal(scenario.fixed_planes[12].frame.orientation, np.eye(3))


def test_too_few_objects_raises():
    with pytest.raises(ValueError):
        rotate_specific_objects(make_scenario(count=11), seconds(1))