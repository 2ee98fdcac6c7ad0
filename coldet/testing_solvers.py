"""Simple solvers used to check scenario components visually."""

from __future__ import annotations

import math

from .types import to_dt

_AXES = (
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
    (1.0, 0.0, 1.0),
)

# Objects 0-7 spin about local axes, objects 8-11 about parent axes.
_ROTATIONS = [(axis, True) for axis in _AXES * 2] + [(axis, False) for axis in _AXES]


def passive_solver(scenario, timestep: int) -> float:
    """Leave the scenario untouched and return the step length in seconds."""
    return to_dt(timestep)


def _rotate_all(objects, angle: float, kind: str) -> None:
    if len(objects) < len(_ROTATIONS):
        raise ValueError(
            f"scenario needs at least {len(_ROTATIONS)} {kind}, got {len(objects)}"
        )
    for obj, (axis, local) in zip(objects, _ROTATIONS):
        if local:
            obj.frame.rotate_local(angle, axis)
        else:
            obj.frame.rotate_parent(angle, axis)


def rotate_specific_objects(scenario, timestep: int) -> None:
    """Spin the first twelve spheres and fixed planes at half a turn per second.

    Objects 0-7 turn about local axes x, y, z and x+z (twice over), objects
    8-11 about the same parent axes.  Raises ``ValueError`` when either list
    holds fewer than twelve objects.
    """
    angle = math.pi * to_dt(timestep)
    _rotate_all(scenario.spheres, angle, "spheres")
    _rotate_all(scenario.fixed_planes, angle, "fixed planes")