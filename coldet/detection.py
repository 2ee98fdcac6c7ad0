"""Collision detection between spheres, fixed planes and fixed spheres.

Every detector returns the fraction ``x`` of the remaining step at which
contact happens, with ``0 < x <= 1``, or ``None`` when there is no
collision within the step.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

from .bodies import FixedLimitedPlane, FixedPlane, FixedSphere, Sphere, State
from .trajectory import compute_linear_trajectory
from .types import normalize, time_diff

EPSILON = 1e-6

Trajectories = Mapping[Sphere, tuple[np.ndarray, np.ndarray]]


def _within_step(x: float) -> float | None:
    return x if 0.0 < x <= 1.0 else None


def _plane_fraction(d: np.ndarray, ds: np.ndarray, n: np.ndarray) -> float | None:
    inner_ds_n = float(np.dot(ds, n))
    if abs(inner_ds_n) < EPSILON:
        return None
    return float(np.dot(d, n)) / inner_ds_n


def _sphere_fraction(q: np.ndarray, r: np.ndarray, radius_sum: float) -> float | None:
    a = float(np.dot(r, r))
    b = 2.0 * float(np.dot(q, r))
    c = float(np.dot(q, q)) - radius_sum**2
    discriminant = b * b - 4.0 * a * c
    if a < EPSILON or discriminant < 0.0:
        return None
    return _within_step((-b - discriminant**0.5) / (2.0 * a))


def _displacement(sphere: Sphere, trajectories: Trajectories) -> np.ndarray:
    if sphere.state is State.RESTING:
        return np.zeros(3)
    return np.asarray(trajectories[sphere][0], dtype=float)


def detect_collision_sphere_fixed_plane(
    tc: int, p, r: float, v, q, n, force, t_0: int, timestep: int
) -> float | None:
    """Detect a sphere at ``p`` (valid from time ``tc``) hitting the plane through ``q``."""
    p = np.asarray(p, dtype=float)
    q = np.asarray(q, dtype=float)
    n = np.asarray(n, dtype=float)
    d = (q + r * normalize(n)) - p
    remaining = timestep - time_diff(tc, t_0)
    ds, _ = compute_linear_trajectory(v, force, remaining)
    x = _plane_fraction(d, ds, n)
    return None if x is None else _within_step(x)


def detect_collision_sphere_sphere(
    t1: int, p1, r1: float, v1, t2: int, p2, r2: float, v2, force, t_0: int, timestep: int
) -> float | None:
    """Detect two moving spheres touching within the rest of the step."""
    ds1, _ = compute_linear_trajectory(v1, force, timestep - time_diff(t1, t_0))
    ds2, _ = compute_linear_trajectory(v2, force, timestep - time_diff(t2, t_0))
    q = np.asarray(p2, dtype=float) - np.asarray(p1, dtype=float)
    return _sphere_fraction(q, ds2 - ds1, r1 + r2)


def detect_sphere_fixed_plane(
    sphere: Sphere, plane: FixedPlane, trajectories: Trajectories
) -> float | None:
    """Detect ``sphere`` hitting an infinite fixed plane along its cached trajectory."""
    n = plane.normal
    d = (plane.point + sphere.radius * normalize(n)) - sphere.point
    x = _plane_fraction(d, _displacement(sphere, trajectories), n)
    return None if x is None else _within_step(x)


def detect_sphere_fixed_limited_plane(
    sphere: Sphere, plane: FixedLimitedPlane, trajectories: Trajectories
) -> tuple[float, bool] | None:
    """Detect ``sphere`` hitting a limited plate.

    Returns the step fraction and whether the hit comes from the side.
    """
    n = normalize(plane.normal_front)
    ds = _displacement(sphere, trajectories)
    d_init = (plane.point + sphere.radius * n) - sphere.point
    x = _plane_fraction(d_init, ds, n)
    if x is None or not 0.0 < x <= 1.0:
        return None

    d = plane.point - sphere.point
    u = plane.u_axis_local
    v = plane.v_axis_local
    u_hat = -float(np.dot(d, normalize(u))) / float(np.linalg.norm(u))
    v_hat = -float(np.dot(d, normalize(v))) / float(np.linalg.norm(v))
    inside = 0.0 <= u_hat <= 1.0 and 0.0 <= v_hat <= 1.0
    if not inside:
        return None

    from_side = float(np.dot(ds, plane.normal_front)) >= 0.0 and float(
        np.dot(ds, plane.normal_back)
    ) >= 0.0
    return x, from_side


def detect_sphere_sphere(s1: Sphere, s2: Sphere, trajectories: Trajectories) -> float | None:
    """Detect two dynamic spheres touching along their cached trajectories."""
    ds1 = _displacement(s1, trajectories)
    ds2 = _displacement(s2, trajectories)
    return _sphere_fraction(s2.point - s1.point, ds2 - ds1, s1.radius + s2.radius)


def detect_sphere_fixed_sphere(
    sphere: Sphere, fixed: FixedSphere, trajectories: Trajectories
) -> float | None:
    """Detect a dynamic sphere hitting a fixed sphere."""
    ds = np.asarray(trajectories[sphere][0], dtype=float)
    return _sphere_fraction(fixed.point - sphere.point, -ds, sphere.radius + fixed.radius)