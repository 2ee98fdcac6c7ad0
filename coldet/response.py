"""Velocities of spheres after impacts with planes and other spheres."""

from __future__ import annotations

import numpy as np

from .bodies import FixedLimitedPlane, FixedSphere, Sphere, State
from .types import normalize


def _time_independent_loss(v: np.ndarray, mu1: float, mu2: float) -> np.ndarray:
    """Scale ``v`` by what is left after the friction between two surfaces."""
    return v * max(0.0, 1.0 - mu1 * mu2)


def impact_response_sphere_fixed_plane(v, n) -> np.ndarray:
    """Reflect velocity ``v`` in the plane with normal ``n``."""
    v = np.asarray(v, dtype=float)
    n_norm = normalize(n)
    return v - 2.0 * float(np.dot(v, n_norm)) * n_norm


def impact_response_sphere_sphere(p1, v1, m1: float, p2, v2, m2: float) -> tuple[np.ndarray, np.ndarray]:
    """Return the velocities of two spheres after an elastic impact."""
    v1 = np.asarray(v1, dtype=float)
    v2 = np.asarray(v2, dtype=float)
    d = normalize(np.asarray(p2, dtype=float) - np.asarray(p1, dtype=float))
    v1_d = float(np.dot(v1, d)) * d
    v2_d = float(np.dot(v2, d)) * d
    total = m1 + m2
    v1_prime_d = ((m1 - m2) / total) * v1_d + ((2.0 * m2) / total) * v2_d
    v2_prime_d = ((m2 - m1) / total) * v2_d + ((2.0 * m1) / total) * v1_d
    return (v1 - v1_d) + v1_prime_d, (v2 - v2_d) + v2_prime_d


def parallel_velocity(v, n) -> np.ndarray:
    """Remove from ``v`` its component along ``n``.

    ``v`` is returned unchanged when it is orthogonal to ``n`` or points
    exactly along it.
    """
    v = np.asarray(v, dtype=float)
    n = np.asarray(n, dtype=float)
    n_normalized = normalize(n)
    inner = float(np.dot(n_normalized, v))
    same_direction = bool(np.all(n_normalized - normalize(v) == 0.0))
    if inner == 0.0 or same_direction:
        return v.copy()
    return v - n * inner


def state_response_sphere_fixed_plane(sphere: Sphere, n) -> np.ndarray:
    """Reflect the sphere's velocity in a plane, keeping attached spheres in it."""
    n_norm = normalize(n)
    v = impact_response_sphere_fixed_plane(sphere.velocity, n_norm)
    return v if sphere.state is State.FREE else parallel_velocity(v, n_norm)


def response_sphere_fixed_limited_plane(sphere: Sphere, plane: FixedLimitedPlane) -> np.ndarray:
    """Velocity of ``sphere`` after hitting the front of a limited plate."""
    n = normalize(plane.normal_front)
    v = state_response_sphere_fixed_plane(sphere, n)
    return _time_independent_loss(v, sphere.friction_coef, plane.friction_coef)


def response_sphere_fixed_sphere(sphere: Sphere, fixed: FixedSphere) -> np.ndarray:
    """Velocity of ``sphere`` after bouncing off a fixed sphere."""
    n_norm = normalize(sphere.point - fixed.point)
    v = sphere.velocity
    response = v - 2.0 * float(np.dot(v, n_norm)) * n_norm
    return _time_independent_loss(response, sphere.friction_coef, fixed.friction_coef)