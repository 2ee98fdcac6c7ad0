"""Linear trajectories of spheres over a timestep."""

from __future__ import annotations

import numpy as np

from .types import normalize, to_dt


def compute_linear_trajectory(velocity, force, timestep: int) -> tuple[np.ndarray, np.ndarray]:
    """Return the displacement and velocity change over ``timestep`` nanoseconds."""
    v = np.asarray(velocity, dtype=float)
    f = np.asarray(force, dtype=float)
    dt = to_dt(timestep)
    a = f * dt
    ds = (v + 0.5 * a) * dt
    return ds, a


def compute_rolling_linear_trajectory(
    velocity, acceleration, timestep: int
) -> tuple[np.ndarray, np.ndarray]:
    """Return the displacement and velocity change of a rolling sphere."""
    v = np.asarray(velocity, dtype=float)
    a = np.asarray(acceleration, dtype=float)
    dt = to_dt(timestep)
    ds = (v + 0.5 * a * dt) * dt
    return ds, a * dt


def parallel_acceleration(a, n) -> np.ndarray:
    """Remove from ``a`` its component along the plane normal ``n``."""
    a = np.asarray(a, dtype=float)
    n = np.asarray(n, dtype=float)
    inner = float(np.dot(normalize(n), a))
    if inner == 0.0:
        return a.copy()
    return a - n * inner


def parallel_ds(ds, n) -> np.ndarray:
    """Return the displacement ``ds`` turned into the plane with normal ``n``."""
    ds = np.asarray(ds, dtype=float)
    n = np.asarray(n, dtype=float)
    ortho = np.cross(ds, n)
    ds_prime = np.cross(n, ortho)
    return normalize(ds_prime) * float(np.dot(ds, ds_prime))