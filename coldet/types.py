"""Scalar, vector and time conventions shared by the collision code.

Vectors and points are ``numpy`` arrays of three floats.  Durations and time
points are integer nanoseconds, so arithmetic on them stays exact.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

ValueType = float
Point3 = np.ndarray
Vector3 = np.ndarray

NANOSECONDS_PER_SECOND = 1_000_000_000


def vector3(x: float, y: float, z: float) -> np.ndarray:
    """Return a three-component float vector."""
    return np.array([x, y, z], dtype=float)


def _to_nanoseconds(value: float, scale: int) -> int:
    if isinstance(value, int):
        return value * scale
    # Casting a fractional duration truncates toward zero.
    return int(value * scale)


def seconds(value: float) -> int:
    """Return a duration of ``value`` seconds in nanoseconds."""
    return _to_nanoseconds(value, NANOSECONDS_PER_SECOND)


def milliseconds(value: float) -> int:
    """Return a duration of ``value`` milliseconds in nanoseconds."""
    return _to_nanoseconds(value, 1_000_000)


def microseconds(value: float) -> int:
    """Return a duration of ``value`` microseconds in nanoseconds."""
    return _to_nanoseconds(value, 1_000)


def nanoseconds(value: float) -> int:
    """Return a duration of ``value`` nanoseconds."""
    return _to_nanoseconds(value, 1)


def to_dt(duration_ns: int) -> float:
    """Convert a duration in nanoseconds to floating point seconds."""
    return duration_ns / NANOSECONDS_PER_SECOND


def time_diff(t1: int, t0: int) -> int:
    """Return the duration from time point ``t0`` to ``t1``."""
    return t1 - t0


def normalize(v: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ``v`` scaled to unit length; a zero vector is returned unchanged."""
    arr = np.asarray(v, dtype=float)
    length = float(np.linalg.norm(arr))
    if length == 0.0:
        return arr.copy()
    return arr / length