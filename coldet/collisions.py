"""Pending collisions within one timestep and how they are found.

Collisions are kept in one queue per kind.  Each queue is kept sorted with
the latest time point first, so the earliest collision is at its end and can
be popped cheaply.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

import numpy as np

from .bodies import FixedLimitedPlane, FixedPlane, FixedSphere, Sphere, State
from .detection import (
    detect_sphere_fixed_limited_plane,
    detect_sphere_fixed_plane,
    detect_sphere_fixed_sphere,
    detect_sphere_sphere,
)

Trajectories = Mapping[Sphere, tuple[np.ndarray, np.ndarray]]


@dataclass
class SphereSphereCollision:
    """Two dynamic spheres meeting at time point ``tp`` (nanoseconds)."""

    tp: int
    first: Sphere
    second: Sphere


@dataclass
class SphereFixedSphereCollision:
    """A dynamic sphere hitting a fixed sphere at time point ``tp``."""

    tp: int
    sphere: Sphere
    fixed: FixedSphere


@dataclass
class SphereFixedPlaneCollision:
    """A dynamic sphere hitting an infinite fixed plane at time point ``tp``."""

    tp: int
    sphere: Sphere
    plane: FixedPlane


@dataclass
class SphereLimitedPlaneCollision:
    """A dynamic sphere hitting a limited plate at time point ``tp``."""

    tp: int
    sphere: Sphere
    plane: FixedLimitedPlane


def _sorted_unique(collisions: list, key: Callable[[object], Hashable]) -> list:
    """Sort latest first and keep only the earliest collision per key."""
    ordered = sorted(collisions, key=lambda c: c.tp, reverse=True)
    seen: set = set()
    kept_earliest_first = []
    for collision in reversed(ordered):
        k = key(collision)
        if k in seen:
            continue
        seen.add(k)
        kept_earliest_first.append(collision)
    kept_earliest_first.reverse()
    return kept_earliest_first


@dataclass
class CollisionQueues:
    """The pending collisions of a timestep, one list per kind."""

    sphere_sphere: list[SphereSphereCollision] = field(default_factory=list)
    sphere_fixed_sphere: list[SphereFixedSphereCollision] = field(default_factory=list)
    sphere_fixed_plane: list[SphereFixedPlaneCollision] = field(default_factory=list)
    sphere_limited_plane: list[SphereLimitedPlaneCollision] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(
            self.sphere_sphere
            or self.sphere_fixed_sphere
            or self.sphere_fixed_plane
            or self.sphere_limited_plane
        )

    def sort_and_make_unique(self) -> None:
        """Sort every queue latest first and drop all but the earliest
        collision of each sphere (or each pair of spheres)."""
        self.sphere_fixed_plane = _sorted_unique(self.sphere_fixed_plane, lambda c: c.sphere)
        self.sphere_sphere = _sorted_unique(
            self.sphere_sphere, lambda c: frozenset((c.first, c.second))
        )
        self.sphere_fixed_sphere = _sorted_unique(self.sphere_fixed_sphere, lambda c: c.sphere)
        self.sphere_limited_plane = _sorted_unique(self.sphere_limited_plane, lambda c: c.sphere)

    def _fronts(self) -> Iterable[tuple[type, list]]:
        yield SphereSphereCollision, self.sphere_sphere
        yield SphereFixedSphereCollision, self.sphere_fixed_sphere
        yield SphereFixedPlaneCollision, self.sphere_fixed_plane
        yield SphereLimitedPlaneCollision, self.sphere_limited_plane

    def next_kind(self) -> type | None:
        """Return the collision class of the earliest pending collision.

        Queues must be sorted.  Returns ``None`` when nothing is pending; on
        equal time points the kinds are preferred in the order sphere-sphere,
        sphere-fixed sphere, sphere-plane, sphere-limited plane.
        """
        best_kind = None
        best_tp = None
        for kind, queue in self._fronts():
            if queue and (best_tp is None or queue[-1].tp < best_tp):
                best_kind, best_tp = kind, queue[-1].tp
        return best_kind


def _scaled(x: float, duration: int) -> int:
    # A fractional duration cast to integer nanoseconds truncates.
    return int(x * duration)


def detect_initial_collisions(
    spheres: Sequence[Sphere],
    fixed_spheres: Iterable[FixedSphere],
    fixed_planes: Iterable[FixedPlane],
    limited_planes: Iterable[FixedLimitedPlane],
    trajectories: Trajectories,
    queues: CollisionQueues,
    t_0: int,
    timestep: int,
    pyramid_top: float,
    active_count: int,
) -> None:
    """Find the collisions of the first ``active_count`` spheres over a whole step.

    Fixed spheres are only checked for spheres below ``pyramid_top`` plus
    their radius.
    """
    active = spheres[:active_count]
    fixed_spheres = list(fixed_spheres)
    fixed_planes = list(fixed_planes)
    limited_planes = list(limited_planes)

    for sphere in active:
        if sphere.state is State.RESTING:
            continue

        for other in active:
            if other.state is State.RESTING or other is sphere:
                continue
            x = detect_sphere_sphere(sphere, other, trajectories)
            if x is not None:
                queues.sphere_sphere.append(
                    SphereSphereCollision(t_0 + _scaled(x, timestep), sphere, other)
                )

        for fixed in fixed_spheres:
            if sphere.point[1] < pyramid_top + sphere.radius:
                x = detect_sphere_fixed_sphere(sphere, fixed, trajectories)
                if x is not None:
                    queues.sphere_fixed_sphere.append(
                        SphereFixedSphereCollision(t_0 + _scaled(x, timestep), sphere, fixed)
                    )

        for plane in fixed_planes:
            x = detect_sphere_fixed_plane(sphere, plane, trajectories)
            if x is not None:
                queues.sphere_fixed_plane.append(
                    SphereFixedPlaneCollision(t_0 + _scaled(x, timestep), sphere, plane)
                )

        for plate in limited_planes:
            hit = detect_sphere_fixed_limited_plane(sphere, plate, trajectories)
            if hit is not None:
                x, _from_side = hit
                queues.sphere_limited_plane.append(
                    SphereLimitedPlaneCollision(t_0 + _scaled(x, timestep), sphere, plate)
                )


def detect_new_collisions(
    sphere: Sphere,
    other: Sphere | FixedSphere | FixedPlane | FixedLimitedPlane,
    trajectories: Trajectories,
    queues: CollisionQueues,
    t_0: int,
    timestep: int,
) -> None:
    """Find a collision of ``sphere`` with ``other`` in the rest of the step.

    Time is counted from the sphere's own time point.  A sphere-sphere
    collision is only queued when it falls no earlier than both spheres'
    time points and before the end of the step.
    """
    remaining = timestep - (sphere.timepoint - t_0)

    if isinstance(other, Sphere):
        x = detect_sphere_sphere(sphere, other, trajectories)
        if x is None:
            return
        tp = sphere.timepoint + _scaled(x, remaining)
        if max(sphere.timepoint, other.timepoint) <= tp < t_0 + timestep:
            queues.sphere_sphere.append(SphereSphereCollision(tp, sphere, other))
    elif isinstance(other, FixedSphere):
        x = detect_sphere_fixed_sphere(sphere, other, trajectories)
        if x is not None:
            tp = sphere.timepoint + _scaled(x, remaining)
            queues.sphere_fixed_sphere.append(SphereFixedSphereCollision(tp, sphere, other))
    elif isinstance(other, FixedPlane):
        x = detect_sphere_fixed_plane(sphere, other, trajectories)
        if x is not None:
            tp = sphere.timepoint + _scaled(x, remaining)
            queues.sphere_fixed_plane.append(SphereFixedPlaneCollision(tp, sphere, other))
    elif isinstance(other, FixedLimitedPlane):
        hit = detect_sphere_fixed_limited_plane(sphere, other, trajectories)
        if hit is not None:
            x, _from_side = hit
            tp = sphere.timepoint + _scaled(x, remaining)
            queues.sphere_limited_plane.append(SphereLimitedPlaneCollision(tp, sphere, other))
    else:
        raise TypeError(f"cannot detect collisions with {type(other).__name__}")