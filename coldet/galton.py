"""The Galton board solver: spheres released in batches fall through a
pyramid of fixed spheres and plates and land on the floor, where their
landing spots are counted.

Spheres in this scenario are only ever free or resting: a sphere that hits
an infinite plane (the floor) comes to rest there and is taken out of play.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from .bodies import FixedLimitedPlane, FixedPlane, FixedSphere, Sphere, State
from .collisions import (
    CollisionQueues,
    SphereFixedPlaneCollision,
    SphereFixedSphereCollision,
    SphereLimitedPlaneCollision,
    SphereSphereCollision,
    detect_initial_collisions,
    detect_new_collisions,
)
from .response import (
    _time_independent_loss,
    impact_response_sphere_sphere,
    response_sphere_fixed_limited_plane,
    response_sphere_fixed_sphere,
)
from .trajectory import compute_linear_trajectory
from .types import normalize, to_dt

RELEASE_INTERVAL = 7.0
RELEASE_BATCH = 5
DISTRIBUTION_SIZE = 50
DISTRIBUTION_OFFSET = 25


def _empty_distribution() -> list[int]:
    return [0] * DISTRIBUTION_SIZE


@dataclass(eq=False)
class GaltonScenario:
    """Everything the Galton solver reads and updates between steps."""

    spheres: list[Sphere] = field(default_factory=list)
    fixed_spheres: list[FixedSphere] = field(default_factory=list)
    fixed_planes: list[FixedPlane] = field(default_factory=list)
    limited_planes: list[FixedLimitedPlane] = field(default_factory=list)
    gravity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    pyramid_top: float = 0.0
    time: float = 0.0
    active_count: int = RELEASE_BATCH
    landed: int = 0
    attachments: dict[Sphere, FixedPlane] = field(default_factory=dict)
    trajectories: dict[Sphere, tuple[np.ndarray, np.ndarray]] = field(default_factory=dict)
    x_distribution: list[int] = field(default_factory=_empty_distribution)
    z_distribution: list[int] = field(default_factory=_empty_distribution)

    def __post_init__(self) -> None:
        self.gravity = np.asarray(self.gravity, dtype=float).copy()

    def record_landing(self, point) -> tuple[int, int] | None:
        """Count a sphere landing at ``point`` in the x and z distributions.

        Returns the bins that were incremented, or ``None`` when the point
        lies outside the counted area.
        """
        x_index = math.floor(point[0]) + DISTRIBUTION_OFFSET
        z_index = math.floor(point[2]) + DISTRIBUTION_OFFSET
        if 0 <= x_index < DISTRIBUTION_SIZE and 0 <= z_index < DISTRIBUTION_SIZE:
            self.x_distribution[x_index] += 1
            self.z_distribution[z_index] += 1
            return x_index, z_index
        return None


def rotation_axis(sphere: Sphere) -> np.ndarray:
    """Axis the sphere spins about, scaled by its radius and speed."""
    return -(sphere.radius * np.cross(sphere.velocity, sphere.rotation_normal))


def set_rotation_speed(sphere: Sphere) -> None:
    """Derive the sphere's rotation speed from its velocity."""
    sphere.rotation_speed = float(np.linalg.norm(rotation_axis(sphere))) * (math.pi / 180.0)


def _set_rotation_normal(sphere: Sphere, n) -> None:
    sphere.rotation_normal = normalize(n)


def _cache_trajectory(trajectories, sphere: Sphere, ds: np.ndarray, a: np.ndarray) -> None:
    trajectories[sphere] = (ds, a)


def simulate(
    sphere: Sphere,
    trajectories,
    simulation_dt: int,
    full_timestep: int,
    t_0: int,
) -> None:
    """Advance ``sphere`` by ``simulation_dt`` along its cached trajectory.

    The cached trajectory covers the time from the sphere's own time point
    to the end of the step; the part for ``simulation_dt`` is taken from it.
    """
    if sphere.state is State.RESTING:
        return
    remaining = to_dt((t_0 + full_timestep) - sphere.timepoint)
    if remaining <= 0.0:
        return
    scaling = to_dt(simulation_dt) / remaining
    ds, a = trajectories[sphere]
    ds = np.asarray(ds, dtype=float) * scaling
    a = np.asarray(a, dtype=float) * scaling
    angle = sphere.rotation_speed * to_dt(simulation_dt)
    sphere.frame.rotate_parent(angle, rotation_axis(sphere))
    sphere.frame.translate_parent(ds)
    if sphere.state is not State.ROLLING:
        sphere.add_acceleration(a)
    if sphere.state is not State.FREE:
        set_rotation_speed(sphere)


@dataclass
class _Step:
    scenario: GaltonScenario
    t_0: int
    timestep: int
    active: list[Sphere]
    queues: CollisionQueues = field(default_factory=CollisionQueues)

    def _remaining(self, tp: int) -> int:
        return self.timestep - (tp - self.t_0)

    def _advance(self, sphere: Sphere, tp: int) -> None:
        simulate(
            sphere, self.scenario.trajectories, tp - sphere.timepoint, self.timestep, self.t_0
        )

    def _search(self, sphere: Sphere, exclude=None) -> None:
        s = self.scenario
        for other in self.active:
            if other is not sphere:
                detect_new_collisions(
                    sphere, other, s.trajectories, self.queues, self.t_0, self.timestep
                )
        for other in (*s.fixed_planes, *s.fixed_spheres, *s.limited_planes):
            if other is not exclude:
                detect_new_collisions(
                    sphere, other, s.trajectories, self.queues, self.t_0, self.timestep
                )

    def _respond_free(self, sphere: Sphere, v: np.ndarray, normal, tp: int) -> None:
        ds, a = compute_linear_trajectory(v, self.scenario.gravity, self._remaining(tp))
        sphere.velocity = v
        _set_rotation_normal(sphere, normal)
        set_rotation_speed(sphere)
        _cache_trajectory(self.scenario.trajectories, sphere, ds, a)

    def handle_sphere_sphere(self) -> None:
        c: SphereSphereCollision = self.queues.sphere_sphere.pop()
        s1, s2 = c.first, c.second
        self._advance(s1, c.tp)
        self._advance(s2, c.tp)

        mu1, mu2 = s1.friction_coef, s2.friction_coef
        normal_1 = s1.point - s2.point
        normal_2 = s2.point - s1.point
        v1, v2 = impact_response_sphere_sphere(
            s1.point, s1.velocity, s1.mass, s2.point, s2.velocity, s2.mass
        )
        v1 = _time_independent_loss(v1, mu1, mu2)
        v2 = _time_independent_loss(v2, mu1, mu2)
        # An attached sphere is not knocked off its plane here; it stays put.
        if s1.state is State.FREE:
            self._respond_free(s1, v1, normal_1, c.tp)
        if s2.state is State.FREE:
            self._respond_free(s2, v2, normal_2, c.tp)

        s1.timepoint = c.tp
        s2.timepoint = c.tp
        self._search(s1)
        self._search(s2)

    def handle_fixed_sphere(self) -> None:
        c: SphereFixedSphereCollision = self.queues.sphere_fixed_sphere.pop()
        sphere = c.sphere
        self._advance(sphere, c.tp)
        v = response_sphere_fixed_sphere(sphere, c.fixed)
        self._respond_free(sphere, v, sphere.point - c.fixed.point, c.tp)
        sphere.timepoint = c.tp
        self._search(sphere, exclude=c.fixed)

    def handle_fixed_plane(self) -> None:
        c: SphereFixedPlaneCollision = self.queues.sphere_fixed_plane.pop()
        sphere = c.sphere
        self._advance(sphere, c.tp)
        sphere.velocity = np.zeros(3)
        sphere.state = State.RESTING
        point = sphere.point
        print(f"{point[0]:f}|{point[2]:f}")
        self.scenario.record_landing(point)
        self.scenario.attachments[sphere] = c.plane
        sphere.timepoint = c.tp
        self.scenario.landed += 1

    def handle_limited_plane(self) -> None:
        c: SphereLimitedPlaneCollision = self.queues.sphere_limited_plane.pop()
        sphere = c.sphere
        self._advance(sphere, c.tp)
        v = response_sphere_fixed_limited_plane(sphere, c.plane)
        self._respond_free(sphere, v, c.plane.normal_front, c.tp)
        sphere.timepoint = c.tp
        self._search(sphere, exclude=c.plane)

    def run(self) -> None:
        handlers = {
            SphereSphereCollision: self.handle_sphere_sphere,
            SphereFixedSphereCollision: self.handle_fixed_sphere,
            SphereFixedPlaneCollision: self.handle_fixed_plane,
            SphereLimitedPlaneCollision: self.handle_limited_plane,
        }
        self.queues.sort_and_make_unique()
        while self.queues:
            handlers[self.queues.next_kind()]()
            self.queues.sort_and_make_unique()


def solve(scenario: GaltonScenario, timestep: int, now: int) -> bool:
    """Advance the scenario by ``timestep`` nanoseconds starting at time point ``now``.

    Every ``RELEASE_INTERVAL`` seconds another batch of spheres is released.
    Returns whether every sphere has landed.
    """
    t_0 = now
    gravity = scenario.gravity

    scenario.time += to_dt(timestep)
    if scenario.time >= RELEASE_INTERVAL:
        scenario.time = 0.0
        scenario.active_count += RELEASE_BATCH
    active = scenario.spheres[: min(scenario.active_count, len(scenario.spheres))]

    for sphere in scenario.spheres:
        sphere.timepoint = t_0
        if sphere not in scenario.trajectories:
            ds, a = compute_linear_trajectory(sphere.velocity, gravity, timestep)
            _cache_trajectory(scenario.trajectories, sphere, ds, a)

    step = _Step(scenario, t_0, timestep, active)
    detect_initial_collisions(
        scenario.spheres,
        scenario.fixed_spheres,
        scenario.fixed_planes,
        scenario.limited_planes,
        scenario.trajectories,
        step.queues,
        t_0,
        timestep,
        scenario.pyramid_top,
        len(active),
    )
    step.run()

    for sphere in active:
        if sphere.state is State.RESTING:
            continue
        simulate(
            sphere,
            scenario.trajectories,
            timestep - (sphere.timepoint - t_0),
            timestep,
            t_0,
        )
        if sphere.state is State.FREE:
            ds, a = compute_linear_trajectory(sphere.velocity, gravity, timestep)
            _cache_trajectory(scenario.trajectories, sphere, ds, a)

    return scenario.landed >= len(scenario.spheres)