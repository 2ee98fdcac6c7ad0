"""Rigid bodies taking part in the simulation and their coordinate frames."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .types import normalize, vector3


class State(Enum):
    """Motion state of a dynamic sphere."""

    FREE = "free"
    RESTING = "resting"
    SLIDING = "sliding"
    ROLLING = "rolling"


def _rotation(angle: float, axis) -> np.ndarray | None:
    k = normalize(axis)
    if not k.any():
        return None
    x, y, z = k
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    return np.array(
        [
            [c + x * x * t, x * y * t - z * s, x * z * t + y * s],
            [y * x * t + z * s, c + y * y * t, y * z * t - x * s],
            [z * x * t - y * s, z * y * t + x * s, c + z * z * t],
        ]
    )


@dataclass(eq=False)
class Frame:
    """A rigid frame: an orientation and an origin in parent coordinates."""

    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=lambda: np.eye(3))

    def __post_init__(self) -> None:
        self.origin = np.asarray(self.origin, dtype=float).copy()
        self.orientation = np.asarray(self.orientation, dtype=float).copy()

    @property
    def matrix(self) -> np.ndarray:
        """The homogeneous 4x4 matrix of the frame."""
        m = np.eye(4)
        m[:3, :3] = self.orientation
        m[:3, 3] = self.origin
        return m

    def translate_parent(self, v) -> None:
        """Move the origin by ``v`` given in parent coordinates."""
        self.origin = self.origin + np.asarray(v, dtype=float)

    def rotate_local(self, angle: float, axis) -> None:
        """Rotate by ``angle`` radians about ``axis`` given in local coordinates.

        A zero axis leaves the frame unchanged.
        """
        r = _rotation(angle, axis)
        if r is not None:
            self.orientation = self.orientation @ r

    def rotate_parent(self, angle: float, axis) -> None:
        """Rotate by ``angle`` radians about ``axis`` given in parent coordinates.

        The origin stays in place; a zero axis leaves the frame unchanged.
        """
        r = _rotation(angle, axis)
        if r is not None:
            self.orientation = r @ self.orientation


@dataclass(eq=False)
class Sphere:
    """A dynamic sphere with velocity, mass, friction and a motion state."""

    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    radius: float = 1.0
    mass: float = 1.0
    friction_coef: float = 0.0
    state: State = State.FREE
    frame: Frame = field(default_factory=Frame)
    timepoint: int = 0
    rotation_normal: np.ndarray = field(default_factory=lambda: vector3(0.0, 1.0, 0.0))
    rotation_speed: float = 0.0

    def __post_init__(self) -> None:
        self.velocity = np.asarray(self.velocity, dtype=float).copy()
        self.rotation_normal = np.asarray(self.rotation_normal, dtype=float).copy()

    @property
    def point(self) -> np.ndarray:
        """Centre of the sphere in parent coordinates."""
        return self.frame.origin.copy()

    def add_acceleration(self, a) -> None:
        """Add a velocity change to the sphere's velocity."""
        self.velocity = self.velocity + np.asarray(a, dtype=float)


@dataclass(eq=False)
class FixedSphere:
    """A sphere that never moves."""

    radius: float = 1.0
    friction_coef: float = 0.0
    frame: Frame = field(default_factory=Frame)

    @property
    def point(self) -> np.ndarray:
        """Centre of the sphere in parent coordinates."""
        return self.frame.origin.copy()

    @property
    def velocity(self) -> np.ndarray:
        """Always the zero vector."""
        return np.zeros(3)


@dataclass(eq=False)
class FixedPlane:
    """An infinite fixed plane through the frame origin."""

    normal_local: np.ndarray = field(default_factory=lambda: vector3(0.0, 1.0, 0.0))
    friction_coef: float = 0.0
    frame: Frame = field(default_factory=Frame)

    def __post_init__(self) -> None:
        self.normal_local = np.asarray(self.normal_local, dtype=float).copy()

    @property
    def point(self) -> np.ndarray:
        """A point on the plane in parent coordinates."""
        return self.frame.origin.copy()

    @property
    def normal(self) -> np.ndarray:
        """The plane normal in parent coordinates."""
        return self.frame.orientation @ self.normal_local


@dataclass(eq=False)
class FixedLimitedPlane:
    """A fixed rectangular plate spanned by two axes from a corner point."""

    point_local: np.ndarray = field(default_factory=lambda: np.zeros(3))
    u_axis_local: np.ndarray = field(default_factory=lambda: vector3(1.0, 0.0, 0.0))
    v_axis_local: np.ndarray = field(default_factory=lambda: vector3(0.0, 0.0, 1.0))
    thickness: float = 0.01
    friction_coef: float = 0.0
    frame: Frame = field(default_factory=Frame)

    def __post_init__(self) -> None:
        self.point_local = np.asarray(self.point_local, dtype=float).copy()
        self.u_axis_local = np.asarray(self.u_axis_local, dtype=float).copy()
        self.v_axis_local = np.asarray(self.v_axis_local, dtype=float).copy()

    @property
    def point(self) -> np.ndarray:
        """The corner point in parent coordinates."""
        return self.frame.orientation @ self.point_local + self.frame.origin

    @property
    def u_axis(self) -> np.ndarray:
        """The first spanning axis in parent coordinates."""
        return self.frame.orientation @ self.u_axis_local

    @property
    def v_axis(self) -> np.ndarray:
        """The second spanning axis in parent coordinates."""
        return self.frame.orientation @ self.v_axis_local

    @property
    def normal_front(self) -> np.ndarray:
        """Unit normal on the front side, along ``u x v``."""
        return normalize(np.cross(self.u_axis, self.v_axis))

    @property
    def normal_back(self) -> np.ndarray:
        """Unit normal on the back side."""
        return -self.normal_front