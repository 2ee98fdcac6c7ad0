"""Surface geometry of a limited plate drawn as a thin slab."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .types import normalize, vector3

Face = tuple[np.ndarray, np.ndarray, np.ndarray]


def slab_faces(p, u, v, thickness: float) -> list[Face]:
    """Return the six faces of a slab as ``(origin, u, v)`` parallelograms.

    The slab is centred on the plate spanned by ``u`` and ``v`` from ``p``
    and extends ``thickness / 2`` to each side along ``u x v``.
    """
    p = np.asarray(p, dtype=float)
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    n = normalize(np.cross(u, v))
    depth = n * thickness

    o_0 = p + depth * 0.5
    return [
        (o_0, u.copy(), v.copy()),
        (o_0 + u - depth, -u, v.copy()),
        (o_0 + v - depth, depth.copy(), u.copy()),
        (o_0 + u - depth, depth.copy(), -u),
        (o_0 - depth, depth.copy(), v.copy()),
        (o_0 + u, -depth, v.copy()),
    ]


def _face_grid(face: Face, samples: int) -> np.ndarray:
    origin, u, v = face
    s = np.linspace(0.0, 1.0, samples)
    su, sv = np.meshgrid(s, s, indexing="ij")
    return origin + su[..., None] * u + sv[..., None] * v


@dataclass(eq=False)
class LimitedPlaneGeometry:
    """A limited plate with a corner point, two spanning axes and a thickness."""

    p: np.ndarray = field(default_factory=lambda: vector3(0.0, 0.0, 0.0))
    u: np.ndarray = field(default_factory=lambda: vector3(1.0, 0.0, 0.0))
    v: np.ndarray = field(default_factory=lambda: vector3(0.0, 0.0, 1.0))
    thickness: float = 0.01

    def __post_init__(self) -> None:
        self.p = np.asarray(self.p, dtype=float).copy()
        self.u = np.asarray(self.u, dtype=float).copy()
        self.v = np.asarray(self.v, dtype=float).copy()

    def faces(self) -> list[Face]:
        """The six faces of the slab."""
        return slab_faces(self.p, self.u, self.v, self.thickness)

    def bounds(self, samples: int = 10) -> tuple[np.ndarray, np.ndarray]:
        """Axis-aligned bounds of the faces sampled on a ``samples`` x ``samples`` grid.

        Raises ``ValueError`` when fewer than two samples per direction are asked for.
        """
        if samples < 2:
            raise ValueError(f"need at least 2 samples per direction, got {samples}")
        points = np.concatenate(
            [_face_grid(face, samples).reshape(-1, 3) for face in self.faces()]
        )
        return points.min(axis=0), points.max(axis=0)