"""Read-only views of scenarios for display: a sorted list of scenario
names and per-object snapshots of what a fixture holds."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np


class ScenarioList:
    """A live, name-ordered list view over a mapping of named scenarios.

    The view keeps a reference to the mapping, so scenarios added to it later
    show up without rebuilding the view.
    """

    OBJECT_NAME_ROLE = 0x0100

    def __init__(self, scenarios: Mapping[str, Any]) -> None:
        self._scenarios = scenarios

    def _names(self) -> list[str]:
        return sorted(self._scenarios)

    def row_count(self) -> int:
        """Number of scenarios in the list."""
        return len(self._scenarios)

    def data(self, row: int) -> str | None:
        """Name of the scenario at ``row``, or ``None`` for a row not in the list."""
        names = self._names()
        if not 0 <= row < len(names):
            return None
        return names[row]

    def role_names(self) -> dict[int, str]:
        """The data roles the list provides, keyed by role number."""
        return {self.OBJECT_NAME_ROLE: "scenario_name"}


@dataclass(frozen=True)
class SphereData:
    """Snapshot of a sphere: frame matrix, velocity, radius and whether it is fixed."""

    frame: np.ndarray
    velocity: np.ndarray
    radius: float
    is_fixed: bool


@dataclass(frozen=True)
class FixedPlaneData:
    """Snapshot of an infinite fixed plane."""

    frame: np.ndarray
    point: np.ndarray
    normal: np.ndarray


@dataclass(frozen=True)
class LimitedPlaneData:
    """Snapshot of a limited plate in its local coordinates."""

    frame: np.ndarray
    point: np.ndarray
    u_axis: np.ndarray
    v_axis: np.ndarray
    thickness: float


def _has_spheres(fixture) -> bool:
    return hasattr(fixture, "spheres")


def _has_all_spheres(fixture) -> bool:
    return _has_spheres(fixture) and hasattr(fixture, "fixed_spheres")


def number_of_spheres(fixture) -> int:
    """Dynamic plus fixed spheres; 0 unless the fixture holds both kinds."""
    if not _has_all_spheres(fixture):
        return 0
    return len(fixture.spheres) + len(fixture.fixed_spheres)


def number_of_fixed_planes(fixture) -> int:
    """Number of infinite fixed planes, 0 when the fixture has none."""
    planes = getattr(fixture, "fixed_planes", None)
    return 0 if planes is None else len(planes)


def number_of_fixed_limited_planes(fixture) -> int:
    """Number of limited plates, 0 when the fixture has none."""
    plates = getattr(fixture, "limited_planes", None)
    return 0 if plates is None else len(plates)


def _sphere_snapshot(sphere, is_fixed: bool) -> SphereData:
    return SphereData(
        frame=sphere.frame.matrix,
        velocity=np.asarray(sphere.velocity, dtype=float).copy(),
        radius=sphere.radius,
        is_fixed=is_fixed,
    )


def sphere_data(fixture, index: int) -> SphereData | None:
    """Snapshot of sphere ``index``.

    Indices past the dynamic spheres continue into the fixed spheres when the
    fixture has them.  Returns ``None`` for a fixture without spheres.
    """
    if not _has_spheres(fixture):
        return None
    spheres = fixture.spheres
    if _has_all_spheres(fixture) and index >= len(spheres):
        return _sphere_snapshot(fixture.fixed_spheres[index - len(spheres)], True)
    return _sphere_snapshot(spheres[index], False)


def fixed_plane_data(fixture, index: int) -> FixedPlaneData | None:
    """Snapshot of fixed plane ``index``, or ``None`` for a fixture without planes."""
    planes = getattr(fixture, "fixed_planes", None)
    if planes is None:
        return None
    plane = planes[index]
    return FixedPlaneData(frame=plane.frame.matrix, point=plane.point, normal=plane.normal)


def fixed_limited_plane_data(fixture, index: int) -> LimitedPlaneData | None:
    """Snapshot of limited plate ``index``, or ``None`` for a fixture without plates."""
    plates = getattr(fixture, "limited_planes", None)
    if plates is None:
        return None
    plate = plates[index]
    return LimitedPlaneData(
        frame=plate.frame.matrix,
        point=plate.point_local.copy(),
        u_axis=plate.u_axis_local.copy(),
        v_axis=plate.v_axis_local.copy(),
        thickness=plate.thickness,
    )