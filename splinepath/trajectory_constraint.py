"""Velocity limits that depend on the pose and curvature along a trajectory."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from splinepath.linegular import Linegular
from splinepath.polygon import Polygon2D


class TrajectoryConstraint:
    """A velocity limit; the base constraint limits nothing."""

    def calculate_max_velocity(self, pose: Linegular, curvature: float, velocity: float) -> float:
        return velocity


def velocity_from_constraints(
    constraints: Iterable[TrajectoryConstraint],
    pose: Linegular,
    curvature: float,
    velocity: float,
) -> float:
    """The lowest velocity allowed by ``constraints``, never above ``velocity``."""
    result = velocity
    for constraint in constraints:
        result = min(result, constraint.calculate_max_velocity(pose, curvature, velocity))
    return result


@dataclass
class CentripetalAccelerationConstraint(TrajectoryConstraint):
    """Limits velocity so that v^2 * |curvature| stays within a maximum."""

    max_centripetal_acceleration: float

    def calculate_max_velocity(self, pose: Linegular, curvature: float, velocity: float) -> float:
        if abs(curvature) < 1e-6:
            return velocity
        return math.sqrt(self.max_centripetal_acceleration / abs(curvature))


@dataclass
class PolygonRegionConstraint(TrajectoryConstraint):
    """Limits velocity while the pose lies inside a polygon."""

    polygon: Polygon2D
    max_velocity: float

    def calculate_max_velocity(self, pose: Linegular, curvature: float, velocity: float) -> float:
        if self.polygon.contains_point(pose.position):
            return self.max_velocity
        return velocity