"""Curvature sampled along a path, with lookup and smooth-maximum smoothing."""

from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass

from splinepath.general import range_map, signum

_LOOKUP_TOLERANCE = 1e-5


@dataclass
class CurvaturePoint:
    """Curvature of the path at a distance along it."""

    distance: float
    curvature: float

    def max_smooth(self, previous_point: "CurvaturePoint", epsilon: float) -> None:
        """Raise this point's curvature towards a neighbour of larger magnitude.

        Uses a smooth maximum of the two curvatures; only applies when both
        have the same sign and this point's magnitude is the smaller one.
        """
        d1, d2 = previous_point.distance, self.distance
        k1, k2 = previous_point.curvature, self.curvature
        sign1 = signum(k1)
        if abs(k2) < abs(k1) and sign1 == signum(k2):
            squared_gap = (k1 - k2) ** 2
            e = min(epsilon * (d1 - d2) ** 2, squared_gap)
            self.curvature = (k1 + k2 + sign1 * math.sqrt(squared_gap - e)) / 2


class CurvatureSequence:
    """Curvature points ordered by distance, linearly interpolated."""

    def __init__(self) -> None:
        self.points: list[CurvaturePoint] = []
        self.is_sorted = False

    def add_point(self, distance: float, curvature: float) -> None:
        self.points.append(CurvaturePoint(distance, curvature))
        self.is_sorted = False

    def sort(self) -> None:
        if not self.is_sorted:
            self.points.sort(key=lambda point: point.distance)
            self.is_sorted = True

    def _index_at(self, distance: float) -> int:
        distances = [point.distance for point in self.points]
        return max(bisect_right(distances, distance + _LOOKUP_TOLERANCE) - 1, 0)

    def curvature_at_distance(self, distance: float) -> float:
        """Interpolated curvature at ``distance``; 0 when there are no points."""
        self.sort()
        if not self.points:
            return 0.0
        index = self._index_at(distance)
        this_point = self.points[index]
        if index + 1 < len(self.points):
            next_point = self.points[index + 1]
            return range_map(
                distance,
                this_point.distance,
                next_point.distance,
                this_point.curvature,
                next_point.curvature,
            )
        return this_point.curvature

    def control_point_distance(self, distance: float, next_point: bool = True) -> float:
        """Distance of the point at or after ``distance``.

        With ``next_point`` the following point is taken. When there is no
        such point, ``distance`` itself is returned.
        """
        self.sort()
        if not self.points:
            return distance
        index = self._index_at(distance)
        if next_point:
            index += 1
        if index >= len(self.points):
            return distance
        return self.points[index].distance

    def max_smooth(self, epsilon: float) -> None:
        """Smooth the curvatures with a forward then a backward pass."""
        self.sort()
        for previous, current in zip(self.points, self.points[1:]):
            current.max_smooth(previous, epsilon)
        backward = self.points[::-1]
        for previous, current in zip(backward, backward[1:]):
            current.max_smooth(previous, epsilon)