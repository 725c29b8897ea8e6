"""Simple 2D polygons with area and winding-number containment."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union

from splinepath.general import is_within, range_map, signum
from splinepath.vector2d import Vector2D

_EPSILON = 1e-9

PointLike = Union[Vector2D, Sequence[float]]


def _as_vector(point: PointLike) -> Vector2D:
    if isinstance(point, Vector2D):
        return point
    x, y = point
    return Vector2D(x, y)


@dataclass
class Polygon2D:
    """A polygon given by its vertices in counter-clockwise order."""

    ccw_points: list[Vector2D] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.ccw_points = [_as_vector(point) for point in self.ccw_points]

    def _edges(self):
        points = self.ccw_points
        return zip(points, points[1:] + points[:1])

    def area(self) -> float:
        """Signed area by the shoelace formula; positive for counter-clockwise order."""
        points = self.ccw_points
        previous = points[-1:] + points[:-1]
        following = points[1:] + points[:1]
        return sum(
            cur.x * (nxt.y - prev.y) for prev, cur, nxt in zip(previous, points, following)
        ) / 2

    def winding_number(self, point: PointLike) -> int:
        """Winding number of the polygon around ``point``."""
        point = _as_vector(point)
        winding = 0
        for point0, point1 in self._edges():
            delta = 1 if point0.y < point1.y else -1

            # Edge entirely on one side of the horizontal through the point
            if signum(point0.y - point.y) == signum(point1.y - point.y):
                continue

            if is_within(point0.x, point1.x, _EPSILON):
                if point0.x < point.x:
                    continue
                winding += delta
                continue

            if range_map(point.y, point0.y, point1.y, point0.x, point1.x) < point.x:
                continue

            winding += delta
        return winding

    def contains_point(self, point: PointLike) -> bool:
        return self.winding_number(point) != 0

    def __contains__(self, point: PointLike) -> bool:
        return self.contains_point(point)