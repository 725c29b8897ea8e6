"""Piecewise parametric curves built from spline segments."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple

from splinepath.general import mod_range
from splinepath.linegular import Linegular
from splinepath.segments import CubicSplineSegment, SegmentBase, SplineType
from splinepath.units import PolarAngle


class SplineCurve:
    """A curve made of consecutive segments; segment ``i`` covers t in [i, i + 1]."""

    def __init__(self, segments: Optional[Iterable[SegmentBase]] = None) -> None:
        self._segments: list[SegmentBase] = list(segments) if segments is not None else []

    @classmethod
    def from_auto_tangent_cubic_spline(
        cls,
        spline_type: SplineType,
        points: Sequence[Sequence[float]],
        knot_parameter_alpha: float = 0.0,
    ) -> "SplineCurve":
        """Build a spline through ``points``; meant for B-spline or Catmull-Rom types.

        Raises ValueError when fewer than four points are given.
        """
        points = [list(point) for point in points]
        if len(points) < 4:
            raise ValueError("a cubic spline needs at least four points")
        spline = cls()
        spline.attach_segment(CubicSplineSegment(spline_type, points[:4], knot_parameter_alpha))
        spline.extend_points(points[4:])
        return spline

    @property
    def segments(self) -> list[SegmentBase]:
        return list(self._segments)

    def extend_point(self, new_point: Sequence[float]) -> "SplineCurve":
        """Add a segment continuing the last one to ``new_point``."""
        last = self.segment(len(self._segments) - 1)
        points = last.control_points
        self.attach_segment(
            CubicSplineSegment(
                last.spline_type,
                [points[1], points[2], points[3], list(new_point)],
                last.knot_parameter_alpha,
            )
        )
        return self

    def extend_points(self, new_points: Iterable[Sequence[float]]) -> "SplineCurve":
        for point in new_points:
            self.extend_point(point)
        return self

    def attach_segment(self, segment: SegmentBase) -> "SplineCurve":
        self._segments.append(segment)
        return self

    def segment(self, index: int) -> SegmentBase:
        """Return segment ``index``; raises IndexError when it does not exist."""
        if not 0 <= index < len(self._segments):
            raise IndexError(f"segment index {index} out of range")
        return self._segments[index]

    def segment_index(self, t: float) -> Tuple[int, float]:
        """Segment number and local parameter for the curve parameter ``t``."""
        segment_id = math.floor(t)
        segment_t = t - segment_id
        if segment_id < 0:
            return 0, 0.0
        if segment_id >= len(self._segments):
            return len(self._segments) - 1, 1.0
        return segment_id, segment_t

    def _at(self, t: float) -> Tuple[SegmentBase, float]:
        index, local_t = self.segment_index(t)
        if index < 0:
            raise IndexError("the spline has no segments")
        return self._segments[index], local_t

    def position_at(self, t: float) -> list[float]:
        segment, local_t = self._at(t)
        return segment.position_at(local_t)

    def first_prime_at(self, t: float) -> list[float]:
        segment, local_t = self._at(t)
        return segment.first_prime_at(local_t)

    def second_prime_at(self, t: float) -> list[float]:
        segment, local_t = self._at(t)
        return segment.second_prime_at(local_t)

    def polar_angle_at(self, t: float) -> PolarAngle:
        """Direction of travel at ``t``."""
        velocity = self.first_prime_at(t)
        return PolarAngle.from_radians(math.atan2(velocity[1], velocity[0]))

    def curvature_at(self, t: float) -> float:
        """Signed curvature at ``t``; positive when turning counter-clockwise."""
        xp, yp = self.first_prime_at(t)[:2]
        xpp, ypp = self.second_prime_at(t)[:2]
        return (xp * ypp - yp * xpp) / (xp * xp + yp * yp) ** 1.5

    def t_range(self) -> Tuple[float, float]:
        return 0.0, float(self.segment_count())

    def segment_count(self) -> int:
        return len(self._segments)

    def reversed(self) -> "SplineCurve":
        """The same curve traversed from end to start."""
        return SplineCurve(segment.reversed() for segment in reversed(self._segments))

    def linegular_at(self, t: float, reverse_heading: bool = False) -> Linegular:
        """Pose at ``t``, with the heading in [-180, 180) degrees."""
        position = self.position_at(t)
        rotation = self.polar_angle_at(t) + (180.0 if reverse_heading else 0.0)
        heading = mod_range(rotation.polar_deg(), 360, -180)
        return Linegular.from_xy(position[0], position[1], PolarAngle(heading))