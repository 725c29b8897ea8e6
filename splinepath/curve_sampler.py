"""Arc-length sampling of spline curves."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Optional, Tuple

from splinepath.general import l2_norm, range_map
from splinepath.linegular import Linegular
from splinepath.spline_curve import SplineCurve


@dataclass(frozen=True)
class CurveParam:
    """A curve parameter and the arc length travelled up to it."""

    t: float
    distance: float


class CurveSampler:
    """Maps between the curve parameter and arc length along a spline."""

    def __init__(self, spline: Optional[SplineCurve] = None) -> None:
        self.spline = spline if spline is not None else SplineCurve()
        self._params: list[CurveParam] = []

    def reset(self) -> None:
        """Discard the computed samples."""
        self._params.clear()

    def calculate_by_resolution(self, resolution: int = 30) -> "CurveSampler":
        """Sample the arc length with ``resolution`` midpoint-rule steps."""
        resolution = int(resolution)
        t_start, t_end = self.spline.t_range()
        params = [CurveParam(t_start, 0.0)]
        previous_t = 0.0
        path_length = 0.0
        for step in range(1, resolution + 1):
            t = range_map(step, 0, resolution, t_start, t_end)
            delta_t = t - previous_t
            middle_speed = l2_norm(self.spline.first_prime_at(t - delta_t / 2))
            path_length += middle_speed * delta_t
            params.append(CurveParam(t, path_length))
            previous_t = t
        self._params = params
        return self

    def _samples(self) -> list[CurveParam]:
        if not self._params:
            raise ValueError("the sampler has not been calculated")
        return self._params

    def t_range(self) -> Tuple[float, float]:
        return self.spline.t_range()

    def distance_range(self) -> Tuple[float, float]:
        samples = self._samples()
        return samples[0].distance, samples[-1].distance

    def linegular_at_distance(self, distance: float, reverse_heading: bool = False) -> Linegular:
        return self.spline.linegular_at(self.distance_to_param(distance), reverse_heading)

    def param_to_distance(self, t: float) -> float:
        """Arc length at parameter ``t``, clamped to the sampled range."""
        samples = self._samples()
        if t <= samples[0].t:
            return samples[0].distance
        if t >= samples[-1].t:
            return samples[-1].distance
        index = bisect_right([sample.t for sample in samples], t) - 1
        low, high = samples[index], samples[index + 1]
        return range_map(t, low.t, high.t, low.distance, high.distance)

    def distance_to_param(self, distance: float) -> float:
        """Parameter at arc length ``distance``, clamped to the sampled range."""
        samples = self._samples()
        if distance <= samples[0].distance:
            return samples[0].t
        if distance >= samples[-1].distance:
            return samples[-1].t
        index = bisect_right([sample.distance for sample in samples], distance) - 1
        low, high = samples[index], samples[index + 1]
        return range_map(distance, low.distance, high.distance, low.t, high.t)

    def integer_params_to_distances(self) -> list[float]:
        """Arc length at the start of every segment."""
        return [self.param_to_distance(t) for t in range(self.spline.segment_count())]