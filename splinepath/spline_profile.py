"""A spline together with its arc-length sampler and a planned motion profile."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from splinepath.curve_sampler import CurveSampler
from splinepath.general import clamp
from splinepath.spline_curve import SplineCurve
from splinepath.trajectory_constraint import TrajectoryConstraint
from splinepath.trajectory_planner import TrajectoryPlanner

DEFAULT_MAX_VELOCITY = 3.216
DEFAULT_MAX_ACCELERATION = DEFAULT_MAX_VELOCITY * 1.5
DEFAULT_TRACK_WIDTH = 0.503937008

_MIN_DISTANCE_STEP = 0.077
_MAX_DISTANCE_STEP = 0.5


@dataclass
class SplineProfile:
    """A spline, its sampler and the trajectory planned along it."""

    spline: SplineCurve
    curve_sampler: CurveSampler
    trajectory_plan: TrajectoryPlanner
    will_reverse: bool = False


def build_spline_profile(
    spline: SplineCurve,
    reverse: bool = False,
    constraints: Iterable[TrajectoryConstraint] = (),
    max_velocity: float = DEFAULT_MAX_VELOCITY,
    max_acceleration: float = DEFAULT_MAX_ACCELERATION,
    track_width: float = DEFAULT_TRACK_WIDTH,
) -> SplineProfile:
    """Sample ``spline`` and plan a motion profile along it.

    With ``reverse`` the path is driven backwards, so distances come out negative.
    """
    sampler = CurveSampler(spline).calculate_by_resolution(spline.t_range()[1] * 10)
    total_distance = sampler.distance_range()[1]
    distance_step = clamp(total_distance / 64, _MIN_DISTANCE_STEP, _MAX_DISTANCE_STEP)

    def curvature(distance: float) -> float:
        return spline.curvature_at(sampler.distance_to_param(distance))

    planner = (
        TrajectoryPlanner(total_distance * (-1 if reverse else 1), track_width, distance_step)
        .set_curvature_function(curvature, sampler.integer_params_to_distances())
        .set_spline(sampler)
        .max_smooth_curvature()
        .add_center_constraint_max_motion([max_velocity, max_acceleration])
        .add_track_constraint_max_motion([max_velocity, max_acceleration * 0.85])
        .add_center_constraint_max_centripetal_acceleration(max_acceleration * 0.2)
        .add_center_trajectory_constraints(list(constraints))
        .calculate_motion_profile()
    )
    return SplineProfile(spline, sampler, planner, reverse)