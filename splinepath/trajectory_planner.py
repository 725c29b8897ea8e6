"""Time-optimal motion profiles along a path under distance-based constraints."""

from __future__ import annotations

import logging
from bisect import bisect_right
from itertools import pairwise
from typing import Callable, Iterable, Optional, Sequence, Tuple

from splinepath.constraint import (
    ConstraintSequence,
    DistanceConstraint,
    constraints_at_distance,
    minimum_constraint,
)
from splinepath.curvature import CurvatureSequence
from splinepath.curve_sampler import CurveSampler
from splinepath.general import (
    absolute,
    clamp,
    integrate_polynomial,
    multiply_vector,
    range_map,
    signum,
)
from splinepath.linegular import Linegular
from splinepath.plan_point import (
    PlanPoint,
    plan_points_to_raw_sequence,
    time_step_from_distance_step,
)
from splinepath.trajectory_constraint import (
    CentripetalAccelerationConstraint,
    TrajectoryConstraint,
    velocity_from_constraints,
)

logger = logging.getLogger(__name__)

_STEP_SPLIT = 5
_SPECIFIC_WINDOW = 1e-3
_MIN_DISTANCE_GAP = 1e-5
_MIN_TIME_STEP = 1e-5
_SKIPPED_TIME_STEP = 0.1


def _window_max_curvature(function: Callable[[float], float], x: float, width: float) -> float:
    """Curvature of largest magnitude sampled across a window centred on ``x``."""
    max_k = 0.0
    for step in range(_STEP_SPLIT + 1):
        offset = range_map(step, 0, _STEP_SPLIT, 0, width) - width / 2
        k = function(x + offset)
        if abs(k) > abs(max_k):
            max_k = k
    return max_k


class TrajectoryPlanner:
    """Plans velocity over distance with forward and backward passes.

    Units are up to the caller, but must be used consistently.
    """

    def __init__(
        self,
        distance: float = 0.0,
        track_width: float = 0.0,
        plan_point_distance_step: float = 0.1,
        start_motion: Optional[Sequence[float]] = None,
        end_motion: Optional[Sequence[float]] = None,
    ) -> None:
        self.total_distance = abs(distance)
        self.distance_sign = signum(distance)
        self.track_width = track_width
        self.plan_point_distance_step = plan_point_distance_step
        self.start_motion = list(start_motion) if start_motion is not None else [0.0]
        self.end_motion = list(end_motion) if end_motion is not None else [0.0]

        self.curvature_sequence = CurvatureSequence()
        self.curve_sampler: Optional[CurveSampler] = None

        self.center_constraint_sequences: list[ConstraintSequence] = []
        self.track_constraint_sequences: list[ConstraintSequence] = []
        self.center_trajectory_constraints: list[TrajectoryConstraint] = []

        self.plan_point_distances: list[float] = []
        self._raw_sequence = ConstraintSequence()
        self.profile_points: list[PlanPoint] = []

    # ---------- Curvature ----------

    def set_curvature_function(
        self,
        function: Callable[[float], float],
        specific_distances: Iterable[float] = (),
    ) -> "TrajectoryPlanner":
        """Sample curvature from ``function`` of distance, more densely where it is high."""
        self.curvature_sequence = CurvatureSequence()
        distance_step = self.plan_point_distance_step
        delta_x = distance_step

        for x in specific_distances:
            self.curvature_sequence.add_point(
                x, _window_max_curvature(function, x, _SPECIFIC_WINDOW)
            )

        x = 0.0
        last_iteration = False
        while True:
            if x >= self.total_distance:
                x = self.total_distance
                last_iteration = True

            # Shrink the step where the curvature is high
            segment_k = _window_max_curvature(function, x, delta_x)
            delta_x = distance_step / (1 + abs(segment_k))
            delta_x = clamp(delta_x, distance_step / 7.0, distance_step)

            segment_k = _window_max_curvature(function, x, delta_x)
            self.curvature_sequence.add_point(x, segment_k)

            x += delta_x
            if last_iteration:
                break
        return self

    def max_smooth_curvature(self, epsilon: float = 1e10) -> "TrajectoryPlanner":
        self.curvature_sequence.max_smooth(epsilon)
        return self

    def curvature_at_distance(self, distance: float) -> float:
        return self.curvature_sequence.curvature_at_distance(distance)

    # ---------- Spline ----------

    def set_spline(self, curve_sampler: Optional[CurveSampler]) -> "TrajectoryPlanner":
        self.curve_sampler = curve_sampler
        return self

    def linegular_at_distance(self, distance: float) -> Linegular:
        """Pose on the spline at ``distance``; the origin when no spline is set."""
        if self.curve_sampler is not None:
            return self.curve_sampler.linegular_at_distance(distance)
        return Linegular.from_xy(0.0, 0.0, 0.0)

    # ---------- Constraints ----------

    def add_center_constraint_sequence(self, sequence: ConstraintSequence) -> "TrajectoryPlanner":
        self.center_constraint_sequences.append(sequence)
        return self

    def add_track_constraint_sequence(self, sequence: ConstraintSequence) -> "TrajectoryPlanner":
        self.track_constraint_sequences.append(sequence)
        return self

    def add_center_constraints(
        self, constraints: Iterable[Tuple[float, Sequence[float]]]
    ) -> "TrajectoryPlanner":
        return self.add_center_constraint_sequence(ConstraintSequence().add_constraints(constraints))

    def add_track_constraints(
        self, constraints: Iterable[Tuple[float, Sequence[float]]]
    ) -> "TrajectoryPlanner":
        return self.add_track_constraint_sequence(ConstraintSequence().add_constraints(constraints))

    def add_center_constraint_max_motion(self, max_motion: Sequence[float]) -> "TrajectoryPlanner":
        """Limit the path centre's velocity, acceleration, ... everywhere."""
        return self.add_center_constraints([(0.0, list(max_motion))])

    def add_track_constraint_max_motion(self, max_motion: Sequence[float]) -> "TrajectoryPlanner":
        """Limit each wheel track's velocity, acceleration, ... everywhere."""
        return self.add_track_constraints([(0.0, list(max_motion))])

    def add_center_constraint_max_centripetal_acceleration(
        self, max_acceleration: float
    ) -> "TrajectoryPlanner":
        self.center_trajectory_constraints.append(
            CentripetalAccelerationConstraint(max_acceleration)
        )
        return self

    def add_center_trajectory_constraints(
        self, constraints: Iterable[TrajectoryConstraint]
    ) -> "TrajectoryPlanner":
        self.center_trajectory_constraints.extend(constraints)
        return self

    # ---------- Calculation ----------

    @property
    def _uses_track(self) -> bool:
        return self.track_width > 0 and bool(self.curvature_sequence.points)

    def _constrain_to_track(
        self, node: PlanPoint, curvature: float, constraint: DistanceConstraint
    ) -> None:
        factor = 1 + abs(curvature) * self.track_width / 2
        node.motion = multiply_vector(node.motion, factor)
        node.constrain(constraint)
        node.motion = multiply_vector(node.motion, 1 / factor)

    def _center_minimum(self, distance: float) -> DistanceConstraint:
        return minimum_constraint(constraints_at_distance(self.center_constraint_sequences, distance))

    def _track_minimum(self, distance: float) -> DistanceConstraint:
        return minimum_constraint(constraints_at_distance(self.track_constraint_sequences, distance))

    def next_plan_point(
        self, original_node: PlanPoint, distance_step: float, degree: int
    ) -> PlanPoint:
        """The plan point ``distance_step`` further on from ``original_node``."""
        node = original_node.copy()

        old_distance = node.distance
        original_velocity = node.motion[0]
        old_curvature = self.curvature_at_distance(old_distance)
        old_pose = self.linegular_at_distance(old_distance)

        center_min0 = self._center_minimum(old_distance)
        track_min0 = self._track_minimum(old_distance)

        node.constrain(center_min0)
        node.constrain(self._center_minimum(old_distance + distance_step))

        trajectory_velocity0 = velocity_from_constraints(
            self.center_trajectory_constraints, old_pose, old_curvature, original_velocity
        )
        node.motion[0] = min(node.motion[0], trajectory_velocity0)

        plan_raw0 = self._raw_sequence.constraint_at_distance(old_distance)
        node.maximize_nth_degree(center_min0, degree + 1, plan_raw0)

        if self._uses_track:
            self._constrain_to_track(node, old_curvature, track_min0)

        time_step = time_step_from_distance_step(node, abs(distance_step))
        if time_step is None or time_step <= _MIN_TIME_STEP:
            logger.debug("skipped plan step at distance %.3f", old_distance)
            node.distance += distance_step
            node.time_seconds += _SKIPPED_TIME_STEP * signum(distance_step)
            node.motion = [0.0] * len(node.motion)
            return node

        _, integrated_motion = integrate_polynomial(node.motion, time_step)
        new_distance = old_distance + distance_step
        new_node = PlanPoint(node.time_seconds + time_step, new_distance, integrated_motion)

        new_original_velocity = new_node.motion[0]
        new_curvature = self.curvature_at_distance(new_distance)
        new_pose = self.linegular_at_distance(new_distance)

        center_min1 = self._center_minimum(new_distance)
        track_min1 = self._track_minimum(new_distance)
        new_node.constrain(center_min1)

        trajectory_velocity1 = velocity_from_constraints(
            self.center_trajectory_constraints, new_pose, new_curvature, new_original_velocity
        )
        new_node.motion[0] = min(new_node.motion[0], trajectory_velocity1)

        # Higher degrees follow from the change of the degree below
        original_motion = original_node.motion
        for index in range(degree + 1, len(new_node.motion)):
            before = original_motion[index - 1] if index - 1 < len(original_motion) else 0.0
            new_node.motion[index] = (new_node.motion[index - 1] - before) / time_step

        if self._uses_track:
            self._constrain_to_track(new_node, new_curvature, track_min1)

            # Limit each wheel's change in velocity over the step
            half_track = self.track_width / 2
            factor_pairs = (
                (1 - old_curvature * half_track, 1 - new_curvature * half_track),
                (1 + old_curvature * half_track, 1 + new_curvature * half_track),
            )
            for factor0, factor1 in factor_pairs:
                raw_track = DistanceConstraint(
                    plan_raw0.distance, multiply_vector(plan_raw0.max_motion, factor0)
                )
                track_node = original_node.copy()
                track_node.motion = multiply_vector(original_node.motion, factor0)
                track_node.maximize_nth_degree(track_min0, degree + 1, raw_track)
                if factor0 < 0:
                    track_node.motion[degree] *= -1

                _, track_motion = integrate_polynomial(track_node.motion, time_step)
                if factor1 == 0:
                    # Dividing by zero leaves no limit on the centre motion
                    continue
                track_motion = multiply_vector(track_motion, 1 / factor1)
                new_node.constrain(DistanceConstraint(0.0, absolute(track_motion)))

        new_node.constrain(center_min1)
        return new_node

    def forward_pass(self, degree: int) -> list[PlanPoint]:
        """Plan from the start of the path to its end."""
        min_constraint = self._center_minimum(0.0)
        start = (
            PlanPoint(0.0, 0.0, list(self.start_motion))
            .constrain(min_constraint)
            .maximize_nth_degree(
                min_constraint, degree + 1, self._raw_sequence.constraint_at_distance(0.0)
            )
        )
        points = [start]
        for low, high in pairwise(self.plan_point_distances):
            delta_x = high - low
            if abs(delta_x) < _MIN_DISTANCE_GAP:
                continue
            points.append(self.next_plan_point(points[-1], delta_x, degree))
        return points

    def backward_pass(self, degree: int) -> list[PlanPoint]:
        """Plan from the end of the path back to its start; returned in path order."""
        min_constraint = self._center_minimum(self.total_distance)
        end = (
            PlanPoint(0.0, self.total_distance, list(self.end_motion))
            .constrain(min_constraint)
            .maximize_nth_degree(
                min_constraint,
                degree + 1,
                self._raw_sequence.constraint_at_distance(self.total_distance),
            )
        )
        points = [end]
        for low, high in reversed(list(pairwise(self.plan_point_distances))):
            delta_x = high - low
            if abs(delta_x) < _MIN_DISTANCE_GAP:
                continue
            points.append(self.next_plan_point(points[-1], -delta_x, degree))

        for point in points:
            point.motion[1:] = [-value for value in point.motion[1:]]
        points.reverse()
        return points

    def constraint_sequences_from_plan_points(
        self, nodes: Iterable[PlanPoint]
    ) -> Tuple[ConstraintSequence, ConstraintSequence]:
        """Centre velocity limits taken from ``nodes``, and an (empty) track sequence."""
        center = ConstraintSequence(lerped=True)
        track = ConstraintSequence(lerped=True)
        center.add_constraints((node.distance, [abs(node.motion[0])]) for node in nodes)
        return center, track

    def _build_plan_point_distances(self) -> list[float]:
        distances = []
        x = 0.0
        while x <= self.total_distance:
            distances.append(x)
            x += self.plan_point_distance_step
        distances.append(self.total_distance)

        if not self._uses_track:
            return distances

        merged: list[float] = []
        position = 0
        for point in self.curvature_sequence.points:
            while position < len(distances) and distances[position] < point.distance:
                merged.append(distances[position])
                position += 1
            if not merged or abs(point.distance - merged[-1]) > _MIN_DISTANCE_GAP:
                merged.append(point.distance)

        result = []
        last_x = -1.0
        for distance in merged:
            if distance - last_x <= _MIN_DISTANCE_GAP:
                continue
            result.append(distance)
            last_x = distance
        return result

    def _pop_pass_constraints(self, count: int) -> None:
        for _ in range(count):
            self.center_constraint_sequences.pop()
            self.track_constraint_sequences.pop()

    def _push_pass_constraints(self, nodes: list[PlanPoint]) -> None:
        center, track = self.constraint_sequences_from_plan_points(nodes)
        self.center_constraint_sequences.append(center)
        self.track_constraint_sequences.append(track)
        self._raw_sequence = plan_points_to_raw_sequence(nodes)

    def calculate_motion_profile(self) -> "TrajectoryPlanner":
        """Run the forward and backward passes and store the resulting profile."""
        max_degree = max(
            (
                len(sequence.constraints[0].max_motion)
                for sequence in self.center_constraint_sequences + self.track_constraint_sequences
                if sequence.constraints
            ),
            default=0,
        )

        self.plan_point_distances = self._build_plan_point_distances()
        logger.debug("planning with %d plan points", len(self.plan_point_distances))

        self._raw_sequence = ConstraintSequence().add_constraints([(0.0, [1e9])])

        passes = 0
        for degree in range(max_degree - 1):
            forward = self.forward_pass(degree)
            self._pop_pass_constraints(passes)
            self._push_pass_constraints(forward)
            passes = 1

            backward = self.backward_pass(degree)
            self._pop_pass_constraints(passes)
            self._push_pass_constraints(backward)
            passes = 1

        forward = self.forward_pass(max_degree - 2)
        self._pop_pass_constraints(passes)
        self.profile_points = forward
        return self

    def total_time(self) -> float:
        """Duration of the calculated profile; raises ValueError before calculation."""
        if not self.profile_points:
            raise ValueError("the motion profile has not been calculated")
        return self.profile_points[-1].time_seconds

    def motion_at_time(self, time_seconds: float) -> Tuple[float, list[float]]:
        """Signed distance and motion (velocity, acceleration, ...) at a time."""
        if len(self.profile_points) < 2 or time_seconds < 0:
            return 0.0, [0.0, 0.0]
        total_time = self.total_time()
        if total_time < time_seconds:
            return self.total_distance * self.distance_sign, [0.0, 0.0]

        time_seconds = clamp(time_seconds, 0, total_time)
        times = [point.time_seconds for point in self.profile_points[:-1]]
        index = max(bisect_right(times, time_seconds) - 1, 0)
        point1 = self.profile_points[index]
        point2 = self.profile_points[index + 1]

        def at_time(value1: float, value2: float) -> float:
            return range_map(time_seconds, point1.time_seconds, point2.time_seconds, value1, value2)

        distance = at_time(point1.distance, point2.distance)
        motion = [at_time(a, b) for a, b in zip(point1.motion, point2.motion)]

        if self.distance_sign == -1:
            distance = -distance
            motion = [-value for value in motion]
        return distance, motion