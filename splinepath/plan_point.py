"""Points of a motion plan and the helpers that step between them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from splinepath.constraint import ConstraintSequence, DistanceConstraint
from splinepath.general import clamp, integrate_polynomial, newtons_method, signum


@dataclass
class PlanPoint:
    """Time, distance and motion state (velocity, acceleration, ...) at a plan step."""

    time_seconds: float
    distance: float
    motion: list[float] = field(default_factory=list)

    def copy(self) -> "PlanPoint":
        return PlanPoint(self.time_seconds, self.distance, list(self.motion))

    def constrain(self, constraint: DistanceConstraint) -> "PlanPoint":
        """Clamp every degree that the constraint limits to [-limit, limit]."""
        for degree, limit in enumerate(constraint.max_motion[: len(self.motion)]):
            self.motion[degree] = clamp(self.motion[degree], -limit, limit)
        return self

    def _extend_to(self, size: int) -> None:
        if len(self.motion) < size:
            self.motion.extend([0.0] * (size - len(self.motion)))

    def maximize_last_degree(self, constraint: DistanceConstraint) -> "PlanPoint":
        """Set the highest degree the constraint limits to that limit.

        Raises ValueError when the constraint limits nothing.
        """
        if not constraint.max_motion:
            raise ValueError("the constraint has no motion limits")
        size = len(constraint.max_motion)
        self._extend_to(size)
        self.motion[size - 1] = constraint.max_motion[-1]
        return self

    def maximize_nth_degree(
        self,
        constraint: DistanceConstraint,
        degree: int,
        target_raw_constraint: DistanceConstraint,
        maximize_lower_degrees: bool = False,
    ) -> "PlanPoint":
        """Set ``degree`` (and optionally all lower degrees) to the constraint's limits.

        When the constraint does not reach ``degree``, its highest degree is
        maximized instead. The limits are always applied with a positive sign;
        ``target_raw_constraint`` is accepted for the planner's call signature.
        """
        if len(constraint.max_motion) < degree + 1:
            return self.maximize_last_degree(constraint)
        self._extend_to(degree + 1)
        end_degree = 0 if maximize_lower_degrees else degree
        for current in range(degree, end_degree - 1, -1):
            self.motion[current] = constraint.max_motion[current]
        return self


def time_step_from_distance_step(node: PlanPoint, distance_step: float) -> Optional[float]:
    """Time needed to travel ``distance_step`` from ``node``'s motion state.

    Solves for the distance first; failing that, for the time at which the
    velocity reaches zero. Returns None when neither converges.
    """
    step_sign = signum(distance_step)

    def distance_error(x: float):
        delta, motion = integrate_polynomial(node.motion, x)
        return delta - distance_step, motion[0]

    result = newtons_method(distance_error, 0.0, 0.1, step_sign)
    if result is not None:
        return result

    if len(node.motion) < 2:
        return None

    def velocity(x: float):
        _, motion = integrate_polynomial(node.motion, x)
        return motion[0], motion[1]

    return newtons_method(velocity, 0.0, 0.1, step_sign)


def plan_points_to_raw_sequence(nodes: Iterable[PlanPoint]) -> ConstraintSequence:
    """An interpolated constraint sequence holding each node's motion at its distance."""
    return ConstraintSequence(lerped=True).add_constraints(
        (node.distance, list(node.motion)) for node in nodes
    )