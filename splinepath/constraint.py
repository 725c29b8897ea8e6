"""Motion limits that vary with distance along a path."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

from splinepath.general import lerp


@dataclass
class DistanceConstraint:
    """Maximum velocity, acceleration, ... from ``distance`` onward."""

    distance: float
    max_motion: list[float] = field(default_factory=list)

    def copy(self) -> "DistanceConstraint":
        return DistanceConstraint(self.distance, list(self.max_motion))


class ConstraintSequence:
    """Constraints ordered by distance, either stepped or linearly interpolated."""

    def __init__(
        self,
        constraints: Optional[Iterable[DistanceConstraint]] = None,
        lerped: bool = False,
    ) -> None:
        self.constraints: list[DistanceConstraint] = list(constraints) if constraints else []
        self.lerped = lerped
        self.is_sorted = False

    def add_constraints(
        self, constraints: Iterable[Tuple[float, Sequence[float]]]
    ) -> "ConstraintSequence":
        """Add ``(distance, max_motion)`` pairs."""
        for distance, max_motion in constraints:
            self.constraints.append(DistanceConstraint(distance, list(max_motion)))
        self.is_sorted = False
        return self

    def sort(self) -> None:
        if not self.is_sorted:
            self.constraints.sort(key=lambda constraint: constraint.distance)
            self.is_sorted = True

    def constraint_at_distance(self, distance: float) -> DistanceConstraint:
        """The constraint in force at ``distance``; an empty one if there are none."""
        self.sort()
        if not self.constraints:
            return DistanceConstraint(0.0, [])

        distances = [constraint.distance for constraint in self.constraints]
        index = max(bisect_right(distances, distance + 1e-4) - 1, 0)
        result = self.constraints[index].copy()

        if self.lerped and index + 1 < len(self.constraints):
            c1 = self.constraints[index]
            c2 = self.constraints[index + 1]
            lerp_t = (distance - c1.distance) / (c2.distance - c1.distance)
            result.distance = lerp(c1.distance, c2.distance, lerp_t)
            blended = [lerp(a, b, lerp_t) for a, b in zip(c1.max_motion, c2.max_motion)]
            result.max_motion = blended + result.max_motion[len(blended):]
        return result


def minimum_motion_at_degree(constraints: Iterable[DistanceConstraint], degree: int) -> float:
    """Smallest limit at ``degree`` among the constraints, or -1 if none has one."""
    result = -1.0
    for constraint in constraints:
        if degree >= len(constraint.max_motion):
            continue
        value = constraint.max_motion[degree]
        result = value if result < 0 else min(result, value)
    return result


def minimum_constraint(constraints: Iterable[DistanceConstraint]) -> DistanceConstraint:
    """Combine constraints, keeping the smallest limit at every degree."""
    result = DistanceConstraint(0.0, [])
    for constraint in constraints:
        for degree, value in enumerate(constraint.max_motion):
            if degree >= len(result.max_motion):
                result.max_motion.append(value)
            elif value < result.max_motion[degree]:
                result.max_motion[degree] = value
    return result


def constraints_at_distance(
    sequences: Iterable[ConstraintSequence], distance: float
) -> list[DistanceConstraint]:
    return [sequence.constraint_at_distance(distance) for sequence in sequences]


def constraints_at_index(
    sequences: Iterable[ConstraintSequence], index: int
) -> list[DistanceConstraint]:
    """The ``index``-th stored constraint of every sequence long enough to have one."""
    return [
        sequence.constraints[index].copy()
        for sequence in sequences
        if 0 <= index < len(sequence.constraints)
    ]