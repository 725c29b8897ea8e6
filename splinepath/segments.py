"""Spline segments: a common interface and cubic spline segments."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from splinepath.matrix import Matrix


class SplineType(Enum):
    CUBIC_BEZIER = "cubic_bezier"
    CUBIC_HERMITE = "cubic_hermite"
    CATMULL_ROM = "catmull_rom"
    CUBIC_B_SPLINE = "cubic_b_spline"
    UNDEFINED = "undefined"


# Maps the stored points to Hermite form (p0, p1, v0, v1) coefficients.
CUBIC_HERMITE_CHARACTERISTIC = Matrix([
    [1, 0, 0, 0],
    [0, 0, 1, 0],
    [-3, 3, -2, -1],
    [2, -2, 1, 1],
])

# Convert each spline type's control points into Hermite form.
_STORING_MATRICES = {
    SplineType.CUBIC_BEZIER: Matrix([
        [1, 0, 0, 0],
        [0, 0, 0, 1],
        [-3, 3, 0, 0],
        [0, 0, -3, 3],
    ]),
    SplineType.CUBIC_HERMITE: Matrix.identity(4),
    SplineType.CATMULL_ROM: Matrix([
        [0, 1, 0, 0],
        [0, 0, 1, 0],
        [-0.5, 0, 0.5, 0],
        [0, -0.5, 0, 0.5],
    ]),
    SplineType.CUBIC_B_SPLINE: Matrix([
        [1, 4, 1, 0],
        [0, 1, 4, 1],
        [-3, 0, 3, 0],
        [0, -3, 0, 3],
    ]) * (1.0 / 6.0),
}


def storing_matrix_for(spline_type: SplineType) -> Matrix:
    """Storing matrix of a spline type; unknown types use the Bezier matrix."""
    return _STORING_MATRICES.get(spline_type, _STORING_MATRICES[SplineType.CUBIC_BEZIER])


class SegmentBase:
    """A parametric curve piece on t in [0, 1]. The base segment is empty."""

    knot_parameter_alpha: float = 0.0

    @property
    def spline_type(self) -> SplineType:
        return SplineType.UNDEFINED

    @property
    def control_points(self) -> list[list[float]]:
        return []

    def position_at(self, t: float) -> list[float]:
        return []

    def first_prime_at(self, t: float) -> list[float]:
        return []

    def second_prime_at(self, t: float) -> list[float]:
        return []

    def reversed(self) -> Optional["SegmentBase"]:
        return None


class CubicSplineSegment(SegmentBase):
    """A cubic segment defined by four control points of a given spline type."""

    def __init__(
        self,
        spline_type: SplineType = SplineType.CUBIC_BEZIER,
        points: Optional[Sequence[Sequence[float]]] = None,
        knot_parameter_alpha: float = 0.0,
    ) -> None:
        self._spline_type = spline_type
        self._control_points: list[list[float]] = []
        self._stored_points: list[list[float]] = []
        if points is None:
            points = [[0.0, 0.0] for _ in range(4)]
        self.set_points(points)
        self.knot_parameter_alpha = knot_parameter_alpha

    @property
    def spline_type(self) -> SplineType:
        return self._spline_type

    @spline_type.setter
    def spline_type(self, spline_type: SplineType) -> None:
        # The stored points are not recomputed until set_points is called.
        self._spline_type = spline_type

    @property
    def control_points(self) -> list[list[float]]:
        return [list(point) for point in self._control_points]

    def set_points(self, points: Sequence[Sequence[float]]) -> None:
        """Set the control points; raises ValueError unless there are four."""
        control_points = [list(point) for point in points]
        self._stored_points = self.storing_matrix().multiply(Matrix(control_points)).data
        self._control_points = control_points

    def storing_matrix(self) -> Matrix:
        return storing_matrix_for(self._spline_type)

    def characteristic_matrix(self) -> Matrix:
        return CUBIC_HERMITE_CHARACTERISTIC

    def _evaluate(self, basis: list[float]) -> list[float]:
        product = Matrix([basis]) @ self.characteristic_matrix() @ Matrix(self._stored_points)
        return product.data[0]

    def position_at(self, t: float) -> list[float]:
        return self._evaluate([1, t, t * t, t * t * t])

    def first_prime_at(self, t: float) -> list[float]:
        return self._evaluate([0, 1, 2 * t, 3 * t * t])

    def second_prime_at(self, t: float) -> list[float]:
        return self._evaluate([0, 0, 2, 6 * t])

    def reversed(self) -> "CubicSplineSegment":
        """A segment of the same type with the control points in reverse order."""
        return CubicSplineSegment(self._spline_type, self._control_points[::-1])