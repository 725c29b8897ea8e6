import pytest

from splinepath.matrix import Matrix
from splinepath.segments import (
    CubicSplineSegment,
    SegmentBase,
    SplineType,
    storing_matrix_for,
)

POINTS = [[0.0, 0.0], [1.0, 3.0], [4.0, 2.5], [5.0, -1.0]]


def approx_list(values):
    return pytest.approx(values, abs=1e-9)


def test_bezier_endpoints():
    segment = CubicSplineSegment(SplineType.CUBIC_BEZIER, POINTS)
    assert segment.position_at(0) == approx_list(POINTS[0])
    assert segment.position_at(1) == approx_list(POINTS[3])


def test_bezier_tangents_at_ends():
    segment = CubicSplineSegment(SplineType.CUBIC_BEZIER, POINTS)
    p0, p1, p2, p3 = POINTS
    assert segment.first_prime_at(0) == approx_list([3 * (p1[i] - p0[i]) for i in range(2)])
    assert segment.first_prime_at(1) == approx_list([3 * (p3[i] - p2[i]) for i in range(2)])


def test_bezier_second_derivative_at_start():
    segment = CubicSplineSegment(SplineType.CUBIC_BEZIER, POINTS)
    p0, p1, p2, _ = POINTS
    assert segment.second_prime_at(0) == approx_list(
        [6 * (p0[i] - 2 * p1[i] + p2[i]) for i in range(2)]
    )


def test_hermite_interpolates_and_matches_tangents():
    segment = CubicSplineSegment(SplineType.CUBIC_HERMITE, POINTS)
    assert segment.position_at(0) == approx_list(POINTS[0])
    assert segment.position_at(1) == approx_list(POINTS[1])
    assert segment.first_prime_at(0) == approx_list(POINTS[2])
    assert segment.first_prime_at(1) == approx_list(POINTS[3])


def test_catmull_rom_passes_middle_points():
    segment = CubicSplineSegment(SplineType.CATMULL_ROM, POINTS)
    p0, p1, p2, p3 = POINTS
    assert segment.position_at(0) == approx_list(p1)
    assert segment.position_at(1) == approx_list(p2)
    assert segment.first_prime_at(0) == approx_list([(p2[i] - p0[i]) / 2 for i in range(2)])
    assert segment.first_prime_at(1) == approx_list([(p3[i] - p1[i]) / 2 for i in range(2)])


def test_b_spline_start_point():
    segment = CubicSplineSegment(SplineType.CUBIC_B_SPLINE, POINTS)
    p0, p1, p2, _ = POINTS
    assert segment.position_at(0) == approx_list([(p0[i] + 4 * p1[i] + p2[i]) / 6 for i in range(2)])


def test_first_derivative_matches_finite_difference():
    segment = CubicSplineSegment(SplineType.CATMULL_ROM, POINTS)
    h = 1e-6
    t = 0.37
    ahead = segment.position_at(t + h)
    behind = segment.position_at(t - h)
    numeric = [(a - b) / (2 * h) for a, b in zip(ahead, behind)]
    assert segment.first_prime_at(t) == pytest.approx(numeric, abs=1e-5)


@pytest.mark.parametrize("spline_type", [SplineType.CUBIC_BEZIER, SplineType.CATMULL_ROM,
                                         SplineType.CUBIC_B_SPLINE, SplineType.CUBIC_HERMITE])
def test_reversed_keeps_type_and_reverses_points(spline_type):
    segment = CubicSplineSegment(spline_type, POINTS)
    reverse = segment.reversed()
    assert reverse.spline_type is spline_type
    assert reverse.control_points == POINTS[::-1]


@pytest.mark.parametrize("spline_type", [SplineType.CUBIC_BEZIER, SplineType.CATMULL_ROM,
                                         SplineType.CUBIC_B_SPLINE])
def test_reversed_traces_same_curve_backwards(spline_type):
    segment = CubicSplineSegment(spline_type, POINTS)
    reverse = segment.reversed()
    for t in (0.0, 0.25, 0.5, 0.9, 1.0):
        assert reverse.position_at(t) == approx_list(segment.position_at(1 - t))


def test_default_segment_is_degenerate_bezier():
    segment = CubicSplineSegment()
    assert segment.spline_type is SplineType.CUBIC_BEZIER
    assert segment.position_at(0.5) == approx_list([0.0, 0.0])
    assert segment.knot_parameter_alpha == 0


def test_control_points_are_copies():
    segment = CubicSplineSegment(SplineType.CUBIC_BEZIER, POINTS)
    points = segment.control_points
    points[0][0] = 99
    assert segment.control_points == POINTS


def test_wrong_point_count_raises():
    with pytest.raises(ValueError):
        CubicSplineSegment(SplineType.CUBIC_BEZIER, POINTS[:3])


def test_storing_matrix_lookup():
    assert storing_matrix_for(SplineType.CUBIC_HERMITE) == Matrix.identity(4)
    assert storing_matrix_for(SplineType.UNDEFINED) == storing_matrix_for(SplineType.CUBIC_BEZIER)
    segment = CubicSplineSegment(SplineType.CATMULL_ROM, POINTS)
    assert segment.storing_matrix() == storing_matrix_for(SplineType.CATMULL_ROM)
    assert segment.characteristic_matrix().shape == (4, 4)


def test_base_segment_is_empty():
    base = SegmentBase()
    assert base.position_at(0.5) == []
    assert base.first_prime_at(0.5) == []
    assert base.second_prime_at(0.5) == []
    assert base.control_points == []
    assert base.spline_type is SplineType.UNDEFINED
    assert base.reversed() is None