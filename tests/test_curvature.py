import math

import pytest

from splinepath.curvature import CurvaturePoint, CurvatureSequence


def make_sequence(pairs):
    sequence = CurvatureSequence()
    for distance, curvature in pairs:
        sequence.add_point(distance, curvature)
    return sequence


def test_empty_sequence_curvature_is_zero():
    assert CurvatureSequence().curvature_at_distance(3.0) == 0.0


def test_curvature_at_stored_points():
    sequence = make_sequence([(0.0, 0.0), (2.0, 4.0), (5.0, -1.0)])
    assert sequence.curvature_at_distance(0.0) == pytest.approx(0.0)
    assert sequence.curvature_at_distance(2.0) == pytest.approx(4.0)
    assert sequence.curvature_at_distance(5.0) == pytest.approx(-1.0)


def test_curvature_interpolates_between_points():
    sequence = make_sequence([(0.0, 0.0), (2.0, 4.0)])
    assert sequence.curvature_at_distance(1.0) == pytest.approx(2.0)


def test_curvature_beyond_last_point_is_last_value():
    sequence = make_sequence([(0.0, 1.0), (1.0, 3.0)])
    assert sequence.curvature_at_distance(10.0) == pytest.approx(3.0)


def test_points_added_out_of_order_are_sorted():
    sequence = make_sequence([(2.0, 4.0), (0.0, 0.0), (1.0, 7.0)])
    assert [point.distance for point in sequence.points] == [2.0, 0.0, 1.0]
    assert sequence.curvature_at_distance(1.0) == pytest.approx(7.0)
    assert [point.distance for point in sequence.points] == [0.0, 1.0, 2.0]


def test_duplicate_distances_use_last_point():
    sequence = make_sequence([(0.0, 1.0), (0.0, 5.0), (1.0, 5.0)])
    assert math.isfinite(sequence.curvature_at_distance(0.0))
    assert sequence.curvature_at_distance(0.5) == pytest.approx(5.0)


def test_control_point_distance_next_and_current():
    sequence = make_sequence([(0.0, 0.0), (1.5, 1.0), (3.0, 2.0)])
    assert sequence.control_point_distance(1.0) == 1.5
    assert sequence.control_point_distance(1.0, next_point=False) == 0.0
    assert sequence.control_point_distance(1.5, next_point=False) == 1.5


def test_control_point_distance_past_end_returns_query():
    sequence = make_sequence([(0.0, 0.0), (1.0, 1.0)])
    assert sequence.control_point_distance(4.2) == 4.2


def test_control_point_distance_empty_returns_query():
    assert CurvatureSequence().control_point_distance(0.7) == 0.7


def test_point_max_smooth_zero_epsilon_takes_exact_max():
    previous = CurvaturePoint(0.0, 2.0)
    point = CurvaturePoint(1.0, 1.0)
    point.max_smooth(previous, 0.0)
    assert point.curvature == pytest.approx(2.0)


def test_point_max_smooth_keeps_value_between_neighbours():
    previous = CurvaturePoint(0.0, -3.0)
    point = CurvaturePoint(0.1, -1.0)
    point.max_smooth(previous, 50.0)
    assert -3.0 <= point.curvature <= -1.0


def test_point_max_smooth_ignores_opposite_signs():
    previous = CurvaturePoint(0.0, 2.0)
    point = CurvaturePoint(1.0, -1.0)
    point.max_smooth(previous, 0.0)
    assert point.curvature == -1.0


def test_point_max_smooth_ignores_larger_magnitude():
    previous = CurvaturePoint(0.0, 1.0)
    point = CurvaturePoint(1.0, 3.0)
    point.max_smooth(previous, 0.0)
    assert point.curvature == 3.0


def test_sequence_max_smooth_never_lowers_magnitudes():
    pairs = [(0.0, 0.1), (0.5, 2.0), (1.0, 0.2), (1.5, 0.3), (2.0, 1.0)]
    sequence = make_sequence(pairs)
    sequence.max_smooth(1e10)
    for (_, original), point in zip(pairs, sequence.points):
        assert abs(point.curvature) >= abs(original) - 1e-12
        assert abs(point.curvature) <= 2.0 + 1e-12


def test_sequence_max_smooth_zero_epsilon_spreads_peak():
    sequence = make_sequence([(0.0, 0.5), (1.0, 2.0), (2.0, 0.5)])
    sequence.max_smooth(0.0)
    assert [point.curvature for point in sequence.points] == pytest.approx([2.0, 2.0, 2.0])