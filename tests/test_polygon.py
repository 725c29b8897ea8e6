import pytest

from splinepath.polygon import Polygon2D
from splinepath.vector2d import Vector2D

TRIANGLE = [(0, 0), (4, 0), (2, 5)]
SQUARE = [(0, 0), (2, 0), (2, 2), (0, 2)]
STAR = [
    (0, -5), (1, -4), (2, -3), (3, -2), (4, 1), (4, 2), (3, 4), (2, 5), (1, 4), (0, 2),
    (-1, 4), (-2, 5), (-3, 4), (-4, 2), (-4, 1), (-3, -2), (-2, -3), (-1, -4),
]


def test_triangle_area():
    assert Polygon2D(TRIANGLE).area() == pytest.approx(10)


def test_square_area_and_winding():
    square = Polygon2D(SQUARE)
    assert square.area() == pytest.approx(4)
    assert square.winding_number(Vector2D(1, 1)) == 1


@pytest.mark.parametrize("points", [TRIANGLE, SQUARE, STAR])
def test_reversing_order_negates(points):
    forward = Polygon2D(points)
    backward = Polygon2D(list(reversed(points)))
    assert backward.area() == pytest.approx(-forward.area())
    for probe in [(0.5, 0.5), (1.0, 1.0), (10.0, 10.0), (-3.0, 3.0)]:
        assert backward.winding_number(probe) == -forward.winding_number(probe)


def test_containment():
    triangle = Polygon2D(TRIANGLE)
    assert Vector2D(2, 1) in triangle
    assert triangle.contains_point((2, 1))
    assert Vector2D(10, 10) not in triangle
    assert triangle.winding_number(Vector2D(-1, 1)) == 0


def test_star_interior_and_notch():
    star = Polygon2D(STAR)
    assert star.contains_point((0, 0))
    assert star.contains_point((-2, 3))
    assert not star.contains_point((0, 4))
    assert star.area() > 0


def test_tuple_points_are_vectors():
    polygon = Polygon2D(TRIANGLE)
    assert polygon.ccw_points[1] == Vector2D(4, 0)


def test_empty_polygon():
    empty = Polygon2D([])
    assert empty.area() == 0
    assert not empty.contains_point((0, 0))