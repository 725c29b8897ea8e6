import math

import pytest

from splinepath.units import INCHES_PER_TILE, Length, PolarAngle


def test_tile_in_inches():
    assert Length.from_tiles(1).inches() == pytest.approx(23.8125)
    assert INCHES_PER_TILE == pytest.approx(23.8125)


@pytest.mark.parametrize("value", [-12.5, 0.0, 1.0, 3.75, 250.0])
def test_length_round_trips(value):
    assert Length.from_tiles(value).tiles() == pytest.approx(value)
    assert Length.from_inches(value).inches() == pytest.approx(value)
    assert Length.from_quarter_inches(value).quarter_inches() == pytest.approx(value)
    assert Length.from_cm(value).cm() == pytest.approx(value)
    assert Length.from_m(value).m() == pytest.approx(value)


def test_length_unit_relations():
    length = Length.from_tiles(2.3)
    assert length.quarter_inches() == pytest.approx(length.inches() * 4)
    assert length.cm() == pytest.approx(length.inches() * 2.54)
    assert length.m() == pytest.approx(length.cm() / 100)


def test_length_arithmetic():
    total = Length.from_inches(-2000.0) + Length.from_inches(200)
    assert total.m() == pytest.approx(Length.from_inches(-1800).m())
    a, b = Length.from_tiles(3.5), Length.from_tiles(1.25)
    assert (a - b) + b == a
    assert (-a).tiles() == -a.tiles()
    assert a - b == a + (-b)


def test_polar_angle_radians():
    assert PolarAngle.from_degrees(-90).polar_rad() == pytest.approx(-math.pi / 2)
    for rad in (-3.0, 0.0, 0.5, 6.0):
        assert PolarAngle.from_radians(rad).polar_rad() == pytest.approx(rad)


def test_polar_angle_arithmetic():
    a, b = PolarAngle(30.0), PolarAngle(-75.0)
    assert (a + b).polar_deg() == pytest.approx(a.polar_deg() + b.polar_deg())
    assert (a - b) + b == a
    assert (-a).polar_deg() == -a.polar_deg()
    assert (a + 180.0).polar_deg() == pytest.approx(a.polar_deg() + 180.0)