"""Angle helpers, including numerically safe forms of sin(x)/x and (cos(x)-1)/x."""

from __future__ import annotations

import math


def swap_field_polar_degrees(degrees: float) -> float:
    """Convert between field heading and polar angle, both in degrees."""
    return 90 - degrees


def sinc(x: float) -> float:
    """sin(x)/x, using a Taylor approximation below 1e-8."""
    if x < 1e-8:
        return 1 - x**2 / 6
    return math.sin(x) / x


def cosm1_x(x: float) -> float:
    """(cos(x) - 1)/x, using a Taylor approximation below 1e-8."""
    if x < 1e-8:
        return -x / 2
    return (math.cos(x) - 1) / x