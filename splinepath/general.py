"""General numeric helpers shared by the geometry and planning code."""

from __future__ import annotations

import math
from typing import Callable, Iterable, Optional, Sequence, Tuple


def mod_range(num: float, mod: float, minimum: float) -> float:
    """Return ``num`` modulo ``mod`` within the range [minimum, minimum + mod)."""
    result = math.fmod(num - minimum, mod)
    if result < 0:
        result += abs(mod)
    return result + minimum


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Limit ``value`` to the closed interval [minimum, maximum]."""
    return min(maximum, max(minimum, value))


def pct_to_volt(pct: float) -> float:
    """Convert a motor percentage to volts on a 12 V supply."""
    return pct * 12.0 / 100.0


def volt_to_pct(volt: float) -> float:
    """Convert volts on a 12 V supply to a motor percentage."""
    return volt * 100.0 / 12.0


def signum(value: float) -> int:
    """Return 1, 0 or -1 according to the sign of ``value``."""
    if value > 0:
        return 1
    if value == 0:
        return 0
    return -1


def is_within(value: float, target: float, within_range: float) -> bool:
    """Tell whether ``value`` lies within ``within_range`` of ``target``."""
    return abs(value - target) <= within_range


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi


def lerp(value1: float, value2: float, t: float) -> float:
    """Linearly interpolate between two values."""
    return value1 + (value2 - value1) * t


def range_map(x: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map ``x`` linearly from [in_min, in_max] to [out_min, out_max]."""
    return lerp(out_min, out_max, (x - in_min) / (in_max - in_min))


def max_absolute(values: Iterable[float]) -> float:
    """Return the largest absolute value, or 0 for an empty input."""
    return max((abs(value) for value in values), default=0.0)


def get_scale_factor(scale_to_max: float, values: Iterable[float]) -> float:
    """Factor that scales ``values`` so none exceeds ``scale_to_max`` in magnitude."""
    scale_to_max = abs(scale_to_max)
    return scale_to_max / max(scale_to_max, max_absolute(values))


def average(values: Iterable[float]) -> float:
    """Arithmetic mean of the values."""
    items = list(values)
    if not items:
        raise ValueError("cannot average an empty sequence")
    return sum(items) / len(items)


def absolute(values: Iterable[float]) -> list[float]:
    return [abs(value) for value in values]


def multiply_vector(values: Iterable[float], scale: float) -> list[float]:
    return [value * scale for value in values]


def euclidean_distance(point1: Sequence[float], point2: Sequence[float]) -> float:
    """Distance between two points over the dimensions they share."""
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(point1, point2)))


def l2_norm(point: Sequence[float]) -> float:
    return euclidean_distance(point, [0.0] * len(point))


def arc_radius(arc_length: float, rotated_angle: float) -> Optional[float]:
    """Radius of an arc, or None when the rotation is too small to define one."""
    if is_within(rotated_angle, 0, 1e-7):
        return None
    return arc_length / rotated_angle


def chord_length(arc_radius: float, rotated_angle: float) -> float:
    return 2 * math.sin(rotated_angle / 2) * arc_radius


def integrate_polynomial(
    value_dy_dx: Sequence[float], dx: float, is_simple: bool = False
) -> Tuple[float, list[float]]:
    """Integrate a motion state over ``dx``.

    ``value_dy_dx`` holds successive derivatives (e.g. velocity, acceleration, ...).
    Returns the change of the integrated value and the derivatives after ``dx``.
    """
    degree_count = len(value_dy_dx)

    if is_simple:
        result = list(value_dy_dx)
        delta_value = value_dy_dx[0] * dx
        for degree, higher in enumerate(value_dy_dx[1:]):
            result[degree] += higher * dx
        return delta_value, result

    integrated = list(value_dy_dx)
    result = list(value_dy_dx)
    delta_value = 0.0
    for degree in range(degree_count + 1):
        for term in range(degree):
            index = degree_count - 1 - term
            integrated[index] = integrated[index] * dx / (degree - term)
            if degree == degree_count:
                delta_value += integrated[index]
            else:
                result[degree_count - 1 - degree] += integrated[index]
    return delta_value, result


def newtons_method(
    f_fprime: Callable[[float], Tuple[float, float]],
    start_x: float = 0.0,
    x_skip_step: float = 0.1,
    skip_step_sign: int = 1,
) -> Optional[float]:
    """Find a root of f with Newton's method.

    ``f_fprime`` returns ``(f(x), f'(x))``. Returns the root, or None when
    the iteration does not converge within 20 steps.
    """
    x = start_x
    low, high = -1e5, 1e5
    for _ in range(20):
        f_x, fp_x = f_fprime(x)

        if abs(fp_x) < 1e-6:
            x += x_skip_step * skip_step_sign
            continue

        dx = -f_x / fp_x
        new_x = x + dx
        if new_x < low or high < new_x:
            x -= x_skip_step * signum(new_x - high)
            continue

        if abs(dx) < 1e-5:
            return x

        if dx < 0:
            high = min(high, x)
        else:
            low = max(low, x)
        x = new_x
    return None