"""Length and angle value types with unit conversions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from splinepath.general import to_degrees, to_radians

INCHES_PER_TILE = 23 + 13.0 / 16


@dataclass(frozen=True)
class Length:
    """A length stored in field tiles."""

    value_tiles: float = 0.0

    @classmethod
    def from_tiles(cls, value: float) -> "Length":
        return cls(float(value))

    @classmethod
    def from_inches(cls, value: float) -> "Length":
        return cls.from_tiles(value / INCHES_PER_TILE)

    @classmethod
    def from_quarter_inches(cls, value: float) -> "Length":
        return cls.from_inches(value / 4)

    @classmethod
    def from_cm(cls, value: float) -> "Length":
        return cls.from_inches(value / 2.54)

    @classmethod
    def from_m(cls, value: float) -> "Length":
        return cls.from_cm(value * 100)

    def tiles(self) -> float:
        return self.value_tiles

    def inches(self) -> float:
        return self.tiles() * INCHES_PER_TILE

    def quarter_inches(self) -> float:
        return self.inches() * 4

    def cm(self) -> float:
        return self.inches() * 2.54

    def m(self) -> float:
        return self.cm() / 100

    def __neg__(self) -> "Length":
        return Length(-self.value_tiles)

    def __add__(self, other: "Length") -> "Length":
        return Length(self.value_tiles + other.value_tiles)

    def __sub__(self, other: "Length") -> "Length":
        return Length(self.value_tiles - other.value_tiles)


AngleLike = Union["PolarAngle", float, int]


def _degrees_of(value: AngleLike) -> float:
    if isinstance(value, PolarAngle):
        return value.value_polar_deg
    return float(value)


@dataclass(frozen=True)
class PolarAngle:
    """A counter-clockwise angle stored in degrees. Plain numbers count as degrees."""

    value_polar_deg: float = 0.0

    @classmethod
    def from_degrees(cls, value: float) -> "PolarAngle":
        return cls(float(value))

    @classmethod
    def from_radians(cls, value: float) -> "PolarAngle":
        return cls.from_degrees(to_degrees(value))

    def polar_deg(self) -> float:
        return self.value_polar_deg

    def polar_rad(self) -> float:
        return to_radians(self.polar_deg())

    def __neg__(self) -> "PolarAngle":
        return PolarAngle(-self.value_polar_deg)

    def __add__(self, other: AngleLike) -> "PolarAngle":
        return PolarAngle(self.value_polar_deg + _degrees_of(other))

    def __sub__(self, other: AngleLike) -> "PolarAngle":
        return PolarAngle(self.value_polar_deg - _degrees_of(other))