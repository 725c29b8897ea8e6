"""Two-dimensional vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass

from splinepath.angle import cosm1_x, sinc
from splinepath.general import l2_norm
from splinepath.units import PolarAngle


@dataclass
class Vector2D:
    """A mutable 2D vector."""

    x: float
    y: float

    @classmethod
    def from_polar(cls, angle: PolarAngle, magnitude: float) -> "Vector2D":
        radians = angle.polar_rad()
        return cls(magnitude * math.cos(radians), magnitude * math.sin(radians))

    def rotate_by(self, rotation: PolarAngle) -> None:
        """Rotate the vector in place."""
        radians = rotation.polar_rad()
        cos_r, sin_r = math.cos(radians), math.sin(radians)
        self.x, self.y = self.x * cos_r - self.y * sin_r, self.x * sin_r + self.y * cos_r

    def rotate_exponential_by(self, rotation: PolarAngle) -> None:
        """Apply the pose-exponential rotation to the vector in place."""
        radians = rotation.polar_rad()
        s, c = sinc(radians), cosm1_x(radians)
        self.x, self.y = self.x * s + self.y * c, -self.x * c + self.y * s

    def magnitude(self) -> float:
        return l2_norm([self.x, self.y])

    def normalized(self) -> "Vector2D":
        magnitude = self.magnitude()
        return Vector2D(self.x / magnitude, self.y / magnitude)

    def __neg__(self) -> "Vector2D":
        return Vector2D(-self.x, -self.y)

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return self + -other

    def cross_scalar(self, other: "Vector2D") -> float:
        return self.x * other.y - self.y * other.x

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def angle_from(self, other: "Vector2D") -> PolarAngle:
        """Angle of this vector measured from ``other``."""
        this_radians = math.atan2(self.y, self.x)
        other_radians = math.atan2(other.y, other.x)
        return PolarAngle.from_radians(this_radians - other_radians)