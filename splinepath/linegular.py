"""Planar pose: a 2D position together with a heading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union

from splinepath.units import PolarAngle
from splinepath.vector2d import Vector2D

PositionLike = Union[Vector2D, Sequence[float]]
RotationLike = Union[PolarAngle, float, int]


@dataclass
class Linegular:
    """A position on the plane and a heading angle."""

    position: Vector2D
    rotation: PolarAngle = field(default_factory=PolarAngle)

    def __post_init__(self) -> None:
        position = self.position
        if isinstance(position, Vector2D):
            self.position = Vector2D(position.x, position.y)
        else:
            x, y = position
            self.position = Vector2D(x, y)
        if not isinstance(self.rotation, PolarAngle):
            self.rotation = PolarAngle(float(self.rotation))

    @classmethod
    def from_xy(cls, x: float, y: float, rotation: RotationLike) -> "Linegular":
        """Build a pose from its x (right-left) and y (forward-backward) coordinates."""
        return cls(Vector2D(x, y), rotation)

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def xy_magnitude(self) -> float:
        """Distance of the position from the origin."""
        return self.position.magnitude()

    def rotate_xy_by(self, rotation: PolarAngle) -> None:
        """Rotate the position about the origin in place; the heading is unchanged."""
        self.position.rotate_by(rotation)

    def rotate_exponential_by(self, rotation: PolarAngle) -> None:
        """Apply the pose-exponential rotation to the position in place."""
        self.position.rotate_exponential_by(rotation)

    def __add__(self, other: "Linegular") -> "Linegular":
        return Linegular.from_xy(self.x + other.x, self.y + other.y, self.rotation + other.rotation)

    def __sub__(self, other: "Linegular") -> "Linegular":
        return Linegular.from_xy(self.x - other.x, self.y - other.y, self.rotation - other.rotation)

    def __iadd__(self, other: "Linegular") -> "Linegular":
        self.position.x += other.x
        self.position.y += other.y
        self.rotation = self.rotation + other.rotation
        return self

    def __isub__(self, other: "Linegular") -> "Linegular":
        self.position.x -= other.x
        self.position.y -= other.y
        self.rotation = self.rotation - other.rotation
        return self

    def __mul__(self, value: float) -> "Linegular":
        """Scale the position; the heading is kept."""
        return Linegular.from_xy(self.x * value, self.y * value, self.rotation)

    def __truediv__(self, value: float) -> "Linegular":
        return self * (1 / value)