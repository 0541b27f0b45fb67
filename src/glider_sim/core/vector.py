"""Two dimensional vector value type used throughout the glider core."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D vector with the usual arithmetic."""

    x: float
    y: float

    @classmethod
    def from_array(cls, values) -> "Vector2":
        return cls(float(values[0]), float(values[1]))

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vector2":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def sq_magnitude(self) -> float:
        return self.x * self.x + self.y * self.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vector2":
        """Unit vector in the same direction; ``(nan, nan)`` for the zero vector."""

        length = self.magnitude()
        if length == 0.0 or not math.isfinite(length):
            return Vector2(math.nan, math.nan)
        return Vector2(self.x / length, self.y / length)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector2") -> float:
        """z-component of the 3D cross product."""

        return self.x * other.y - self.y * other.x

    def angle(self) -> float:
        """Polar angle in radians, in ``(-pi, pi]``."""

        return math.atan2(self.y, self.x)

    def perpendicular(self) -> "Vector2":
        """The vector rotated by +90 degrees, ``(-y, x)``."""

        return Vector2(-self.y, self.x)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def __repr__(self) -> str:
        return f"Vector2({self.x:.4g}, {self.y:.4g})"


ZERO = Vector2(0.0, 0.0)


__all__ = ["Vector2", "ZERO"]
