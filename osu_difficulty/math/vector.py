from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D vector in osu!pixels (playfield is 512x384, +Y down)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __mul__(self, k: float) -> "Vector2":
        return Vector2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "Vector2":
        return Vector2(self.x / k, self.y / k)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector2") -> float:
        # z component of the 3D cross product (2D determinant)
        return self.x * other.y - self.y * other.x

    def normalized(self) -> "Vector2":
        n = self.length()
        if n <= 0.0:
            return Vector2(0.0, 0.0)
        return Vector2(self.x / n, self.y / n)

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    @classmethod
    def of(cls, pt) -> "Vector2":
        x, y = pt
        return cls(float(x), float(y))


ZERO = Vector2(0.0, 0.0)
