"""
Small 3D vector value type used by the orbit model.

Vector3 is a NamedTuple so it still unpacks and indexes like the plain
(x, y, z) tuples used elsewhere, but arithmetic is spelled out as methods
(tuple `+` and `*` keep their sequence meaning).
"""

from __future__ import annotations

import math
from typing import NamedTuple, Tuple

Vector2 = Tuple[float, float]


class Vector3(NamedTuple):
    x: float
    y: float
    z: float

    @staticmethod
    def zero() -> Vector3:
        return Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def of(v) -> Vector3:
        """Build from any 3-sequence."""
        x, y, z = v
        return Vector3(float(x), float(y), float(z))

    def add(self, other: Tuple[float, float, float]) -> Vector3:
        return Vector3(self.x + other[0], self.y + other[1], self.z + other[2])

    def sub(self, other: Tuple[float, float, float]) -> Vector3:
        return Vector3(self.x - other[0], self.y - other[1], self.z - other[2])

    def scale(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def dot(self, other: Tuple[float, float, float]) -> float:
        return self.x * other[0] + self.y * other[1] + self.z * other[2]

    def cross(self, other: Tuple[float, float, float]) -> Vector3:
        ox, oy, oz = other
        return Vector3(
            self.y * oz - self.z * oy,
            self.z * ox - self.x * oz,
            self.x * oy - self.y * ox,
        )

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vector3:
        mag = self.norm()
        if mag < 1e-15:
            raise ValueError("Cannot normalize a zero vector.")
        return self.scale(1.0 / mag)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def rotated(self, axis: Tuple[float, float, float], angle_rad: float) -> Vector3:
        """
        Right-handed rotation about `axis` by `angle_rad` (Rodrigues' formula):
            v' = v cos(t) + (k x v) sin(t) + k (k . v)(1 - cos(t))

        Args:
            axis: Rotation axis (will be normalized)
            angle_rad: Rotation angle in radians

        Returns:
            Rotated vector
        """
        k = Vector3.of(axis).normalized()
        c = math.cos(angle_rad)
        s = math.sin(angle_rad)
        return (
            self.scale(c)
            .add(k.cross(self).scale(s))
            .add(k.scale(k.dot(self) * (1.0 - c)))
        )

    def is_close(self, other: Tuple[float, float, float], abs_tol: float = 1e-9) -> bool:
        return all(math.isclose(a, b, rel_tol=0.0, abs_tol=abs_tol) for a, b in zip(self, other))


def distance(a: Tuple[float, float, float], b: Tuple[float, float, float]) -> float:
    return Vector3.of(a).sub(b).norm()
