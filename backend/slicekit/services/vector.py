"""
Small immutable vector and point types.

``Vector3D`` and ``Point`` are plain value types with component‑wise
arithmetic.  ``Vector3D`` is used for direction and displacement
calculations inside the predicates; ``Point`` is the coordinate type
exposed by the rest of the package (triangles, paths and layers).  In
2D contexts the ``z`` component simply stays at zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector3D:
    """A 3D vector in Cartesian coordinates."""

    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> "Vector3D":
        return Vector3D(self.x * s, self.y * s, self.z * s)

    def __rmul__(self, s: float) -> "Vector3D":
        return self * s

    def __neg__(self) -> "Vector3D":
        return Vector3D(-self.x, -self.y, -self.z)

    def to_point(self) -> "Point":
        return Point(self.x, self.y, self.z)


@dataclass(frozen=True)
class Point:
    """A position in 2D or 3D space.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate; left at ``0.0`` for planar data such as slice
            contours.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> "Point":
        return Point(self.x * s, self.y * s, self.z * s)

    def __rmul__(self, s: float) -> "Point":
        return self * s

    def to_vector(self) -> Vector3D:
        return Vector3D(self.x, self.y, self.z)

    def xy(self) -> tuple[float, float]:
        """Return the planar ``(x, y)`` pair."""
        return (self.x, self.y)


def dot_product(v1: Vector3D, v2: Vector3D) -> float:
    """Compute the scalar product ``v1 · v2``."""
    return v1.x * v2.x + v1.y * v2.y + v1.z * v2.z


def cross_product(v1: Vector3D, v2: Vector3D) -> Vector3D:
    """Compute the vector product ``v1 × v2``.

    For two vectors lying in the XY plane the ``z`` component of the
    result is the signed area of the parallelogram they span.
    """
    return Vector3D(
        v1.y * v2.z - v1.z * v2.y,
        v1.z * v2.x - v1.x * v2.z,
        v1.x * v2.y - v1.y * v2.x,
    )


def magnitude(v: Vector3D) -> float:
    """Euclidean length of ``v``."""
    return math.sqrt(dot_product(v, v))


def distance(v1: Vector3D, v2: Vector3D) -> float:
    """Euclidean distance between two position vectors."""
    return magnitude(v1 - v2)


__all__ = [
    "Vector3D",
    "Point",
    "dot_product",
    "cross_product",
    "magnitude",
    "distance",
]
