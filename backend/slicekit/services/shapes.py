"""
Passive shape records consumed and produced by the slicer.

``Triangle`` and ``Layer`` are the mesh‑side records; ``Rectangle`` and
``Circle`` describe simple 2D outlines used by the perimeter generator.
Shapes with dimensional constraints validate them on construction and
raise :class:`InvalidShapeError` rather than silently clamping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .projections import AxisAlignedBoundingBox
from .vector import Point

Path = List[Point]

# Box type used for 3D extents alongside the shape records.
Box = AxisAlignedBoundingBox


class InvalidShapeError(ValueError):
    """Raised when a shape is constructed with invalid dimensions."""


@dataclass(frozen=True)
class Triangle:
    """One mesh facet.  Zero‑area triangles are accepted as‑is."""

    a: Point
    b: Point
    c: Point

    def vertices(self) -> Tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)


@dataclass(frozen=True)
class Layer:
    """A single Z slice holding the polylines found at that height.

    Attributes:
        z: Height of the slicing plane.
        paths: Polylines in the XY plane.  The layer and each of its
            paths are stored as tuples, so neither can be changed after
            construction and layers can be shared between callers.
    """

    z: float
    paths: Tuple[Tuple[Point, ...], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", tuple(tuple(path) for path in self.paths))


@dataclass(frozen=True)
class Rectangle:
    """Axis‑aligned rectangle in the XY plane."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise InvalidShapeError("Rectangle: min must be <= max on all axes")


@dataclass(frozen=True)
class Circle:
    """Circle in the XY plane."""

    center_x: float
    center_y: float
    radius: float

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise InvalidShapeError("Circle: radius must be positive")


def is_closed(path: Sequence[Point]) -> bool:
    """Return True if ``path`` ends where it starts and has more than two points."""
    return len(path) > 2 and path[0] == path[-1]


__all__ = [
    "Path",
    "Box",
    "InvalidShapeError",
    "Triangle",
    "Layer",
    "Rectangle",
    "Circle",
    "is_closed",
]
