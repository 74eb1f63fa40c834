"""
Geometric predicates used by the slicer.

This module collects the projection, orientation and containment tests
that the rest of the package relies on.  Every tolerance decision is
made against :data:`~.numeric_utils.EPSILON` so that the predicates
agree with each other on borderline inputs.

Bounding boxes here are disposable helpers: they are built from the two
endpoints of a segment, padded by a small tolerance and thrown away
once the containment test has been answered.
"""

from __future__ import annotations

from dataclasses import dataclass

from .numeric_utils import EPSILON, clamp_to_unit_interval, sign
from .vector import Point, cross_product, dot_product, magnitude


def project_point_on_line(point: Point, a: Point, b: Point) -> Point:
    """Project ``point`` onto the infinite line through ``a`` and ``b``.

    The result may lie outside the segment ``[a, b]``; use
    :func:`project_point_on_line_segment` to stay within it.  When ``a``
    and ``b`` coincide (squared length within ``EPSILON``) the line
    degenerates to a point and ``a`` is returned.

    Args:
        point: Point to project.
        a: First point defining the line.
        b: Second point defining the line.

    Returns:
        The closest point on the line to ``point``.
    """
    a_vec = a.to_vector()
    direction = b.to_vector() - a_vec
    length_squared = dot_product(direction, direction)
    if abs(length_squared) <= EPSILON:
        return a
    t = dot_product(point.to_vector() - a_vec, direction) / length_squared
    return (a_vec + direction * t).to_point()


def project_point_on_line_segment(point: Point, a: Point, b: Point) -> Point:
    """Project ``point`` onto the closed segment ``[a, b]``.

    Identical to :func:`project_point_on_line` except that the
    interpolation parameter is clamped to ``[0, 1]`` so the result is
    always on the segment (possibly at an endpoint).
    """
    a_vec = a.to_vector()
    direction = b.to_vector() - a_vec
    length_squared = dot_product(direction, direction)
    if abs(length_squared) <= EPSILON:
        return a
    t = dot_product(point.to_vector() - a_vec, direction) / length_squared
    t = clamp_to_unit_interval(t)
    return (a_vec + direction * t).to_point()


def orient2d(a: Point, b: Point, c: Point) -> float:
    """Signed area test for three points in the XY plane.

    Returns twice the signed area of triangle ``abc``: positive when
    ``c`` lies to the left of the directed edge ``a → b`` (counter‑
    clockwise), negative when it lies to the right and (near) zero when
    the three points are collinear.
    """
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


signed_area_2d = orient2d


@dataclass(frozen=True)
class AxisAlignedBoundingBox:
    """Axis‑aligned box in 3D."""

    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float


@dataclass(frozen=True)
class AxisAlignedBoundingBox2D:
    """Axis‑aligned box in the XY plane."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float


def axis_aligned_bounding_box(a: Point, b: Point, pad: float = EPSILON) -> AxisAlignedBoundingBox:
    """Bounding box of the segment ``[a, b]`` grown by ``pad`` on every side."""
    return AxisAlignedBoundingBox(
        min_x=min(a.x, b.x) - pad,
        min_y=min(a.y, b.y) - pad,
        min_z=min(a.z, b.z) - pad,
        max_x=max(a.x, b.x) + pad,
        max_y=max(a.y, b.y) + pad,
        max_z=max(a.z, b.z) + pad,
    )


def axis_aligned_bounding_box_2d(a: Point, b: Point, pad: float = EPSILON) -> AxisAlignedBoundingBox2D:
    """XY bounding box of the segment ``[a, b]`` grown by ``pad``."""
    return AxisAlignedBoundingBox2D(
        min_x=min(a.x, b.x) - pad,
        min_y=min(a.y, b.y) - pad,
        max_x=max(a.x, b.x) + pad,
        max_y=max(a.y, b.y) + pad,
    )


def contains_point_3d(box: AxisAlignedBoundingBox, point: Point) -> bool:
    """Inclusive containment test on all three axes."""
    return (
        box.min_x <= point.x <= box.max_x
        and box.min_y <= point.y <= box.max_y
        and box.min_z <= point.z <= box.max_z
    )


def contains_point_2d(box: AxisAlignedBoundingBox2D, point: Point) -> bool:
    """Inclusive containment test on the x and y axes."""
    return box.min_x <= point.x <= box.max_x and box.min_y <= point.y <= box.max_y


def on_line_segment_2d(a: Point, b: Point, point: Point) -> bool:
    """Return True if ``point`` lies on the closed segment ``[a, b]`` in XY.

    The point must be collinear with ``a`` and ``b`` and fall inside the
    padded bounding box of the segment.
    """
    if abs(orient2d(a, b, point)) > EPSILON:
        return False
    return contains_point_2d(axis_aligned_bounding_box_2d(a, b, EPSILON), point)


def on_line_segment_3d(a: Point, b: Point, point: Point) -> bool:
    """Return True if ``point`` lies on the closed segment ``[a, b]`` in 3D."""
    a_vec = a.to_vector()
    cross = cross_product(b.to_vector() - a_vec, point.to_vector() - a_vec)
    if magnitude(cross) > EPSILON:
        return False
    return contains_point_3d(axis_aligned_bounding_box(a, b, EPSILON), point)


def line_segments_intersect_2d(a: Point, b: Point, c: Point, d: Point) -> bool:
    """Test whether the closed segments ``[a, b]`` and ``[c, d]`` intersect in XY.

    A proper crossing is detected when each segment's endpoints lie on
    strictly opposite sides of the other segment's line.  Otherwise any
    endpoint that is collinear with the other segment and lies within it
    counts as an intersection, which covers touching endpoints,
    T‑junctions and collinear overlap.

    Args:
        a: Start of the first segment.
        b: End of the first segment.
        c: Start of the second segment.
        d: End of the second segment.

    Returns:
        True if the segments share at least one point.
    """
    ab_c = sign(orient2d(a, b, c), EPSILON)
    ab_d = sign(orient2d(a, b, d), EPSILON)
    cd_a = sign(orient2d(c, d, a), EPSILON)
    cd_b = sign(orient2d(c, d, b), EPSILON)

    if ab_c * ab_d < 0 and cd_a * cd_b < 0:
        return True

    if ab_c == 0 and on_line_segment_2d(a, b, c):
        return True
    if ab_d == 0 and on_line_segment_2d(a, b, d):
        return True
    if cd_a == 0 and on_line_segment_2d(c, d, a):
        return True
    if cd_b == 0 and on_line_segment_2d(c, d, b):
        return True
    return False


__all__ = [
    "project_point_on_line",
    "project_point_on_line_segment",
    "orient2d",
    "signed_area_2d",
    "AxisAlignedBoundingBox",
    "AxisAlignedBoundingBox2D",
    "axis_aligned_bounding_box",
    "axis_aligned_bounding_box_2d",
    "contains_point_3d",
    "contains_point_2d",
    "on_line_segment_2d",
    "on_line_segment_3d",
    "line_segments_intersect_2d",
]
