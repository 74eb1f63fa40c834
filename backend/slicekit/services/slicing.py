"""
Mesh slicing: triangle–plane intersection and segment stitching.

Slicing a mesh proceeds one horizontal plane at a time.  Every triangle
is intersected with the plane ``z = plane_height`` and contributes at
most one :class:`Segment2D`.  The raw segments arrive in no particular
order, so :func:`stitch_segments_into_paths` joins them greedily by
matching endpoints into polylines, closing a polyline when its two ends
meet.  :func:`slice_triangle_mesh_layers` drives both steps for every
layer between the lowest and highest vertex of the mesh.

Edges lying in the cutting plane are skipped, so a triangle that is
fully coplanar with a layer contributes nothing.  Open polylines
(from non‑manifold or boundary‑adjacent geometry) are returned as‑is
rather than treated as errors.

Debug logging can be enabled via the ``SLICE_DEBUG`` environment
variable; when set, per‑layer statistics (segment count, path count,
closed path count) are emitted.
"""

from __future__ import annotations

import math
import os
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .numeric_utils import EPSILON, STITCH_EPSILON
from .perimeters import generate_layer_perimeters
from .shapes import Layer, Path, Triangle, is_closed
from .vector import Point

logger = logging.getLogger(__name__)

# Added to the layer count before flooring so that the top plane is
# kept when (max_z - min_z) / layer_height lands just below an integer.
LAYER_COUNT_TOLERANCE: float = 1e-12


@dataclass(frozen=True)
class Segment2D:
    """An unordered pair of XY points from one triangle–plane intersection."""

    start_point: Point
    end_point: Point


def points_close_2d(point1: Point, point2: Point, epsilon: float) -> bool:
    """Return True if two points agree on x and y within ``epsilon``."""
    return abs(point1.x - point2.x) <= epsilon and abs(point1.y - point2.y) <= epsilon


def _add_unique_point(points: List[Point], point: Point, epsilon: float) -> None:
    for existing in points:
        if points_close_2d(existing, point, epsilon):
            return
    points.append(point)


def triangle_plane_segment(
    triangle: Triangle,
    plane_height: float,
    epsilon: float = EPSILON,
) -> Optional[Segment2D]:
    """Intersect a triangle with the horizontal plane ``z = plane_height``.

    The three directed edges ``a→b``, ``b→c`` and ``c→a`` are inspected
    in turn using the signed vertical distances of their endpoints to
    the plane:

    - both endpoints on the plane: the edge is coplanar and skipped;
    - exactly one endpoint on the plane: that vertex is recorded;
    - endpoints on strictly opposite sides: the crossing point is
      linearly interpolated.

    Recorded points are compared in XY only and near duplicates are
    dropped, so a vertex shared by two edges is counted once.

    Args:
        triangle: Triangle to intersect.
        plane_height: Height of the cutting plane.
        epsilon: Tolerance for classifying a vertex as lying on the plane.

    Returns:
        A :class:`Segment2D` when exactly two distinct points were found,
        otherwise ``None`` (triangle misses the plane, touches it at a
        single vertex, or lies in it).
    """
    intersections: List[Point] = []
    vertices = triangle.vertices()
    for i in range(3):
        p0 = vertices[i]
        p1 = vertices[(i + 1) % 3]
        d0 = p0.z - plane_height
        d1 = p1.z - plane_height

        if abs(d0) <= epsilon and abs(d1) <= epsilon:
            continue
        if abs(d0) <= epsilon:
            _add_unique_point(intersections, Point(p0.x, p0.y, 0.0), epsilon)
            continue
        if abs(d1) <= epsilon:
            _add_unique_point(intersections, Point(p1.x, p1.y, 0.0), epsilon)
            continue
        if d0 * d1 < 0.0:
            t = d0 / (d0 - d1)
            x = p0.x + t * (p1.x - p0.x)
            y = p0.y + t * (p1.y - p0.y)
            _add_unique_point(intersections, Point(x, y, 0.0), epsilon)

    if len(intersections) != 2:
        return None
    return Segment2D(start_point=intersections[0], end_point=intersections[1])


def stitch_segments_into_paths(
    segments: Iterable[Segment2D],
    epsilon: float = STITCH_EPSILON,
) -> List[Path]:
    """Join unordered segments into polylines by matching endpoints.

    A path is seeded with the last remaining segment.  The remaining
    segments are then scanned for one whose start or end lies within
    ``epsilon`` of the path's back or front; the first match is attached
    (appending at the back, prepending at the front), removed from the
    pool, and the scan restarts.  When nothing else attaches and the path
    has more than two points with coinciding ends, it is closed by
    appending a copy of its first point.  The segment that completed the
    loop already contributed a point matching the front, so a closed
    square comes out with six points.  This repeats until every segment
    is used.

    The algorithm is greedy and O(n²) in the number of segments.

    Args:
        segments: Unordered XY segments.  The caller's collection is not
            modified.
        epsilon: Endpoint matching tolerance.

    Returns:
        The assembled paths, closed where the geometry allows.
    """
    remaining: List[Segment2D] = list(segments)
    paths: List[Path] = []

    while remaining:
        seed = remaining.pop()
        path: Path = [seed.start_point, seed.end_point]

        found_match = True
        while found_match:
            found_match = False
            for i, candidate in enumerate(remaining):
                if points_close_2d(path[-1], candidate.start_point, epsilon):
                    path.append(candidate.end_point)
                elif points_close_2d(path[-1], candidate.end_point, epsilon):
                    path.append(candidate.start_point)
                elif points_close_2d(path[0], candidate.start_point, epsilon):
                    path.insert(0, candidate.end_point)
                elif points_close_2d(path[0], candidate.end_point, epsilon):
                    path.insert(0, candidate.start_point)
                else:
                    continue
                del remaining[i]
                found_match = True
                break

        if len(path) > 2 and points_close_2d(path[0], path[-1], epsilon):
            path.append(path[0])
        paths.append(path)
    return paths


def compute_mesh_z_bounds(triangles: Sequence[Triangle]) -> Tuple[float, float]:
    """Return the lowest and highest vertex z of a non‑empty mesh."""
    zs = [v.z for tri in triangles for v in tri.vertices()]
    return min(zs), max(zs)


def slice_layer(triangles: Sequence[Triangle], z: float) -> List[Path]:
    """Intersect every triangle with ``z`` and stitch the result into paths."""
    segments: List[Segment2D] = []
    for tri in triangles:
        segment = triangle_plane_segment(tri, z, EPSILON)
        if segment is not None:
            segments.append(segment)
    paths = stitch_segments_into_paths(segments, STITCH_EPSILON)
    if os.getenv("SLICE_DEBUG"):
        logger.debug(
            "slice_layer: z=%s segments=%d paths=%d closed=%d",
            z,
            len(segments),
            len(paths),
            sum(1 for p in paths if is_closed(p)),
        )
    return paths


def slice_triangle_mesh_layers(
    triangles: Sequence[Triangle],
    layer_height: float,
    perimeter_spacing: Optional[float] = None,
) -> List[Layer]:
    """Slice a triangle mesh into horizontal layers.

    Planes are placed at ``min_z + i * layer_height`` for
    ``i = 0 .. floor((max_z - min_z) / layer_height + 1 + 1e-12) - 1``
    so that both the bottom and the top of the mesh are sliced.
    Intersection uses the base ``EPSILON``; stitching uses the coarser
    ``STITCH_EPSILON`` so that crossing points interpolated separately on
    the two triangles sharing an edge still join up.

    Args:
        triangles: The mesh to slice.
        layer_height: Vertical distance between planes.
        perimeter_spacing: When positive, each layer's contour paths are
            followed by rectangular perimeters around the layer's
            bounding rectangle, stepping inward by this spacing.

    Returns:
        One :class:`Layer` per plane in ascending z order.  Empty when the
        mesh is empty or ``layer_height`` is not positive.
    """
    if not triangles or not layer_height > 0.0:
        return []

    min_z, max_z = compute_mesh_z_bounds(triangles)
    height = max_z - min_z
    if height < 0.0:
        return []

    layer_count = int(math.floor(height / layer_height + 1.0 + LAYER_COUNT_TOLERANCE))
    logger.info(
        "Slicing %d triangles into %d layers (z=%s..%s, layer_height=%s)",
        len(triangles),
        layer_count,
        min_z,
        max_z,
        layer_height,
    )

    layers: List[Layer] = []
    for i in range(layer_count):
        z = min_z + i * layer_height
        paths = slice_layer(triangles, z)
        if perimeter_spacing is not None and perimeter_spacing > 0.0:
            perimeters = generate_layer_perimeters(Layer(z=z, paths=paths), perimeter_spacing)
            paths = paths + list(perimeters.paths)
        layers.append(Layer(z=z, paths=paths))
    return layers


__all__ = [
    "LAYER_COUNT_TOLERANCE",
    "Segment2D",
    "points_close_2d",
    "triangle_plane_segment",
    "stitch_segments_into_paths",
    "compute_mesh_z_bounds",
    "slice_layer",
    "slice_triangle_mesh_layers",
]
