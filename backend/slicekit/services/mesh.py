"""
Conversions between flat mesh buffers and :class:`~.shapes.Triangle` lists.

Meshes arriving over the API may be given as a flat vertex list
``(x0, y0, z0, x1, y1, z1, …)`` plus a flat index list where every three
entries form a triangle.  This module decodes such buffers and computes
summary information (bounding box, content digest) with NumPy.
"""

from __future__ import annotations

import hashlib
import logging
import math
from typing import List, Sequence, Tuple

import numpy as np

from .shapes import Triangle
from .vector import Point

logger = logging.getLogger(__name__)


def triangles_from_buffers(vertices: Sequence[float], indices: Sequence[int]) -> List[Triangle]:
    """Decode flat vertex/index buffers into triangles.

    A trailing partial index triple is ignored.  Triangles that
    reference a vertex outside the buffer, or whose coordinates are not
    finite, are skipped.

    Args:
        vertices: Flat list of vertex coordinates.
        indices: Flat list of vertex indices, three per triangle.

    Returns:
        The decoded triangles in index order.
    """
    vertex_count = len(vertices) // 3
    triangles: List[Triangle] = []
    skipped = 0
    for k in range(0, len(indices) - 2, 3):
        tri_idx = indices[k], indices[k + 1], indices[k + 2]
        if any(i < 0 or i >= vertex_count for i in tri_idx):
            skipped += 1
            continue
        coords = [float(vertices[3 * i + axis]) for i in tri_idx for axis in range(3)]
        if not all(math.isfinite(value) for value in coords):
            skipped += 1
            continue
        a, b, c = (Point(*coords[j:j + 3]) for j in (0, 3, 6))
        triangles.append(Triangle(a, b, c))
    if skipped:
        logger.warning(
            "triangles_from_buffers: skipped %d triangles with out-of-range indices or non-finite coordinates",
            skipped,
        )
    return triangles


def triangles_to_array(triangles: Sequence[Triangle]) -> "np.ndarray":
    """Stack triangle vertices into an ``(n, 3, 3)`` float array."""
    if not triangles:
        return np.zeros((0, 3, 3), dtype=float)
    return np.array(
        [[[v.x, v.y, v.z] for v in tri.vertices()] for tri in triangles],
        dtype=float,
    )


def compute_mesh_bbox(triangles: Sequence[Triangle]) -> Tuple[List[float], List[float]]:
    """Axis‑aligned bounding box of a mesh as ``(min_xyz, max_xyz)``.

    An empty mesh yields zeros for both corners.
    """
    arr = triangles_to_array(triangles)
    if arr.size == 0:
        return [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]
    flat = arr.reshape(-1, 3)
    return flat.min(axis=0).tolist(), flat.max(axis=0).tolist()


def mesh_digest(triangles: Sequence[Triangle]) -> str:
    """SHA‑256 of the mesh coordinates, used as a cache key."""
    arr = np.ascontiguousarray(triangles_to_array(triangles), dtype="<f8")
    return hashlib.sha256(arr.tobytes()).hexdigest()


__all__ = [
    "triangles_from_buffers",
    "triangles_to_array",
    "compute_mesh_bbox",
    "mesh_digest",
]
