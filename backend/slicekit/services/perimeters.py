"""
Concentric perimeter generation for simple 2D outlines.

These helpers approximate a printer's perimeter toolpath by emitting
closed loops that step inward from an outer boundary by a fixed
spacing (typically the nozzle width).  Rectangles produce five‑point
loops (the start point is repeated at the end); circles are sampled as
regular polygons with ``num_segments`` edges.

``generate_layer_perimeters`` composes the rectangle generator with a
sliced :class:`~.shapes.Layer`: the bounding rectangle of every point in
the layer is used as the outer boundary.
"""

from __future__ import annotations

import logging
import math
from typing import List

from .shapes import Circle, InvalidShapeError, Layer, Path, Rectangle
from .vector import Point

logger = logging.getLogger(__name__)

# Upper bound on loops a single request may ask for.
MAX_PERIMETER_LOOPS: int = 10_000


def generate_rectangle_perimeters(rectangle: Rectangle, spacing: float) -> List[Path]:
    """Generate inward‑offset rectangular loops.

    Args:
        rectangle: Outer boundary.
        spacing: Inward offset between successive loops.  Non‑positive
            values produce no loops.

    Returns:
        A list of closed 5‑point paths, outermost first.
    """
    paths: List[Path] = []
    if spacing <= 0.0:
        return paths

    min_x, min_y = rectangle.min_x, rectangle.min_y
    max_x, max_y = rectangle.max_x, rectangle.max_y
    while min_x < max_x and min_y < max_y:
        paths.append(
            [
                Point(min_x, min_y, 0.0),
                Point(max_x, min_y, 0.0),
                Point(max_x, max_y, 0.0),
                Point(min_x, max_y, 0.0),
                Point(min_x, min_y, 0.0),
            ]
        )
        shrunk = (min_x + spacing, min_y + spacing, max_x - spacing, max_y - spacing)
        # A spacing below the float step of the bounds makes no progress.
        if shrunk == (min_x, min_y, max_x, max_y):
            logger.warning("rectangle perimeters: spacing %s too small for bounds, stopping", spacing)
            break
        min_x, min_y, max_x, max_y = shrunk
    return paths


def generate_circle_perimeters(circle: Circle, spacing: float, num_segments: int) -> List[Path]:
    """Generate inward‑offset circular loops.

    Each loop has ``num_segments + 1`` points; the first point is
    repeated at the end to close it.  The radius shrinks by ``spacing``
    until it is no longer positive.

    Args:
        circle: Outer circle.
        spacing: Radial offset between successive loops.
        num_segments: Number of polygon edges per loop (at least 3).

    Returns:
        A list of closed paths, outermost first.  Empty when ``spacing``
        is not positive or ``num_segments`` is below 3.
    """
    paths: List[Path] = []
    if spacing <= 0.0 or num_segments < 3:
        return paths

    radius = circle.radius
    while radius > 0.0:
        path: Path = []
        for i in range(num_segments):
            theta = 2.0 * math.pi * i / num_segments
            path.append(
                Point(
                    circle.center_x + radius * math.cos(theta),
                    circle.center_y + radius * math.sin(theta),
                    0.0,
                )
            )
        path.append(path[0])
        paths.append(path)
        if radius - spacing == radius:
            logger.warning("circle perimeters: spacing %s too small for radius, stopping", spacing)
            break
        radius -= spacing
    return paths


def estimate_rectangle_loop_count(rectangle: Rectangle, spacing: float) -> float:
    """Approximate number of loops :func:`generate_rectangle_perimeters` emits.

    Returned as a float so that a vanishing spacing yields ``inf``
    instead of overflowing.
    """
    if not spacing > 0.0:
        return 0.0
    extent = min(rectangle.max_x - rectangle.min_x, rectangle.max_y - rectangle.min_y) / 2.0
    return extent / spacing


def estimate_circle_loop_count(circle: Circle, spacing: float) -> float:
    """Approximate number of loops :func:`generate_circle_perimeters` emits."""
    if not spacing > 0.0:
        return 0.0
    return circle.radius / spacing


def check_loop_budget(estimate: float, limit: int = MAX_PERIMETER_LOOPS) -> None:
    """Raise :class:`InvalidShapeError` when ``estimate`` exceeds ``limit``."""
    if estimate > limit:
        raise InvalidShapeError(
            f"spacing too small: about {estimate:.0f} loops requested, limit is {limit}"
        )


def compute_layer_bounding_box(layer: Layer) -> Rectangle:
    """Bounding rectangle of every point in ``layer`` (XY only).

    A layer without any points yields the zero rectangle at the origin.
    """
    points = [p for path in layer.paths for p in path]
    if not points:
        return Rectangle(0.0, 0.0, 0.0, 0.0)
    return Rectangle(
        min(p.x for p in points),
        min(p.y for p in points),
        max(p.x for p in points),
        max(p.y for p in points),
    )


def generate_layer_perimeters(layer: Layer, spacing: float) -> Layer:
    """Build a new layer holding rectangular perimeters around ``layer``."""
    bbox = compute_layer_bounding_box(layer)
    paths = generate_rectangle_perimeters(bbox, spacing)
    logger.debug("layer z=%s: %d perimeter loops (spacing=%s)", layer.z, len(paths), spacing)
    return Layer(z=layer.z, paths=paths)


__all__ = [
    "generate_rectangle_perimeters",
    "generate_circle_perimeters",
    "estimate_rectangle_loop_count",
    "estimate_circle_loop_count",
    "MAX_PERIMETER_LOOPS",
    "check_loop_budget",
    "compute_layer_bounding_box",
    "generate_layer_perimeters",
]
