"""
API routes for perimeter generation.

These endpoints expose the concentric perimeter generators for simple
outlines.  The request dimensions are validated by the shape
constructors themselves, and the spacing is checked against
``MAX_PERIMETER_LOOPS``.  Inverted rectangle bounds, a non‑positive
radius or a spacing that would produce too many loops are reported as
``422`` responses carrying the error message.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from .models import CirclePerimeterRequest, PerimeterResponse, RectanglePerimeterRequest
from ..services.perimeters import (
    check_loop_budget,
    estimate_circle_loop_count,
    estimate_rectangle_loop_count,
    generate_circle_perimeters,
    generate_rectangle_perimeters,
)
from ..services.shapes import Circle, InvalidShapeError, Path, Rectangle
from ..services.toolpath import format_toolpath_gcode

logger = logging.getLogger(__name__)

router = APIRouter()


def _response(paths: List[Path]) -> PerimeterResponse:
    return PerimeterResponse(
        paths=[[[p.x, p.y] for p in path] for path in paths],
        gcode=format_toolpath_gcode(paths),
    )


@router.post("/perimeters/rectangle", response_model=PerimeterResponse)
async def rectangle_perimeters(request: RectanglePerimeterRequest) -> PerimeterResponse:
    """Generate inward rectangular loops for an axis‑aligned rectangle."""
    try:
        rectangle = Rectangle(request.minX, request.minY, request.maxX, request.maxY)
        check_loop_budget(estimate_rectangle_loop_count(rectangle, request.spacing))
    except InvalidShapeError as exc:
        logger.info("rejected rectangle request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))
    return _response(generate_rectangle_perimeters(rectangle, request.spacing))


@router.post("/perimeters/circle", response_model=PerimeterResponse)
async def circle_perimeters(request: CirclePerimeterRequest) -> PerimeterResponse:
    """Generate inward circular loops sampled as regular polygons."""
    try:
        circle = Circle(request.centerX, request.centerY, request.radius)
        check_loop_budget(estimate_circle_loop_count(circle, request.spacing))
    except InvalidShapeError as exc:
        logger.info("rejected circle request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))
    return _response(generate_circle_perimeters(circle, request.spacing, request.numSegments))
