"""
API routes for mesh slicing.

``POST /slice`` slices a mesh into layers and returns the stitched
polylines of every layer together with the mesh bounding box and a
short summary.  ``POST /slice/gcode`` runs the same slicing and returns
the layers formatted as G‑code text.

Results are cached by mesh content, layer height and perimeter spacing
so that repeated requests for the same mesh do not re‑slice it.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from .models import GcodeRequest, LayerOut, MeshBBox, SliceMeta, SliceRequest, SliceResponse
from ..services.mesh import compute_mesh_bbox, mesh_digest, triangles_from_buffers
from ..services.perimeters import check_loop_budget, estimate_rectangle_loop_count
from ..services.shapes import InvalidShapeError, Layer, Path, Rectangle, Triangle, is_closed
from ..services.slice_cache import SliceCacheKey, get_layers_from_cache, put_layers_in_cache
from ..services.slicing import slice_triangle_mesh_layers
from ..services.stl_reader import parse_ascii_stl
from ..services.toolpath import format_layers_gcode

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_triangles(request: SliceRequest) -> List[Triangle]:
    if request.stlText is not None:
        return parse_ascii_stl(request.stlText)
    if request.vertices is not None and request.indices is not None:
        return triangles_from_buffers(request.vertices, request.indices)
    raise HTTPException(
        status_code=400,
        detail="Provide either stlText or both vertices and indices.",
    )


def _check_perimeter_budget(triangles: List[Triangle], perimeter_spacing: Optional[float]) -> None:
    if not triangles or perimeter_spacing is None:
        return
    bbox_min, bbox_max = compute_mesh_bbox(triangles)
    outline = Rectangle(bbox_min[0], bbox_min[1], bbox_max[0], bbox_max[1])
    try:
        check_loop_budget(estimate_rectangle_loop_count(outline, perimeter_spacing))
    except InvalidShapeError as exc:
        logger.info("rejected slice request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))


def _slice(
    triangles: List[Triangle],
    layer_height: float,
    perimeter_spacing: Optional[float],
) -> Tuple[List[Layer], bool]:
    """Slice with the LRU cache in front; returns ``(layers, cached)``."""
    _check_perimeter_budget(triangles, perimeter_spacing)
    key = SliceCacheKey(
        mesh_digest=mesh_digest(triangles),
        layer_height=layer_height,
        perimeter_spacing=perimeter_spacing,
    )
    layers = get_layers_from_cache(key)
    if layers is not None:
        return layers, True
    try:
        layers = slice_triangle_mesh_layers(triangles, layer_height, perimeter_spacing)
    except Exception as exc:
        logger.exception("slice endpoint error for %d triangles: %s", len(triangles), exc)
        raise HTTPException(status_code=500, detail=f"Failed to slice mesh: {exc}")
    put_layers_in_cache(key, layers)
    return layers, False


def _path_to_json(path: Path) -> List[List[float]]:
    return [[p.x, p.y] for p in path]


@router.post("/slice", response_model=SliceResponse)
async def slice_mesh(request: SliceRequest) -> SliceResponse:
    """Slice a mesh into horizontal layers.

    An empty mesh or a non‑positive layer height is not an error; the
    response then simply contains no layers.
    """
    triangles = _load_triangles(request)
    layers, cached = _slice(triangles, request.layerHeight, request.perimeterSpacing)

    layers_out: List[LayerOut] = []
    path_count = 0
    closed_count = 0
    for layer in layers:
        closed = [is_closed(p) for p in layer.paths]
        path_count += len(closed)
        closed_count += sum(closed)
        layers_out.append(
            LayerOut(
                z=layer.z,
                paths=[_path_to_json(p) for p in layer.paths],
                closed=closed,
            )
        )
    bbox_min, bbox_max = compute_mesh_bbox(triangles)
    return SliceResponse(
        layers=layers_out,
        bbox=MeshBBox(min=bbox_min, max=bbox_max),
        meta=SliceMeta(
            triangleCount=len(triangles),
            layerCount=len(layers),
            pathCount=path_count,
            closedPathCount=closed_count,
            cached=cached,
        ),
    )


@router.post("/slice/gcode", response_class=PlainTextResponse)
async def slice_mesh_to_gcode(request: GcodeRequest) -> PlainTextResponse:
    """Slice a mesh and return the layers as G‑code text."""
    triangles = _load_triangles(request)
    layers, _ = _slice(triangles, request.layerHeight, request.perimeterSpacing)
    return PlainTextResponse(format_layers_gcode(layers, request.precision))
