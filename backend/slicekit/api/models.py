"""
Pydantic data models for the slicekit API.

These models define the shapes of requests and responses used by the
HTTP layer.  Field names follow the camelCase convention of the JSON
API; conversion to and from the internal geometry types happens in the
route modules.  Numeric inputs are declared ``FiniteFloat`` so that
``Infinity`` and ``NaN`` literals are rejected with a validation error.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, FiniteFloat


class SliceRequest(BaseModel):
    """Request body for slicing a mesh.

    The mesh is given either as ASCII STL text (``stlText``) or as flat
    ``vertices``/``indices`` buffers.  When both are present the STL
    text wins.
    """

    stlText: Optional[str] = Field(
        default=None, description="ASCII STL document to slice"
    )
    vertices: Optional[List[FiniteFloat]] = Field(
        default=None, description="Flat list of vertex positions (x, y, z …)"
    )
    indices: Optional[List[int]] = Field(
        default=None, description="Index buffer defining the mesh triangles"
    )
    layerHeight: FiniteFloat = Field(..., description="Vertical distance between slicing planes")
    perimeterSpacing: Optional[FiniteFloat] = Field(
        default=None,
        description="When positive, add rectangular perimeters around each layer stepping inward by this spacing",
    )


class GcodeRequest(SliceRequest):
    """Request body for slicing a mesh straight to G‑code."""

    precision: int = Field(
        default=16, description="Number of decimals written for each coordinate"
    )


class MeshBBox(BaseModel):
    """Axis‑aligned bounding box for a mesh."""

    min: List[float] = Field(..., description="Minimum x, y, z coordinates of the mesh")
    max: List[float] = Field(..., description="Maximum x, y, z coordinates of the mesh")


class LayerOut(BaseModel):
    """One sliced layer."""

    z: float = Field(..., description="Height of the slicing plane")
    paths: List[List[List[float]]] = Field(
        ..., description="Polylines as lists of [x, y] points"
    )
    closed: List[bool] = Field(
        ..., description="Whether each polyline ends where it starts"
    )


class SliceMeta(BaseModel):
    """Summary information about a slicing run."""

    triangleCount: int
    layerCount: int
    pathCount: int
    closedPathCount: int
    cached: bool = Field(..., description="True when the layers were served from the cache")


class SliceResponse(BaseModel):
    """Response returned for a slicing request."""

    layers: List[LayerOut]
    bbox: MeshBBox
    meta: SliceMeta


class RectanglePerimeterRequest(BaseModel):
    """Request body for rectangular perimeter generation."""

    minX: FiniteFloat
    minY: FiniteFloat
    maxX: FiniteFloat
    maxY: FiniteFloat
    spacing: FiniteFloat = Field(..., description="Inward offset between successive loops")


class CirclePerimeterRequest(BaseModel):
    """Request body for circular perimeter generation."""

    centerX: FiniteFloat
    centerY: FiniteFloat
    radius: FiniteFloat
    spacing: FiniteFloat = Field(..., description="Radial offset between successive loops")
    numSegments: int = Field(default=16, description="Polygon edges per loop (>= 3)")


class PerimeterResponse(BaseModel):
    """Concentric perimeter loops."""

    paths: List[List[List[float]]] = Field(
        ..., description="Closed loops as lists of [x, y] points, outermost first"
    )
    gcode: str = Field(..., description="The loops formatted as G0/G1 moves")
