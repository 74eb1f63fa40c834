"""
Tests for triangle–plane intersection and layering in slicing.py.

These tests construct a simple unit cube mesh from flat vertex and
index buffers and exercise the intersection and layer functions with
horizontal slicing planes.  The expected segments, layer heights and
path shapes are asserted.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

# Make the backend package importable when running tests directly via pytest
sys.path.append(str(Path(__file__).resolve().parents[1]))

from slicekit.services.mesh import triangles_from_buffers  # type: ignore
from slicekit.services.shapes import Layer, Triangle, is_closed  # type: ignore
from slicekit.services.slicing import (  # type: ignore
    compute_mesh_z_bounds,
    slice_layer,
    slice_triangle_mesh_layers,
    triangle_plane_segment,
)
from slicekit.services.vector import Point  # type: ignore


def create_unit_cube_mesh() -> tuple[list[float], list[int]]:
    """Construct vertices and indices for a unit cube with corners at (0,0,0) and (1,1,1).

    The cube is composed of 12 triangles (two per face).  Vertices are
    returned as a flat list of floats and indices as a flat list of ints.
    """
    verts = [
        0.0, 0.0, 0.0,  # 0
        1.0, 0.0, 0.0,  # 1
        1.0, 1.0, 0.0,  # 2
        0.0, 1.0, 0.0,  # 3
        0.0, 0.0, 1.0,  # 4
        1.0, 0.0, 1.0,  # 5
        1.0, 1.0, 1.0,  # 6
        0.0, 1.0, 1.0,  # 7
    ]
    idx = [
        0, 1, 2, 0, 2, 3,  # bottom face (z=0)
        4, 5, 6, 4, 6, 7,  # top face (z=1)
        0, 1, 5, 0, 5, 4,  # front face (y=0)
        3, 2, 6, 3, 6, 7,  # back face (y=1)
        0, 4, 7, 0, 7, 3,  # left face (x=0)
        1, 2, 6, 1, 6, 5,  # right face (x=1)
    ]
    return verts, idx


def unit_cube() -> list[Triangle]:
    verts, idx = create_unit_cube_mesh()
    return triangles_from_buffers(verts, idx)


def test_segment_crossing_two_edges() -> None:
    tri = Triangle(Point(0.0, 0.0, 0.0), Point(2.0, 0.0, 1.0), Point(0.0, 2.0, 1.0))
    seg = triangle_plane_segment(tri, 0.5)
    assert seg is not None
    assert {seg.start_point.xy(), seg.end_point.xy()} == {(1.0, 0.0), (0.0, 1.0)}
    assert seg.start_point.z == 0.0 and seg.end_point.z == 0.0


def test_segment_through_vertex_and_opposite_edge() -> None:
    tri = Triangle(Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 1.0), Point(0.5, 1.0, 0.5))
    seg = triangle_plane_segment(tri, 0.5)
    assert seg is not None
    points = sorted([seg.start_point.xy(), seg.end_point.xy()], key=lambda p: p[1])
    assert points[0] == pytest.approx((0.5, 0.0))
    assert points[1] == pytest.approx((0.5, 1.0))


def test_segment_single_vertex_contact_is_none() -> None:
    tri = Triangle(Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 1.0), Point(0.0, 1.0, 1.0))
    assert triangle_plane_segment(tri, 0.0) is None


def test_segment_coplanar_edge_is_skipped() -> None:
    """An edge lying in the plane contributes neither of its endpoints."""
    tri = Triangle(Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0), Point(0.0, 1.0, 1.0))
    seg = triangle_plane_segment(tri, 0.0)
    assert seg is not None
    assert {seg.start_point.xy(), seg.end_point.xy()} == {(1.0, 0.0), (0.0, 0.0)}


@pytest.mark.parametrize("plane_height", [-0.5, 1.5, 0.0])
def test_segment_missing_or_coplanar_triangle(plane_height: float) -> None:
    if plane_height == 0.0:
        tri = Triangle(Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0), Point(0.0, 1.0, 0.0))
    else:
        tri = Triangle(Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 1.0), Point(0.0, 1.0, 0.5))
    assert triangle_plane_segment(tri, plane_height) is None


def test_segment_within_epsilon_of_plane() -> None:
    tri = Triangle(Point(0.0, 0.0, 1e-10), Point(1.0, 0.0, 1.0), Point(0.0, 1.0, -1.0))
    seg = triangle_plane_segment(tri, 0.0)
    assert seg is not None
    assert (0.0, 0.0) in {seg.start_point.xy(), seg.end_point.xy()}


def test_mesh_z_bounds() -> None:
    assert compute_mesh_z_bounds(unit_cube()) == (0.0, 1.0)


def test_cube_mid_slice_is_closed_square() -> None:
    paths = slice_layer(unit_cube(), 0.5)
    assert len(paths) == 1
    path = paths[0]
    assert is_closed(path)
    for p in path:
        assert math.isclose(min(abs(p.x), abs(p.x - 1.0)), 0.0, abs_tol=1e-9) or math.isclose(
            min(abs(p.y), abs(p.y - 1.0)), 0.0, abs_tol=1e-9
        )
    corners = {(round(p.x, 9), round(p.y, 9)) for p in path}
    assert {(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)} <= corners


def test_cube_layers() -> None:
    layers = slice_triangle_mesh_layers(unit_cube(), 0.5)
    assert [layer.z for layer in layers] == [0.0, 0.5, 1.0]
    for layer in layers:
        assert isinstance(layer, Layer)
        assert len(layer.paths) == 1
        assert is_closed(layer.paths[0])
    assert len(layers[0].paths[0]) == 6
    assert len(layers[1].paths[0]) == 10
    assert len(layers[2].paths[0]) == 6


def test_layer_count_keeps_top_plane() -> None:
    """0.3 does not divide 1.0 evenly; planes stop below the top."""
    layers = slice_triangle_mesh_layers(unit_cube(), 0.3)
    assert len(layers) == 4
    assert [layer.z for layer in layers] == pytest.approx([0.0, 0.3, 0.6, 0.9])
    layers = slice_triangle_mesh_layers(unit_cube(), 0.1)
    assert len(layers) == 11
    assert layers[-1].z == pytest.approx(1.0)


def test_layers_are_ascending() -> None:
    layers = slice_triangle_mesh_layers(unit_cube(), 0.125)
    zs = [layer.z for layer in layers]
    assert zs == sorted(zs)
    assert zs[0] == 0.0


def test_flat_triangle_has_one_empty_layer() -> None:
    tri = Triangle(Point(0.0, 0.0, 1.0), Point(1.0, 0.0, 1.0), Point(0.0, 1.0, 1.0))
    layers = slice_triangle_mesh_layers([tri], 0.2)
    assert len(layers) == 1
    assert layers[0].z == 1.0
    assert layers[0].paths == ()


@pytest.mark.parametrize("layer_height", [0.0, -0.5, float("nan")])
def test_invalid_layer_height_returns_no_layers(layer_height: float) -> None:
    assert slice_triangle_mesh_layers(unit_cube(), layer_height) == []


def test_empty_mesh_returns_no_layers() -> None:
    assert slice_triangle_mesh_layers([], 0.2) == []


def test_perimeter_spacing_adds_loops_after_contours() -> None:
    layers = slice_triangle_mesh_layers(unit_cube(), 0.5, perimeter_spacing=0.25)
    assert len(layers) == 3
    for layer in layers:
        assert len(layer.paths) == 3
        assert all(is_closed(p) for p in layer.paths)
        outer = layer.paths[1]
        assert [p.xy() for p in outer] == [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0)]
        inner = layer.paths[2]
        assert inner[0].xy() == (0.25, 0.25)
        assert inner[2].xy() == (0.75, 0.75)


@pytest.mark.parametrize("spacing", [None, 0.0, -1.0])
def test_non_positive_perimeter_spacing_is_ignored(spacing) -> None:
    layers = slice_triangle_mesh_layers(unit_cube(), 0.5, perimeter_spacing=spacing)
    assert all(len(layer.paths) == 1 for layer in layers)
