"""
Tests for stitching slice segments into paths in slicing.py.

These tests validate that unordered segments are joined by their
endpoints into closed loops where the geometry allows it, that open
chains are returned as‑is, and that independent outlines stay
separate.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the backend package importable when running tests directly via pytest
sys.path.append(str(Path(__file__).resolve().parents[1]))

from slicekit.services.numeric_utils import STITCH_EPSILON  # type: ignore
from slicekit.services.shapes import is_closed  # type: ignore
from slicekit.services.slicing import (  # type: ignore
    Segment2D,
    points_close_2d,
    stitch_segments_into_paths,
)
from slicekit.services.vector import Point  # type: ignore


def create_rectangle_segments(
    width: float, height: float, x0: float = 0.0, y0: float = 0.0
) -> list[Segment2D]:
    """Create the four edges of an axis‑aligned rectangle, in order."""
    p0 = Point(x0, y0)
    p1 = Point(x0 + width, y0)
    p2 = Point(x0 + width, y0 + height)
    p3 = Point(x0, y0 + height)
    return [
        Segment2D(p0, p1),
        Segment2D(p1, p2),
        Segment2D(p2, p3),
        Segment2D(p3, p0),
    ]


def test_points_close_2d_ignores_z() -> None:
    assert points_close_2d(Point(1.0, 2.0, 0.0), Point(1.0, 2.0, 5.0), 1e-9)
    assert points_close_2d(Point(1.0, 2.0), Point(1.0 + 5e-9, 2.0 - 5e-9), STITCH_EPSILON)
    assert not points_close_2d(Point(1.0, 2.0), Point(1.0 + 1e-6, 2.0), STITCH_EPSILON)


def test_rectangle_closes_into_one_loop() -> None:
    paths = stitch_segments_into_paths(create_rectangle_segments(2.0, 1.0))
    assert len(paths) == 1
    path = paths[0]
    assert len(path) == 6
    assert is_closed(path)
    assert path[-2] == path[0]
    assert {p.xy() for p in path} == {(0.0, 0.0), (2.0, 0.0), (2.0, 1.0), (0.0, 1.0)}


def test_closed_loop_ends_on_its_first_point() -> None:
    segments = [
        Segment2D(Point(0.0, 0.0), Point(1.0, 0.0)),
        Segment2D(Point(1.0, 0.0), Point(0.0, 1.0)),
        Segment2D(Point(0.0, 1.0), Point(1e-10, 0.0)),
    ]
    path = stitch_segments_into_paths(segments)[0]
    assert len(path) == 5
    assert path[-1] is path[0]
    assert points_close_2d(path[-2], path[0], STITCH_EPSILON)


@pytest.mark.parametrize("reverse", [False, True])
def test_unordered_and_flipped_segments(reverse: bool) -> None:
    """Segment order and direction must not matter for the loop found."""
    segments = create_rectangle_segments(1.0, 1.0)
    shuffled = [segments[2], segments[0], segments[3], segments[1]]
    if reverse:
        shuffled = [Segment2D(s.end_point, s.start_point) for s in shuffled]
    paths = stitch_segments_into_paths(shuffled)
    assert len(paths) == 1
    assert len(paths[0]) == 6
    assert is_closed(paths[0])


def test_two_separate_squares() -> None:
    segments = create_rectangle_segments(1.0, 1.0) + create_rectangle_segments(1.0, 1.0, x0=5.0)
    paths = stitch_segments_into_paths(segments)
    assert len(paths) == 2
    assert all(is_closed(p) and len(p) == 6 for p in paths)
    # The last segment seeds the first path
    assert all(p.x >= 5.0 for p in paths[0])
    assert all(p.x <= 1.0 for p in paths[1])


def test_open_chain_is_returned_open() -> None:
    segments = [
        Segment2D(Point(0.0, 0.0), Point(1.0, 0.0)),
        Segment2D(Point(1.0, 0.0), Point(2.0, 0.0)),
    ]
    paths = stitch_segments_into_paths(segments)
    assert len(paths) == 1
    assert [p.xy() for p in paths[0]] == [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)]
    assert not is_closed(paths[0])


def test_single_segment_is_two_point_path() -> None:
    seg = Segment2D(Point(0.0, 0.0), Point(1.0, 1.0))
    assert stitch_segments_into_paths([seg]) == [[seg.start_point, seg.end_point]]


def test_empty_input() -> None:
    assert stitch_segments_into_paths([]) == []


def test_input_is_not_modified() -> None:
    segments = create_rectangle_segments(1.0, 1.0)
    copy = list(segments)
    stitch_segments_into_paths(segments)
    assert segments == copy


def test_gap_larger_than_tolerance_stays_open() -> None:
    segments = [
        Segment2D(Point(0.0, 0.0), Point(1.0, 0.0)),
        Segment2D(Point(1.0 + 1e-6, 0.0), Point(2.0, 0.0)),
    ]
    paths = stitch_segments_into_paths(segments)
    assert len(paths) == 2


def test_custom_epsilon_bridges_gap() -> None:
    segments = [
        Segment2D(Point(0.0, 0.0), Point(1.0, 0.0)),
        Segment2D(Point(1.0 + 1e-6, 0.0), Point(2.0, 0.0)),
    ]
    paths = stitch_segments_into_paths(segments, epsilon=1e-5)
    assert len(paths) == 1
    assert len(paths[0]) == 3
