"""
Minimal ASCII STL reader.

Only the ``vertex x y z`` records of an ASCII STL are used; every other
token (``solid``, ``facet normal``, ``outer loop``, ``endloop`` …) is
ignored, and any amount of whitespace separates tokens.  Every three
vertices form one :class:`~.shapes.Triangle`.

The reader never raises on bad input.  A ``vertex`` keyword followed by
fewer than three finite numbers (``inf`` and ``nan`` count as malformed)
stops parsing and the triangles completed so far are returned.  A missing or unreadable file yields an empty list.
Binary STL is not supported.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, TextIO, Union

from .shapes import Triangle
from .vector import Point

logger = logging.getLogger(__name__)


def parse_ascii_stl(source: Union[str, TextIO]) -> List[Triangle]:
    """Parse ASCII STL text into triangles.

    Args:
        source: The STL document as a string, or a readable text stream.

    Returns:
        The triangles found, in file order.
    """
    text = source if isinstance(source, str) else source.read()
    tokens = text.split()
    triangles: List[Triangle] = []
    vertices: List[Point] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        i += 1
        if token != "vertex":
            continue
        try:
            x, y, z = (float(t) for t in tokens[i:i + 3])
        except ValueError:
            logger.debug("parse_ascii_stl: malformed vertex at token %d; stopping", i - 1)
            break
        if not all(math.isfinite(v) for v in (x, y, z)):
            logger.debug("parse_ascii_stl: non-finite vertex at token %d; stopping", i - 1)
            break
        i += 3
        vertices.append(Point(x, y, z))
        if len(vertices) == 3:
            triangles.append(Triangle(vertices[0], vertices[1], vertices[2]))
            vertices = []
    return triangles


def read_ascii_stl_file(path: Union[str, Path]) -> List[Triangle]:
    """Read an ASCII STL file from disk.

    Returns an empty list (and logs a warning) when the file cannot be
    opened.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            triangles = parse_ascii_stl(fh)
    except (OSError, ValueError) as exc:
        logger.warning("Failed to read ASCII STL from %s: %s", path, exc)
        return []
    logger.info("Read %d triangles from %s", len(triangles), path)
    return triangles


__all__ = ["parse_ascii_stl", "read_ascii_stl_file"]
