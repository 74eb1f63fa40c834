"""
G‑code style formatting of sliced paths.

Each path becomes one rapid move (``G0``) to its first point followed by
a linear move (``G1``) to every subsequent point.  Layered output adds a
``G0 Z<z>`` height change before each layer's paths.  Coordinates are
written in fixed‑point notation with a caller‑chosen number of decimals.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .shapes import Layer, Path


def _fmt(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def format_toolpath_gcode(paths: Iterable[Path], precision: int = 16) -> str:
    """Format 2D polylines as ``G0``/``G1`` moves.

    Args:
        paths: Polylines to emit.  Empty paths are skipped.
        precision: Number of decimals for coordinates; negative values
            are treated as zero.

    Returns:
        The G‑code text, one command per line.
    """
    precision = max(precision, 0)
    lines: List[str] = []
    for path in paths:
        if not path:
            continue
        start = path[0]
        lines.append(f"G0 X{_fmt(start.x, precision)} Y{_fmt(start.y, precision)}")
        for p in path[1:]:
            lines.append(f"G1 X{_fmt(p.x, precision)} Y{_fmt(p.y, precision)}")
    return "".join(line + "\n" for line in lines)


def format_layers_gcode(layers: Sequence[Layer], precision: int = 16) -> str:
    """Format sliced layers, inserting a ``G0 Z`` move before each layer."""
    precision = max(precision, 0)
    out: List[str] = []
    for layer in layers:
        out.append(f"G0 Z{_fmt(layer.z, precision)}\n")
        out.append(format_toolpath_gcode(layer.paths, precision))
    return "".join(out)


__all__ = ["format_toolpath_gcode", "format_layers_gcode"]
