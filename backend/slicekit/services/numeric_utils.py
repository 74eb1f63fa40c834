"""
Numeric tolerance helpers shared by the geometry and slicing modules.

All tolerance decisions in slicekit go through the constants and
helpers defined here.  ``EPSILON`` is the base tolerance used for
orientation tests, bounding box padding and plane classification.
``STITCH_EPSILON`` is an order of magnitude coarser and is used when
matching segment endpoints that were produced by independent linear
interpolations on adjacent triangles.
"""

from __future__ import annotations

EPSILON: float = 1e-9
STITCH_EPSILON: float = EPSILON * 10.0


def sign(value: float, tolerance: float = EPSILON) -> int:
    """Classify ``value`` as positive, negative or zero within ``tolerance``.

    Args:
        value: The value to classify.
        tolerance: Magnitude at or below which the value counts as zero.

    Returns:
        ``1`` if ``value > tolerance``, ``-1`` if ``value < -tolerance``
        and ``0`` otherwise.  NaN compares false against both bounds and
        therefore classifies as ``0``; infinities resolve to ``±1``.
    """
    if value > tolerance:
        return 1
    if value < -tolerance:
        return -1
    return 0


def clamp_to_unit_interval(value: float) -> float:
    """Clamp ``value`` to the closed interval ``[0, 1]``."""
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


__all__ = ["EPSILON", "STITCH_EPSILON", "sign", "clamp_to_unit_interval"]
