"""
Simple in‑memory caching layer for sliced layers.

Slicing a mesh touches every triangle once per layer, so repeated
requests with identical parameters should reuse the earlier result.  A
``SliceCacheKey`` identifies a slicing run by the mesh content digest,
the layer height and the optional perimeter spacing.

The cache is implemented as an ``OrderedDict`` to provide
least‑recently‑used (LRU) eviction.  Its capacity is read from the
``SLICE_CACHE_ENTRIES`` environment variable (default 32) each time an
entry is inserted.

Usage::

    key = SliceCacheKey(mesh_digest=digest, layer_height=0.2)
    layers = get_layers_from_cache(key)
    if layers is None:
        layers = slice_triangle_mesh_layers(triangles, 0.2)
        put_layers_in_cache(key, layers)
"""

from __future__ import annotations

import logging
import os
from collections import OrderedDict
from dataclasses import dataclass
from threading import RLock
from typing import List, Optional

from .shapes import Layer

logger = logging.getLogger(__name__)

DEFAULT_CACHE_ENTRIES: int = 32


@dataclass(frozen=True)
class SliceCacheKey:
    """Unique identifier for a cached slicing result.

    Attributes:
        mesh_digest: Content digest of the sliced mesh.
        layer_height: Distance between slicing planes.
        perimeter_spacing: Perimeter spacing, or ``None`` when no
            perimeters were requested.
    """

    mesh_digest: str
    layer_height: float
    perimeter_spacing: Optional[float] = None


# Layers are immutable, so cached lists are handed out without copying
# the layers themselves.  A reentrant lock protects the dictionary
# because the ASGI server may serve requests from a thread pool.
_cache: "OrderedDict[SliceCacheKey, List[Layer]]" = OrderedDict()
_lock = RLock()


def max_cache_entries() -> int:
    """Capacity of the cache as configured by ``SLICE_CACHE_ENTRIES``."""
    raw = os.getenv("SLICE_CACHE_ENTRIES")
    if not raw:
        return DEFAULT_CACHE_ENTRIES
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid SLICE_CACHE_ENTRIES=%r", raw)
        return DEFAULT_CACHE_ENTRIES
    return max(value, 0)


def get_layers_from_cache(key: SliceCacheKey) -> Optional[List[Layer]]:
    """Return cached layers for ``key`` or ``None`` on a miss."""
    with _lock:
        layers = _cache.get(key)
        if layers is not None:
            _cache.move_to_end(key)
            return list(layers)
        return None


def put_layers_in_cache(key: SliceCacheKey, layers: List[Layer]) -> None:
    """Store layers, evicting least recently used entries over capacity."""
    capacity = max_cache_entries()
    with _lock:
        _cache[key] = list(layers)
        _cache.move_to_end(key)
        while len(_cache) > capacity:
            _cache.popitem(last=False)


def clear_cache() -> None:
    """Drop every cached entry."""
    with _lock:
        _cache.clear()


__all__ = [
    "DEFAULT_CACHE_ENTRIES",
    "SliceCacheKey",
    "max_cache_entries",
    "get_layers_from_cache",
    "put_layers_in_cache",
    "clear_cache",
]
