"""Bounding-box computation over output features.

Coordinates are found by one recursive rule instead of per-geometry-type
code: a sequence of exactly two numbers is a coordinate, any other
sequence is descended into. This covers every GeoJSON geometry shape.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from typing import Any

from range_maps.models.feature import BoundingBox, RangeFeature


def compute_bounding_box(features: Iterable[RangeFeature | dict[str, Any]]) -> BoundingBox | None:
    """Return ``(min_lng, min_lat, max_lng, max_lat)`` over every coordinate.

    Accepts ``RangeFeature`` objects or GeoJSON feature mappings.
    Returns ``None`` when no coordinate is found anywhere.
    """
    min_lng = min_lat = math.inf
    max_lng = max_lat = -math.inf
    found = False

    for feature in features:
        for lng, lat in iter_coordinates(_coordinates_of(feature)):
            found = True
            min_lng = min(min_lng, lng)
            min_lat = min(min_lat, lat)
            max_lng = max(max_lng, lng)
            max_lat = max(max_lat, lat)

    if not found:
        return None
    return (min_lng, min_lat, max_lng, max_lat)


def iter_coordinates(item: Any) -> Iterator[tuple[float, float]]:
    """Yield every terminal ``(lng, lat)`` pair nested inside *item*."""
    if not isinstance(item, list | tuple):
        return
    if len(item) == 2 and _is_number(item[0]) and _is_number(item[1]):
        yield (item[0], item[1])
        return
    for sub_item in item:
        yield from iter_coordinates(sub_item)


def _coordinates_of(feature: RangeFeature | dict[str, Any]) -> Any:
    if isinstance(feature, RangeFeature):
        return feature.geometry.coordinates
    if isinstance(feature, dict):
        geometry = feature.get("geometry")
        if isinstance(geometry, dict):
            return geometry.get("coordinates")
    return None


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)
