"""Geometry validity diagnostics for converted range maps.

The converter never repairs geometry. These helpers only *report*
features whose geometry shapely considers invalid (self-intersecting
rings, holes outside their shell, ...) so that an operator can fix the
source document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from range_maps.models.feature import FeatureCollection


def invalid_feature_indexes(collection: FeatureCollection) -> list[int]:
    """Return the indexes of features whose geometry is not valid."""
    return [idx for idx, _ in explain_invalid_features(collection)]


def explain_invalid_features(collection: FeatureCollection) -> list[tuple[int, str]]:
    """Return ``(index, reason)`` for every invalid feature geometry.

    ``reason`` is shapely's ``explain_validity()`` text, e.g.
    ``"Self-intersection[1 1]"``.
    """
    from shapely.errors import ShapelyError
    from shapely.validation import explain_validity

    problems: list[tuple[int, str]] = []
    for idx, feature in enumerate(collection.features):
        try:
            geom = feature.shape
        except (ShapelyError, ValueError, TypeError) as exc:
            problems.append((idx, f"Cannot build geometry: {exc}"))
            continue
        if not geom.is_valid:
            problems.append((idx, explain_validity(geom)))
    return problems
