"""KML → GeoJSON range-map conversion.

Converts a KML-subset document (already read into memory) into a
GeoJSON ``FeatureCollection``. The pipeline is split into focused
stages:

- **_tags**: regex tag scanner (no XML library, no nesting awareness)
- **_coordinates**: ``lng,lat[,alt]`` text → ``(lng, lat)`` tuples
- **_geometry**: Polygon (outer ring + holes), LineString, Point builders
- **_placemark**: per-Placemark properties and feature emission
- **_bbox**: bounding box over every output coordinate
- **_validation**: shapely validity diagnostics (report only)

Supported KML structures:
- Placemarks with bare Polygon / LineString / Point children
- MultiGeometry grouping (aggregated into ``Multi*`` geometries)
- Inner boundaries (holes)

Conversion is best-effort and never raises for malformed content: short
rings, unparseable coordinates and geometry-less Placemarks are skipped.
An empty result is a valid return value that callers should surface.
"""

from __future__ import annotations

import logging

from range_maps.convert._bbox import compute_bounding_box, iter_coordinates
from range_maps.convert._coordinates import parse_coordinates
from range_maps.convert._geometry import (
    Polygon,
    build_line_string,
    build_point,
    build_polygon,
)
from range_maps.convert._placemark import (
    PlacemarkGeometries,
    collect_geometries,
    transform_placemark,
)
from range_maps.convert._tags import extract_tag_content, first_tag_content
from range_maps.convert._validation import explain_invalid_features, invalid_feature_indexes
from range_maps.core.constants import DEFAULT_PROVENANCE, TAG_PLACEMARK
from range_maps.core.exceptions import ArgumentValidationError
from range_maps.models.feature import FeatureCollection, RangeFeature

logger = logging.getLogger("range_maps.convert")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "PlacemarkGeometries",
    "Polygon",
    "build_line_string",
    "build_point",
    "build_polygon",
    "collect_geometries",
    "compute_bounding_box",
    "convert_kml",
    "explain_invalid_features",
    "extract_tag_content",
    "first_tag_content",
    "invalid_feature_indexes",
    "iter_coordinates",
    "parse_coordinates",
    "transform_placemark",
]


def convert_kml(markup: str | None, *, source: str = DEFAULT_PROVENANCE) -> FeatureCollection:
    """Convert a KML document to a GeoJSON feature collection.

    Args:
        markup: Full KML document text. ``None`` or a non-string is
            treated as an empty document.
        source: Provenance tag written into every feature's properties.

    Returns:
        ``FeatureCollection`` with features in document order (Placemark
        order, then polygon → line → point within a Placemark) and a
        bounding box, or ``bbox=None`` when there are no coordinates.

    Raises:
        ArgumentValidationError: If *source* is not a non-empty string.
    """
    if not isinstance(source, str) or not source.strip():
        raise ArgumentValidationError("source", source, "must be a non-empty provenance string")

    placemarks = extract_tag_content(markup, TAG_PLACEMARK)

    features: list[RangeFeature] = []
    for placemark in placemarks:
        features.extend(transform_placemark(placemark, source=source))

    bbox = compute_bounding_box(features)

    logger.debug(
        "Converted KML | placemarks=%d | features=%d | bbox=%s",
        len(placemarks),
        len(features),
        bbox,
    )
    return FeatureCollection(features=features, bbox=bbox)
