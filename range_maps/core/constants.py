"""Shared range-map constants.

Centralises tag names, geometry labels, ring thresholds and storage
defaults used by the converter, the importer and the CLI.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Provenance
# ---------------------------------------------------------------------------

DEFAULT_PROVENANCE: str = "IUCN"
"""Provenance tag recorded on every feature when the caller gives none."""

# ---------------------------------------------------------------------------
# KML-subset vocabulary
# ---------------------------------------------------------------------------

TAG_PLACEMARK = "Placemark"
TAG_MULTI_GEOMETRY = "MultiGeometry"
TAG_POLYGON = "Polygon"
TAG_OUTER_BOUNDARY = "outerBoundaryIs"
TAG_INNER_BOUNDARY = "innerBoundaryIs"
TAG_LINE_STRING = "LineString"
TAG_POINT = "Point"
TAG_COORDINATES = "coordinates"
TAG_NAME = "name"
TAG_DESCRIPTION = "description"

# ---------------------------------------------------------------------------
# Geometry thresholds
# ---------------------------------------------------------------------------

# Closed ring: 3 distinct vertices + closing vertex
MIN_RING_POINTS = 4

MIN_LINE_POINTS = 2

# ---------------------------------------------------------------------------
# Output labels
# ---------------------------------------------------------------------------

GEOMETRY_TYPE_RANGE = "range"
GEOMETRY_TYPE_LINE = "line"
GEOMETRY_TYPE_POINT = "point"

MULTI_POLYGON = "MultiPolygon"
MULTI_LINE_STRING = "MultiLineString"
MULTI_POINT = "MultiPoint"

# ---------------------------------------------------------------------------
# Storage defaults
# ---------------------------------------------------------------------------

DEFAULT_INPUT_CONTAINER: str = "turtle-species-range-maps"
"""Blob container holding one folder of KML documents per species slug."""

DEFAULT_OUTPUT_CONTAINER: str = "range-map-geojson"
"""Blob container receiving one GeoJSON document per species."""

KML_SUFFIX = ".kml"
GEOJSON_SUFFIX = ".geojson"
