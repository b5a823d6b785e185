"""Data models and schemas.

- feature: GeoJSON feature / feature-collection value objects
- report: Per-species import outcomes and the batch import report
"""

from range_maps.models.feature import (
    BoundingBox,
    Coordinate,
    FeatureCollection,
    FeatureProperties,
    Geometry,
    RangeFeature,
)
from range_maps.models.report import ImportAction, ImportOutcome, ImportReport, ImportStatus

__all__ = [
    "BoundingBox",
    "Coordinate",
    "FeatureCollection",
    "FeatureProperties",
    "Geometry",
    "ImportAction",
    "ImportOutcome",
    "ImportReport",
    "ImportStatus",
    "RangeFeature",
]
