"""Placemark → feature transformation.

One Placemark can emit several features: polygons, lines and points are
never mixed in a single geometry. Polygons inside a ``<MultiGeometry>``
are aggregated into one ``MultiPolygon``; bare sibling polygons stay
separate features because they describe distinct shapes. Lines and
points always aggregate into one ``MultiLineString`` / ``MultiPoint``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from range_maps.convert._geometry import (
    Polygon,
    build_line_string,
    build_point,
    build_polygon,
)
from range_maps.convert._tags import extract_tag_content, first_tag_content
from range_maps.core.constants import (
    GEOMETRY_TYPE_LINE,
    GEOMETRY_TYPE_POINT,
    GEOMETRY_TYPE_RANGE,
    MULTI_LINE_STRING,
    MULTI_POINT,
    MULTI_POLYGON,
    TAG_DESCRIPTION,
    TAG_LINE_STRING,
    TAG_MULTI_GEOMETRY,
    TAG_NAME,
    TAG_POINT,
    TAG_POLYGON,
)
from range_maps.models.feature import (
    Coordinate,
    FeatureProperties,
    Geometry,
    RangeFeature,
)

logger = logging.getLogger("range_maps.convert")


@dataclass(frozen=True, slots=True)
class PlacemarkGeometries:
    """Valid geometries collected from one Placemark.

    Attributes:
        grouped: ``True`` when collected from ``<MultiGeometry>`` blocks,
            ``False`` when collected from bare children of the Placemark.
        polygons: Polygons in document order.
        lines: Line strings in document order.
        points: Points in document order.
    """

    grouped: bool
    polygons: list[Polygon] = field(default_factory=list)
    lines: list[list[Coordinate]] = field(default_factory=list)
    points: list[Coordinate] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.polygons or self.lines or self.points)


def transform_placemark(markup: str, *, source: str) -> list[RangeFeature]:
    """Convert one Placemark's inner markup to zero or more features.

    Args:
        markup: Inner text of a ``<Placemark>`` element.
        source: Provenance tag stored in each feature's properties.

    Returns:
        Features ordered polygon(s), line, point. Empty when the
        Placemark has no valid geometry.
    """
    name = _trimmed_or_none(first_tag_content(markup, TAG_NAME))
    description = _trimmed_or_none(first_tag_content(markup, TAG_DESCRIPTION))

    geometries = collect_geometries(markup)
    if geometries.is_empty:
        logger.debug("Placemark '%s' has no valid geometry, skipping", name or "<unnamed>")
        return []

    def properties(geometry_type: str) -> FeatureProperties:
        return FeatureProperties(
            name=name,
            description=description,
            source=source,
            geometry_type=geometry_type,
        )

    features: list[RangeFeature] = []

    if geometries.polygons:
        if geometries.grouped:
            polygon_groups = [geometries.polygons]
        else:
            polygon_groups = [[polygon] for polygon in geometries.polygons]
        for group in polygon_groups:
            features.append(
                RangeFeature(
                    properties=properties(GEOMETRY_TYPE_RANGE),
                    geometry=Geometry(
                        type=MULTI_POLYGON,
                        coordinates=[polygon.to_coordinates() for polygon in group],
                    ),
                )
            )

    if geometries.lines:
        features.append(
            RangeFeature(
                properties=properties(GEOMETRY_TYPE_LINE),
                geometry=Geometry(
                    type=MULTI_LINE_STRING,
                    coordinates=[[[lng, lat] for lng, lat in line] for line in geometries.lines],
                ),
            )
        )

    if geometries.points:
        features.append(
            RangeFeature(
                properties=properties(GEOMETRY_TYPE_POINT),
                geometry=Geometry(
                    type=MULTI_POINT,
                    coordinates=[[lng, lat] for lng, lat in geometries.points],
                ),
            )
        )

    return features


def collect_geometries(markup: str) -> PlacemarkGeometries:
    """Collect valid geometries from a Placemark.

    When any ``<MultiGeometry>`` block is present only its children are
    scanned, across every block; otherwise the Placemark is scanned
    directly.
    """
    multi_geometries = extract_tag_content(markup, TAG_MULTI_GEOMETRY)
    grouped = bool(multi_geometries)
    blocks = multi_geometries if grouped else [markup]

    polygons: list[Polygon] = []
    lines: list[list[Coordinate]] = []
    points: list[Coordinate] = []

    for block in blocks:
        for fragment in extract_tag_content(block, TAG_POLYGON):
            polygon = build_polygon(fragment)
            if polygon is not None:
                polygons.append(polygon)

        for fragment in extract_tag_content(block, TAG_LINE_STRING):
            line = build_line_string(fragment)
            if line is not None:
                lines.append(line)

        for fragment in extract_tag_content(block, TAG_POINT):
            point = build_point(fragment)
            if point is not None:
                points.append(point)

    return PlacemarkGeometries(grouped=grouped, polygons=polygons, lines=lines, points=points)


def _trimmed_or_none(text: str | None) -> str | None:
    if text is None:
        return None
    return text.strip() or None
