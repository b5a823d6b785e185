"""Geometry reconstruction from KML markup fragments.

Each builder takes the inner text of one ``<Polygon>``, ``<LineString>``
or ``<Point>`` element and returns a geometry, or ``None`` when the
fragment does not carry enough valid coordinates. ``None`` is an
ordinary outcome for hand-authored data, not an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from range_maps.convert._coordinates import parse_coordinates
from range_maps.convert._tags import extract_tag_content, first_tag_content
from range_maps.core.constants import (
    MIN_LINE_POINTS,
    MIN_RING_POINTS,
    TAG_COORDINATES,
    TAG_INNER_BOUNDARY,
    TAG_OUTER_BOUNDARY,
)
from range_maps.models.feature import Coordinate

logger = logging.getLogger("range_maps.convert")


@dataclass(frozen=True, slots=True)
class Polygon:
    """One outer ring plus zero or more hole rings.

    Attributes:
        exterior: Outer ring, at least ``MIN_RING_POINTS`` coordinates.
        holes: Inner rings, each at least ``MIN_RING_POINTS`` coordinates.
    """

    exterior: list[Coordinate]
    holes: list[list[Coordinate]] = field(default_factory=list)

    def to_coordinates(self) -> list[list[list[float]]]:
        """GeoJSON polygon coordinates: ``[exterior, *holes]``."""
        return [_ring_to_lists(self.exterior), *(_ring_to_lists(h) for h in self.holes)]


def build_polygon(markup: str) -> Polygon | None:
    """Build a polygon from the inner text of a ``<Polygon>`` element.

    The outer ring comes from the first ``outerBoundaryIs`` block; if it
    is missing or short the whole polygon is rejected. Each
    ``innerBoundaryIs`` block contributes a hole, and short holes are
    dropped on their own.
    """
    outer_block = first_tag_content(markup, TAG_OUTER_BOUNDARY)
    exterior = _ring_from_boundary(outer_block)
    if exterior is None:
        logger.debug("Skipping polygon without a valid outer ring")
        return None

    holes: list[list[Coordinate]] = []
    for inner_block in extract_tag_content(markup, TAG_INNER_BOUNDARY):
        ring = _ring_from_boundary(inner_block)
        if ring is None:
            logger.debug("Dropping hole ring with fewer than %d points", MIN_RING_POINTS)
            continue
        holes.append(ring)

    return Polygon(exterior=exterior, holes=holes)


def build_line_string(markup: str) -> list[Coordinate] | None:
    """Build a line from the first ``coordinates`` block of a ``<LineString>``."""
    coords = parse_coordinates(first_tag_content(markup, TAG_COORDINATES))
    if len(coords) < MIN_LINE_POINTS:
        logger.debug("Skipping line string with %d point(s)", len(coords))
        return None
    return coords


def build_point(markup: str) -> Coordinate | None:
    """Take the first coordinate of the first ``coordinates`` block of a ``<Point>``."""
    coords = parse_coordinates(first_tag_content(markup, TAG_COORDINATES))
    return coords[0] if coords else None


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _ring_from_boundary(boundary_markup: str | None) -> list[Coordinate] | None:
    if boundary_markup is None:
        return None
    ring = parse_coordinates(first_tag_content(boundary_markup, TAG_COORDINATES))
    if len(ring) < MIN_RING_POINTS:
        return None
    return ring


def _ring_to_lists(ring: list[Coordinate]) -> list[list[float]]:
    return [[lng, lat] for lng, lat in ring]
