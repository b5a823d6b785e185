"""GeoJSON value objects produced by the range-map converter.

A ``RangeFeature`` is one output feature: fixed properties (Placemark
name, description, provenance, geometry label) plus a ``Multi*``
geometry. A ``FeatureCollection`` holds the ordered features of one
document together with their bounding box.

All objects are frozen and built fresh on every conversion; equality is
structural, so converting the same document twice yields equal results.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

Coordinate = tuple[float, float]
"""A ``(longitude, latitude)`` pair in WGS 84 degrees."""

BoundingBox = tuple[float, float, float, float]
"""``(min_lng, min_lat, max_lng, max_lat)``."""


@dataclass(frozen=True, slots=True)
class FeatureProperties:
    """Properties attached to every output feature.

    Attributes:
        name: Trimmed Placemark ``<name>``, or ``None`` if absent or blank.
        description: Trimmed Placemark ``<description>``, or ``None``.
        source: Provenance tag (e.g. ``"IUCN"``).
        geometry_type: ``"range"``, ``"line"`` or ``"point"``.
    """

    name: str | None
    description: str | None
    source: str
    geometry_type: str

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "source": self.source,
            "geometryType": self.geometry_type,
        }


@dataclass(frozen=True, slots=True)
class Geometry:
    """A GeoJSON geometry: ``type`` plus nested ``coordinates`` lists."""

    type: str
    coordinates: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type, "coordinates": _copy_coordinates(self.coordinates)}


@dataclass(frozen=True, slots=True)
class RangeFeature:
    """A single GeoJSON feature extracted from a KML Placemark."""

    properties: FeatureProperties
    geometry: Geometry

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON ``Feature`` mapping."""
        return {
            "type": "Feature",
            "properties": self.properties.to_dict(),
            "geometry": self.geometry.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RangeFeature:
        """Deserialise from a GeoJSON ``Feature`` mapping.

        Raises:
            TypeError: If ``properties`` or ``geometry`` are not mappings,
                or the coordinates are not a list.
        """
        props = data.get("properties", {})
        if not isinstance(props, dict):
            msg = f"properties must be a dict, got {type(props).__name__}"
            raise TypeError(msg)

        geometry = data.get("geometry", {})
        if not isinstance(geometry, dict):
            msg = f"geometry must be a dict, got {type(geometry).__name__}"
            raise TypeError(msg)

        coordinates = geometry.get("coordinates", [])
        if not isinstance(coordinates, list):
            msg = f"coordinates must be a list, got {type(coordinates).__name__}"
            raise TypeError(msg)

        return cls(
            properties=FeatureProperties(
                name=_optional_str(props.get("name")),
                description=_optional_str(props.get("description")),
                source=str(props.get("source", "")),
                geometry_type=str(props.get("geometryType", "")),
            ),
            geometry=Geometry(
                type=str(geometry.get("type", "")),
                coordinates=_copy_coordinates(coordinates),
            ),
        )

    @property
    def shape(self) -> BaseGeometry:
        """The geometry as a shapely object."""
        from shapely.geometry import shape

        return shape(self.geometry.to_dict())


@dataclass(frozen=True, slots=True)
class FeatureCollection:
    """Ordered features of one converted document.

    Attributes:
        features: Features in source document order.
        bbox: Bounding box over every coordinate, ``None`` when the
            collection has no coordinates at all.
    """

    features: list[RangeFeature] = field(default_factory=list)
    bbox: BoundingBox | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON ``FeatureCollection`` mapping.

        The ``bbox`` member is omitted entirely when there is no box.
        """
        payload: dict[str, object] = {
            "type": "FeatureCollection",
            "features": [f.to_dict() for f in self.features],
        }
        if self.bbox is not None:
            payload["bbox"] = list(self.bbox)
        return payload

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FeatureCollection:
        """Deserialise from a GeoJSON ``FeatureCollection`` mapping.

        Raises:
            TypeError: If ``features`` is not a list or ``bbox`` is not a
                four-element list.
        """
        features_raw = data.get("features", [])
        if not isinstance(features_raw, list):
            msg = f"features must be a list, got {type(features_raw).__name__}"
            raise TypeError(msg)

        bbox_raw = data.get("bbox")
        bbox: BoundingBox | None = None
        if bbox_raw is not None:
            if not isinstance(bbox_raw, list | tuple) or len(bbox_raw) != 4:
                msg = f"bbox must be a list of 4 numbers, got {bbox_raw!r}"
                raise TypeError(msg)
            bbox = tuple(float(v) for v in bbox_raw)  # type: ignore[assignment]

        return cls(
            features=[RangeFeature.from_dict(f) for f in features_raw],
            bbox=bbox,
        )

    @property
    def is_empty(self) -> bool:
        """Whether the conversion produced no features at all."""
        return len(self.features) == 0

    @property
    def geometry_types(self) -> list[str]:
        """``geometryType`` label of each feature, in order."""
        return [f.properties.geometry_type for f in self.features]


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _copy_coordinates(value: Any) -> Any:
    """Deep-copy nested coordinates, turning tuples into lists."""
    if isinstance(value, list | tuple):
        return [_copy_coordinates(v) for v in value]
    return value
