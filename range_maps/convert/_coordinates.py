"""KML coordinate text parsing.

KML writes coordinates as whitespace-separated ``lng,lat[,alt]`` tuples.
Altitude is dropped. Each field is read by its leading decimal number,
so ``"10.5abc"`` reads as ``10.5`` and ``"1_000"`` as ``1``; tokens whose
first two fields do not both start with a finite number are skipped
rather than failing the whole ring.
"""

from __future__ import annotations

import math
import re

from range_maps.models.feature import Coordinate

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_coordinates(text: str | None) -> list[Coordinate]:
    """Parse KML coordinate text to ``(lng, lat)`` tuples.

    ``None``, non-string, empty and whitespace-only input all yield ``[]``.
    """
    if not isinstance(text, str):
        return []
    coords: list[Coordinate] = []
    for token in text.split():
        parts = token.split(",")
        if len(parts) < 2:
            continue
        lng = _leading_number(parts[0])
        lat = _leading_number(parts[1])
        if lng is None or lat is None:
            continue
        coords.append((lng, lat))
    return coords


def _leading_number(field: str) -> float | None:
    match = _LEADING_NUMBER.match(field)
    if match is None:
        return None
    value = float(match.group())
    return value if math.isfinite(value) else None
