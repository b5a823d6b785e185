"""Regex tag scanner for the KML subset.

This is not an XML parser. Each call finds every ``<tag ...>...</tag>``
span by non-overlapping, case-insensitive scanning and returns the inner
text. The first closing tag after an opening tag ends the span, so a tag
nested inside a tag of the same name yields a truncated outer span.
Range-map documents never nest Placemark, Polygon, LineString or Point
inside themselves.

Scanning stops at the last closing tag of the requested name. An opening
tag after it can never match, and leaving it out keeps documents full of
unclosed tags linear to scan.
"""

from __future__ import annotations

import re
from functools import lru_cache

from range_maps.core.exceptions import ArgumentValidationError


@lru_cache(maxsize=64)
def _tag_pattern(tag_name: str) -> re.Pattern[str]:
    name = re.escape(tag_name)
    # Opening tag: name, then optional whitespace-led attributes; not self-closing.
    return re.compile(
        rf"<{name}(?:\s[^>]*)?(?<!/)>(.*?)</{name}\s*>",
        re.IGNORECASE | re.DOTALL,
    )


@lru_cache(maxsize=64)
def _closing_pattern(tag_name: str) -> re.Pattern[str]:
    return re.compile(rf"</{re.escape(tag_name)}\s*>", re.IGNORECASE)


def extract_tag_content(markup: str | None, tag_name: str) -> list[str]:
    """Return the inner text of every ``tag_name`` element in *markup*.

    Args:
        markup: Markup to scan. ``None`` or a non-string yields ``[]``.
        tag_name: Element name, matched case-insensitively.

    Returns:
        Inner text of each match, in document order. Empty when the tag
        does not occur.

    Raises:
        TypeError: If *tag_name* is not a string.
        ArgumentValidationError: If *tag_name* is empty.
    """
    if not isinstance(tag_name, str):
        msg = f"tag_name must be a string, got {type(tag_name).__name__}"
        raise TypeError(msg)
    if not tag_name:
        raise ArgumentValidationError("tag_name", tag_name, "must not be empty")
    if not isinstance(markup, str) or not markup:
        return []

    last_close = None
    for last_close in _closing_pattern(tag_name).finditer(markup):
        pass
    if last_close is None:
        return []
    return _tag_pattern(tag_name).findall(markup, 0, last_close.end())


def first_tag_content(markup: str | None, tag_name: str) -> str | None:
    """Return the inner text of the first ``tag_name`` element, if any."""
    matches = extract_tag_content(markup, tag_name)
    return matches[0] if matches else None
