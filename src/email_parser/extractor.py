"""Delimiter-bounded field extraction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from email_parser.models import Mapping

logger = logging.getLogger(__name__)


def extract_field(body: str, mapping: Mapping) -> str | None:
    """Return the trimmed text between the mapping's markers, or None.

    Markers are matched literally. The end marker is searched for only after
    the first occurrence of the start marker.
    """
    index = body.find(mapping.start_marker)
    if index == -1:
        return None

    start = index + len(mapping.start_marker)
    end = body.find(mapping.end_marker, start)
    if end == -1:
        return None

    return body[start:end].strip()


def extract_fields(body: str, mappings: Iterable[Mapping]) -> dict[str, str]:
    """Apply each mapping to *body* and collect the values found.

    Mappings whose markers are not found are left out of the result. A later
    mapping with the same target field overwrites an earlier one.
    """
    fields: dict[str, str] = {}
    for mapping in mappings:
        value = extract_field(body, mapping)
        if value is None:
            logger.debug(
                "No value for field %s between %r and %r",
                mapping.target_field_name,
                mapping.start_marker,
                mapping.end_marker,
            )
            continue
        fields[mapping.target_field_name] = value
    return fields
