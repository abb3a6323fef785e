"""Build and persist extracted records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from email_parser.models import ExtractedRecord

if TYPE_CHECKING:
    from collections.abc import Mapping as FieldMap

    from email_parser.store import RecordStore


def emit(
    entity_type: str,
    fields: FieldMap[str, str],
    store: RecordStore,
    *,
    source_id: str | None = None,
) -> str:
    """Create one record of *entity_type* holding *fields* and return its id.

    Store errors propagate unchanged.
    """
    record = ExtractedRecord(entity_type=entity_type, fields=dict(fields), source_id=source_id)
    return store.create_record(record)
