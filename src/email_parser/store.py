"""Record store abstraction and PostgreSQL implementation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

import psycopg
from psycopg.types.json import Jsonb
from pydantic import BaseModel, ValidationError

from email_parser.exceptions import StoreError
from email_parser.models import Definition, Mapping

if TYPE_CHECKING:
    from email_parser.models import ExtractedRecord

logger = logging.getLogger(__name__)

_RowT = TypeVar("_RowT", bound=BaseModel)

SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS parser_definitions (
    id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
    name text NOT NULL,
    target_entity_name text NOT NULL,
    subject_pattern text NOT NULL,
    sender_address text,
    active boolean NOT NULL DEFAULT true
);

CREATE TABLE IF NOT EXISTS parser_mappings (
    id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
    definition_id uuid NOT NULL REFERENCES parser_definitions (id) ON DELETE CASCADE,
    start_marker text NOT NULL,
    end_marker text NOT NULL,
    target_field_name text NOT NULL,
    created_at timestamptz NOT NULL DEFAULT now()
);

CREATE TABLE IF NOT EXISTS extracted_records (
    id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
    entity_type text NOT NULL,
    fields jsonb NOT NULL DEFAULT '{}'::jsonb,
    source_id text,
    created_at timestamptz NOT NULL DEFAULT now()
);
"""

_SELECT_ACTIVE_DEFINITIONS = """\
SELECT id::text AS id, name, target_entity_name, subject_pattern,
       sender_address, active
FROM parser_definitions
WHERE active
ORDER BY name, id
"""

_SELECT_MAPPINGS = """\
SELECT definition_id::text AS definition_id, start_marker, end_marker,
       target_field_name
FROM parser_mappings
WHERE definition_id = %s
ORDER BY created_at, id
"""

_INSERT_RECORD = """\
INSERT INTO extracted_records (entity_type, fields, source_id)
VALUES (%s, %s, %s)
RETURNING id::text AS id
"""


class RecordStore(Protocol):
    """Protocol for the structured store holding definitions and records."""

    def fetch_active_definitions(self) -> list[Definition]: ...

    def fetch_mappings(self, definition_id: str) -> list[Mapping]: ...

    def create_record(self, record: ExtractedRecord) -> str: ...


class PostgresRecordStore:
    """PostgreSQL implementation of RecordStore.

    Definitions and mappings are read from ``parser_definitions`` and
    ``parser_mappings``; extracted records are written to
    ``extracted_records`` with their fields as JSONB.
    """

    def __init__(self, conn: psycopg.Connection[Any]) -> None:
        self.conn = conn

    def create_schema(self) -> None:
        """Create the parser tables if they do not exist."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
            self.conn.commit()
        except psycopg.Error as exc:
            self.conn.rollback()
            msg = f"Failed to create schema: {exc}"
            raise StoreError(msg) from exc

    def fetch_active_definitions(self) -> list[Definition]:
        """Return all active definitions.

        Rows that fail validation are logged and left out.
        """
        rows = self._fetch_all(_SELECT_ACTIVE_DEFINITIONS, ())
        return _validate_rows(Definition, rows)

    def fetch_mappings(self, definition_id: str) -> list[Mapping]:
        """Return the valid mappings owned by a definition."""
        rows = self._fetch_all(_SELECT_MAPPINGS, (definition_id,))
        return _validate_rows(Mapping, rows)

    def create_record(self, record: ExtractedRecord) -> str:
        """Insert an extracted record and return its new id."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(
                    _INSERT_RECORD,
                    (record.entity_type, Jsonb(dict(record.fields)), record.source_id),
                )
                row = cur.fetchone()
            self.conn.commit()
        except psycopg.Error as exc:
            self.conn.rollback()
            msg = f"Failed to create {record.entity_type} record: {exc}"
            raise StoreError(msg) from exc

        if row is None:
            msg = f"Insert of {record.entity_type} record returned no id"
            raise StoreError(msg)
        record_id = str(row["id"])
        logger.debug("Created %s record %s", record.entity_type, record_id)
        return record_id

    def _fetch_all(self, query: str, params: tuple[Any, ...]) -> list[dict[str, Any]]:
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, params)
                return list(cur.fetchall())
        except psycopg.Error as exc:
            self.conn.rollback()
            msg = f"Store query failed: {exc}"
            raise StoreError(msg) from exc


def _validate_rows(model: type[_RowT], rows: list[dict[str, Any]]) -> list[_RowT]:
    """Build a model per row, skipping rows that fail validation."""
    valid: list[_RowT] = []
    for row in rows:
        try:
            valid.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid %s row %s: %s",
                model.__name__,
                row.get("id") or row.get("definition_id"),
                exc,
            )
    return valid
