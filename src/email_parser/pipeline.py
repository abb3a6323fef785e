"""Entry point: process one inbound email against the stored definitions.

Each run creates new records; running twice on the same email produces
duplicates.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from email_parser.emitter import emit
from email_parser.exceptions import InvalidInputError, PatternError
from email_parser.extractor import extract_fields
from email_parser.matcher import select_definitions
from email_parser.normalizer import normalize_body
from email_parser.tracer import NullTracer

if TYPE_CHECKING:
    from email_parser.models import Definition, Email
    from email_parser.store import RecordStore
    from email_parser.tracer import Tracer

logger = logging.getLogger(__name__)


def process_email(
    email: Email,
    store: RecordStore,
    tracer: Tracer | None = None,
    *,
    strict_patterns: bool = False,
) -> list[str]:
    """Extract fields for every matching definition and persist one record each.

    Returns the ids of the created records in emission order. An empty list
    means no definition matched.
    """
    if tracer is None:
        tracer = NullTracer()

    definitions = _select(email, store, tracer, strict_patterns)
    if not definitions:
        return []

    body = normalize_body(email.body)
    record_ids: list[str] = []
    for definition in definitions:
        mappings = store.fetch_mappings(definition.id)
        tracer.trace("Mappings loaded", definition=definition.name, mappings=len(mappings))

        fields = extract_fields(body, mappings)
        record_id = emit(
            definition.target_entity_name, fields, store, source_id=email.source_id
        )
        record_ids.append(record_id)
        tracer.trace(
            "Email parsed",
            definition=definition.name,
            entity_type=definition.target_entity_name,
            fields=len(fields),
            record_id=record_id,
        )

    return record_ids


def match_email(
    email: Email,
    store: RecordStore,
    tracer: Tracer | None = None,
    *,
    strict_patterns: bool = False,
) -> list[tuple[Definition, dict[str, str]]]:
    """Run selection and extraction without writing any records."""
    if tracer is None:
        tracer = NullTracer()

    definitions = _select(email, store, tracer, strict_patterns)
    body = normalize_body(email.body)
    return [
        (definition, extract_fields(body, store.fetch_mappings(definition.id)))
        for definition in definitions
    ]


def _select(
    email: Email, store: RecordStore, tracer: Tracer, strict_patterns: bool
) -> list[Definition]:
    """Validate the email and return the definitions matching its subject."""
    if email.subject is None:
        msg = "Email subject is required"
        raise InvalidInputError(msg)

    available = store.fetch_active_definitions()
    tracer.trace("Parsing definitions loaded", definitions=len(available))

    errors: list[PatternError] = []
    definitions = select_definitions(
        email.subject, available, strict=strict_patterns, errors=errors
    )
    for error in errors:
        tracer.trace(
            "Definition skipped", definition_id=error.definition_id, reason=error.reason
        )

    if not definitions:
        logger.info("No definitions match subject %r", email.subject)
        tracer.trace("No matching definitions", subject=email.subject)
    return definitions
