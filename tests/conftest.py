"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from email_parser.models import Definition, Email, Mapping

if TYPE_CHECKING:
    from email_parser.models import ExtractedRecord


class FakeRecordStore:
    """In-memory RecordStore used by pipeline tests."""

    def __init__(
        self,
        definitions: list[Definition] | None = None,
        mappings: dict[str, list[Mapping]] | None = None,
    ) -> None:
        self.definitions = definitions or []
        self.mappings = mappings or {}
        self.created: list[ExtractedRecord] = []
        self.mapping_requests: list[str] = []

    def fetch_active_definitions(self) -> list[Definition]:
        return [d for d in self.definitions if d.active]

    def fetch_mappings(self, definition_id: str) -> list[Mapping]:
        self.mapping_requests.append(definition_id)
        return list(self.mappings.get(definition_id, []))

    def create_record(self, record: ExtractedRecord) -> str:
        self.created.append(record)
        return f"rec-{len(self.created)}"


class RecordingTracer:
    """Tracer that keeps every message it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, object]]] = []

    def trace(self, message: str, **context: object) -> None:
        self.events.append((message, context))

    @property
    def messages(self) -> list[str]:
        return [message for message, _context in self.events]


@pytest.fixture
def invoice_definition() -> Definition:
    """Provide an active definition matching invoice subjects."""
    return Definition(
        id="def-invoice",
        name="Invoices",
        target_entity_name="invoice",
        subject_pattern=r"Invoice #\d+",
        sender_address="billing@example.com",
    )


@pytest.fixture
def invoice_mappings() -> list[Mapping]:
    """Provide mappings for the invoice definition."""
    return [
        Mapping(
            start_marker="Customer:",
            end_marker="\n",
            target_field_name="customer",
            definition_id="def-invoice",
        ),
        Mapping(
            start_marker="Total:",
            end_marker="EUR",
            target_field_name="total",
            definition_id="def-invoice",
        ),
    ]


@pytest.fixture
def invoice_email() -> Email:
    """Provide an HTML invoice email."""
    return Email(
        subject="Invoice #123",
        body=(
            "<html><head><title>Invoice</title></head><body>\n"
            "Customer: Smith &amp; Sons\n"
            "Total: 1,250.00 EUR\n"
            "</body></html>"
        ),
        sender="billing@example.com",
        source_id="<invoice-123@example.com>",
    )


@pytest.fixture
def store(
    invoice_definition: Definition, invoice_mappings: list[Mapping]
) -> FakeRecordStore:
    """Provide an in-memory store holding the invoice definition."""
    return FakeRecordStore(
        definitions=[invoice_definition],
        mappings={invoice_definition.id: invoice_mappings},
    )


@pytest.fixture
def tracer() -> RecordingTracer:
    """Provide a tracer that records events."""
    return RecordingTracer()
