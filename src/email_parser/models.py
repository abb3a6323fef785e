"""Domain models for rule-driven email parsing."""

from __future__ import annotations

from collections.abc import Mapping as FieldMap
from dataclasses import dataclass
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass
class Email:
    """An inbound email as delivered by the trigger."""

    subject: str | None
    body: str = ""
    sender: str | None = None
    source_id: str | None = None


class Definition(BaseModel):
    """A parsing rule-set selected by a pattern match on the email subject.

    ``sender_address`` is stored with the definition but does not take part
    in matching.
    """

    id: str
    name: str
    target_entity_name: str = Field(min_length=1)
    subject_pattern: str
    sender_address: str | None = None
    active: bool = True


class Mapping(BaseModel):
    """One field-extraction rule belonging to a definition."""

    start_marker: str
    end_marker: str
    target_field_name: str = Field(min_length=1)
    definition_id: str | None = None


class ExtractedRecord(BaseModel):
    """A new record built from one email/definition pairing.

    The record is frozen and its fields are exposed as a read-only mapping.
    """

    model_config = ConfigDict(frozen=True)

    entity_type: str = Field(min_length=1)
    fields: FieldMap[str, str] = Field(default_factory=dict, validate_default=True)
    source_id: str | None = None

    @field_validator("fields", mode="after")
    @classmethod
    def _read_only_fields(cls, value: FieldMap[str, str]) -> FieldMap[str, str]:
        return MappingProxyType(dict(value))
