"""Email source protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from email_parser.models import Email


@runtime_checkable
class EmailSource(Protocol):
    """Protocol for adapters that deliver one inbound email."""

    def load(self) -> Email: ...
