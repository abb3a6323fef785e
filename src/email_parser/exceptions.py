"""Error types raised by email-parser."""

from __future__ import annotations


class EmailParserError(Exception):
    """Base class for all email-parser errors."""


class InvalidInputError(EmailParserError):
    """The triggering email is missing data required to run."""


class PatternError(EmailParserError):
    """A definition's subject pattern is not a valid regular expression."""

    def __init__(self, definition_id: str, pattern: str, reason: str) -> None:
        self.definition_id = definition_id
        self.pattern = pattern
        self.reason = reason
        super().__init__(
            f"Invalid subject pattern {pattern!r} on definition {definition_id}: {reason}"
        )


class StoreError(EmailParserError):
    """The record store rejected a read or write."""
