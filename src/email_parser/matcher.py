"""Select the definitions that apply to an email subject."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from email_parser.exceptions import InvalidInputError, PatternError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from email_parser.models import Definition

logger = logging.getLogger(__name__)


def matches_subject(definition: Definition, subject: str) -> bool:
    """Return True if the definition's pattern occurs anywhere in *subject*.

    Raises PatternError if the pattern does not compile.
    """
    try:
        pattern = re.compile(definition.subject_pattern)
    except re.error as exc:
        raise PatternError(definition.id, definition.subject_pattern, str(exc)) from exc
    return pattern.search(subject) is not None


def select_definitions(
    subject: str | None,
    definitions: Iterable[Definition],
    *,
    strict: bool = False,
    errors: list[PatternError] | None = None,
) -> list[Definition]:
    """Return the active definitions whose subject pattern matches.

    Results keep the order of *definitions*. A definition with a malformed
    pattern is skipped and its PatternError appended to *errors*, unless
    *strict* is set, in which case the error is raised.
    """
    if subject is None:
        msg = "Email subject is required"
        raise InvalidInputError(msg)

    selected: list[Definition] = []
    for definition in definitions:
        if not definition.active:
            continue

        try:
            matched = matches_subject(definition, subject)
        except PatternError as exc:
            if strict:
                raise
            logger.warning("Skipping definition %s: %s", definition.name, exc)
            if errors is not None:
                errors.append(exc)
            continue

        if matched:
            selected.append(definition)

    return selected
