"""Isolate and decode the meaningful part of an email body."""

from __future__ import annotations

import html
import re

_BEFORE_BODY_RE = re.compile(r"^.*?<body>", re.DOTALL)
_AFTER_BODY_RE = re.compile(r"</body>.*$", re.DOTALL)


def normalize_body(raw_body: str | None) -> str:
    """Return the text inside ``<body>...</body>`` with HTML entities decoded.

    The tags are matched literally and case-sensitively. When either tag is
    missing that side is left untouched, so plain-text bodies pass through
    apart from entity decoding.
    """
    if not raw_body:
        return ""

    output = _BEFORE_BODY_RE.sub("", raw_body, count=1)
    output = _AFTER_BODY_RE.sub("", output, count=1)
    return html.unescape(output)
