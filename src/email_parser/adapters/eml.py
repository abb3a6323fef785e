"""Adapter that reads an inbound email from an RFC 822 ``.eml`` file."""

from __future__ import annotations

import logging
from email import message_from_bytes
from email.header import decode_header, make_header
from typing import TYPE_CHECKING, cast

from email_parser.models import Email

if TYPE_CHECKING:
    from email.message import Message
    from pathlib import Path

logger = logging.getLogger(__name__)


class EmlFileSource:
    """Load a single email from a ``.eml`` file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Email:
        """Parse the file and return it as an Email."""
        msg = message_from_bytes(self.path.read_bytes())
        return self._parse_message(msg)

    def _parse_message(self, msg: Message) -> Email:
        """Convert an email Message to an Email."""
        raw_subject = msg.get("Subject")
        subject = None if raw_subject is None else self._decode_header_value(raw_subject)
        sender = self._decode_header_value(msg.get("From", "")) or None

        message_id = msg.get("Message-ID")
        source_id = message_id.strip() if message_id else None

        return Email(
            subject=subject,
            body=self._extract_body(msg),
            sender=sender,
            source_id=source_id,
        )

    @staticmethod
    def _decode_header_value(value: str | None) -> str:
        """Decode RFC 2047 encoded words; undecodable headers are kept as-is."""
        if not value:
            return ""
        try:
            return str(make_header(decode_header(value)))
        except (LookupError, UnicodeDecodeError):
            logger.warning("Could not decode header %r", value)
            return value

    @staticmethod
    def _extract_body(msg: Message) -> str:
        """Return the HTML body if present, else the plain-text body, else ""."""
        html_body: str | None = None
        text_body: str | None = None

        for part in msg.walk():
            if part.get_content_maintype() == "multipart":
                continue
            if part.get_filename() or "attachment" in str(
                part.get("Content-Disposition", "")
            ).lower():
                continue

            content_type = part.get_content_type()
            if content_type not in ("text/html", "text/plain"):
                continue

            raw_payload = part.get_payload(decode=True)
            if raw_payload is None:
                continue
            charset = part.get_content_charset() or "utf-8"
            payload = cast("bytes", raw_payload).decode(charset, errors="replace")

            if content_type == "text/html" and html_body is None:
                html_body = payload
            elif content_type == "text/plain" and text_body is None:
                text_body = payload

        if html_body is not None:
            return html_body
        if text_body is not None:
            return text_body
        logger.debug("Message has no text body")
        return ""
