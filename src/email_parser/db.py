"""Database connection helper."""

from __future__ import annotations

import psycopg
from psycopg.rows import dict_row

from email_parser.config import get_connect_timeout, get_database_url
from email_parser.exceptions import StoreError


def get_connection(url: str | None = None) -> psycopg.Connection[dict[str, object]]:
    """Open a connection returning rows as dicts.

    Uses DATABASE_URL unless *url* is given. Connection failures are raised
    as StoreError.
    """
    try:
        return psycopg.connect(
            url or get_database_url(),
            row_factory=dict_row,
            connect_timeout=get_connect_timeout(),
        )
    except psycopg.Error as exc:
        msg = f"Could not connect to the database: {exc}"
        raise StoreError(msg) from exc
