"""Tests for email_parser.db."""

from __future__ import annotations

from unittest.mock import patch

import psycopg
import pytest
from psycopg.rows import dict_row

from email_parser.db import get_connection
from email_parser.exceptions import StoreError


class TestGetConnection:
    """Tests for get_connection()."""

    def test_uses_database_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql://db/parser")
        monkeypatch.delenv("EMAIL_PARSER_DB_TIMEOUT", raising=False)

        with patch("email_parser.db.psycopg.connect") as connect:
            get_connection()

        connect.assert_called_once_with(
            "postgresql://db/parser", row_factory=dict_row, connect_timeout=10
        )

    def test_explicit_url_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with patch("email_parser.db.psycopg.connect") as connect:
            get_connection("postgresql://other/db")

        assert connect.call_args[0][0] == "postgresql://other/db"

    def test_missing_url_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(ValueError, match="DATABASE_URL"):
            get_connection()

    def test_connection_failure_raises_store_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@127.0.0.1:1/db")
        refused = psycopg.OperationalError("connection refused")

        with (
            patch("email_parser.db.psycopg.connect", side_effect=refused),
            pytest.raises(StoreError, match="connection refused") as excinfo,
        ):
            get_connection()

        assert excinfo.value.__cause__ is refused
