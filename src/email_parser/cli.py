"""CLI entry point for email-parser."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from email_parser.adapters.eml import EmlFileSource
from email_parser.config import get_log_level, get_strict_patterns
from email_parser.db import get_connection
from email_parser.exceptions import EmailParserError
from email_parser.pipeline import match_email, process_email
from email_parser.store import PostgresRecordStore
from email_parser.tracer import LoggingTracer

_EML_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Email Parser: turn inbound emails into structured records."""
    try:
        level = "DEBUG" if verbose else get_log_level()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


@cli.command("init-db")
def init_db() -> None:
    """Create the definition, mapping and record tables."""
    try:
        with get_connection() as conn:
            PostgresRecordStore(conn).create_schema()
    except (EmailParserError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo("Schema ready.")


@cli.command()
@click.argument("eml_file", type=_EML_FILE)
def process(eml_file: Path) -> None:
    """Parse EML_FILE and create one record per matching definition."""
    try:
        email = EmlFileSource(eml_file).load()
        strict = get_strict_patterns()
        with get_connection() as conn:
            store = PostgresRecordStore(conn)
            record_ids = process_email(
                email, store, LoggingTracer(), strict_patterns=strict
            )
    except (EmailParserError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    if not record_ids:
        click.echo("No matching definitions.")
        return
    for record_id in record_ids:
        click.echo(record_id)


@cli.command()
@click.argument("eml_file", type=_EML_FILE)
def match(eml_file: Path) -> None:
    """Show which definitions match EML_FILE and what they would extract."""
    try:
        email = EmlFileSource(eml_file).load()
        strict = get_strict_patterns()
        with get_connection() as conn:
            results = match_email(
                email, PostgresRecordStore(conn), strict_patterns=strict
            )
    except (EmailParserError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    if not results:
        click.echo("No matching definitions.")
        return
    for definition, fields in results:
        click.echo(f"{definition.name} -> {definition.target_entity_name}")
        for name, value in fields.items():
            click.echo(f"  {name}: {value}")
