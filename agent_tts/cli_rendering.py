"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
filtered message output, and pronunciation table listings.
"""

from __future__ import annotations

import json
from typing import Mapping, NoReturn

import typer

from .errors import FilterConfigurationError, MessageParseError
from .io.message_reader import message_to_mapping
from .models.datatypes import ParsedMessage, Suppressed


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, FilterConfigurationError):
        typer.secho(
            f"{command_name} failed at filter `{exc.filter_name}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    elif isinstance(exc, MessageParseError):
        typer.secho(
            f"{command_name} failed reading input at line {exc.line_number}: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_message(message: ParsedMessage, output_format: str) -> None:
    """Print one forwarded message as plain text or a JSON line."""

    if output_format == "jsonl":
        typer.echo(json.dumps(message_to_mapping(message), ensure_ascii=False, sort_keys=True))
        return
    typer.echo(message.content)


def echo_suppressed(result: Suppressed) -> None:
    """Print a one-line suppression notice."""

    typer.echo(f"(suppressed by {result.filter_name}: {result.reason})")


def echo_pronunciation_table(table: Mapping[str, str]) -> None:
    """Print `term -> replacement` rows in deterministic key order."""

    for term in sorted(table):
        typer.echo(f"{term} -> {table[term].strip()}")


def echo_run_summary(forwarded: int, suppressed: int) -> None:
    """Print message counts to stderr so stdout stays speakable text."""

    typer.echo(f"Forwarded: {forwarded}, suppressed: {suppressed}", err=True)
