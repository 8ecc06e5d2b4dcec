"""Command-line interface for agent-tts filters.

Responsibilities:
- Run a configured filter chain over JSON Lines message dumps.
- Preview the speakable form of a single message.
- List the effective pronunciation table.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Annotated

import typer

from .cli_rendering import (
    echo_message,
    echo_pronunciation_table,
    echo_run_summary,
    echo_suppressed,
    exit_with_command_error,
)
from .config import ChainConfig, ConfigLoader
from .errors import FilterConfigurationError
from .filters.chain import FilterChain
from .filters.factory import build_filter_chain
from .filters.pronunciation import PRONUNCIATION_FILTER_NAME, PronunciationFilter
from .io.message_reader import read_messages
from .models.datatypes import ParsedMessage, Role, Suppressed, coerce_role
from .telemetry.logger import FilterLogger

app = typer.Typer(
    name="agent-tts",
    no_args_is_help=True,
    help="Prepare AI assistant chat messages for speech synthesis.",
)

_OUTPUT_FORMATS = ("text", "jsonl")

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML filter chain config."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Log filter events to stderr."),
]


def _load_yaml_config(config_path: Path | None) -> ChainConfig | None:
    """Load a YAML config file when requested and map failures to config errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise FilterConfigurationError(
            filter_name="chain",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise FilterConfigurationError(
            filter_name="chain",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc


def _build_chain(config_path: Path | None, verbose: bool) -> FilterChain:
    """Resolve config and build the chain, enabling event logging on request."""

    logger = FilterLogger(sink=sys.stderr, level="DEBUG") if verbose else FilterLogger()
    return build_filter_chain(_load_yaml_config(config_path), logger=logger)


@app.command("filter")
def filter_command(
    input_path: Annotated[
        Path | None,
        typer.Argument(help="JSON Lines file of messages; reads stdin when omitted or `-`."),
    ] = None,
    config_file: ConfigOption = None,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: `text` or `jsonl`."),
    ] = "text",
    summary: Annotated[
        bool,
        typer.Option("--summary", help="Print forwarded/suppressed counts to stderr."),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Filter a stream of chat messages and print what should be spoken."""

    try:
        if output_format not in _OUTPUT_FORMATS:
            raise ValueError(
                f"Unsupported `--format` value `{output_format}`; "
                f"supported: {', '.join(_OUTPUT_FORMATS)}."
            )
        chain = _build_chain(config_file, verbose)
        if input_path is None or str(input_path) == "-":
            lines = typer.get_text_stream("stdin").read().splitlines()
        else:
            lines = input_path.read_text(encoding="utf-8").splitlines()

        forwarded = 0
        suppressed = 0
        for message in read_messages(lines):
            result = chain.process(message)
            if isinstance(result, Suppressed):
                suppressed += 1
                continue
            forwarded += 1
            echo_message(result.message, output_format)
    except Exception as exc:
        exit_with_command_error("filter", exc)

    if summary:
        echo_run_summary(forwarded, suppressed)


@app.command("preview")
def preview_command(
    text: Annotated[str, typer.Argument(help="Message content to filter.")],
    role: Annotated[
        str,
        typer.Option("--role", help="Message role: `assistant`, `user` or `system`."),
    ] = Role.ASSISTANT.value,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show the speakable form of one message."""

    try:
        chain = _build_chain(config_file, verbose)
        result = chain.process(ParsedMessage(role=coerce_role(role) or role, content=text))
    except Exception as exc:
        exit_with_command_error("preview", exc)

    if isinstance(result, Suppressed):
        echo_suppressed(result)
        return
    typer.echo(result.message.content)


@app.command("pronunciations")
def pronunciations_command(
    config_file: ConfigOption = None,
) -> None:
    """List the effective pronunciation table."""

    try:
        chain = _build_chain(config_file, verbose=False)
        pronunciation = chain.get_filter(PRONUNCIATION_FILTER_NAME)
        if not isinstance(pronunciation, PronunciationFilter):
            raise FilterConfigurationError(
                filter_name=PRONUNCIATION_FILTER_NAME,
                detail="The configured chain has no pronunciation filter.",
                hint="Add `- name: pronunciation` to the config `filters` list.",
            )
    except Exception as exc:
        exit_with_command_error("pronunciations", exc)

    echo_pronunciation_table(pronunciation.table)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
