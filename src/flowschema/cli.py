# src/flowschema/cli.py
"""flowschema Command Line Interface.

Entry point for the flowschema CLI tool. Runs the platform callback against
payload files so process exports can be checked outside the platform.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import typer
from pydantic import ValidationError

from flowschema import __version__
from flowschema.contracts.enums import OutputField
from flowschema.core.canonical import canonical_json
from flowschema.core.config import FlowSchemaSettings, load_settings
from flowschema.engine.callback import (
    AI_NODE_ID_KEY,
    INCLUDE_URL_VARS_KEY,
    handle_callback,
    select_payload,
)
from flowschema.engine.orchestrator import Orchestrator

__all__ = [
    "app",
]

# Exit codes: 1 = payload carries an error descriptor, 2 = input unreadable
EXIT_GENERATION_ERROR = 1
EXIT_INPUT_ERROR = 2

app = typer.Typer(
    name="flowschema",
    help="flowschema: input-schema synthesis for workflow graphs.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"flowschema version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"Error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(EXIT_INPUT_ERROR)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)  # Don't override existing env vars


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,  # We handle existence check ourselves for better error message
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """flowschema: input-schema synthesis for workflow graphs."""
    from flowschema.core.logging import configure_logging

    # Logs go to stderr; stdout carries only the command's JSON output
    log_level = "DEBUG" if verbose else "WARNING"
    configure_logging(json_output=json_logs, level=log_level)

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )


def _format_error(
    title: str,
    message: str,
    hint: str | None = None,
    details: list[str] | None = None,
) -> None:
    """Display a formatted error with optional hint and details on stderr."""
    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    console = Console(stderr=True)

    content = Text()
    content.append(message, style="white")

    if details:
        content.append("\n\n")
        for detail in details:
            content.append(f"  • {detail}\n", style="dim")

    if hint:
        content.append("\n")
        content.append("Hint: ", style="yellow bold")
        content.append(hint, style="yellow")

    console.print(
        Panel(
            content,
            title=f"[red bold]{title}[/]",
            border_style="red",
            padding=(0, 1),
        )
    )


def _settings_or_exit(settings: str | None) -> FlowSchemaSettings:
    """Load settings (file + FLOWSCHEMA_* env), exiting on failure."""
    settings_path = Path(settings).expanduser() if settings is not None else None
    try:
        return load_settings(settings_path)
    except FileNotFoundError:
        _format_error(
            title="File Not Found",
            message=f"Settings file does not exist: {settings}",
            hint="Check the path and ensure the file exists.",
        )
        raise typer.Exit(EXIT_INPUT_ERROR) from None
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            details.append(f"{loc}: {error['msg']}")
        _format_error(
            title="Configuration Validation Failed",
            message="Invalid flowschema settings",
            details=details,
            hint="Check field names, types, and FLOWSCHEMA_* environment variables.",
        )
        raise typer.Exit(EXIT_INPUT_ERROR) from None


def _read_json_or_exit(source: str) -> Any:
    """Read a JSON document from a file path, or stdin when source is '-'."""
    if source == "-":
        text = typer.get_text_stream("stdin").read()
        label = "<stdin>"
    else:
        path = Path(source).expanduser()
        label = path.name
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            _format_error(
                title="File Not Found",
                message=f"Input file does not exist: {source}",
            )
            raise typer.Exit(EXIT_INPUT_ERROR) from None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        _format_error(
            title="JSON Syntax Error",
            message=f"Failed to parse {label}",
            details=[f"line {e.lineno}, column {e.colno}: {e.msg}"],
        )
        raise typer.Exit(EXIT_INPUT_ERROR) from None


def _dump(data: Any, *, canonical: bool) -> str:
    if canonical:
        return canonical_json(data)
    return json.dumps(data, indent=2, ensure_ascii=False)


@app.command()
def generate(
    payload: str = typer.Argument(
        ...,
        help="Callback payload JSON file ('-' reads stdin).",
    ),
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings file (YAML, TOML, or JSON).",
    ),
    ai_node_id: str | None = typer.Option(
        None,
        "--ai-node-id",
        "-a",
        help="Override the payload's aiNodeId.",
    ),
    include_url_vars: bool = typer.Option(
        False,
        "--include-url-vars",
        help="Harvest variables from transition url fields.",
    ),
    output_field: OutputField | None = typer.Option(
        None,
        "--output-field",
        "-o",
        help="Where to write the schema: structured_output_rsp or schema.",
    ),
    canonical: bool = typer.Option(
        False,
        "--canonical",
        help="Print RFC 8785 canonical JSON instead of indented JSON.",
    ),
) -> None:
    """Run the callback on a payload and print the augmented payload.

    Exits 1 when the result carries an error descriptor.
    """
    config = _settings_or_exit(settings)
    if output_field is not None:
        config = config.model_copy(update={"output_field": output_field})

    data = _read_json_or_exit(payload)
    if not isinstance(data, dict):
        _format_error(
            title="Invalid Payload",
            message=f"Callback payload must be a JSON object, got {type(data).__name__}",
        )
        raise typer.Exit(EXIT_INPUT_ERROR)

    inputs = select_payload(data)
    if ai_node_id is not None:
        inputs[AI_NODE_ID_KEY] = ai_node_id
    if include_url_vars:
        inputs[INCLUDE_URL_VARS_KEY] = True

    handle_callback(data, config)
    typer.echo(_dump(data, canonical=canonical))

    if "error" in inputs:
        raise typer.Exit(EXIT_GENERATION_ERROR)


@app.command("inspect")
def inspect_process(
    process: str = typer.Argument(
        ...,
        help="Process export JSON file ('-' reads stdin).",
    ),
    ai_node_id: str = typer.Option(
        ...,
        "--ai-node-id",
        "-a",
        help="AI node to generate the schema for.",
    ),
    include_url_vars: bool = typer.Option(
        False,
        "--include-url-vars",
        help="Harvest variables from transition url fields.",
    ),
    output_format: Literal["console", "json"] = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format: 'console' (human-readable) or 'json' (structured JSON).",
    ),
) -> None:
    """Show the nodes reached after an AI node and the variables they need."""
    document = _read_json_or_exit(process)
    orchestrator = Orchestrator(FlowSchemaSettings(debug_meta=True))
    result = orchestrator.run(ai_node_id, document, include_url_vars=include_url_vars)

    if result.error is not None:
        if output_format == "json":
            typer.echo(json.dumps({"error": result.error.to_dict()}), err=True)
        else:
            _format_error(title=result.error.code.value, message=result.error.message)
        raise typer.Exit(EXIT_GENERATION_ERROR)

    assert result.meta is not None
    properties: dict[str, Any] = result.schema["properties"]

    if output_format == "json":
        typer.echo(json.dumps({"meta": result.meta.to_dict(), "properties": properties}, indent=2))
        return

    from rich.console import Console
    from rich.table import Table

    meta = result.meta
    console = Console()
    if meta.next_node_id is None:
        console.print(f"AI node [bold]{ai_node_id}[/] has no outgoing 'go' transition to a known node.")
    else:
        console.print(f"AI node [bold]{ai_node_id}[/] → [bold]{meta.next_node_id}[/] ({meta.next_node_title or 'untitled'})")
        console.print(f"Reachable nodes: {', '.join(meta.reachable_node_ids or ())}")

    table = Table(title=f"Variables ({meta.vars_count})")
    table.add_column("Variable")
    table.add_column("Type")
    for name, fragment in properties.items():
        table.add_row(name, str(fragment.get("type", "")))
    console.print(table)
