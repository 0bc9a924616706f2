"""Main CLI entry point for wolfram-llm.

Provides the `wolfram-llm` command: run the MCP server, or query
WolframAlpha directly from the terminal.
"""

from pathlib import Path
from typing import Optional
import sys

import typer

from wolfram_llm import __version__
from wolfram_llm.core.client import WolframLLMClient
from wolfram_llm.core.config import Config, get_config, set_config
from wolfram_llm.core.parser import parse_answer
from wolfram_llm.output import (
    print_answer,
    print_error,
    print_json,
    print_success,
    print_warning,
)
from wolfram_llm.utils.exceptions import ConfigError, WolframError
from wolfram_llm.utils.log import configure_logging

app = typer.Typer(
    name="wolfram-llm",
    help="WolframAlpha LLM API answers, as MCP tools or from the terminal.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print(f"wolfram-llm {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    agent: bool = typer.Option(
        False,
        "--agent",
        "-a",
        help="Agent mode: no colors, no box-drawing",
        envvar="WOLFRAM_AGENT",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON for scripting",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """wolfram-llm: WolframAlpha for LLMs.

    Examples:
        wolfram-llm serve                      Run the MCP server on stdio
        wolfram-llm ask "integrate x^2"        Full structured answer
        wolfram-llm simple "population of Hawaii"
        wolfram-llm parse answer.txt           Parse a saved raw answer
    """
    try:
        config = Config.from_env(
            agent_mode=agent,
            json_mode=json_output,
            verbose=verbose,
        )
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)

    set_config(config)
    configure_logging(config.log_level)


@app.command("serve")
def serve_cmd() -> None:
    """Run the MCP server over stdio."""
    from wolfram_llm.mcp_server import run_server

    run_server()


@app.command("ask")
def ask_cmd(
    query: str = typer.Argument(..., help="Query to ask WolframAlpha"),
) -> None:
    """Ask a query and show the full structured answer."""
    try:
        with WolframLLMClient(get_config()) as client:
            answer = client.query(query)
    except WolframError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_answer(answer)


@app.command("simple")
def simple_cmd(
    query: str = typer.Argument(..., help="Query to ask WolframAlpha"),
    max_chars: Optional[int] = typer.Option(
        None, "--max-chars", "-m", help="Answer length limit", min=1
    ),
) -> None:
    """Ask a query and show a short answer."""
    try:
        with WolframLLMClient(get_config()) as client:
            answer = client.simple_answer(query, max_chars=max_chars)
    except WolframError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_answer(answer, show_sections=False)


@app.command("validate-key")
def validate_key_cmd() -> None:
    """Check that the configured app id is accepted."""
    config = get_config()
    if not config.has_app_id and not config.is_json_mode:
        print_warning("WOLFRAM_LLM_APP_ID is not set")

    with WolframLLMClient(config) as client:
        is_valid = client.validate_key()

    if config.is_json_mode:
        print_json({"valid": is_valid})
    elif is_valid:
        print_success("API key is valid")
    else:
        print_error("API key is invalid")

    if not is_valid:
        raise typer.Exit(1)


@app.command("parse")
def parse_cmd(
    source: str = typer.Argument("-", help="File with a raw answer, or - for stdin"),
) -> None:
    """Parse a saved raw LLM API answer without calling the API."""
    try:
        raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as e:
        print_error(f"Cannot read {source}: {e}")
        raise typer.Exit(1)

    try:
        answer = parse_answer(raw)
    except WolframError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_answer(answer)


if __name__ == "__main__":
    app()
