"""Console output with mode-aware formatting.

Provides Rich console output for human mode, and clean text for agent mode.
The abstraction ensures all output respects the current output mode.
"""

from typing import Any
import json
import os
import re
import sys

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from wolfram_llm.core.config import OutputMode, get_config
from wolfram_llm.core.parser import ParsedAnswer
from wolfram_llm.utils.exceptions import ConfigError

_MARKUP_PATTERN = re.compile(r"\[/?[^\]]+\]")


def _output_mode() -> OutputMode:
    try:
        return get_config().output_mode
    except ConfigError:
        # Config could not load, check env directly
        return OutputMode.AGENT if os.environ.get("WOLFRAM_AGENT") else OutputMode.HUMAN


def _is_agent_mode() -> bool:
    return _output_mode() == OutputMode.AGENT


class WolframConsole:
    """Mode-aware console for wolfram-llm output.

    In human mode: Rich formatting with colors and panels
    In agent mode: Clean text with === headers and no decorations
    In JSON mode: Structured output via print_json
    """

    def __init__(self) -> None:
        self._console = Console()

    def print(self, *args, **kwargs) -> None:
        """Print to console, respecting output mode."""
        if _is_agent_mode():
            text = " ".join(str(arg) for arg in args)
            print(_MARKUP_PATTERN.sub("", text), file=sys.stdout)
        else:
            self._console.print(*args, **kwargs)

    def print_raw(self, text: str) -> None:
        """Print raw text without any formatting."""
        print(text, file=sys.stdout)

    @property
    def rich_console(self) -> Console:
        """Get the underlying Rich console for direct access."""
        return self._console


# Global console instance
console = WolframConsole()


def print_header(title: str) -> None:
    """Print a major section header.

    Human mode: Rich panel
    Agent mode: === Title ===
    """
    if _is_agent_mode():
        print(f"=== {title} ===")
        print()
    else:
        console.rich_console.print(
            Panel(Text(title, justify="center"), style="cyan", expand=True)
        )


def print_section(title: str) -> None:
    """Print a subsection header.

    Human mode: Colored title
    Agent mode: --- Title ---
    """
    if _is_agent_mode():
        print(f"--- {title} ---")
    else:
        console.print(f"[bold magenta]{escape(title)}[/bold magenta]")


def print_error(message: str) -> None:
    """Print an error message."""
    if _is_agent_mode():
        print(f"ERROR: {message}")
    else:
        console.print(f"[red]Error:[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    if _is_agent_mode():
        print(f"WARNING: {message}")
    else:
        console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    if _is_agent_mode():
        print(f"OK: {message}")
    else:
        console.print(f"[green]OK:[/green] {escape(message)}")


def print_json(data: Any) -> None:
    """Print data as indented JSON on stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def print_answer(answer: ParsedAnswer, show_sections: bool = True) -> None:
    """Render a parsed answer in the current output mode.

    Args:
        answer: Parsed WolframAlpha answer
        show_sections: Print each section instead of the principal text
    """
    mode = _output_mode()
    if mode == OutputMode.JSON:
        print_json(answer.to_dict())
        return

    print_header(f"Query: {answer.query}")
    if answer.interpretation:
        console.print_raw(f"Interpretation: {answer.interpretation}")
        console.print_raw("")

    if show_sections and answer.sections:
        for section in answer.sections:
            if mode == OutputMode.AGENT:
                print_section(section.title)
                console.print_raw(section.content)
                console.print_raw("")
            else:
                console.rich_console.print(
                    Panel(
                        Text(section.content),
                        title=Text(section.title),
                        title_align="left",
                        border_style="green",
                    )
                )
    else:
        console.print_raw(answer.principal_text)
        console.print_raw("")

    if answer.url:
        if mode == OutputMode.AGENT:
            console.print_raw(f"Full results: {answer.url}")
        else:
            console.print(f"[blue]Full results:[/blue] {escape(answer.url)}")
