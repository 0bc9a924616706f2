"""Output formatting for wolfram-llm."""

from wolfram_llm.output.console import (
    console,
    print_header,
    print_section,
    print_error,
    print_warning,
    print_success,
    print_json,
    print_answer,
)

__all__ = [
    "console",
    "print_header",
    "print_section",
    "print_error",
    "print_warning",
    "print_success",
    "print_json",
    "print_answer",
]
