"""Utility functions for wolfram-llm."""

from wolfram_llm.utils.exceptions import (
    WolframError,
    ConfigError,
    WolframAPIError,
    InputNotInterpretedError,
    AnswerFormatError,
    MissingQueryError,
    EmptyResultError,
)
from wolfram_llm.utils.log import configure_logging, get_logger

__all__ = [
    "WolframError",
    "ConfigError",
    "WolframAPIError",
    "InputNotInterpretedError",
    "AnswerFormatError",
    "MissingQueryError",
    "EmptyResultError",
    "configure_logging",
    "get_logger",
]
