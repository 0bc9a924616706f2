"""Logging setup for wolfram-llm.

Modules get their logger with:
    from wolfram_llm.utils.log import get_logger
    logger = get_logger(__name__)

Everything goes to stderr. When running as an MCP server, stdout belongs
to the JSON-RPC transport.
"""

import logging
import sys
from typing import Optional, TextIO, Union

PACKAGE_LOGGER = "wolfram_llm"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    fmt: str = DEFAULT_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once: the handler is installed only on the
    first call, later calls just adjust the level.

    Args:
        level: Logging level, as an int or a name like "DEBUG"
        fmt: Log record format
        stream: Output stream (defaults to stderr)

    Returns:
        The package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger. Configuration happens in configure_logging()."""
    return logging.getLogger(name)
