"""Configuration management for wolfram-llm.

Handles the WolframAlpha app id, API endpoint settings, output mode and
configuration precedence.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import os

from dotenv import find_dotenv, load_dotenv

from wolfram_llm.utils.exceptions import ConfigError

DEFAULT_BASE_URL = "https://www.wolframalpha.com/api/v1/llm-api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_SIMPLE_MAX_CHARS = 500


class OutputMode(Enum):
    """Output formatting mode."""

    HUMAN = "human"  # Rich formatting with colors
    AGENT = "agent"  # Clean output: no colors, no box-drawing
    JSON = "json"  # Structured JSON output


@dataclass
class Config:
    """Runtime configuration for wolfram-llm.

    Configuration precedence (highest to lowest):
    1. Explicit arguments (CLI flags)
    2. Environment variables (WOLFRAM_LLM_APP_ID, WOLFRAM_AGENT, ...)
    3. .env file in or above the working directory
    4. Defaults
    """

    app_id: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    simple_max_chars: int = DEFAULT_SIMPLE_MAX_CHARS
    output_mode: OutputMode = OutputMode.HUMAN
    log_level: str = "WARNING"
    verbose: bool = False

    @classmethod
    def from_env(
        cls,
        app_id: Optional[str] = None,
        agent_mode: bool = False,
        json_mode: bool = False,
        verbose: bool = False,
        load_env_file: bool = True,
    ) -> "Config":
        """Create config from the environment.

        Args:
            app_id: Explicit WolframAlpha app id (highest precedence)
            agent_mode: Force agent mode output
            json_mode: Force JSON output
            verbose: Enable verbose logging
            load_env_file: Read a .env file before looking at the environment

        Returns:
            Configured Config instance

        Raises:
            ConfigError: If a numeric setting cannot be parsed
        """
        if load_env_file:
            # Real environment variables always win over .env entries
            load_dotenv(find_dotenv(usecwd=True), override=False)

        if json_mode:
            output_mode = OutputMode.JSON
        elif agent_mode or os.environ.get("WOLFRAM_AGENT"):
            output_mode = OutputMode.AGENT
        else:
            output_mode = OutputMode.HUMAN

        if verbose:
            log_level = "INFO"
        else:
            log_level = os.environ.get("LOG_LEVEL") or "WARNING"

        return cls(
            app_id=app_id or os.environ.get("WOLFRAM_LLM_APP_ID", ""),
            base_url=os.environ.get("WOLFRAM_LLM_BASE_URL") or DEFAULT_BASE_URL,
            timeout=_env_number("WOLFRAM_LLM_TIMEOUT", float, DEFAULT_TIMEOUT),
            simple_max_chars=_env_number(
                "WOLFRAM_LLM_MAX_CHARS", int, DEFAULT_SIMPLE_MAX_CHARS
            ),
            output_mode=output_mode,
            log_level=log_level.upper(),
            verbose=verbose,
        )

    @property
    def has_app_id(self) -> bool:
        """Check if an app id is configured."""
        return bool(self.app_id)

    @property
    def is_agent_mode(self) -> bool:
        """Check if running in agent mode."""
        return self.output_mode == OutputMode.AGENT

    @property
    def is_json_mode(self) -> bool:
        """Check if running in JSON mode."""
        return self.output_mode == OutputMode.JSON

    @property
    def is_human_mode(self) -> bool:
        """Check if running in human-friendly mode."""
        return self.output_mode == OutputMode.HUMAN


def _env_number(name: str, kind: type, default):
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


# Global config singleton (set by CLI)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the current configuration, loading it from the environment on first use.

    Returns:
        Current Config instance
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Optional[Config]) -> None:
    """Set the global configuration.

    Args:
        config: Config instance to use globally, or None to reset
    """
    global _config
    _config = config
