"""Client for the WolframAlpha LLM API."""

from typing import Optional

import httpx

from wolfram_llm.core.config import Config, get_config
from wolfram_llm.core.parser import ParsedAnswer, parse_answer
from wolfram_llm.utils.exceptions import (
    ConfigError,
    InputNotInterpretedError,
    WolframAPIError,
    WolframError,
)
from wolfram_llm.utils.log import get_logger

logger = get_logger(__name__)

VALIDATION_QUERY = "2+2"


class WolframLLMClient:
    """Wrapper for WolframAlpha LLM API requests."""

    def __init__(
        self,
        config: Optional[Config] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize the client.

        Args:
            config: wolfram-llm configuration (defaults to the global one)
            http_client: Preconfigured httpx client, mainly for tests
        """
        self.config = config or get_config()
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self.config.timeout)

    def __enter__(self) -> "WolframLLMClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http.close()

    def fetch(self, query: str, max_chars: Optional[int] = None) -> str:
        """Fetch the raw answer text for a query.

        Args:
            query: Natural language query
            max_chars: Optional answer length limit (the API's maxchars)

        Returns:
            Raw answer text

        Raises:
            ConfigError: If no app id is configured
            InputNotInterpretedError: If WolframAlpha cannot interpret the query
            WolframAPIError: If the request fails or the response is not text
        """
        if not self.config.has_app_id:
            raise ConfigError(
                "WolframAlpha app id not set. Set WOLFRAM_LLM_APP_ID in the environment or .env."
            )

        params = {"appid": self.config.app_id, "input": query}
        if max_chars is not None:
            params["maxchars"] = str(max_chars)

        try:
            response = self._http.get(self.config.base_url, params=params)
        except httpx.HTTPError as e:
            raise WolframAPIError(f"WolframAlpha LLM API request failed: {e}") from e

        if response.status_code == 501:
            logger.info("Input not interpreted: %r", query)
            raise InputNotInterpretedError(raw_response=response.text)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("WolframAlpha LLM API error %s: %s", response.status_code, response.text)
            raise WolframAPIError(
                f"WolframAlpha LLM API returned HTTP {response.status_code}",
                status_code=response.status_code,
                raw_response=response.text,
            ) from e

        content_type = response.headers.get("content-type", "text/plain")
        if not content_type.startswith("text/"):
            logger.error("Unexpected response format: %s", content_type)
            raise WolframAPIError(
                "Invalid response format from WolframAlpha API",
                status_code=response.status_code,
                raw_response=response.content,
            )

        logger.debug("Raw API response for %r:\n%s", query, response.text)
        return response.text

    def query(self, query: str) -> ParsedAnswer:
        """Ask a query and get the full structured answer."""
        return parse_answer(self.fetch(query))

    def simple_answer(self, query: str, max_chars: Optional[int] = None) -> ParsedAnswer:
        """Ask a query with a length limit, for compact answers.

        Args:
            query: Natural language query
            max_chars: Answer length limit (defaults to config.simple_max_chars)

        Returns:
            ParsedAnswer of the shortened response
        """
        limit = max_chars if max_chars is not None else self.config.simple_max_chars
        return parse_answer(self.fetch(query, max_chars=limit))

    def validate_key(self) -> bool:
        """Check the app id by asking a trivial query.

        Returns:
            True if the API answered with a result
        """
        try:
            return "Result:" in self.fetch(VALIDATION_QUERY)
        except WolframError as e:
            logger.warning("API key validation failed: %s", e)
            return False
