"""Pytest configuration and fixtures for wolfram-llm tests."""

import logging
from typing import Callable, Generator

import httpx
import pytest

from wolfram_llm import mcp_server
from wolfram_llm.core.client import WolframLLMClient
from wolfram_llm.core.config import Config, OutputMode, set_config
from wolfram_llm.utils.log import PACKAGE_LOGGER

ENV_VARS = [
    "WOLFRAM_LLM_APP_ID",
    "WOLFRAM_LLM_BASE_URL",
    "WOLFRAM_LLM_TIMEOUT",
    "WOLFRAM_LLM_MAX_CHARS",
    "WOLFRAM_AGENT",
    "LOG_LEVEL",
]

TWO_PLUS_TWO_ANSWER = (
    'Query:\n"what is 2+2?"\n\n'
    "Input:\n2 + 2\n\n"
    "Result:\n4\n\n"
    "Number name:\nfour\n\n"
    'Wolfram|Alpha website result for "what is 2+2?":\n'
    "https://www.wolframalpha.com/input?i=what+is+2%2B2%3F"
)

DUPLICATED_ANSWER = (
    'Query:\n"pi"\n\n'
    'Assumption: "pi" is a mathematical constant\n\n'
    "Decimal approximation:\n3.1415926535897932384626433832795028841971693993751058209749445923\n\n"
    "Property: pi is a transcendental number\n\n"
    'Assumption: "pi" is a mathematical constant\n\n'
    "Decimal approximation:\n3.1415926535897932384626433832795028841971693993751058209749445923\n\n"
    "Continued fraction: [3; 7, 15, 1, 292, 1, 1, 1, 2, 1, 3, 1, 14, ...]\n\n"
    'Wolfram|Alpha website result for "pi":\nhttps://www.wolframalpha.com/input?i=pi'
)


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from the environment and from each other."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    mcp_server._client = None
    yield
    set_config(None)
    mcp_server._client = None
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.propagate = True


@pytest.fixture
def config() -> Generator[Config, None, None]:
    """Create and set a test configuration."""
    cfg = Config(app_id="test-app-id", output_mode=OutputMode.AGENT)
    set_config(cfg)
    yield cfg


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    """Requests received by the mock transport."""
    return []


@pytest.fixture
def make_client(
    config: Config, requests_seen: list[httpx.Request]
) -> Callable[..., WolframLLMClient]:
    """Build a client whose HTTP calls are answered by a handler function.

    The handler takes an httpx.Request and returns an httpx.Response.
    """

    def factory(handler: Callable[[httpx.Request], httpx.Response], cfg: Config = None):
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        http = httpx.Client(transport=httpx.MockTransport(recording_handler))
        return WolframLLMClient(cfg or config, http_client=http)

    return factory


@pytest.fixture
def text_response() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Factory for handlers that always answer with the given text."""

    def factory(text: str, status_code: int = 200):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, text=text)

        return handler

    return factory


@pytest.fixture
def two_plus_two_answer() -> str:
    """Raw answer for a simple arithmetic query."""
    return TWO_PLUS_TWO_ANSWER


@pytest.fixture
def duplicated_answer() -> str:
    """Raw answer with the repeated tail after a second assumption."""
    return DUPLICATED_ANSWER
