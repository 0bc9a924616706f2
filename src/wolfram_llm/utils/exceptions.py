"""Custom exceptions for wolfram-llm."""

from typing import Any, Optional


class WolframError(Exception):
    """Base exception for wolfram-llm errors."""

    pass


class ConfigError(WolframError):
    """Raised when configuration is missing or malformed."""

    pass


class WolframAPIError(WolframError):
    """Raised when the WolframAlpha LLM API call fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        raw_response: Any = None,
    ):
        self.status_code = status_code
        self.raw_response = raw_response
        super().__init__(message)


class InputNotInterpretedError(WolframAPIError):
    """Raised when WolframAlpha cannot interpret the input (HTTP 501)."""

    def __init__(self, raw_response: Any = None):
        super().__init__(
            "Input cannot be interpreted. Try rephrasing your query.",
            status_code=501,
            raw_response=raw_response,
        )


class AnswerFormatError(WolframError):
    """Raised when a raw answer cannot be parsed."""

    pass


class MissingQueryError(AnswerFormatError):
    """Raised when the answer has no recoverable Query: paragraph."""

    def __init__(self, message: str = "Invalid response format: missing query"):
        super().__init__(message)


class EmptyResultError(AnswerFormatError):
    """Raised when parsing leaves no principal text."""

    def __init__(self, message: str = "Could not extract result from response"):
        super().__init__(message)
