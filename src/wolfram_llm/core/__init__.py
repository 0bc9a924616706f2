"""Core functionality for wolfram-llm."""

from wolfram_llm.core.config import Config, get_config
from wolfram_llm.core.parser import ParsedAnswer, Section, parse_answer
from wolfram_llm.core.client import WolframLLMClient

__all__ = [
    "Config",
    "get_config",
    "ParsedAnswer",
    "Section",
    "parse_answer",
    "WolframLLMClient",
]
