"""wolfram-llm: WolframAlpha LLM API answers as MCP tools."""

__version__ = "1.0.0"
