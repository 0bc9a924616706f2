"""MCP Server for wolfram-llm - Exposes WolframAlpha LLM API queries as MCP tools.

Tools:
- ask_llm: Full structured answer (query, interpretation, result, link)
- get_simple_answer: Short answer, length-limited by the API
- validate_key: Check the configured app id

Usage:
    wolfram-llm serve

MCP client settings:
    {
        "mcpServers": {
            "wolframalpha-llm": {
                "command": "wolfram-llm",
                "args": ["serve"],
                "env": {"WOLFRAM_LLM_APP_ID": "..."}
            }
        }
    }
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from wolfram_llm.core.client import WolframLLMClient
from wolfram_llm.core.config import get_config
from wolfram_llm.core.parser import ParsedAnswer
from wolfram_llm.utils.exceptions import WolframError
from wolfram_llm.utils.log import configure_logging, get_logger

logger = get_logger(__name__)

# Initialize the MCP server
mcp = FastMCP("wolfram-llm")

# Shared client, created on first tool call
_client: Optional[WolframLLMClient] = None


def get_client() -> WolframLLMClient:
    """Get or create the WolframAlpha LLM API client."""
    global _client
    if _client is None:
        _client = WolframLLMClient(get_config())
    return _client


def close_client() -> None:
    """Close the shared client, if one was created."""
    global _client
    if _client is not None:
        _client.close()
        _client = None


def format_answer(answer: ParsedAnswer) -> str:
    """Render a full answer as the ask_llm tool text."""
    text = f"Query: {answer.query}\n"
    if answer.interpretation:
        text += f"Interpretation: {answer.interpretation}\n"
    text += f"\nResult: {answer.principal_text}\n"
    if answer.url:
        text += f"\nFull results: {answer.url}"
    return text


def _missing_query(query: str) -> Optional[str]:
    if not query or not query.strip():
        return "Missing required arguments: query"
    return None


# =============================================================================
# QUERY TOOLS
# =============================================================================


@mcp.tool()
def ask_llm(query: str) -> str:
    """Ask WolframAlpha a query and get LLM-optimized structured response with multiple formats.

    Args:
        query: The query to ask WolframAlpha

    Returns:
        Query, interpretation, result text and a link to the full results
    """
    missing = _missing_query(query)
    if missing:
        return missing

    try:
        answer = get_client().query(query)
    except WolframError as e:
        logger.error("ask_llm failed for %r: %s", query, e)
        return str(e)
    return format_answer(answer)


@mcp.tool()
def get_simple_answer(query: str) -> str:
    """Get a simplified, LLM-friendly answer focusing on the most relevant information.

    Args:
        query: The query to ask WolframAlpha

    Returns:
        The answer text
    """
    missing = _missing_query(query)
    if missing:
        return missing

    try:
        answer = get_client().simple_answer(query)
    except WolframError as e:
        logger.error("get_simple_answer failed for %r: %s", query, e)
        return str(e)
    return answer.principal_text


# =============================================================================
# STATUS TOOLS
# =============================================================================


@mcp.tool()
def validate_key() -> str:
    """Validate the WolframAlpha LLM API key."""
    is_valid = get_client().validate_key()
    return "API key is valid" if is_valid else "API key is invalid"


# =============================================================================
# SERVER ENTRY POINT
# =============================================================================


def run_server() -> None:
    """Run the MCP server with stdio transport."""
    config = get_config()
    configure_logging(config.log_level)
    if not config.has_app_id:
        logger.warning("WOLFRAM_LLM_APP_ID is not set; queries will fail until it is")
    logger.info("WolframAlpha MCP server running on stdio")
    try:
        mcp.run()
    finally:
        close_client()


if __name__ == "__main__":
    run_server()
