# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (search + fetch)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the articles backend to a remote agent as two MCP tools and one
#   resource.  Each is a thin wrapper around core/dispatcher.py. It handles
#   serialization and the error policy at the protocol boundary.
#
# THE SURFACE:
#   - search(query, limit?)     → JSON array of search hits (never an error)
#   - fetch(id)                 → JSON object of one full article, or a
#                                 tool-level error
#   - articles://categories     → the category list, as JSON
#
# RUNNING THIS SERVER:
#     a) Standalone over stdio:  python -m tools.mcp_server
#     b) Over HTTP or SSE:       python main.py  (see MCP_TRANSPORT there)
# =============================================================================

import json
import logging
import sys
from typing import Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from core.backend import ArticlesBackend
from core.config import AdapterConfig
from core.dispatcher import run_fetch, run_search
from core.errors import ArticlesAdapterError

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: with the stdio transport, STDOUT carries the MCP JSON
# stream and any stray output there corrupts it.
#
#   CYAN   → incoming tool calls with their parameters
#   YELLOW → intermediate status
#   GREEN  → response JSON
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger("articles_mcp")

# Response bodies can be whole articles; log only the start
_MAX_LOGGED_RESPONSE = 500


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, payload: str) -> str:
    """Log the (truncated) serialized response in GREEN, then return it."""
    shown = payload if len(payload) <= _MAX_LOGGED_RESPONSE else payload[:_MAX_LOGGED_RESPONSE] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response: {shown}{_RESET}")
    return payload


def _to_json(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("articles-mcp-server")

config = AdapterConfig.from_env()
backend = ArticlesBackend(config)


def configure(new_config: AdapterConfig, new_backend: Optional[ArticlesBackend] = None) -> None:
    """Swap the configuration (and backend) the tools use.

    main.py calls this after loading .env; tests use it to inject a backend
    with a mock transport.
    """
    global config, backend
    config = new_config
    backend = new_backend or ArticlesBackend(new_config)


# =============================================================================
# TOOL 1: search
# =============================================================================
@mcp.tool()
async def search(query: str, limit: Optional[int] = None) -> str:
    """Search the article library and return matching articles as snippets.

    The query is interpreted before searching:
      - "", "*", or anything mentioning "all", "everything" or "list"
        browses the whole library (up to 100 articles).
      - Anything mentioning "latest", "recent", "newest" or "last"
        returns the most recent articles, newest first.  A number in the
        query sets how many (e.g. "latest 5"); the default is 10.
      - Anything else is a keyword search.

    Args:
        query: Free-text query, or one of the browse phrases above.
        limit: Optional page size for browsing and keyword search (1-100).

    Returns:
        A JSON array.  Each item has id, title, text (a short snippet),
        url and optional metadata (category, author, publishedAt, tags,
        relevance).  Use `fetch` with an item's id to read the full article.
        An empty array means nothing matched.
    """
    _log_request("search", query=query, limit=limit)

    try:
        docs = await run_search(backend, query, limit, config.snippet_length)
    except Exception:
        # The search contract is "never a hard error"
        logger.exception("Unexpected failure while searching for %r", query)
        docs = []

    _log_status(f"Returning {len(docs)} results")
    return _log_response("search", _to_json([doc.to_dict() for doc in docs]))


# =============================================================================
# TOOL 2: fetch
# =============================================================================
@mcp.tool()
async def fetch(id: str) -> str:
    """Retrieve the full text of one article by its id.

    Args:
        id: The article id, as returned in a search result.

    Returns:
        A JSON object with id, title, text (the complete article body), url
        and metadata (author, publishedAt, updatedAt, category, tags,
        source and any extra fields the library provides).
    """
    _log_request("fetch", id=id)

    try:
        doc = await run_fetch(backend, id)
    except ArticlesAdapterError as exc:
        _log_status(f"Fetch failed: {exc}")
        raise ToolError(f"Error fetching article: {exc}") from exc

    _log_status(f"Found '{doc.title}'")
    return _log_response("fetch", _to_json(doc.to_dict()))


# =============================================================================
# RESOURCE: article categories
# =============================================================================
@mcp.resource("articles://categories", mime_type="application/json")
async def categories() -> str:
    """The list of article categories known to the library."""
    _log_request("articles://categories")
    result = await backend.get_article_categories()
    return _log_response("articles://categories", _to_json(result))


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    mcp.run()
