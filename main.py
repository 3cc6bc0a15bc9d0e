# =============================================================================
# main.py  —  Entry Point for the Articles MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (STRAPI_URL, MCP_TRANSPORT, ...)
#   2. Builds the adapter config and injects it into the tool server
#   3. Serves the search/fetch tools over the chosen transport
#
# TRANSPORTS (MCP_TRANSPORT):
#   stdio  → default; the agent spawns this process and talks over pipes
#   http   → streamable HTTP on http://MCP_HOST:MCP_PORT/mcp
#   sse    → Server-Sent Events on http://MCP_HOST:MCP_PORT/sse
# =============================================================================

import logging
import os

from dotenv import load_dotenv

# Must run before the config is built, since STRAPI_URL may live in .env
load_dotenv()

from core.config import AdapterConfig
from tools.mcp_server import configure, mcp

_TRANSPORT_PATHS = {
    "http": "/mcp",
    "sse": "/sse",
}


def run_server() -> None:
    """Configure the tool server from the environment and start serving."""
    config = AdapterConfig.from_env()
    configure(config)

    transport = os.environ.get("MCP_TRANSPORT", "stdio").lower()
    logging.info(f"Articles MCP server starting: backend={config.base_url} transport={transport}")

    if transport == "stdio":
        mcp.run()
    elif transport in _TRANSPORT_PATHS:
        mcp.run(
            transport=transport,
            host=os.environ.get("MCP_HOST", "127.0.0.1"),
            port=int(os.environ.get("MCP_PORT", "8000")),
            path=_TRANSPORT_PATHS[transport],
        )
    else:
        raise SystemExit(
            f"Unknown MCP_TRANSPORT '{transport}'. Use one of: stdio, http, sse."
        )


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    run_server()
