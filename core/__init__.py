# =============================================================================
# core/__init__.py
# =============================================================================
# Business logic of the articles adapter: query classification, the backend
# client, normalization into canonical documents, and the search/fetch
# pipelines that tie them together.
#
# Nothing in this package imports FastMCP.  The tools/ layer wraps these
# functions in MCP tools; everything here can be driven directly from tests.
# =============================================================================
