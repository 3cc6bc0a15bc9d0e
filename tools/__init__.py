# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP bindings for the articles adapter.
#
# tools/ is the translation layer between MCP and core/:
#   1. Receives a tool call from the agent
#   2. Hands it to a core/dispatcher.py pipeline
#   3. Serializes the canonical documents to JSON text
#   4. Applies the boundary error policy (search never fails, fetch does)
#
# The tool docstrings are what the calling agent reads to decide how to use
# each tool, so they describe inputs and outputs in full.
# =============================================================================
