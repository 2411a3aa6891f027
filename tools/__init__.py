# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the MCP-facing layer.
#
#   handlers.py    →  argument defaults/validation + output shaping, no FastMCP
#   mcp_server.py  →  FastMCP registration, logging, error payloads
#
# Tools never talk HTTP themselves; they go through core.events.EventsService.
# =============================================================================
