# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the Kynhood Events API access layer.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The only third-party import is
#   httpx (in core/http.py).  Everything here can be driven from a plain
#   asyncio script or a test with a fake transport.
#
# LAYERS (leaf first):
#   token_cache.py     →  one in-memory guest token with an expiry
#   token_provider.py  →  fetches a fresh guest token from GET /token
#   http.py            →  sends requests, attaches the token, retries a 401 once
#   events.py          →  list events / get one event
# =============================================================================
