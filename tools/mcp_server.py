# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server and registers the two Kynhood tools:
#
#     listEvents(skip?, limit?)  →  {events, count, skip, limit}
#     getEventById(id)           →  {event}
#
#   Each tool is a thin wrapper around a handler in tools/handlers.py.  The
#   wrapper logs the call, pretty-prints the result as JSON text, and turns
#   ANY exception into a ToolError whose text is
#
#     {"error": "<message>", "tool": "<tool name>"}
#
#   FastMCP reports a ToolError as a normal tool result with isError set,
#   so a failing upstream never becomes a protocol-level fault.
#
# STATE:
#   create_server() owns the single TokenCache for the process and passes it
#   down to ApiClient.  Tests call create_server() with their own transport
#   to get an isolated server.
# =============================================================================

import json
import logging
import sys
from dataclasses import asdict
from typing import Annotated, Any, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.config import Settings
from core.events import EventsService
from core.http import ApiClient
from core.token_cache import TokenCache
from tools.handlers import get_event_by_id_handler, list_events_handler

SERVER_NAME = "mcp-kynhood-events"

logger = logging.getLogger(__name__)

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: stdout is the MCP stdio transport, and anything else
# written there corrupts the JSON-RPC stream.
#
# Colour coding for the tool call log lines:
#   CYAN    incoming tool call + arguments
#   YELLOW  intermediate status
#   GREEN   response JSON
#   RED     error payload
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"


def configure_logging(debug: bool = False) -> None:
    """Send all log records to stderr; DEBUG level when ``debug`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [MCP] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    # httpx logs every request at INFO; our own client already does.
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def _log_request(tool_name: str, **params) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> str:
    """Log the tool response as compact JSON, return it pretty-printed."""
    logger.info(
        f"{_GREEN}  ← {tool_name} response: "
        f"{json.dumps(result, separators=(',', ':'), ensure_ascii=False)}{_RESET}"
    )
    return json.dumps(result, indent=2, ensure_ascii=False)


def _tool_error(tool_name: str, exc: Exception) -> ToolError:
    """Build the ToolError carrying the structured error payload."""
    logger.error(f"{_RED}Tool execution failed: {tool_name}: {exc}{_RESET}")
    payload = {"error": str(exc), "tool": tool_name}
    return ToolError(json.dumps(payload, indent=2, ensure_ascii=False))


# =============================================================================
# Server factory
# =============================================================================
def create_server(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    cache: Optional[TokenCache] = None,
) -> FastMCP:
    """Build a FastMCP server wired to the Kynhood API.

    Args:
        settings: Startup configuration (base URL, pagination defaults, ...).
        transport: Optional httpx transport, used by tests to fake the API.
        cache: Optional TokenCache; a fresh one is created when omitted.
    """
    cache = cache or TokenCache(default_ttl=settings.token_ttl_seconds)
    client = ApiClient(
        settings.api_base_url,
        cache,
        timeout=settings.request_timeout_seconds,
        transport=transport,
    )
    service = EventsService(client)

    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            "Tools for browsing trending and upcoming events from the "
            "Kynhood Events API."
        ),
    )

    # -------------------------------------------------------------------------
    # TOOL 1: listEvents
    # -------------------------------------------------------------------------
    # Parameters are typed Any so FastMCP passes raw JSON values through and
    # list_events_handler does all the checking inside the try block.
    @mcp.tool(name="listEvents")
    async def list_events(
        skip: Annotated[
            Any,
            Field(
                description="Number of events to skip (for pagination)",
                json_schema_extra={"type": "number"},
            ),
        ] = settings.default_skip,
        limit: Annotated[
            Any,
            Field(
                description="Maximum number of events to return",
                json_schema_extra={"type": "number"},
            ),
        ] = settings.default_limit,
    ) -> str:
        """List events from the Kynhood API with optional pagination.

        Returns a list of trending and upcoming events.

        Returns:
            JSON object with fields:
              - events: The event objects as returned by the API
              - count: Number of events in this page
              - skip, limit: The pagination values actually used
        """
        _log_request("listEvents", skip=skip, limit=limit)
        try:
            result = await list_events_handler(service, settings, skip, limit)
        except Exception as exc:
            raise _tool_error("listEvents", exc) from exc

        _log_status(f"Got {result.count} events (skip={result.skip}, limit={result.limit})")
        return _log_response("listEvents", asdict(result))

    # -------------------------------------------------------------------------
    # TOOL 2: getEventById
    # -------------------------------------------------------------------------
    @mcp.tool(name="getEventById")
    async def get_event_by_id(
        id: Annotated[
            Any,
            Field(
                description="The unique identifier of the event (24-character hex string)",
                json_schema_extra={"type": "string"},
            ),
        ] = None,
    ) -> str:
        """Get detailed information about a specific event by its ID.

        Returns complete event details including description, location,
        date, and other metadata.

        Returns:
            JSON object with a single field, event, holding the event details.
        """
        _log_request("getEventById", id=id)
        try:
            result = await get_event_by_id_handler(service, id)
        except Exception as exc:
            raise _tool_error("getEventById", exc) from exc

        _log_status(f"Found event {id}")
        return _log_response("getEventById", asdict(result))

    # A missing id is reported by the handler, but hosts still see it as required.
    id_schema = get_event_by_id.parameters["properties"]["id"]
    id_schema.pop("default", None)
    get_event_by_id.parameters["required"] = ["id"]

    return mcp
