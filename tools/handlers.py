# =============================================================================
# tools/handlers.py  —  Tool Handlers (framework-agnostic)
# =============================================================================
#
# Each handler:
#   1. fills in defaults and validates the raw tool arguments
#   2. calls one EventsService operation
#   3. shapes the result into the tool's declared output dataclass
#
# Errors are NOT caught here.  tools/mcp_server.py turns them into the
# {"error": ..., "tool": ...} payload.
# =============================================================================

from typing import Any

from core.config import Settings
from core.errors import ValidationError
from core.events import EventsService
from core.models import EventDetailResult, EventListResult


def _page_value(name: str, value: Any, default: int) -> int:
    if value is None:
        return default
    # bool is an int subclass; "true" is not a page size.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{name} must be a whole number")
    if value < 0:
        raise ValidationError(f"{name} must not be negative")
    return int(value)


async def list_events_handler(
    service: EventsService,
    settings: Settings,
    skip: Any = None,
    limit: Any = None,
) -> EventListResult:
    skip = _page_value("skip", skip, settings.default_skip)
    limit = _page_value("limit", limit, settings.default_limit)

    events = await service.list_events(skip, limit)
    return EventListResult(events=events, count=len(events), skip=skip, limit=limit)


async def get_event_by_id_handler(
    service: EventsService,
    event_id: Any,
) -> EventDetailResult:
    if not event_id:
        raise ValidationError("Event ID is required")

    event = await service.get_event_by_id(event_id)
    return EventDetailResult(event=event)
