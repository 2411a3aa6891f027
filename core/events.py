# =============================================================================
# core/events.py  —  Events API Operations
# =============================================================================
#
# Two read-only operations on top of ApiClient:
#
#   list_events(skip, limit)   GET /events?skip=&limit=   → {"data": [...]}
#   get_event_by_id(id)        GET /events/{id}           → {"data": {...}}
#
# Event JSON is returned exactly as the upstream sent it.
#
# Failures are re-raised with the operation name prefixed to the message
# ("Failed to fetch events: ...").  Errors from core/errors.py keep their
# class when prefixed; anything else becomes a plain EventsApiError.
# =============================================================================

import logging
from urllib.parse import quote

from core.errors import EventsApiError, NotFoundError, ValidationError
from core.http import ApiClient
from core.models import ApiRequest, JsonValue

logger = logging.getLogger(__name__)

EVENTS_ENDPOINT = "/events"


class EventsService:
    def __init__(self, client: ApiClient):
        self._client = client

    async def list_events(self, skip: int = 0, limit: int = 10) -> list[JsonValue]:
        """Fetch one page of events.

        A response whose ``data`` field is missing or not a list is treated
        as an empty page, not an error.
        """
        context = "Failed to fetch events"
        try:
            logger.info("Fetching events (skip: %s, limit: %s)", skip, limit)
            response = await self._client.execute(
                ApiRequest(
                    endpoint=EVENTS_ENDPOINT,
                    params={"skip": skip, "limit": limit},
                )
            )

            data = response.get("data") if isinstance(response, dict) else None
            if not isinstance(data, list):
                logger.warning(
                    "Unexpected response format for events list: %r", response
                )
                return []

            logger.info("Retrieved %d events", len(data))
            return data

        except EventsApiError as exc:
            logger.error("%s: %s", context, exc)
            raise exc.with_context(context) from exc
        except Exception as exc:
            logger.exception(context)
            raise EventsApiError(f"{context}: {exc}") from exc

    async def get_event_by_id(self, event_id: str) -> JsonValue:
        """Fetch the full details of one event.

        Raises:
            ValidationError: ``event_id`` is not a non-empty string.  No
                request is made.
            NotFoundError: the upstream answered 2xx but without ``data``.
        """
        context = "Failed to fetch event details"
        try:
            if not isinstance(event_id, str) or not event_id.strip():
                raise ValidationError("Valid event ID is required")

            logger.info("Fetching event details for ID: %s", event_id)
            response = await self._client.execute(
                ApiRequest(endpoint=f"{EVENTS_ENDPOINT}/{quote(event_id, safe='')}")
            )

            data = response.get("data") if isinstance(response, dict) else None
            if data is None:
                raise NotFoundError("Event data not found in response")

            logger.info("Retrieved event details for ID: %s", event_id)
            return data

        except EventsApiError as exc:
            logger.error("Failed to fetch event %s: %s", event_id, exc)
            raise exc.with_context(context) from exc
        except Exception as exc:
            logger.exception("Failed to fetch event %s", event_id)
            raise EventsApiError(f"{context}: {exc}") from exc
