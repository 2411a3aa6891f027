# =============================================================================
# core/models.py  —  Data Models
# =============================================================================
#
# The dataclasses below describe the few shapes this server actually owns:
# the cached credential, the request descriptor handed to the API client,
# and the two tool outputs.
#
# Event payloads are NOT modelled.  The upstream decides what an event looks
# like; we pass its JSON through untouched (see JsonValue).
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional

# Opaque JSON value as decoded by json.loads (dict, list, str, int, ...).
JsonValue = Any


# -----------------------------------------------------------------------------
# Credential — the one guest token held by TokenCache
# -----------------------------------------------------------------------------
@dataclass
class Credential:
    """A bearer token and the instant after which it must not be used."""

    token: str
    expires_at: float                  # Clock reading (seconds), exclusive

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


# -----------------------------------------------------------------------------
# ApiRequest — what ApiClient.execute() needs to build one HTTP call
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ApiRequest:
    """Description of a single upstream call.

    ``endpoint`` is either a path relative to the configured base URL
    (e.g. ``/events``) or an absolute ``http(s)://`` URL.
    ``is_retry`` is set by the client itself when it re-issues the request
    after a 401; callers leave it alone.
    """

    endpoint: str
    method: str = "GET"
    body: Optional[JsonValue] = None
    params: Optional[dict[str, Any]] = None
    requires_auth: bool = True
    is_retry: bool = False


# -----------------------------------------------------------------------------
# Tool outputs
# -----------------------------------------------------------------------------
@dataclass
class EventListResult:
    """Output of the listEvents tool."""

    events: list[JsonValue] = field(default_factory=list)
    count: int = 0
    skip: int = 0
    limit: int = 10


@dataclass
class EventDetailResult:
    """Output of the getEventById tool."""

    event: JsonValue = None
