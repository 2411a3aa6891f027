# =============================================================================
# core/token_provider.py  —  Guest Token Acquisition
# =============================================================================
#
# GuestTokenProvider.fetch_fresh() ALWAYS goes to the upstream (GET /token,
# unauthenticated).  Deciding whether a cached token is good enough is the
# caller's job (ApiClient); this class only fetches and stores.
#
# Upstream response:
#   {"token": "...", "userId": "...", "type": "guest", "message": "..."}
# =============================================================================

import logging
from typing import TYPE_CHECKING

from core.errors import AuthenticationError, EventsApiError
from core.models import ApiRequest
from core.token_cache import TokenCache

if TYPE_CHECKING:
    from core.http import ApiClient

logger = logging.getLogger(__name__)

TOKEN_ENDPOINT = "/token"


class GuestTokenProvider:
    def __init__(self, client: "ApiClient", cache: TokenCache):
        self._client = client
        self._cache = cache

    async def fetch_fresh(self) -> str:
        """Fetch a new guest token, cache it with the default ttl, return it.

        Raises:
            AuthenticationError: the request failed, or the response has no
                token.  The cache is left untouched in both cases.
        """
        logger.info("Fetching guest token from Kynhood API")

        try:
            response = await self._client.execute(
                ApiRequest(endpoint=TOKEN_ENDPOINT, requires_auth=False)
            )
        except EventsApiError as exc:
            logger.error("Failed to fetch guest token: %s", exc)
            raise AuthenticationError(f"Failed to obtain guest token: {exc}") from exc

        token = response.get("token") if isinstance(response, dict) else None
        if not token or not isinstance(token, str):
            logger.error("Guest token response has no token field")
            raise AuthenticationError(
                "Failed to obtain guest token: Token not found in response"
            )

        logger.info(
            "Guest token obtained (userId=%s, type=%s)",
            response.get("userId"),
            response.get("type"),
        )
        self._cache.set(token)
        return token
