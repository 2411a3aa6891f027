# =============================================================================
# core/http.py  —  Authenticated Request Executor
# =============================================================================
#
# ApiClient.execute() is the only way anything in this project talks to the
# Kynhood API.  For each request it:
#
#   1. resolves the URL (absolute URLs pass through, paths get the base URL)
#   2. attaches "Authorization: Bearer <token>" when the request needs auth,
#      fetching a guest token first if the cache is empty
#   3. sends the request with httpx
#   4. parses the body as JSON, or wraps plain text as {"raw": text}
#   5. on a 401 for an authenticated request: clears the cache and tries
#      ONE more time with a fresh token.  A second 401 is final.
#
# Anything else that is not 2xx becomes HttpError(status_code, body).
# Transport failures become HttpError with status_code=None.
# =============================================================================

import json
import logging
from dataclasses import replace
from typing import Any, Optional

import httpx

from core.errors import HttpError
from core.models import ApiRequest, JsonValue
from core.token_cache import TokenCache
from core.token_provider import GuestTokenProvider

logger = logging.getLogger(__name__)

# First try plus one retry after a 401.
MAX_ATTEMPTS = 2


class ApiClient:
    """HTTP access to the Kynhood API with guest-token handling.

    Args:
        base_url: Upstream base URL, e.g. ``https://api.example.com``.
        cache: The process-wide TokenCache.
        timeout: httpx timeout in seconds.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        cache: TokenCache,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.timeout = timeout
        self._transport = transport
        self.token_provider = GuestTokenProvider(self, cache)

    async def execute(self, request: ApiRequest) -> JsonValue:
        url = self._resolve_url(request.endpoint)

        for _ in range(MAX_ATTEMPTS):
            headers = await self._build_headers(request)
            response = await self._send(request, url, headers)
            payload = _parse_body(response.text)

            if response.is_success:
                logger.debug("HTTP %s %s - Success", request.method, url)
                return payload

            if not self._should_refresh_token(request, response):
                break

            logger.warning("Received 401, clearing token cache and retrying")
            self.cache.clear()
            request = replace(request, is_retry=True)

        raise HttpError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
            response_body=payload,
        )

    def _resolve_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url}{endpoint}"

    async def _build_headers(self, request: ApiRequest) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}

        if request.requires_auth:
            token = self.cache.get()
            if not token:
                logger.debug("No cached token, fetching new token")
                token = await self.token_provider.fetch_fresh()
            headers["Authorization"] = f"Bearer {token}"

        return headers

    async def _send(
        self, request: ApiRequest, url: str, headers: dict[str, str]
    ) -> httpx.Response:
        logger.debug(
            "HTTP %s %s params=%s headers=%s",
            request.method,
            url,
            request.params,
            _redact(headers),
        )

        content = json.dumps(request.body) if request.body is not None else None
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            ) as client:
                return await client.request(
                    request.method,
                    url,
                    headers=headers,
                    params=request.params,
                    content=content,
                )
        except httpx.HTTPError as exc:
            logger.error("HTTP request failed: %s %s: %s", request.method, url, exc)
            raise HttpError(f"Request failed: {exc}") from exc

    @staticmethod
    def _should_refresh_token(request: ApiRequest, response: httpx.Response) -> bool:
        return (
            response.status_code == 401
            and request.requires_auth
            and not request.is_retry
        )


def _parse_body(text: str) -> Any:
    if not text:
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return {"raw": text}


def _redact(headers: dict[str, str]) -> dict[str, str]:
    if "Authorization" not in headers:
        return headers
    return {**headers, "Authorization": "Bearer ***"}
