# =============================================================================
# core/token_cache.py  —  In-memory Guest Token Cache
# =============================================================================
#
# Holds at most ONE credential.  Expiry is checked lazily: get() clears an
# expired credential and reports nothing, there is no background eviction.
#
# The cache is a plain object, not a module global.  The server builds one
# and passes it to ApiClient; tests build their own with a fake clock.
#
# No locking: two concurrent calls that both find the cache empty will both
# fetch a token, and the last set() wins.
# =============================================================================

import time
from typing import Callable, Optional

from core.config import DEFAULT_TOKEN_TTL_SECONDS
from core.models import Credential


class TokenCache:
    """Single-slot token store with a per-entry time-to-live."""

    def __init__(
        self,
        default_ttl: float = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self._clock = clock
        self._credential: Optional[Credential] = None

    def get(self) -> Optional[str]:
        """Return the cached token, or None if absent or expired."""
        if self._credential is None:
            return None

        if not self._credential.is_valid(self._clock()):
            self._credential = None
            return None

        return self._credential.token

    def set(self, token: str, ttl: Optional[float] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        self._credential = Credential(token=token, expires_at=self._clock() + ttl)

    def clear(self) -> None:
        self._credential = None

    def has_valid_token(self) -> bool:
        return self.get() is not None
