# =============================================================================
# core/config.py  —  Runtime Configuration
# =============================================================================
#
# All settings come from environment variables (main.py calls load_dotenv()
# first, so a local .env file works too).  They are read ONCE at startup into
# a frozen Settings object and handed to whoever needs them.
#
#   API_BASE_URL              upstream base URL (required)
#   DEFAULT_SKIP              listEvents default offset        (default 0)
#   DEFAULT_LIMIT             listEvents default page size     (default 10)
#   DEBUG                     "true" turns on DEBUG logging    (default false)
#   TOKEN_TTL_SECONDS         guest token cache lifetime       (default 3300)
#   REQUEST_TIMEOUT_SECONDS   httpx timeout per request        (default 30)
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

# Guest tokens live for one hour upstream; we stop using them 5 minutes early.
DEFAULT_TOKEN_TTL_SECONDS = 55 * 60
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    default_skip: int = 0
    default_limit: int = 10
    debug: bool = False
    token_ttl_seconds: float = DEFAULT_TOKEN_TTL_SECONDS
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build Settings from ``environ`` (defaults to ``os.environ``).

        Raises:
            ConfigurationError: API_BASE_URL is missing, or a numeric
                variable does not parse / is out of range.
        """
        env = os.environ if environ is None else environ

        base_url = env.get("API_BASE_URL", "").strip().rstrip("/")
        if not base_url:
            raise ConfigurationError("API_BASE_URL environment variable is not set")

        return cls(
            api_base_url=base_url,
            default_skip=_read_int(env, "DEFAULT_SKIP", 0),
            default_limit=_read_int(env, "DEFAULT_LIMIT", 10),
            debug=env.get("DEBUG", "false").strip().lower() == "true",
            token_ttl_seconds=_read_positive_float(
                env, "TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS
            ),
            request_timeout_seconds=_read_positive_float(
                env, "REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS
            ),
        )


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {value}")
    return value


def _read_positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be greater than zero, got {value}")
    return value
