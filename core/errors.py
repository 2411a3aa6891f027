# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure raised by this package derives from EventsApiError, so the
# tool layer can turn any of them into a structured error payload.
#
#   ValidationError      bad caller input (missing id, negative limit)
#   AuthenticationError  the guest token could not be obtained
#   HttpError            non-2xx upstream response, or the request never
#                        completed (status_code is None in that case)
#   NotFoundError        2xx response without the expected payload
#   ConfigurationError   environment configuration is missing or invalid
# =============================================================================

import copy
from typing import Any, Optional


class EventsApiError(Exception):
    """Base class for all errors raised by the events server."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def with_context(self, context: str) -> "EventsApiError":
        """Return a copy of this error whose message is prefixed by ``context``.

        The copy keeps the concrete class and any extra attributes
        (status_code, response_body), so callers higher up can still branch
        on the error type.
        """
        wrapped = copy.copy(self)
        wrapped.message = f"{context}: {self.message}"
        wrapped.args = (wrapped.message,)
        return wrapped


class ValidationError(EventsApiError):
    pass


class AuthenticationError(EventsApiError):
    pass


class NotFoundError(EventsApiError):
    pass


class ConfigurationError(EventsApiError):
    pass


class HttpError(EventsApiError):
    """Upstream call failed.

    ``status_code`` is None when no HTTP response was received (DNS failure,
    connection refused, timeout).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
