# =============================================================================
# core/errors.py  —  Error Classifier
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sits between the Transport Client and the tool handlers.  Any failure
#   raised while talking to transport.opendata.ch is sorted into ONE of a
#   closed set of kinds, and the known kinds are re-raised as a
#   TransportToolError carrying a fixed, user-facing message.
#
#   | Kind         | Trigger                          | Message                     |
#   |--------------|----------------------------------|-----------------------------|
#   | RATE_LIMITED | TransportAPIError, status 429    | retry hint, 3 requests/sec  |
#   | HTTP_STATUS  | TransportAPIError, other status  | status + raw body           |
#   | NETWORK      | httpx.TransportError             | generic connectivity notice |
#   | OTHER        | anything else                    | (re-raised unchanged)       |
#
#   Classification happens once per tool call.  The handlers do not inspect
#   errors any further; they only render the final message.
# =============================================================================

import enum
import logging
from typing import Awaitable, Optional, TypeVar

import httpx

from core.transport_api import TransportAPIError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMIT_MESSAGE = (
    "Rate limited by transport.opendata.ch (max 3 requests/second). "
    "Please try again shortly."
)
NETWORK_ERROR_MESSAGE = (
    "Network error contacting transport.opendata.ch. Please check connectivity."
)


class ErrorKind(enum.Enum):
    RATE_LIMITED = "rate_limited"
    HTTP_STATUS = "http_status"
    NETWORK = "network"
    OTHER = "other"


class TransportToolError(Exception):
    """A classified upstream failure with a message fit for the tool caller."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, TransportAPIError):
        if exc.status == 429:
            return ErrorKind.RATE_LIMITED
        return ErrorKind.HTTP_STATUS
    if isinstance(exc, httpx.TransportError):
        return ErrorKind.NETWORK
    return ErrorKind.OTHER


def describe_error(exc: BaseException) -> Optional[str]:
    """Return the user-facing message for `exc`, or None for ErrorKind.OTHER."""
    kind = classify_error(exc)
    if kind is ErrorKind.RATE_LIMITED:
        return RATE_LIMIT_MESSAGE
    if kind is ErrorKind.HTTP_STATUS:
        return f"Transport API returned HTTP {exc.status}: {exc.body}"
    if kind is ErrorKind.NETWORK:
        return NETWORK_ERROR_MESSAGE
    return None


async def call_transport_api(call: Awaitable[T]) -> T:
    """Await one Transport Client call, translating its failures.

    Example:
        data = await call_transport_api(fetch_transport_api("locations", params))
    """
    try:
        return await call
    except Exception as exc:
        kind = classify_error(exc)
        if kind is ErrorKind.OTHER:
            raise
        if kind is ErrorKind.NETWORK:
            # The low-level text stays in the log, not in the tool result.
            logger.warning("Network failure talking to transport API: %r", exc)
        raise TransportToolError(kind, describe_error(exc)) from exc
