# =============================================================================
# core/transport_api.py  —  Transport Client for transport.opendata.ch
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Builds the request URL for one of the three upstream endpoints, performs
#   ONE GET request, and returns the decoded JSON body.
#
# QUERY PARAMETER ENCODING:
#   The params mapping mixes three kinds of value:
#     - a single string       → key=value
#     - a list of strings     → key[]=v1&key[]=v2   (order preserved)
#     - None                  → key omitted entirely (never "key=" or "key=None")
#   The API expects the PHP-style "key[]" form for multi-valued filters
#   such as via[] and transportations[].
#
# WHAT THIS MODULE DOES NOT DO:
#   - No retries, no caching, no rate limiting (the API allows 3 req/s and
#     reports overruns as HTTP 429; the error classifier surfaces that).
#   - No shape validation: the JSON is handed back as-is and the models in
#     core/models.py read it defensively.
# =============================================================================

import logging
from typing import Any, Mapping, Optional, Sequence, Union

import httpx

logger = logging.getLogger(__name__)

BASE_URL = "https://transport.opendata.ch/v1"

ENDPOINTS = frozenset({"locations", "connections", "stationboard"})

ParamValue = Union[str, Sequence[str], None]


class TransportAPIError(Exception):
    """The API answered with a non-2xx status.

    `body` is the raw response text (not parsed JSON), kept for diagnosis.
    """

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Transport API error (HTTP {status}): {body}")
        self.status = status
        self.body = body


def _query_pairs(params: Mapping[str, ParamValue]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((f"{key}[]", str(v)) for v in value)
        else:
            pairs.append((key, str(value)))
    return pairs


def build_url(endpoint: str, params: Mapping[str, ParamValue]) -> str:
    """Join BASE_URL, the endpoint path and the encoded query string."""
    if endpoint not in ENDPOINTS:
        raise ValueError(
            f"Unknown transport endpoint {endpoint!r}; expected one of {sorted(ENDPOINTS)}"
        )
    url = httpx.URL(f"{BASE_URL}/{endpoint}", params=_query_pairs(params))
    return str(url)


async def fetch_transport_api(
    endpoint: str,
    params: Mapping[str, ParamValue],
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """GET one endpoint and return its decoded JSON body.

    Args:
        endpoint: "locations", "connections" or "stationboard".
        params: Query parameters (see module header for the encoding rules).
        client: Optional shared httpx client.  When omitted, a short-lived
            client is opened for this single request.

    Raises:
        TransportAPIError: the API answered outside the 2xx range.
        httpx.TransportError: the request never got an answer (DNS, refused
            connection, timeout...).
    """
    url = build_url(endpoint, params)
    logger.debug("GET %s", url)

    # Redirects to the canonical URL are followed, also on injected clients.
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as owned_client:
            response = await owned_client.get(url)
    else:
        response = await client.get(url, follow_redirects=True)

    if not response.is_success:
        logger.warning(
            "Transport API returned HTTP %s for %s", response.status_code, endpoint
        )
        raise TransportAPIError(response.status_code, response.text)

    return response.json()
