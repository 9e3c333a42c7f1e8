# =============================================================================
# core/handlers.py  —  Tool Handlers (one per capability)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Implements the three capabilities the MCP server publishes:
#     - search_locations    → /locations
#     - search_connections  → /connections
#     - get_stationboard    → /stationboard
#
# THE LIFECYCLE OF ONE CALL:
#   validate inputs ──(missing)──────────────────────▶ ToolResult.error(...)
#        │
#   build params → fetch via error classifier ──(fail)▶ ToolResult.error(msg)
#        │
#   decode → render text ─────────────────────────────▶ ToolResult(text)
#
#   Handlers are stateless and framework-free: they take already-parsed
#   arguments and return a ToolResult.  They NEVER raise — every failure,
#   expected or not, is caught here and turned into an error result.
#
# PARAMETER CONVENTIONS:
#   Optional inputs left as None are omitted from the query string entirely
#   (see core/transport_api.py).  Numbers are sent as strings; the boolean
#   isArrivalTime is sent as "1"/"0", which is what the API expects.
# =============================================================================

import logging
from typing import Optional, Sequence

import httpx

from core.errors import call_transport_api
from core.formatters import render_connections, render_locations, render_station_board
from core.models import (
    ConnectionsResponse,
    LocationsResponse,
    StationBoardResponse,
    ToolResult,
)
from core.transport_api import ParamValue, fetch_transport_api

logger = logging.getLogger(__name__)

DEFAULT_CONNECTIONS_LIMIT = 4
DEFAULT_STATIONBOARD_LIMIT = 20
DEFAULT_BOARD_TYPE = "departure"


def _as_param(value: Optional[object]) -> Optional[str]:
    return None if value is None else str(value)


def _as_list_param(values: Optional[Sequence[str]]) -> Optional[list[str]]:
    return None if values is None else list(values)


async def search_locations(
    query: Optional[str] = None,
    x: Optional[float] = None,
    y: Optional[float] = None,
    type: Optional[str] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> ToolResult:
    """Find stations, POIs and addresses by name, or near a coordinate pair."""
    if not query and (x is None or y is None):
        return ToolResult.error(
            "Either 'query' or both 'x' and 'y' coordinates must be provided."
        )

    params: dict[str, ParamValue] = {
        "query": query or None,
        "x": _as_param(x),
        "y": _as_param(y),
        "type": type,
    }
    try:
        data = await call_transport_api(
            fetch_transport_api("locations", params, client=client)
        )
        response = LocationsResponse.from_dict(data)
        logger.debug("locations: %d result(s)", len(response.stations))
        return ToolResult(render_locations(response))
    except Exception as exc:
        logger.debug("search_locations failed: %s", exc)
        return ToolResult.error(str(exc))


async def search_connections(
    from_: str,
    to: str,
    via: Optional[Sequence[str]] = None,
    date: Optional[str] = None,
    time: Optional[str] = None,
    is_arrival_time: Optional[bool] = None,
    transportations: Optional[Sequence[str]] = None,
    limit: Optional[int] = None,
    page: Optional[int] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> ToolResult:
    """Find connections between two locations.

    `limit` (1-6) and `page` (0-10) are left to the API defaults (4 and 0)
    when not given.  `via` is capped at 5 stops by the API itself.
    """
    if is_arrival_time is None:
        arrival_flag = None
    else:
        arrival_flag = "1" if is_arrival_time else "0"

    params: dict[str, ParamValue] = {
        "from": from_,
        "to": to,
        "via": _as_list_param(via),
        "date": date,
        "time": time,
        "isArrivalTime": arrival_flag,
        "transportations": _as_list_param(transportations),
        "limit": _as_param(limit),
        "page": _as_param(page),
    }
    try:
        data = await call_transport_api(
            fetch_transport_api("connections", params, client=client)
        )
        response = ConnectionsResponse.from_dict(data)
        logger.debug("connections: %d result(s)", len(response.connections))
        return ToolResult(render_connections(response, from_, to))
    except Exception as exc:
        logger.debug("search_connections failed: %s", exc)
        return ToolResult.error(str(exc))


async def get_stationboard(
    station: Optional[str] = None,
    id: Optional[str] = None,
    limit: Optional[int] = None,
    transportations: Optional[Sequence[str]] = None,
    datetime: Optional[str] = None,
    type: Optional[str] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> ToolResult:
    """Departure (default) or arrival board for one station.

    When both `station` and `id` are given, both are sent; the API gives
    `id` precedence.
    """
    if not station and not id:
        return ToolResult.error("Either 'station' name or 'id' must be provided.")

    params: dict[str, ParamValue] = {
        "station": station or None,
        "id": id or None,
        "limit": _as_param(limit),
        "transportations": _as_list_param(transportations),
        "datetime": datetime,
        "type": type,
    }
    try:
        data = await call_transport_api(
            fetch_transport_api("stationboard", params, client=client)
        )
        response = StationBoardResponse.from_dict(data)
        logger.debug("stationboard: %d row(s)", len(response.stationboard))
        return ToolResult(
            render_station_board(response, station, id, type or DEFAULT_BOARD_TYPE)
        )
    except Exception as exc:
        logger.debug("get_stationboard failed: %s", exc)
        return ToolResult.error(str(exc))
