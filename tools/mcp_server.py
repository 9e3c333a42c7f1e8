# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes the three Swiss public-transport capabilities as MCP tools.
#   Each tool is a thin wrapper around a core/handlers.py coroutine — it
#   declares the input schema, logs the call, and maps the handler's
#   ToolResult onto MCP's success/error channel.
#
# HOW IT WORKS (the flow):
#   1. The host (an agent, Claude Desktop, ...) calls a tool by name
#   2. FastMCP validates the arguments against the schema declared below
#      (enums via Literal, numeric ranges via pydantic Field bounds)
#   3. The wrapper awaits the core handler, which makes ONE request to
#      transport.opendata.ch and renders the answer as text
#   4. Success → the text is returned as the tool result
#      Failure → ToolError(text), which FastMCP reports with isError=true
#
# TOOL NAMING CONVENTIONS:
#   - search_* → Query with filters (idempotent, safe to retry)
#   - get_*    → Read-only retrieval (idempotent, safe to retry)
#   Every tool is annotated readOnlyHint + openWorldHint: nothing is
#   written, and the answer depends on a live external service.
#
# RUNNING THIS SERVER:
#   a) stdio (default):   python -m tools.mcp_server
#   b) HTTP:              PORT=8000 python -m tools.mcp_server
#                         → POST /mcp for MCP traffic (stateless; GET and
#                           DELETE get 405), GET /health for probes
# =============================================================================

import logging
import sys
from typing import Annotated, Literal, Optional

import uvicorn
from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

# The tools layer depends on core/ and nothing else.
from core import handlers
from core.config import ServerSettings
from core.handlers import (
    DEFAULT_BOARD_TYPE,
    DEFAULT_CONNECTIONS_LIMIT,
    DEFAULT_STATIONBOARD_LIMIT,
)
from core.models import ToolResult

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because in stdio mode the MCP messages travel over
# STDOUT.  A single log line on stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - YELLOW for intermediate status messages
#     - GREEN for successful results
#     - RED for error results
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its (non-empty) parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _finish(tool_name: str, result: ToolResult) -> str:
    """Log the handler's result, then return its text or raise ToolError."""
    if result.is_error:
        logging.info(f"{_RED}  ← {tool_name} error: {result.text}{_RESET}")
        raise ToolError(result.text)
    _log_status(f"rendered {len(result.text.splitlines())} line(s)")
    first_line = result.text.splitlines()[0] if result.text else ""
    logging.info(f"{_GREEN}  ← {tool_name} response: {first_line}{_RESET}")
    return result.text


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("swiss-transport")

_READ_ONLY = {"readOnlyHint": True, "openWorldHint": True}

TransportMode = Literal["train", "tram", "ship", "bus", "cableway"]


# =============================================================================
# TOOL 1: search_locations
# =============================================================================
# Usually the FIRST call: it turns a fuzzy name ("zurich hb") or a GPS
# position into exact station names and IDs the other tools accept.
# =============================================================================
@mcp.tool(annotations={"title": "Search Locations", **_READ_ONLY})
async def search_locations(
    query: Annotated[
        Optional[str], Field(description="Name of the location to search for")
    ] = None,
    x: Annotated[Optional[float], Field(description="Latitude (WGS84)")] = None,
    y: Annotated[Optional[float], Field(description="Longitude (WGS84)")] = None,
    type: Annotated[
        Optional[Literal["all", "station", "poi", "address"]],
        Field(description="Filter by location type. Default: all"),
    ] = None,
) -> str:
    """Search for Swiss public transport stations, addresses, and points of
    interest by name or coordinates.

    Provide either `query`, or both `x` and `y`.  Returns matching locations
    with IDs that can be used in search_connections and get_stationboard.
    """
    _log_request("search_locations", query=query, x=x, y=y, type=type)
    result = await handlers.search_locations(query=query, x=x, y=y, type=type)
    return _finish("search_locations", result)


# =============================================================================
# TOOL 2: search_connections
# =============================================================================
# "from" is a Python keyword, so the parameter is from_ with the schema
# alias "from".  Same trick for the camelCase isArrivalTime flag.
# =============================================================================
@mcp.tool(annotations={"title": "Search Connections", **_READ_ONLY})
async def search_connections(
    from_: Annotated[str, Field(alias="from", description="Departure station name or ID")],
    to: Annotated[str, Field(description="Arrival station name or ID")],
    via: Annotated[
        Optional[list[str]], Field(description="Up to 5 intermediate stops")
    ] = None,
    date: Annotated[
        Optional[str], Field(description="Travel date in YYYY-MM-DD format")
    ] = None,
    time: Annotated[Optional[str], Field(description="Travel time in HH:mm format")] = None,
    is_arrival_time: Annotated[
        Optional[bool],
        Field(
            alias="isArrivalTime",
            description="If true, date/time refer to desired arrival time. Default: false",
        ),
    ] = None,
    transportations: Annotated[
        Optional[list[TransportMode]], Field(description="Filter by transport type")
    ] = None,
    limit: Annotated[
        Optional[int],
        Field(
            ge=1,
            le=6,
            description=f"Number of connections to return (1-6). Default: {DEFAULT_CONNECTIONS_LIMIT}",
        ),
    ] = None,
    page: Annotated[
        Optional[int],
        Field(ge=0, le=10, description="Page for pagination (0-10). Default: 0"),
    ] = None,
) -> str:
    """Find public transport connections (routes) between two locations in
    Switzerland.

    Returns schedules with departure/arrival times, platforms, transfers, and
    the train/bus/walk legs of each connection.
    """
    _log_request(
        "search_connections",
        from_=from_, to=to, via=via, date=date, time=time,
        is_arrival_time=is_arrival_time, transportations=transportations,
        limit=limit, page=page,
    )
    result = await handlers.search_connections(
        from_,
        to,
        via=via,
        date=date,
        time=time,
        is_arrival_time=is_arrival_time,
        transportations=transportations,
        limit=limit,
        page=page,
    )
    return _finish("search_connections", result)


# =============================================================================
# TOOL 3: get_stationboard
# =============================================================================
@mcp.tool(annotations={"title": "Get Station Board", **_READ_ONLY})
async def get_stationboard(
    station: Annotated[Optional[str], Field(description="Station name")] = None,
    id: Annotated[
        Optional[str],
        Field(description="Station ID (takes precedence over station name)"),
    ] = None,
    limit: Annotated[
        Optional[int],
        Field(
            ge=1,
            le=420,
            description=f"Max number of entries to return. Default: {DEFAULT_STATIONBOARD_LIMIT}",
        ),
    ] = None,
    transportations: Annotated[
        Optional[list[TransportMode]], Field(description="Filter by transport type")
    ] = None,
    datetime: Annotated[
        Optional[str], Field(description="Date and time in 'YYYY-MM-DD HH:mm' format")
    ] = None,
    type: Annotated[
        Optional[Literal["departure", "arrival"]],
        Field(description=f"Board type: 'departure' or 'arrival'. Default: {DEFAULT_BOARD_TYPE}"),
    ] = None,
) -> str:
    """Get the departure or arrival board for a Swiss public transport station.

    Provide either `station` or `id`.  Shows upcoming departures/arrivals with
    destinations, times, platforms, and delay information.
    """
    _log_request(
        "get_stationboard",
        station=station, id=id, limit=limit, transportations=transportations,
        datetime=datetime, type=type,
    )
    result = await handlers.get_stationboard(
        station=station,
        id=id,
        limit=limit,
        transportations=transportations,
        datetime=datetime,
        type=type,
    )
    return _finish("get_stationboard", result)


# =============================================================================
# Health check (HTTP mode only)
# =============================================================================
@mcp.custom_route("/health", methods=["GET"])
async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


# =============================================================================
# HTTP mode: stateless, POST-only MCP endpoint
# =============================================================================
# Every POST is handled on its own (no session IDs, no server-initiated
# streams), so GET (SSE stream) and DELETE (session teardown) have nothing
# to act on.  They are answered with 405 and a JSON-RPC error body before
# the request reaches FastMCP.
# =============================================================================
_METHOD_NOT_ALLOWED_MESSAGES = {
    "GET": "Method not allowed. Use POST to interact with the MCP server.",
    "DELETE": "Method not allowed.",
}


class PostOnlyMiddleware:
    """ASGI middleware rejecting GET/DELETE on the MCP endpoint with 405."""

    def __init__(self, app: ASGIApp, path: str) -> None:
        self.app = app
        self.path = path.rstrip("/") or "/"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            request_path = scope["path"].rstrip("/") or "/"
            message = _METHOD_NOT_ALLOWED_MESSAGES.get(scope["method"])
            if request_path == self.path and message is not None:
                response = JSONResponse(
                    {"jsonrpc": "2.0", "error": {"code": -32000, "message": message}, "id": None},
                    status_code=405,
                    headers={"Allow": "POST"},
                )
                await response(scope, receive, send)
                return
        await self.app(scope, receive, send)


def build_http_app(path: str = "/mcp") -> Starlette:
    """The Starlette app served in HTTP mode: /mcp (POST only) and /health."""
    return mcp.http_app(
        path=path,
        stateless_http=True,
        middleware=[Middleware(PostOnlyMiddleware, path=path)],
    )


# =============================================================================
# Server entry point
# =============================================================================
# stdio is the default so desktop hosts and the ADK agent (agent/) can spawn
# this module as a subprocess.  Setting PORT switches to streamable HTTP for
# remote deployment.
# =============================================================================
def main() -> None:
    load_dotenv()
    settings = ServerSettings.from_env()
    _configure_logging(settings.log_level)

    if settings.use_http:
        logging.info(
            f"MCP streamable HTTP server listening on {settings.host}:{settings.port}{settings.mcp_path}"
        )
        uvicorn.run(
            build_http_app(settings.mcp_path),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    else:
        mcp.run()


if __name__ == "__main__":
    main()
