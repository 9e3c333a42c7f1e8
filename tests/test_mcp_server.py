"""Tests for the FastMCP tool surface, exercised in-memory."""

import json

import httpx

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from core.models import ToolResult
from tools.mcp_server import build_http_app, health_check, mcp


class FakeHandler:
    """Stand-in for a core handler coroutine that records its call."""

    def __init__(self, result: ToolResult) -> None:
        self.result = result
        self.calls: list[tuple[tuple, dict]] = []

    async def __call__(self, *args, **kwargs) -> ToolResult:
        self.calls.append((args, kwargs))
        return self.result


@pytest.mark.asyncio
async def test_lists_the_three_read_only_tools() -> None:
    """Given the server, when listing tools, then exactly the three transport tools are published."""
    async with Client(mcp) as client:
        tools = {tool.name: tool for tool in await client.list_tools()}

    assert set(tools) == {"search_locations", "search_connections", "get_stationboard"}
    for tool in tools.values():
        assert tool.annotations.readOnlyHint is True
        assert tool.annotations.openWorldHint is True


@pytest.mark.asyncio
async def test_search_connections_schema_uses_wire_names() -> None:
    """Given search_connections, when reading its schema, then 'from' and 'isArrivalTime' are exposed."""
    async with Client(mcp) as client:
        tools = {tool.name: tool for tool in await client.list_tools()}

    schema = tools["search_connections"].inputSchema
    assert {"from", "to", "isArrivalTime", "limit", "page"} <= set(schema["properties"])
    assert set(schema["required"]) == {"from", "to"}
    assert "from_" not in schema["properties"]


@pytest.mark.asyncio
async def test_call_returns_handler_text(monkeypatch) -> None:
    """Given a successful handler, when calling the tool, then its text is the tool result."""
    fake = FakeHandler(ToolResult("Connections from Zürich HB to Bern:\n\n1. Depart: 14:02"))
    monkeypatch.setattr("core.handlers.search_connections", fake)

    async with Client(mcp) as client:
        result = await client.call_tool(
            "search_connections", {"from": "Zürich HB", "to": "Bern", "isArrivalTime": True, "limit": 2}
        )

    assert result.content[0].text.startswith("Connections from Zürich HB to Bern:")
    args, kwargs = fake.calls[0]
    assert args == ("Zürich HB", "Bern")
    assert kwargs["is_arrival_time"] is True
    assert kwargs["limit"] == 2


@pytest.mark.asyncio
async def test_call_surfaces_error_results_as_tool_errors(monkeypatch) -> None:
    """Given an error result, when calling the tool, then the client sees an isError result."""
    fake = FakeHandler(ToolResult.error("Either 'station' name or 'id' must be provided."))
    monkeypatch.setattr("core.handlers.get_stationboard", fake)

    async with Client(mcp) as client:
        with pytest.raises(ToolError, match="Either 'station' name or 'id'"):
            await client.call_tool("get_stationboard", {})


@pytest.mark.asyncio
async def test_schema_rejects_out_of_range_limit(monkeypatch) -> None:
    """Given limit above 6, when calling search_connections, then the handler never runs."""
    fake = FakeHandler(ToolResult("unused"))
    monkeypatch.setattr("core.handlers.search_connections", fake)

    async with Client(mcp) as client:
        with pytest.raises(ToolError):
            await client.call_tool("search_connections", {"from": "A", "to": "B", "limit": 7})

    assert fake.calls == []


@pytest.mark.asyncio
async def test_health_check() -> None:
    """Given the health route, when called, then reports ok."""
    response = await health_check(None)

    assert response.status_code == 200
    assert json.loads(response.body) == {"status": "ok"}


# -----------------------------------------------------------------------------
# HTTP mode
# -----------------------------------------------------------------------------
def _http_client(path: str = "/mcp") -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=build_http_app(path))
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "message"),
    [
        ("GET", "Method not allowed. Use POST to interact with the MCP server."),
        ("DELETE", "Method not allowed."),
    ],
)
async def test_http_endpoint_is_post_only(method, message) -> None:
    """Given the HTTP app, when GET or DELETE hits /mcp, then 405 with a JSON-RPC error."""
    async with _http_client() as client:
        response = await client.request(method, "/mcp")

    assert response.status_code == 405
    assert response.headers["allow"] == "POST"
    assert response.json() == {
        "jsonrpc": "2.0",
        "error": {"code": -32000, "message": message},
        "id": None,
    }


@pytest.mark.asyncio
async def test_http_endpoint_honours_custom_path() -> None:
    """Given MCP_PATH=/api/mcp, when GET hits it, then the 405 follows the configured path."""
    async with _http_client("/api/mcp") as client:
        response = await client.get("/api/mcp/")

    assert response.status_code == 405


@pytest.mark.asyncio
async def test_http_health_route() -> None:
    """Given the HTTP app, when GET /health, then 200 ok and untouched by the POST-only rule."""
    async with _http_client() as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
