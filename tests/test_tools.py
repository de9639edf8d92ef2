import json

import pytest
from fastapi.testclient import TestClient

from helpers import make_service
from top_movers.api.routes import create_app
from top_movers.schemas.movers import TopMoversSchema
from top_movers.tools import run_top_movers


@pytest.mark.asyncio
async def test_tool_result_matches_schema(api_key):
    result = await run_top_movers(make_service(), limit=None)
    assert isinstance(result, TopMoversSchema)
    assert result.gainers[0].ticker == "ABC"


def test_tool_over_streamable_http(api_key):
    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/call",
        "params": {"name": "topMovers", "arguments": {"limit": 1}},
    }
    headers = {"Accept": "application/json, text/event-stream"}

    with TestClient(create_app(make_service())) as client:
        response = client.post("/mcp", json=request, headers=headers)

    assert response.status_code == 200
    result = response.json()["result"]
    assert not result.get("isError")
    assert result["structuredContent"]["gainers"][0]["ticker"] == "ABC"
    assert json.loads(result["content"][0]["text"]) == result["structuredContent"]


def test_tool_is_listed(api_key):
    request = {"jsonrpc": "2.0", "id": 2, "method": "tools/list", "params": {}}
    headers = {"Accept": "application/json, text/event-stream"}

    with TestClient(create_app(make_service())) as client:
        response = client.post("/mcp", json=request, headers=headers)

    tools = response.json()["result"]["tools"]
    assert [tool["name"] for tool in tools] == ["topMovers"]
    assert "limit" in tools[0]["inputSchema"]["properties"]
