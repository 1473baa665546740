"""Tests for the FastAPI adapter and the httpx ToolsClient"""

import httpx
import pytest
from fastapi.testclient import TestClient

from fxbank.app import create_app
from fxbank.clients.tools_client import ToolsClient
from fxbank.errors import UnknownPromptError, UnknownToolError


@pytest.fixture
def app(services):
    return create_app(services)


@pytest.fixture
def client(app):
    return TestClient(app)


def test_health(client):
    """Test the health endpoint reports the account count"""
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "accounts": 3}


def test_list_tools(client):
    """Test tool metadata is served"""
    resp = client.get("/tools")

    names = [t["name"] for t in resp.json()["tools"]]
    assert "smartTransferFunds" in names
    assert len(names) == 8


def test_call_tool(client):
    """Test a tool call wraps the result with the tool name"""
    resp = client.post("/tools/getFXRate", json={"arguments": {"from": "AUD", "to": "EUR"}})

    assert resp.status_code == 200
    body = resp.json()
    assert body["tool"] == "getFXRate"
    assert body["result"]["rate"] == 0.6


def test_tool_error_payload_is_not_http_error(client):
    """Test not-found results are 200 responses carrying an error payload"""
    resp = client.post("/tools/getAccountDetails", json={"arguments": {"accountId": "nope"}})

    assert resp.status_code == 200
    assert resp.json()["result"]["error"] == "Account nope not found"


def test_unknown_tool_is_404(client):
    """Test unknown tools map to 404"""
    resp = client.post("/tools/launchRockets", json={"arguments": {}})

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Unknown tool: launchRockets"


def test_prompts(client):
    """Test prompt listing, rendering and unknown names"""
    assert len(client.get("/prompts").json()["prompts"]) == 3

    rendered = client.post("/prompts/portfolio_overview", json={})
    assert "Analyze this complete portfolio" in rendered.json()["prompt"]

    assert client.post("/prompts/nope", json={}).status_code == 404


@pytest.mark.asyncio
async def test_tools_client_round_trip(app):
    """Test ToolsClient against the in-process app"""
    # Arrange
    client = ToolsClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))

    # Act
    async with client:
        health = await client.health()
        tools = await client.list_tools()
        transfer = await client.call_tool(
            "transferFunds", {"amount": 100, "fromAccount": "USD-account", "toAccount": "EUR-account"}
        )
        prompt = await client.get_prompt("account_analysis", {"accountId": "EUR-account"})

    # Assert
    assert health["status"] == "healthy"
    assert len(tools) == 8
    assert transfer["success"] is True
    assert transfer["details"]["final_amount"] == pytest.approx(91.908)
    assert "Account: EUR-account" in prompt["prompt"]


@pytest.mark.asyncio
async def test_tools_client_unknown_tool(app):
    """Test a 404 from the adapter becomes UnknownToolError"""
    async with ToolsClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app)) as client:
        with pytest.raises(UnknownToolError):
            await client.call_tool("launchRockets")


@pytest.mark.asyncio
async def test_tools_client_unknown_prompt(app):
    """Test a prompt 404 from the adapter becomes UnknownPromptError"""
    async with ToolsClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app)) as client:
        with pytest.raises(UnknownPromptError):
            await client.get_prompt("tax_advice")


def test_non_string_account_id_is_not_server_error(client):
    """Test a list account id comes back as an error payload over HTTP"""
    tool = client.post("/tools/getAccountDetails", json={"arguments": {"accountId": ["AUD-account"]}})
    prompt = client.post("/prompts/account_analysis", json={"arguments": {"accountId": ["AUD-account"]}})

    assert tool.status_code == 200
    assert tool.json()["result"]["error"] == "Account ['AUD-account'] not found"
    assert prompt.status_code == 200
    assert prompt.json() == {"error": "Account ['AUD-account'] not found"}
