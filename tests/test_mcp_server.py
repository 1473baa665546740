"""Tests for the FastMCP server (in-memory client)"""

import json

import pytest
from fastmcp import Client

from fxbank.mcp_server import create_server


@pytest.fixture
def mcp(services):
    return create_server(services)


@pytest.mark.asyncio
async def test_tools_registered(mcp):
    """Test every tool is exposed under its wire name"""
    async with Client(mcp) as client:
        tools = await client.list_tools()

    names = {t.name for t in tools}
    assert {
        "transferFunds",
        "getAccountDetails",
        "getAllAccounts",
        "getFXRate",
        "validateTransfer",
        "smartTransferFunds",
        "analyzeTransferIntent",
        "intelligentAccountCheck",
        "list_tools",
    } <= names


@pytest.mark.asyncio
async def test_call_account_details(mcp):
    """Test camelCase arguments reach the handler"""
    async with Client(mcp) as client:
        result = await client.call_tool("getAccountDetails", {"accountId": "AUD-account"})

    payload = json.loads(result.content[0].text)
    assert payload["balance"] == 5000.0


@pytest.mark.asyncio
async def test_call_fx_rate(mcp):
    """Test the FX tool over MCP"""
    async with Client(mcp) as client:
        result = await client.call_tool("getFXRate", {"fromCurrency": "USD", "toCurrency": "EUR"})

    assert json.loads(result.content[0].text)["rate"] == 0.92


@pytest.mark.asyncio
async def test_prompts_registered(mcp):
    """Test prompts are listed and render account data"""
    async with Client(mcp) as client:
        prompts = await client.list_prompts()
        rendered = await client.get_prompt("account_analysis", {"accountId": "USD-account"})

    assert {p.name for p in prompts} == {"account_analysis", "transfer_advisor", "portfolio_overview"}
    assert "Account: USD-account" in rendered.messages[0].content.text


@pytest.mark.asyncio
async def test_list_tools_names_mcp_params(mcp):
    """Test the list_tools tool advertises the params each MCP tool accepts"""
    async with Client(mcp) as client:
        result = await client.call_tool("list_tools", {})

    tools = {t["name"]: t for t in json.loads(result.content[0].text)["tools"]}
    assert set(tools["getFXRate"]["params"]) == {"fromCurrency", "toCurrency"}
    assert set(tools["getAccountDetails"]["params"]) == {"accountId"}
