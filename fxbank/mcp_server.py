"""
FastMCP tool server for FXBank.

Tools exposed (wire names):
 - transferFunds, getAccountDetails, getAllAccounts, getFXRate, validateTransfer
 - smartTransferFunds, analyzeTransferIntent, intelligentAccountCheck
 - list_tools

Prompts exposed:
 - account_analysis, transfer_advisor, portfolio_overview
"""

from typing import Any, Dict, List, Optional

from fastmcp import FastMCP

from . import config
from .logging_config import get_logger, setup_logging
from .prompts.banking_prompts import PROMPT_METADATA, BankingPrompts, PromptName
from .services import BankingServices, create_services
from .tools.registry import TOOL_METADATA, ToolDispatcher, ToolName

logger = get_logger("fxbank.mcp_server")


def _drop_none(**kwargs: Any) -> Dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}


# tool -> {dispatcher param: MCP param} where the MCP signature differs
MCP_PARAM_NAMES: Dict[str, Dict[str, str]] = {
    ToolName.GET_FX_RATE.value: {"from": "fromCurrency", "to": "toCurrency"},
}


def mcp_tool_listing() -> List[Dict[str, Any]]:
    """Tool metadata with params named the way the MCP tools accept them."""
    listing = []
    for entry in ToolDispatcher.list_tools():
        renames = MCP_PARAM_NAMES.get(entry["name"])
        if renames:
            params = {renames.get(name, name): spec for name, spec in entry["params"].items()}
            entry = {**entry, "params": params}
        listing.append(entry)
    return listing


def create_server(services: Optional[BankingServices] = None) -> FastMCP:
    """
    Build a FastMCP server whose tools and prompts share one set of services.
    """
    services = services or create_services()
    tools = ToolDispatcher(services)
    prompts = BankingPrompts(services.store)
    mcp = FastMCP(name="fxbank_mcp")

    def describe(tool: ToolName) -> str:
        return TOOL_METADATA[tool]["description"]

    # -----------------------------
    # Direct tools
    # -----------------------------

    @mcp.tool(name=ToolName.TRANSFER_FUNDS.value, description=describe(ToolName.TRANSFER_FUNDS))
    async def transfer_funds(
        amount: float,
        fromAccount: str,  # noqa: N803
        toAccount: str | None = None,  # noqa: N803
        fxThreshold: float | None = None,  # noqa: N803
        preferredCurrency: str | None = None,  # noqa: N803
    ) -> dict:
        args = _drop_none(
            amount=amount,
            fromAccount=fromAccount,
            toAccount=toAccount,
            fxThreshold=fxThreshold,
            preferredCurrency=preferredCurrency,
        )
        return await tools.call(ToolName.TRANSFER_FUNDS.value, args)

    @mcp.tool(name=ToolName.GET_ACCOUNT_DETAILS.value, description=describe(ToolName.GET_ACCOUNT_DETAILS))
    async def get_account_details(accountId: str) -> dict:  # noqa: N803
        return await tools.call(ToolName.GET_ACCOUNT_DETAILS.value, {"accountId": accountId})

    @mcp.tool(name=ToolName.GET_ALL_ACCOUNTS.value, description=describe(ToolName.GET_ALL_ACCOUNTS))
    async def get_all_accounts() -> dict:
        return await tools.call(ToolName.GET_ALL_ACCOUNTS.value, {})

    @mcp.tool(name=ToolName.GET_FX_RATE.value, description=describe(ToolName.GET_FX_RATE))
    async def get_fx_rate(fromCurrency: str, toCurrency: str) -> dict:  # noqa: N803
        # "from" is a keyword, so the MCP signature spells out both names
        return await tools.call(ToolName.GET_FX_RATE.value, {"from": fromCurrency, "to": toCurrency})

    @mcp.tool(name=ToolName.VALIDATE_TRANSFER.value, description=describe(ToolName.VALIDATE_TRANSFER))
    async def validate_transfer(
        amount: float,
        fromAccount: str,  # noqa: N803
        toAccount: str | None = None,  # noqa: N803
        fxThreshold: float | None = None,  # noqa: N803
        preferredCurrency: str | None = None,  # noqa: N803
    ) -> dict:
        args = _drop_none(
            amount=amount,
            fromAccount=fromAccount,
            toAccount=toAccount,
            fxThreshold=fxThreshold,
            preferredCurrency=preferredCurrency,
        )
        return await tools.call(ToolName.VALIDATE_TRANSFER.value, args)

    # -----------------------------
    # Reasoning tools
    # -----------------------------

    @mcp.tool(name=ToolName.SMART_TRANSFER_FUNDS.value, description=describe(ToolName.SMART_TRANSFER_FUNDS))
    async def smart_transfer_funds(
        userInput: str,  # noqa: N803
        amount: float | None = None,
        fromAccount: str | None = None,  # noqa: N803
        toAccount: str | None = None,  # noqa: N803
        fxThreshold: float | None = None,  # noqa: N803
        preferredCurrency: str | None = None,  # noqa: N803
    ) -> dict:
        args = _drop_none(
            userInput=userInput,
            amount=amount,
            fromAccount=fromAccount,
            toAccount=toAccount,
            fxThreshold=fxThreshold,
            preferredCurrency=preferredCurrency,
        )
        return await tools.call(ToolName.SMART_TRANSFER_FUNDS.value, args)

    @mcp.tool(name=ToolName.ANALYZE_TRANSFER_INTENT.value, description=describe(ToolName.ANALYZE_TRANSFER_INTENT))
    async def analyze_transfer_intent(
        userInput: str,  # noqa: N803
        providedArgs: dict | None = None,  # noqa: N803
    ) -> dict:
        args = _drop_none(userInput=userInput, providedArgs=providedArgs)
        return await tools.call(ToolName.ANALYZE_TRANSFER_INTENT.value, args)

    @mcp.tool(
        name=ToolName.INTELLIGENT_ACCOUNT_CHECK.value,
        description=describe(ToolName.INTELLIGENT_ACCOUNT_CHECK),
    )
    async def intelligent_account_check(
        userInput: str,  # noqa: N803
        accountId: str | None = None,  # noqa: N803
    ) -> dict:
        args = _drop_none(userInput=userInput, accountId=accountId)
        return await tools.call(ToolName.INTELLIGENT_ACCOUNT_CHECK.value, args)

    @mcp.tool(name="list_tools", description="List available FXBank tools")
    def list_tools() -> dict:
        """Return metadata for all available tools."""
        return {"tools": mcp_tool_listing()}

    # -----------------------------
    # Prompts
    # -----------------------------

    async def render(name: PromptName, arguments: Dict[str, Any]) -> str:
        result = await prompts.render(name.value, arguments)
        if "error" in result:
            raise ValueError(result["error"])
        return result["prompt"]

    @mcp.prompt(
        name=PromptName.ACCOUNT_ANALYSIS.value,
        description=PROMPT_METADATA[PromptName.ACCOUNT_ANALYSIS]["description"],
    )
    async def account_analysis(accountId: str) -> str:  # noqa: N803
        return await render(PromptName.ACCOUNT_ANALYSIS, {"accountId": accountId})

    @mcp.prompt(
        name=PromptName.TRANSFER_ADVISOR.value,
        description=PROMPT_METADATA[PromptName.TRANSFER_ADVISOR]["description"],
    )
    async def transfer_advisor(fromAccount: str, amount: str) -> str:  # noqa: N803
        return await render(PromptName.TRANSFER_ADVISOR, {"fromAccount": fromAccount, "amount": amount})

    @mcp.prompt(
        name=PromptName.PORTFOLIO_OVERVIEW.value,
        description=PROMPT_METADATA[PromptName.PORTFOLIO_OVERVIEW]["description"],
    )
    async def portfolio_overview() -> str:
        return await render(PromptName.PORTFOLIO_OVERVIEW, {})

    logger.info("FastMCP server built with %d tools", len(TOOL_METADATA) + 1)
    return mcp


# -----------------------------
# Start MCP server
# -----------------------------
def main():
    setup_logging()
    services = create_services(seed_file=config.SEED_FILE)
    mcp = create_server(services)

    if config.MCP_TRANSPORT == "stdio":
        logger.info("Starting MCP server on stdio")
        mcp.run(transport="stdio")
        return

    logger.info("Starting MCP server on http://%s:%s (%s)", config.MCP_HOST, config.MCP_PORT, config.MCP_TRANSPORT)
    mcp.run(
        host=config.MCP_HOST,
        port=config.MCP_PORT,
        transport=config.MCP_TRANSPORT,
    )


if __name__ == "__main__":
    main()
