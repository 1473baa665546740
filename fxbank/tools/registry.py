"""
Tool registry.

TOOL_METADATA is the canonical name -> description/params listing returned by
list_tools on both transports. ToolDispatcher routes a tool name to its
handler; the direct tools and the reasoning tools share one closed set.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..errors import UnknownToolError
from ..logging_config import get_logger
from ..services import BankingServices
from .banking_tools import BankingTools
from .enhanced_tools import EnhancedBankingTools

logger = get_logger("fxbank.tools.registry")


class ToolName(str, Enum):
    TRANSFER_FUNDS = "transferFunds"
    GET_ACCOUNT_DETAILS = "getAccountDetails"
    GET_ALL_ACCOUNTS = "getAllAccounts"
    GET_FX_RATE = "getFXRate"
    VALIDATE_TRANSFER = "validateTransfer"
    SMART_TRANSFER_FUNDS = "smartTransferFunds"
    ANALYZE_TRANSFER_INTENT = "analyzeTransferIntent"
    INTELLIGENT_ACCOUNT_CHECK = "intelligentAccountCheck"


_TRANSFER_PARAMS = {
    "amount": {"type": "number", "required": True, "description": "Amount to transfer"},
    "fromAccount": {"type": "string", "required": True, "description": "Source account ID"},
    "toAccount": {
        "type": "string",
        "required": False,
        "description": "Target account ID (optional - will auto-select if not provided)",
    },
    "fxThreshold": {"type": "number", "required": False, "description": "Maximum acceptable FX rate (optional)"},
    "preferredCurrency": {
        "type": "string",
        "required": False,
        "description": "Preferred target currency (USD, EUR, GBP) when auto-selecting target",
    },
}


def _optional(params: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {name: {**spec, "required": False} for name, spec in params.items()}


TOOL_METADATA: Dict[ToolName, Dict[str, Any]] = {
    ToolName.TRANSFER_FUNDS: {
        "description": "Transfer funds between accounts with intelligent target selection and pre-condition validation",
        "high_risk": True,
        "params": _TRANSFER_PARAMS,
    },
    ToolName.GET_ACCOUNT_DETAILS: {
        "description": "Get detailed information about a specific account",
        "params": {
            "accountId": {"type": "string", "required": True, "description": "Account ID to retrieve details for"},
        },
    },
    ToolName.GET_ALL_ACCOUNTS: {
        "description": "Get summary of all user accounts",
        "params": {},
    },
    ToolName.GET_FX_RATE: {
        "description": "Get current foreign exchange rate between two currencies",
        "params": {
            "from": {"type": "string", "required": True, "description": "Source currency (AUD, USD, EUR, GBP)"},
            "to": {"type": "string", "required": True, "description": "Target currency (AUD, USD, EUR, GBP)"},
        },
    },
    ToolName.VALIDATE_TRANSFER: {
        "description": "Validate a transfer request without executing it",
        "params": _TRANSFER_PARAMS,
    },
    ToolName.SMART_TRANSFER_FUNDS: {
        "description": "Intelligent transfer with context analysis, elicitation, and pre-condition checking",
        "high_risk": True,
        "params": {
            "userInput": {"type": "string", "required": True, "description": "The user's original request or intent"},
            **_optional(_TRANSFER_PARAMS),
        },
    },
    ToolName.ANALYZE_TRANSFER_INTENT: {
        "description": "Analyze incomplete transfer requests and provide elicitation prompts",
        "params": {
            "userInput": {"type": "string", "required": True, "description": "The user's transfer request"},
            "providedArgs": {"type": "object", "required": False, "description": "Any arguments already provided"},
        },
    },
    ToolName.INTELLIGENT_ACCOUNT_CHECK: {
        "description": "Smart account analysis with contextual recommendations",
        "params": {
            "userInput": {
                "type": "string",
                "required": True,
                "description": "User's request about account information",
            },
            "accountId": {
                "type": "string",
                "required": False,
                "description": "Account ID to analyze (optional - will infer if not provided)",
            },
        },
    },
}

ToolHandler = Callable[[Dict[str, Any]], Awaitable[Any]]


class ToolDispatcher:
    def __init__(self, services: BankingServices):
        self.banking = BankingTools(services)
        self.enhanced = EnhancedBankingTools(services)
        self._handlers: Dict[ToolName, ToolHandler] = {
            ToolName.TRANSFER_FUNDS: self.banking.transfer_funds,
            ToolName.GET_ACCOUNT_DETAILS: self.banking.get_account_details,
            ToolName.GET_ALL_ACCOUNTS: self.banking.get_all_accounts,
            ToolName.GET_FX_RATE: self.banking.get_fx_rate,
            ToolName.VALIDATE_TRANSFER: self.banking.validate_transfer,
            ToolName.SMART_TRANSFER_FUNDS: self.enhanced.smart_transfer_funds,
            ToolName.ANALYZE_TRANSFER_INTENT: self.enhanced.analyze_transfer_intent,
            ToolName.INTELLIGENT_ACCOUNT_CHECK: self.enhanced.intelligent_account_check,
        }
        missing = [t.value for t in ToolName if t not in self._handlers or t not in TOOL_METADATA]
        if missing:
            raise RuntimeError(f"Tools without a handler or metadata: {missing}")

    @staticmethod
    def list_tools() -> List[Dict[str, Any]]:
        return [{"name": tool.value, **meta} for tool, meta in TOOL_METADATA.items()]

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run a tool by wire name. Unknown names raise UnknownToolError; every
        other failure comes back as an error payload from the handler.
        """
        try:
            tool = ToolName(name)
        except ValueError:
            logger.warning("Rejected call to unknown tool %r", name)
            raise UnknownToolError(name) from None

        arguments = dict(arguments or {})
        logger.info("Tool call %s arg_keys=%s", tool.value, sorted(arguments))
        return await self._handlers[tool](arguments)
