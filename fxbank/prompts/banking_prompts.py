"""
Prompt templates that hand live account data to an LLM for analysis.
"""

import json
from enum import Enum
from typing import Any, Dict, Optional

from ..db.store import AccountStore
from ..errors import UnknownPromptError
from ..logging_config import get_logger
from ..tools.serializers import serialize_account
from ..utils import format_amount

logger = get_logger("fxbank.prompts")


class PromptName(str, Enum):
    ACCOUNT_ANALYSIS = "account_analysis"
    TRANSFER_ADVISOR = "transfer_advisor"
    PORTFOLIO_OVERVIEW = "portfolio_overview"


PROMPT_METADATA: Dict[PromptName, Dict[str, Any]] = {
    PromptName.ACCOUNT_ANALYSIS: {
        "description": "Analyze account health and provide recommendations",
        "arguments": {
            "accountId": {"required": True, "description": "Account ID to analyze"},
        },
    },
    PromptName.TRANSFER_ADVISOR: {
        "description": "Get intelligent transfer recommendations based on current portfolio",
        "arguments": {
            "fromAccount": {"required": True, "description": "Source account for transfer analysis"},
            "amount": {"required": True, "description": "Amount considering for transfer"},
        },
    },
    PromptName.PORTFOLIO_OVERVIEW: {
        "description": "Get comprehensive portfolio analysis and optimization suggestions",
        "arguments": {},
    },
}

ACCOUNT_ANALYSIS_PROMPT = """
Analyze this account and provide recommendations:

Account: {id}
Currency: {currency}
Balance: {balance}
Status: {status}
Daily Limit: {daily_limit} (Used today: {used_today})
Monthly Limit: {monthly_limit} (Used this month: {used_month})

Please assess:
1. Account health and utilization
2. Risk factors
3. Optimization opportunities
4. Recommended actions
""".strip()

TRANSFER_ADVISOR_PROMPT = """
Provide transfer recommendations for:

Source Account: {source_json}
Proposed Amount: {amount}
All Accounts: {accounts_json}

Recommend:
1. Best target account and reasoning
2. Optimal transfer amount
3. FX considerations
4. Risk assessment
5. Alternative strategies
""".strip()

PORTFOLIO_OVERVIEW_PROMPT = """
Analyze this complete portfolio:

{accounts_json}

Balances by currency: {totals}

Provide:
1. Currency allocation analysis
2. Risk assessment
3. Diversification recommendations
4. Rebalancing suggestions
5. Performance optimization tips
""".strip()


class BankingPrompts:
    def __init__(self, store: AccountStore):
        self.store = store

    @staticmethod
    def list_prompts():
        return [{"name": name.value, **meta} for name, meta in PROMPT_METADATA.items()]

    async def render(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Return {"prompt": text}, or {"error": ...} when a referenced account
        does not exist. Unknown prompt names raise UnknownPromptError.
        """
        try:
            prompt = PromptName(name)
        except ValueError:
            raise UnknownPromptError(name) from None

        arguments = arguments or {}
        logger.info("Rendering prompt %s", prompt.value)
        if prompt == PromptName.ACCOUNT_ANALYSIS:
            return await self._account_analysis(arguments.get("accountId"))
        if prompt == PromptName.TRANSFER_ADVISOR:
            return await self._transfer_advisor(arguments.get("fromAccount"), arguments.get("amount"))
        return await self._portfolio_overview()

    async def _account_analysis(self, account_id: Optional[str]) -> Dict[str, Any]:
        account = await self.store.get_account(account_id)
        if not account:
            return {"error": f"Account {account_id} not found"}

        return {
            "prompt": ACCOUNT_ANALYSIS_PROMPT.format(
                id=account.id,
                currency=account.currency.value,
                balance=format_amount(account.balance),
                status=account.status.value,
                daily_limit=format_amount(account.daily_transfer_limit),
                used_today=format_amount(account.transfers_today),
                monthly_limit=format_amount(account.monthly_transfer_limit),
                used_month=format_amount(account.transfers_this_month),
            )
        }

    async def _transfer_advisor(self, account_id: Optional[str], amount: Any) -> Dict[str, Any]:
        account = await self.store.get_account(account_id)
        if not account:
            return {"error": f"Account {account_id} not found"}

        accounts = await self.store.list_accounts()
        return {
            "prompt": TRANSFER_ADVISOR_PROMPT.format(
                source_json=json.dumps(serialize_account(account), indent=2),
                amount=format_amount(amount, account.currency.value) or amount,
                accounts_json=json.dumps([serialize_account(a) for a in accounts], indent=2),
            )
        }

    async def _portfolio_overview(self) -> Dict[str, Any]:
        accounts = await self.store.list_accounts()
        totals: Dict[str, Any] = {}
        for account in accounts:
            code = account.currency.value
            totals[code] = totals.get(code, 0) + account.balance
        return {
            "prompt": PORTFOLIO_OVERVIEW_PROMPT.format(
                accounts_json=json.dumps([serialize_account(a) for a in accounts], indent=2),
                totals=", ".join(f"{format_amount(v, code)}" for code, v in totals.items()) or "none",
            )
        }
