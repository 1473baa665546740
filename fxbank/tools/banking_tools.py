"""
Direct banking tools: account lookups, FX rates, validation and transfers.
"""

from typing import Any, Dict

from pydantic import ValidationError

from ..errors import TransferStateError
from ..logging_config import get_logger
from ..services import BankingServices
from ..transfer.schemas import TransferRequest
from .serializers import serialize_account, serialize_rate, serialize_transfer_result

logger = get_logger("fxbank.tools.banking")


def tool_error(tool: str, arguments: Dict[str, Any], message: str, **extra: Any) -> Dict[str, Any]:
    """Error payload returned in place of a tool result."""
    return {"error": message, "tool": tool, "arguments": arguments, **extra}


def describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ())) or "arguments"
        parts.append(f"{field}: {err.get('msg')}")
    return "Invalid arguments: " + "; ".join(parts)


class BankingTools:
    def __init__(self, services: BankingServices):
        self.services = services

    async def transfer_funds(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        tool = "transferFunds"
        try:
            request = TransferRequest.model_validate(arguments)
        except ValidationError as e:
            return tool_error(tool, arguments, describe_validation_error(e))

        try:
            result = await self.services.executor.execute(request)
        except TransferStateError as e:
            logger.error("transferFunds left partial state txn=%s steps=%s", e.transaction_id, e.applied_steps)
            return tool_error(
                tool,
                arguments,
                str(e),
                transaction_id=e.transaction_id,
                applied_steps=e.applied_steps,
            )
        return serialize_transfer_result(result)

    async def get_account_details(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        account_id = arguments.get("accountId")
        if not account_id:
            return tool_error("getAccountDetails", arguments, "accountId is required")

        account = await self.services.store.get_account(account_id)
        if not account:
            return tool_error("getAccountDetails", arguments, f"Account {account_id} not found")
        return serialize_account(account)

    async def get_all_accounts(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        accounts = await self.services.store.list_accounts()
        return {"accounts": [serialize_account(a) for a in accounts]}

    async def get_fx_rate(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        src, dst = arguments.get("from"), arguments.get("to")
        if not src or not dst:
            return tool_error("getFXRate", arguments, "Both 'from' and 'to' currencies are required")

        rate = await self.services.rates.get_rate(src, dst)
        if not rate:
            return tool_error("getFXRate", arguments, f"FX rate not available for {src} to {dst}")
        return serialize_rate(rate)

    async def validate_transfer(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        try:
            request = TransferRequest.model_validate(arguments)
        except ValidationError as e:
            return tool_error("validateTransfer", arguments, describe_validation_error(e))

        validation = await self.services.validator.validate(request)
        suggested = None
        if not validation.valid:
            suggested = await self.services.resolver.resolve(request.from_account, request.preferred_currency)
        return {
            "valid": validation.valid,
            "errors": validation.errors,
            "to_account": validation.request.to_account,
            "suggested_target": suggested,
        }
