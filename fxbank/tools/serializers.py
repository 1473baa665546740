from decimal import Decimal
from typing import Any, Dict, Optional

from ..db.models import Account, FXRate
from ..guards.elicitation import ElicitationPrompt, ReasoningContext
from ..transfer.schemas import TransferArgs, TransferResult


def to_float(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def serialize_account(a: Account) -> Dict[str, Any]:
    return {
        "id": a.id,
        "currency": a.currency.value,
        "balance": float(a.balance),
        "status": a.status.value,
        "daily_transfer_limit": float(a.daily_transfer_limit),
        "monthly_transfer_limit": float(a.monthly_transfer_limit),
        "transfers_today": float(a.transfers_today),
        "transfers_this_month": float(a.transfers_this_month),
    }


def serialize_rate(r: FXRate) -> Dict[str, Any]:
    return {
        "from": r.from_currency.value,
        "to": r.to_currency.value,
        "rate": float(r.rate),
        "timestamp": r.timestamp.isoformat(),
    }


def serialize_transfer_result(result: TransferResult) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "success": result.success,
        "transaction_id": result.transaction_id,
        "message": result.message,
    }
    if result.errors:
        data["errors"] = list(result.errors)
    if result.details is not None:
        d = result.details
        data["details"] = {
            "from_account": d.from_account,
            "to_account": d.to_account,
            "amount": float(d.amount),
            "exchange_rate": to_float(d.exchange_rate),
            "fee": float(d.fee),
            "final_amount": float(d.final_amount),
        }
    return data


def serialize_args(args: TransferArgs) -> Dict[str, Any]:
    """Wire-named, non-empty fields only."""
    data = {}
    for key, value in args.model_dump(by_alias=True).items():
        if value is None:
            continue
        data[key] = float(value) if isinstance(value, Decimal) else value
    return data


def serialize_prompt(p: ElicitationPrompt) -> Dict[str, Any]:
    return {
        "question": p.question,
        "context": p.context,
        "suggested_options": p.suggested_options,
        "priority": p.priority.value,
    }


def serialize_reasoning(ctx: ReasoningContext) -> Dict[str, Any]:
    return {
        "user_intent": ctx.user_intent.value,
        "missing_info": list(ctx.missing_info),
        "risks": list(ctx.risks),
        "recommendations": list(ctx.recommendations),
        "requires_elicitation": ctx.requires_elicitation,
        "elicitation_prompts": [serialize_prompt(p) for p in ctx.elicitation_prompts],
        "extracted_args": serialize_args(ctx.extracted_args),
    }
