"""
Reasoning tools.

These wrap the transfer engine with intent analysis, elicitation of missing
details and pre-checks, so a client can hand over loosely specified requests.
"""

from typing import Any, Dict, List, Tuple

from pydantic import ValidationError

from ..account_analysis import build_account_recommendations, build_contextual_analysis
from ..errors import TransferStateError
from ..guards.elicitation import ReasoningContext
from ..guards.policy_engine import PreCheck
from ..logging_config import get_logger
from ..nlu.intent_classifier import AccountIntent, Intent
from ..services import BankingServices
from ..transfer.schemas import TransferArgs
from ..utils import format_amount
from .banking_tools import describe_validation_error, tool_error
from .serializers import (
    serialize_account,
    serialize_args,
    serialize_prompt,
    serialize_reasoning,
    serialize_transfer_result,
)

logger = get_logger("fxbank.tools.enhanced")


def recovery_suggestions(failures: List[Tuple[str, Dict[str, Any]]], args: TransferArgs) -> List[str]:
    suggestions = []
    for check, result in failures:
        if check == PreCheck.CHECK_BALANCE_SUFFICIENCY.value and "available" in result:
            suggestions.append(
                f"Consider transferring {format_amount(result['available'])} instead of {format_amount(args.amount)}"
            )
        if check == PreCheck.VERIFY_TRANSFER_LIMITS.value and result.get("daily_remaining"):
            suggestions.append(
                f"Transfer up to {format_amount(result['daily_remaining'])} today, or wait until tomorrow"
            )
    return suggestions


def next_steps(context: ReasoningContext) -> List[str]:
    steps = []
    high = context.high_priority_prompts()
    if high:
        steps.append("Please provide: " + ", ".join(p.question for p in high))
    if context.risks:
        steps.append("Review the identified risks before proceeding")
    if not steps:
        steps.append("Ready to execute transfer with provided information")
    return steps


def _user_input(arguments: Dict[str, Any]) -> str:
    value = arguments.get("userInput")
    return value if isinstance(value, str) else ""


class EnhancedBankingTools:
    def __init__(self, services: BankingServices):
        self.services = services

    async def smart_transfer_funds(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        tool = "smartTransferFunds"
        if not _user_input(arguments):
            return tool_error(tool, arguments, "userInput is required")

        try:
            supplied = TransferArgs.model_validate({k: v for k, v in arguments.items() if k != "userInput"})
        except ValidationError as e:
            return tool_error(tool, arguments, describe_validation_error(e))

        context = await self.services.elicitation.analyze(arguments["userInput"], supplied)

        high = context.high_priority_prompts()
        if high:
            logger.info("smartTransferFunds needs elicitation missing=%s", context.missing_info)
            return {
                "needs_elicitation": True,
                "intent": context.user_intent.value,
                "missing_info": context.missing_info,
                "questions": [serialize_prompt(p) for p in high],
                "context": "I need some additional information to process your transfer safely.",
                "suggested_actions": context.recommendations,
            }

        args = supplied.merged_over(context.extracted_args)
        prechecks = self.services.prechecks
        checks = await prechecks.required_checks(context.user_intent, args)
        results = await prechecks.run(checks, args)

        failures = prechecks.critical_failures(results)
        if failures:
            logger.info("smartTransferFunds blocked by pre-checks %s", [check for check, _ in failures])
            return {
                "can_proceed": False,
                "reason": "Pre-condition checks failed",
                "failures": [
                    {"check": check, "issues": result.get("issues") or [result.get("reason")]}
                    for check, result in failures
                ],
                "suggestions": recovery_suggestions(failures, args),
                "pre_check_results": results,
            }

        try:
            request = args.to_request()
            result = await self.services.executor.execute(request)
        except ValidationError as e:
            return {
                "success": False,
                "error": describe_validation_error(e),
                "reasoning": serialize_reasoning(context),
            }
        except TransferStateError as e:
            logger.error("smartTransferFunds left partial state txn=%s steps=%s", e.transaction_id, e.applied_steps)
            return {
                "success": False,
                "error": str(e),
                "transaction_id": e.transaction_id,
                "reasoning": serialize_reasoning(context),
            }

        return {
            "success": result.success,
            "transfer": serialize_transfer_result(result),
            "reasoning": {
                "intent": context.user_intent.value,
                "pre_checks_executed": [c.value for c in checks],
                "risks": context.risks,
                "recommendations": context.recommendations,
                "resolved_args": serialize_args(args),
            },
            "pre_check_results": results,
        }

    async def analyze_transfer_intent(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        tool = "analyzeTransferIntent"
        if not _user_input(arguments):
            return tool_error(tool, arguments, "userInput is required")

        provided = arguments.get("providedArgs") or {}
        if not isinstance(provided, dict):
            return tool_error(tool, arguments, "providedArgs must be an object")
        try:
            supplied = TransferArgs.model_validate(provided)
        except ValidationError as e:
            return tool_error(tool, arguments, describe_validation_error(e))

        context = await self.services.elicitation.analyze(arguments["userInput"], supplied)
        return {
            "analysis": {
                "detected_intent": context.user_intent.value,
                "confidence": "low" if context.user_intent == Intent.UNCLEAR else "high",
                "missing_information": context.missing_info,
                "identified_risks": context.risks,
                "extracted_args": serialize_args(context.extracted_args),
            },
            "elicitation": {
                "required": context.requires_elicitation,
                "prompts": [serialize_prompt(p) for p in context.elicitation_prompts],
                "priority_order": [serialize_prompt(p) for p in context.prioritized_prompts()],
            },
            "recommendations": context.recommendations,
            "next_steps": next_steps(context),
        }

    async def intelligent_account_check(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        tool = "intelligentAccountCheck"
        text = _user_input(arguments)
        if not text:
            return tool_error(tool, arguments, "userInput is required")

        label = self.services.account_classifier.classify(text)
        try:
            intent = AccountIntent(label)
        except ValueError:
            intent = AccountIntent.GENERAL_INFO

        store = self.services.store
        account_id = arguments.get("accountId") or self.services.entities.infer_account(text)
        if not account_id:
            accounts = await store.list_accounts()
            return {
                "needs_elicitation": True,
                "question": "Which account would you like me to analyze?",
                "options": [
                    {"id": a.id, "display": f"{a.currency.value} Account (Balance: {format_amount(a.balance)})"}
                    for a in accounts
                ],
                "detected_intent": intent.value,
            }

        account = await store.get_account(account_id)
        if not account:
            accounts = await store.list_accounts()
            return tool_error(
                tool,
                arguments,
                f"Account {account_id} not found",
                available_accounts=[a.id for a in accounts],
            )

        accounts = await store.list_accounts()
        return {
            "account": serialize_account(account),
            "analysis": build_contextual_analysis(account, intent, accounts),
            "intent": intent.value,
            "recommendations": build_account_recommendations(account),
        }
