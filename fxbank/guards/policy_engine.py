"""
Policy Engine
Decides which named pre-checks apply to an intent and runs them
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Tuple

from ..db.models import AccountStatus
from ..db.store import AccountStore, RateTable
from ..logging_config import get_logger
from ..nlu.intent_classifier import Intent
from ..transfer.schemas import TransferArgs
from .risk_rules import involves_currency_conversion, target_currency

logger = get_logger("fxbank.guards.policy_engine")


class PreCheck(str, Enum):
    VALIDATE_ACCOUNT_STATUS = "validate_account_status"
    CHECK_BALANCE_SUFFICIENCY = "check_balance_sufficiency"
    VERIFY_TRANSFER_LIMITS = "verify_transfer_limits"
    CHECK_FX_RATES = "check_fx_rates"
    ASSESS_FX_RISK = "assess_fx_risk"
    VERIFY_LARGE_TRANSFER_AUTHORIZATION = "verify_large_transfer_authorization"
    VERIFY_ACCOUNT_ACCESS = "verify_account_access"
    AGGREGATE_ACCOUNT_DATA = "aggregate_account_data"
    CALCULATE_PORTFOLIO_METRICS = "calculate_portfolio_metrics"


# check -> result key that must be truthy; a falsy value blocks execution
CRITICAL_CHECKS: Dict[PreCheck, str] = {
    PreCheck.VALIDATE_ACCOUNT_STATUS: "valid",
    PreCheck.CHECK_BALANCE_SUFFICIENCY: "sufficient",
    PreCheck.VERIFY_TRANSFER_LIMITS: "valid",
}

LARGE_TRANSFER_CHECK_THRESHOLD = Decimal("5000")
LARGE_TRANSFER_AUTH_THRESHOLD = Decimal("10000")
DEFAULT_REPORTING_CURRENCY = "USD"

CheckHandler = Callable[[TransferArgs], Awaitable[Dict[str, Any]]]


class PreCheckOrchestrator:
    """
    Evaluates the pre-checks relevant to an intent against current account
    and rate state. Results are plain dicts so they can go straight back to
    the caller.
    """

    def __init__(self, store: AccountStore, rates: RateTable):
        self.store = store
        self.rates = rates
        self._handlers: Dict[PreCheck, CheckHandler] = {
            PreCheck.VALIDATE_ACCOUNT_STATUS: self._validate_account_status,
            PreCheck.CHECK_BALANCE_SUFFICIENCY: self._check_balance_sufficiency,
            PreCheck.VERIFY_TRANSFER_LIMITS: self._verify_transfer_limits,
            PreCheck.CHECK_FX_RATES: self._check_fx_rates,
            PreCheck.ASSESS_FX_RISK: self._assess_fx_risk,
            PreCheck.VERIFY_LARGE_TRANSFER_AUTHORIZATION: self._verify_large_transfer_authorization,
            PreCheck.VERIFY_ACCOUNT_ACCESS: self._verify_account_access,
            PreCheck.AGGREGATE_ACCOUNT_DATA: self._aggregate_account_data,
            PreCheck.CALCULATE_PORTFOLIO_METRICS: self._calculate_portfolio_metrics,
        }
        unhandled = [c.value for c in PreCheck if c not in self._handlers]
        if unhandled:
            raise RuntimeError(f"Pre-checks without a handler: {unhandled}")

    async def required_checks(self, intent: Intent, args: TransferArgs) -> List[PreCheck]:
        checks: List[PreCheck] = []

        if intent == Intent.TRANSFER_FUNDS:
            checks += [
                PreCheck.VALIDATE_ACCOUNT_STATUS,
                PreCheck.CHECK_BALANCE_SUFFICIENCY,
                PreCheck.VERIFY_TRANSFER_LIMITS,
            ]
            from_account = await self.store.get_account(args.from_account)
            if await involves_currency_conversion(self.store, from_account, args):
                checks += [PreCheck.CHECK_FX_RATES, PreCheck.ASSESS_FX_RISK]
            if args.amount is not None and args.amount > LARGE_TRANSFER_CHECK_THRESHOLD:
                checks.append(PreCheck.VERIFY_LARGE_TRANSFER_AUTHORIZATION)

        elif intent == Intent.CHECK_ACCOUNT:
            checks.append(PreCheck.VERIFY_ACCOUNT_ACCESS)

        elif intent == Intent.PORTFOLIO_OVERVIEW:
            checks += [PreCheck.AGGREGATE_ACCOUNT_DATA, PreCheck.CALCULATE_PORTFOLIO_METRICS]

        logger.info("Required pre-checks intent=%s -> %s", getattr(intent, "value", intent), [c.value for c in checks])
        return checks

    async def run(self, checks: Iterable[PreCheck], args: TransferArgs) -> Dict[str, Dict[str, Any]]:
        results: Dict[str, Dict[str, Any]] = {}
        for check in checks:
            results[check.value] = await self._handlers[PreCheck(check)](args)
        return results

    @staticmethod
    def critical_failures(results: Dict[str, Dict[str, Any]]) -> List[Tuple[str, Dict[str, Any]]]:
        failures = []
        for check, result in results.items():
            key = CRITICAL_CHECKS.get(PreCheck(check))
            if key and not result.get(key):
                failures.append((check, result))
        return failures

    # ------------------------------------------------------------------
    # Transfer checks
    # ------------------------------------------------------------------

    async def _validate_account_status(self, args: TransferArgs) -> Dict[str, Any]:
        issues: List[str] = []
        for label, account_id in (("Source", args.from_account), ("Target", args.to_account)):
            if not account_id:
                continue
            account = await self.store.get_account(account_id)
            if not account:
                issues.append(f"{label} account {account_id} not found")
            elif not account.is_active:
                issues.append(f"{label} account is {account.status.value}")
        return {"valid": not issues, "issues": issues}

    async def _check_balance_sufficiency(self, args: TransferArgs) -> Dict[str, Any]:
        account = await self.store.get_account(args.from_account)
        if not account:
            return {"sufficient": False, "reason": "Account not found", "issues": ["Account not found"]}

        required = args.amount or Decimal("0")
        sufficient = account.balance >= required
        reason = None if sufficient else "Insufficient funds"
        return {
            "sufficient": sufficient,
            "available": float(account.balance),
            "required": float(required),
            "reason": reason,
            "issues": [reason] if reason else [],
        }

    async def _verify_transfer_limits(self, args: TransferArgs) -> Dict[str, Any]:
        account = await self.store.get_account(args.from_account)
        if not account:
            return {"valid": False, "reason": "Account not found", "issues": ["Account not found"]}

        amount = args.amount or Decimal("0")
        issues = []
        if amount > account.daily_transfer_limit:
            issues.append(f"Exceeds daily limit of {account.daily_transfer_limit}")
        if account.transfers_today + amount > account.daily_transfer_limit:
            issues.append(f"Would exceed daily limit (used: {account.transfers_today})")
        if account.transfers_this_month + amount > account.monthly_transfer_limit:
            issues.append(f"Would exceed monthly limit (used: {account.transfers_this_month})")

        return {
            "valid": not issues,
            "issues": issues,
            "daily_remaining": float(account.daily_transfer_limit - account.transfers_today),
            "monthly_remaining": float(account.monthly_transfer_limit - account.transfers_this_month),
        }

    async def _check_fx_rates(self, args: TransferArgs) -> Dict[str, Any]:
        from_account = await self.store.get_account(args.from_account)
        if not from_account:
            return {"required": False, "issues": [f"Source account {args.from_account} not found"]}

        currency = await target_currency(self.store, args)
        if not currency or currency == from_account.currency.value:
            return {"required": False, "issues": []}

        pair = f"{from_account.currency.value}/{currency}"
        rate = await self.rates.get_rate(from_account.currency.value, currency)
        if not rate:
            return {
                "required": True,
                "available": False,
                "rate": None,
                "timestamp": None,
                "pair": pair,
                "issues": [f"FX rate not available for {from_account.currency.value} to {currency}"],
            }
        return {
            "required": True,
            "available": True,
            "rate": float(rate.rate),
            "timestamp": rate.timestamp.isoformat(),
            "pair": pair,
            "issues": [],
        }

    async def _assess_fx_risk(self, args: TransferArgs) -> Dict[str, Any]:
        fx_info = await self._check_fx_rates(args)
        if not fx_info["required"]:
            return {"risk": "none", "issues": []}

        issues = list(fx_info["issues"])
        if args.fx_threshold is None:
            issues.append("No rate threshold set")
        return {
            "risk": "medium" if issues else "low",
            "issues": issues,
            "current_rate": fx_info.get("rate"),
        }

    async def _verify_large_transfer_authorization(self, args: TransferArgs) -> Dict[str, Any]:
        # Placeholder control: always authorizes. There is no approval workflow behind it.
        amount = args.amount or Decimal("0")
        return {
            "required": amount > LARGE_TRANSFER_AUTH_THRESHOLD,
            "authorized": True,
            "threshold": float(LARGE_TRANSFER_AUTH_THRESHOLD),
            "issues": [],
        }

    # ------------------------------------------------------------------
    # Account / portfolio checks
    # ------------------------------------------------------------------

    async def _verify_account_access(self, args: TransferArgs) -> Dict[str, Any]:
        account_id = args.from_account or args.to_account
        if not account_id:
            return {"valid": False, "account_id": None, "issues": ["No account specified"]}

        account = await self.store.get_account(account_id)
        if not account:
            return {"valid": False, "account_id": account_id, "issues": [f"Account {account_id} not found"]}
        if account.status == AccountStatus.CLOSED:
            return {"valid": False, "account_id": account_id, "issues": ["Account is closed"]}
        return {"valid": True, "account_id": account_id, "status": account.status.value, "issues": []}

    async def _aggregate_account_data(self, args: TransferArgs) -> Dict[str, Any]:
        accounts = await self.store.list_accounts()
        balances: Dict[str, Decimal] = {}
        statuses: Dict[str, int] = {}
        for account in accounts:
            code = account.currency.value
            balances[code] = balances.get(code, Decimal("0")) + account.balance
            statuses[account.status.value] = statuses.get(account.status.value, 0) + 1

        return {
            "valid": bool(accounts),
            "account_count": len(accounts),
            "status_counts": statuses,
            "balances_by_currency": {code: float(total) for code, total in balances.items()},
            "issues": [] if accounts else ["No accounts found"],
        }

    async def _calculate_portfolio_metrics(self, args: TransferArgs) -> Dict[str, Any]:
        reporting = args.preferred_currency or DEFAULT_REPORTING_CURRENCY
        accounts = await self.store.list_accounts()

        issues: List[str] = []
        converted: Dict[str, Decimal] = {}
        for account in accounts:
            code = account.currency.value
            if code == reporting:
                value = account.balance
            else:
                rate = await self.rates.get_rate(code, reporting)
                if not rate:
                    issues.append(f"FX rate not available for {code} to {reporting}")
                    continue
                value = account.balance * rate.rate
            converted[account.id] = value

        total = sum(converted.values(), Decimal("0"))
        allocation = {
            account_id: float(value / total * 100) if total else 0.0
            for account_id, value in converted.items()
        }
        active = sum(1 for a in accounts if a.is_active)
        return {
            "valid": not issues,
            "reporting_currency": reporting,
            "total_value": float(total),
            "allocation_percentages": allocation,
            "active_ratio": (active / len(accounts)) if accounts else 0.0,
            "monthly_limit_utilization": {
                a.id: float(a.transfers_this_month / a.monthly_transfer_limit * 100)
                for a in accounts
                if a.monthly_transfer_limit
            },
            "issues": issues,
        }
