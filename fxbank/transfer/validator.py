"""
Pre-condition validation for transfers.

Checks run in a fixed order and every violation is collected; the only
early exits are a missing source account and an unresolvable/missing target.
"""

from typing import List

from ..db.store import AccountStore, RateTable
from ..logging_config import get_logger
from .resolver import TargetResolver
from .schemas import TransferRequest, ValidationResult

logger = get_logger("fxbank.transfer.validator")


class PreConditionValidator:
    def __init__(self, store: AccountStore, rates: RateTable, resolver: TargetResolver):
        self.store = store
        self.rates = rates
        self.resolver = resolver

    async def resolve_target(self, request: TransferRequest) -> TransferRequest:
        """
        Return the request with to_account filled in, or unchanged when it
        already names a target or no target can be inferred.
        """
        if request.to_account:
            return request
        target = await self.resolver.resolve(request.from_account, request.preferred_currency)
        if not target:
            return request
        return request.model_copy(update={"to_account": target})

    async def validate(self, request: TransferRequest) -> ValidationResult:
        errors: List[str] = []

        from_account = await self.store.get_account(request.from_account)
        if not from_account:
            errors.append(f"Source account {request.from_account} not found")
            return self._result(request, errors)

        request = await self.resolve_target(request)
        if not request.to_account:
            errors.append("No suitable target account found")
            return self._result(request, errors)

        to_account = await self.store.get_account(request.to_account)
        if not to_account:
            errors.append(f"Target account {request.to_account} not found")
            return self._result(request, errors)

        if to_account.id == from_account.id:
            errors.append("Source and target accounts must differ")
            return self._result(request, errors)

        if not from_account.is_active:
            errors.append(f"Source account is {from_account.status.value}")
        if not to_account.is_active:
            errors.append(f"Target account is {to_account.status.value}")

        amount = request.amount
        if from_account.balance < amount:
            errors.append(f"Insufficient funds. Available: {from_account.balance}, Required: {amount}")

        if amount > from_account.daily_transfer_limit:
            errors.append(f"Amount exceeds daily transfer limit of {from_account.daily_transfer_limit}")

        if from_account.transfers_today + amount > from_account.daily_transfer_limit:
            errors.append(f"Transfer would exceed daily limit. Today's transfers: {from_account.transfers_today}")

        if from_account.transfers_this_month + amount > from_account.monthly_transfer_limit:
            errors.append(
                f"Transfer would exceed monthly limit. This month's transfers: {from_account.transfers_this_month}"
            )

        if from_account.currency != to_account.currency and request.fx_threshold is not None:
            src, dst = from_account.currency.value, to_account.currency.value
            fx = await self.rates.get_rate(src, dst)
            if not fx:
                errors.append(f"FX rate not available for {src} to {dst}")
            elif fx.rate > request.fx_threshold:
                errors.append(f"FX rate {fx.rate} exceeds threshold {request.fx_threshold}")

        return self._result(request, errors)

    @staticmethod
    def _result(request: TransferRequest, errors: List[str]) -> ValidationResult:
        if errors:
            logger.info("Validation failed from=%s to=%s errors=%s", request.from_account, request.to_account, errors)
        return ValidationResult(valid=not errors, errors=errors, request=request)
