"""
Transfer execution.

The read-validate-write sequence runs while holding the per-account locks of
both the source and the target, so two transfers against the same account
are serialized and the second one validates against the first one's result.
"""

from decimal import Decimal
from typing import List, Optional

from ..db.models import Account
from ..db.store import AccountStore, RateTable
from ..errors import TransferStateError
from ..logging_config import get_logger
from ..utils import generate_transaction_id
from .schemas import TransferDetails, TransferRequest, TransferResult
from .validator import PreConditionValidator

logger = get_logger("fxbank.transfer.service")

# Flat conversion fee, charged on the converted amount
FX_FEE_RATE = Decimal("0.001")


class TransferExecutor:
    """
    Validate, convert and apply a transfer.
    """

    def __init__(self, store: AccountStore, rates: RateTable, validator: PreConditionValidator):
        self.store = store
        self.rates = rates
        self.validator = validator

    async def execute(self, request: TransferRequest) -> TransferResult:
        logger.info(
            "Transfer request from=%s to=%s amount=%s preferred=%s fx_threshold=%s",
            request.from_account,
            request.to_account,
            request.amount,
            request.preferred_currency,
            request.fx_threshold,
        )
        resolved = await self.validator.resolve_target(request)

        async with self.store.lock_accounts(resolved.from_account, resolved.to_account):
            validation = await self.validator.validate(resolved)
            if not validation.valid:
                logger.warning("Transfer rejected from=%s errors=%s", resolved.from_account, validation.errors)
                return TransferResult(
                    success=False,
                    message=f"Transfer failed: {', '.join(validation.errors)}",
                    errors=validation.errors,
                )

            request = validation.request
            from_account = await self.store.get_account(request.from_account)
            to_account = await self.store.get_account(request.to_account)
            if not from_account or not to_account:
                return TransferResult(success=False, message="One of the accounts could not be found.")

            final_amount = request.amount
            exchange_rate: Optional[Decimal] = None
            fee = Decimal("0")

            if from_account.currency != to_account.currency:
                src, dst = from_account.currency.value, to_account.currency.value
                fx = await self.rates.get_rate(src, dst)
                if not fx:
                    logger.warning("Transfer aborted: no FX rate %s->%s", src, dst)
                    return TransferResult(success=False, message=f"FX rate not available for {src} to {dst}")

                exchange_rate = fx.rate
                converted = request.amount * exchange_rate
                fee = converted * FX_FEE_RATE
                final_amount = converted - fee

            transaction_id = generate_transaction_id()
            await self._apply(transaction_id, from_account, to_account, request.amount, final_amount)

        logger.info(
            "Transfer completed txn=%s from=%s to=%s amount=%s rate=%s fee=%s final=%s",
            transaction_id,
            request.from_account,
            request.to_account,
            request.amount,
            exchange_rate,
            fee,
            final_amount,
        )
        return TransferResult(
            success=True,
            transaction_id=transaction_id,
            message="Transfer completed successfully",
            details=TransferDetails(
                from_account=request.from_account,
                to_account=request.to_account,
                amount=request.amount,
                exchange_rate=exchange_rate,
                fee=fee,
                final_amount=final_amount,
            ),
        )

    async def _apply(
        self,
        transaction_id: str,
        from_account: Account,
        to_account: Account,
        amount: Decimal,
        final_amount: Decimal,
    ) -> None:
        # Sequential, no rollback: a failed step leaves earlier steps applied.
        applied: List[str] = []

        if not await self.store.update_balance(from_account.id, from_account.balance - amount):
            raise self._state_error("debit source", transaction_id, applied)
        applied.append("debit_source")

        if not await self.store.update_balance(to_account.id, to_account.balance + final_amount):
            raise self._state_error("credit target", transaction_id, applied)
        applied.append("credit_target")

        if not await self.store.update_transfer_counts(from_account.id, amount):
            raise self._state_error("update transfer counters", transaction_id, applied)

    @staticmethod
    def _state_error(step: str, transaction_id: str, applied: List[str]) -> TransferStateError:
        logger.error("Transfer %s failed at step=%s; already applied=%s (no rollback)", transaction_id, step, applied)
        return TransferStateError(
            f"Transfer {transaction_id} failed to {step}; applied steps were not rolled back",
            transaction_id=transaction_id,
            applied_steps=list(applied),
        )
