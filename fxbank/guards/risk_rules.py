"""
Risk Rules
Flags risky transfers and suggests improvements
"""

from decimal import Decimal
from typing import List, Optional

from ..db.models import Account
from ..db.store import AccountStore
from ..transfer.resolver import TargetResolver
from ..transfer.schemas import TransferArgs


async def target_currency(store: AccountStore, args: TransferArgs) -> Optional[str]:
    """
    Currency the money would land in: the named target's currency, else the
    preferred currency. None when neither is known.
    """
    if args.to_account:
        to_account = await store.get_account(args.to_account)
        return to_account.currency.value if to_account else None
    return args.preferred_currency


async def involves_currency_conversion(
    store: AccountStore,
    from_account: Optional[Account],
    args: TransferArgs,
) -> bool:
    if not from_account:
        return False
    currency = await target_currency(store, args)
    return bool(currency) and currency != from_account.currency.value


class RiskRules:
    """
    Applies risk assessment rules to partially specified transfers
    """

    def __init__(self, store: AccountStore):
        self.store = store
        self.large_transfer_ratio = Decimal("0.8")  # of current balance
        self.daily_limit_warning_ratio = Decimal("0.9")
        self.monthly_limit_warning_ratio = Decimal("0.8")
        self.small_transfer_amount = Decimal("100")

    async def assess(self, args: TransferArgs) -> List[str]:
        """
        Risk descriptions for a transfer; needs both source and amount.
        """
        if not args.from_account or not args.amount:
            return []

        from_account = await self.store.get_account(args.from_account)
        if not from_account:
            return []

        risks = []
        amount = args.amount

        if amount > from_account.balance * self.large_transfer_ratio:
            risks.append("Large transfer amount (>80% of account balance)")

        if from_account.transfers_today + amount > from_account.daily_transfer_limit * self.daily_limit_warning_ratio:
            risks.append("Approaching daily transfer limit")

        if (
            from_account.transfers_this_month + amount
            > from_account.monthly_transfer_limit * self.monthly_limit_warning_ratio
        ):
            risks.append("Approaching monthly transfer limit")

        if args.fx_threshold is None and await involves_currency_conversion(self.store, from_account, args):
            risks.append("No FX rate protection set for currency conversion")

        return risks

    async def recommend(self, args: TransferArgs) -> List[str]:
        if not args.from_account:
            return []

        from_account = await self.store.get_account(args.from_account)
        if not from_account:
            return []

        recommendations = []

        if not args.to_account and args.amount:
            suggested = TargetResolver.pick(from_account, await self.store.list_accounts())
            if suggested:
                recommendations.append(
                    f"Consider transferring to {suggested.currency.value} account for better diversification"
                )

        if await involves_currency_conversion(self.store, from_account, args):
            recommendations.append("Consider monitoring FX rates over the next few days for better conversion rates")

        if args.amount and args.amount < self.small_transfer_amount:
            recommendations.append(
                "Small transfers may have proportionally higher fees. Consider consolidating smaller amounts."
            )

        return recommendations
