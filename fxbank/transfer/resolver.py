"""
Target account resolution.

When a caller does not name a destination, pick one: the preferred currency
if some eligible account holds it, else the lowest-balance account in a
different currency (diversification), else the first eligible account.
"""

from typing import List, Optional

from ..db.models import Account
from ..db.store import AccountStore
from ..logging_config import get_logger

logger = get_logger("fxbank.transfer.resolver")


class TargetResolver:
    def __init__(self, store: AccountStore):
        self.store = store

    async def resolve(self, from_account_id: str, preferred_currency: Optional[str] = None) -> Optional[str]:
        from_account = await self.store.get_account(from_account_id)
        if not from_account:
            return None

        best = self.pick(from_account, await self.store.list_accounts(), preferred_currency)
        logger.info(
            "Resolved target from=%s preferred=%s -> %s",
            from_account_id,
            preferred_currency,
            best.id if best else None,
        )
        return best.id if best else None

    @staticmethod
    def pick(
        from_account: Account,
        accounts: List[Account],
        preferred_currency: Optional[str] = None,
    ) -> Optional[Account]:
        candidates = [a for a in accounts if a.id != from_account.id and a.is_active]
        if not candidates:
            return None

        if preferred_currency:
            wanted = preferred_currency.strip().upper()
            for account in candidates:
                if account.currency.value == wanted:
                    return account

        different = [a for a in candidates if a.currency != from_account.currency]
        if different:
            # min() keeps the first of equal balances
            return min(different, key=lambda a: a.balance)

        return candidates[0]
