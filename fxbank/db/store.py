"""
Account store + FX rate table.

Both are explicitly owned instances (see fxbank.services.create_services);
there is no module-level state. Every accessor is a coroutine and yields to
the event loop once, the same way a call to a real bank backend would.
"""

import asyncio
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import AsyncIterator, Dict, Iterable, List, Optional, Tuple

from ..logging_config import get_logger
from .models import Account, FXRate

logger = get_logger("fxbank.db.store")


class AccountStore:
    """
    Keyed account records with point lookups, enumeration and two mutations.

    Reads return copies, so callers never hold a live record. Writes are
    immediate and visible to subsequent reads. Use `lock_accounts` around any
    read-validate-write sequence.
    """

    def __init__(self, accounts: Iterable[Account] = ()):
        self._accounts: Dict[str, Account] = {}
        for account in accounts:
            self._accounts[account.id] = account.model_copy()
        self._locks: Dict[str, asyncio.Lock] = {}

    async def get_account(self, account_id: Optional[str]) -> Optional[Account]:
        await asyncio.sleep(0)
        if not account_id or not isinstance(account_id, str):
            return None
        account = self._accounts.get(account_id)
        return account.model_copy() if account else None

    async def list_accounts(self) -> List[Account]:
        await asyncio.sleep(0)
        return [a.model_copy() for a in self._accounts.values()]

    async def update_balance(self, account_id: str, new_balance: Decimal) -> bool:
        await asyncio.sleep(0)
        account = self._accounts.get(account_id)
        if not account:
            logger.warning("update_balance: account not found id=%s", account_id)
            return False
        account.balance = new_balance
        logger.info("Balance updated id=%s balance=%s", account_id, new_balance)
        return True

    async def update_transfer_counts(self, account_id: str, amount: Decimal) -> bool:
        await asyncio.sleep(0)
        account = self._accounts.get(account_id)
        if not account:
            logger.warning("update_transfer_counts: account not found id=%s", account_id)
            return False
        account.transfers_today += amount
        account.transfers_this_month += amount
        return True

    @asynccontextmanager
    async def lock_accounts(self, *account_ids: Optional[str]) -> AsyncIterator[None]:
        """
        Hold the per-account locks for every given id.

        Locks are taken in sorted id order so two transfers in opposite
        directions cannot deadlock.
        """
        ids = sorted({i for i in account_ids if i})
        locks = [self._locks.setdefault(i, asyncio.Lock()) for i in ids]
        acquired: List[asyncio.Lock] = []
        try:
            for lock in locks:
                await lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


class RateTable:
    """
    Directional FX rates keyed by (from, to). Read-only after seeding.
    """

    def __init__(self, rates: Iterable[FXRate] = ()):
        self._rates: Dict[Tuple[str, str], FXRate] = {}
        for rate in rates:
            self._rates[(rate.from_currency.value, rate.to_currency.value)] = rate

    async def get_rate(self, from_currency: str, to_currency: str) -> Optional[FXRate]:
        await asyncio.sleep(0)
        return self._rates.get((_code(from_currency), _code(to_currency)))

    async def list_rates(self) -> List[FXRate]:
        await asyncio.sleep(0)
        return list(self._rates.values())


def _code(currency) -> str:
    value = getattr(currency, "value", currency)
    return str(value or "").strip().upper()
