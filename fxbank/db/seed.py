"""
Seed data for the simulated bank.

The demo portfolio has one account per currency (AUD, USD, EUR) and the six
directional rates between them. A JSON seed file may replace both.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..logging_config import get_logger
from .models import Account, FXRate

logger = get_logger("fxbank.db.seed")

DEFAULT_ACCOUNTS: List[Dict[str, Any]] = [
    {
        "id": "AUD-account",
        "currency": "AUD",
        "balance": "5000",
        "status": "active",
        "daily_transfer_limit": "10000",
        "monthly_transfer_limit": "50000",
        "transfers_today": "0",
        "transfers_this_month": "2500",
    },
    {
        "id": "USD-account",
        "currency": "USD",
        "balance": "3200",
        "status": "active",
        "daily_transfer_limit": "8000",
        "monthly_transfer_limit": "40000",
        "transfers_today": "500",
        "transfers_this_month": "1800",
    },
    {
        "id": "EUR-account",
        "currency": "EUR",
        "balance": "2800",
        "status": "active",
        "daily_transfer_limit": "7000",
        "monthly_transfer_limit": "35000",
        "transfers_today": "0",
        "transfers_this_month": "1200",
    },
]

DEFAULT_RATES: List[Tuple[str, str, str]] = [
    ("AUD", "USD", "0.65"),
    ("AUD", "EUR", "0.60"),
    ("USD", "AUD", "1.54"),
    ("USD", "EUR", "0.92"),
    ("EUR", "AUD", "1.67"),
    ("EUR", "USD", "1.09"),
]


def default_accounts() -> List[Account]:
    return [Account.model_validate(raw) for raw in DEFAULT_ACCOUNTS]


def default_rates() -> List[FXRate]:
    now = datetime.now(timezone.utc)
    return [
        FXRate(from_currency=src, to_currency=dst, rate=rate, timestamp=now)
        for src, dst, rate in DEFAULT_RATES
    ]


def load_seed(path: Optional[Union[str, Path]] = None) -> Tuple[List[Account], List[FXRate]]:
    """
    Return (accounts, rates) from a JSON seed file, or the demo portfolio.

    The file holds {"accounts": [...], "rates": [...]}; rate entries use
    from_currency/to_currency/rate and an optional ISO timestamp.
    """
    if not path:
        return default_accounts(), default_rates()

    seed_path = Path(path)
    logger.info("Loading seed data from %s", seed_path)
    with seed_path.open(encoding="utf-8") as handle:
        payload = json.load(handle)

    accounts = [Account.model_validate(raw) for raw in payload.get("accounts", [])]
    rates = [FXRate.model_validate(raw) for raw in payload.get("rates", [])]
    logger.info("Seed loaded accounts=%d rates=%d", len(accounts), len(rates))
    return accounts, rates
