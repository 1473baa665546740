"""Common fixtures for FXBank tests."""

from decimal import Decimal

import pytest

from fxbank.db.models import Account
from fxbank.db.seed import default_accounts, default_rates
from fxbank.services import create_services
from fxbank.tools.registry import ToolDispatcher


@pytest.fixture
def make_account():
    """
    Factory fixture for accounts with sensible defaults.

    Usage:
        def test_something(make_account):
            acc = make_account("GBP-account", "GBP", balance="100")
    """

    def _create(account_id: str, currency: str, **overrides) -> Account:
        data = {
            "id": account_id,
            "currency": currency,
            "balance": Decimal("1000"),
            "status": "active",
            "daily_transfer_limit": Decimal("5000"),
            "monthly_transfer_limit": Decimal("20000"),
        }
        data.update(overrides)
        return Account.model_validate(data)

    return _create


@pytest.fixture
def services():
    """Fresh demo portfolio (AUD/USD/EUR accounts, six rates)."""
    return create_services()


@pytest.fixture
def build_services():
    """
    Factory fixture: demo portfolio plus extra accounts, optionally replacing
    the defaults entirely.
    """

    def _create(*extra: Account, replace: bool = False):
        accounts = list(extra) if replace else default_accounts() + list(extra)
        return create_services(accounts, default_rates())

    return _create


@pytest.fixture
def dispatcher(services):
    return ToolDispatcher(services)
