"""
In-memory account + FX rate storage for the simulated bank.
"""

from .models import Account, AccountStatus, Currency, FXRate  # noqa: F401
from .store import AccountStore, RateTable  # noqa: F401
