from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class Currency(str, Enum):
    AUD = "AUD"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    FROZEN = "frozen"
    CLOSED = "closed"


class Account(BaseModel):
    id: str
    currency: Currency
    balance: Decimal = Field(..., ge=0)
    status: AccountStatus = AccountStatus.ACTIVE
    daily_transfer_limit: Decimal
    monthly_transfer_limit: Decimal
    # Running totals; nothing resets them (no day/month boundary is modelled)
    transfers_today: Decimal = Decimal("0")
    transfers_this_month: Decimal = Decimal("0")

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE


class FXRate(BaseModel):
    from_currency: Currency
    to_currency: Currency
    # units of `to_currency` per unit of `from_currency`
    rate: Decimal = Field(..., gt=0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def pair(self) -> str:
        return f"{self.from_currency.value}/{self.to_currency.value}"
