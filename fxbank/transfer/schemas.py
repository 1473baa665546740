"""
Schemas for the transfer engine.

Field aliases match the tool wire names (fromAccount, toAccount, ...).
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _upper_currency(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip().upper()
    return value or None


class TransferArgs(BaseModel):
    """Partially supplied transfer arguments; anything may be missing."""

    model_config = ConfigDict(populate_by_name=True)

    amount: Optional[Decimal] = None
    from_account: Optional[str] = Field(None, alias="fromAccount")
    to_account: Optional[str] = Field(None, alias="toAccount")
    fx_threshold: Optional[Decimal] = Field(None, alias="fxThreshold")
    preferred_currency: Optional[str] = Field(None, alias="preferredCurrency")

    @field_validator("preferred_currency")
    @classmethod
    def normalize_currency(cls, value: Optional[str]) -> Optional[str]:
        return _upper_currency(value)

    def merged_over(self, base: "TransferArgs") -> "TransferArgs":
        """
        Return `base` with every field supplied here taking precedence. Blank
        amounts and account or currency names count as not supplied.
        """
        supplied = {
            k: v
            for k, v in self.model_dump().items()
            if v is not None and (v or k == "fx_threshold")
        }
        return base.model_copy(update=supplied)

    def to_request(self) -> "TransferRequest":
        return TransferRequest.model_validate(self.model_dump())


class TransferRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    amount: Decimal = Field(..., gt=0)
    from_account: str = Field(..., alias="fromAccount", min_length=1)
    to_account: Optional[str] = Field(None, alias="toAccount")
    fx_threshold: Optional[Decimal] = Field(None, alias="fxThreshold", gt=0)
    # only consulted when to_account is absent
    preferred_currency: Optional[str] = Field(None, alias="preferredCurrency")

    @field_validator("preferred_currency")
    @classmethod
    def normalize_currency(cls, value: Optional[str]) -> Optional[str]:
        return _upper_currency(value)


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)
    # the request as validated, with to_account filled in when it was inferred
    request: TransferRequest


class TransferDetails(BaseModel):
    from_account: str
    to_account: str
    amount: Decimal
    exchange_rate: Optional[Decimal] = None
    fee: Decimal = Decimal("0")
    final_amount: Decimal


class TransferResult(BaseModel):
    success: bool
    transaction_id: Optional[str] = None
    message: str
    errors: List[str] = Field(default_factory=list)
    details: Optional[TransferDetails] = None
