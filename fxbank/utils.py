"""
Common utilities shared across the engine and the tool layer.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from uuid import uuid4

_AMOUNT_NOISE = re.compile(r"[\s,$€£¥]")


def generate_transaction_id() -> str:
    """
    Generate a transaction id unique per call: UTC timestamp + random suffix.
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    return f"TXN-{timestamp}-{uuid4().hex[:6].upper()}"


def parse_decimal(value: Any) -> Optional[Decimal]:
    """
    Return a finite Decimal for numbers or numeric strings, None for anything
    else. Strings may carry thousands separators and a currency symbol.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, str):
            num = Decimal(_AMOUNT_NOISE.sub("", value))
        else:
            num = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return num if num.is_finite() else None


def format_amount(value: Any, currency: Optional[str] = None) -> Optional[str]:
    """Return a nicely formatted amount string or None if invalid."""
    num = parse_decimal(value)
    if num is None:
        return None

    text = f"{num:.0f}" if num == num.to_integral() else f"{num.quantize(Decimal('0.01'))}"
    return f"{text} {currency}" if currency else text
