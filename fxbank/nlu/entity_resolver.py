"""
Entity Resolution Module
Extracts amounts and account references from user input
"""

import re
from decimal import Decimal
from typing import Optional

AMOUNT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)")
ACCOUNT_PATTERN = re.compile(r"(aud|usd|eur|gbp)[\s\-]?account", re.IGNORECASE)

# Currencies recognised when inferring an account from a bare mention
INFERABLE_CURRENCIES = ("aud", "usd", "eur")


class EntityResolver:
    """
    Pulls transfer entities out of free text with plain pattern matching.
    """

    def extract_amount(self, text: str) -> Optional[Decimal]:
        """First number in the text, if it is positive."""
        match = AMOUNT_PATTERN.search(text or "")
        if not match:
            return None
        amount = Decimal(match.group(1))
        return amount if amount > 0 else None

    def extract_account(self, text: str) -> Optional[str]:
        """'{currency} account' / '{currency}-account' -> account id."""
        match = ACCOUNT_PATTERN.search(text or "")
        if not match:
            return None
        return f"{match.group(1).upper()}-account"

    def infer_account(self, text: str) -> Optional[str]:
        """Account id for the first currency mentioned anywhere in the text."""
        text_lower = (text or "").lower()
        for code in INFERABLE_CURRENCIES:
            if code in text_lower:
                return f"{code.upper()}-account"
        return None
