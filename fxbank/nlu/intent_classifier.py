"""
Intent Classification Module
Classifies user intents from free text by keyword containment
"""

from enum import Enum
from typing import Dict, List, Protocol


class Intent(str, Enum):
    TRANSFER_FUNDS = "transfer_funds"
    CHECK_ACCOUNT = "check_account"
    CHECK_FX_RATE = "check_fx_rate"
    PORTFOLIO_OVERVIEW = "portfolio_overview"
    UNCLEAR = "unclear"


class AccountIntent(str, Enum):
    CHECK_BALANCE = "check_balance"
    CHECK_LIMITS = "check_limits"
    CHECK_STATUS = "check_status"
    CHECK_HISTORY = "check_history"
    GENERAL_INFO = "general_info"


class TextClassifier(Protocol):
    """Anything that maps free text to one label."""

    def classify(self, text: str) -> str:
        ...


class KeywordIntentClassifier:
    """
    Classifies text against an ordered keyword mapping.

    The first intent (in mapping order) with any keyword contained in the
    lower-cased text wins; no scoring, no combination of signals.
    """

    def __init__(self, intent_mappings: Dict[str, List[str]], default: str):
        self.intent_mappings = intent_mappings
        self.default = default

    def classify(self, text: str) -> str:
        text_lower = (text or "").lower()
        for intent, keywords in self.intent_mappings.items():
            if any(keyword in text_lower for keyword in keywords):
                return intent
        return self.default


def transfer_intent_classifier() -> KeywordIntentClassifier:
    return KeywordIntentClassifier(
        {
            Intent.TRANSFER_FUNDS: ["transfer", "move", "send"],
            Intent.CHECK_ACCOUNT: ["balance", "account", "check"],
            Intent.CHECK_FX_RATE: ["rate", "exchange", "fx"],
            Intent.PORTFOLIO_OVERVIEW: ["all", "portfolio", "overview"],
        },
        default=Intent.UNCLEAR,
    )


def account_intent_classifier() -> KeywordIntentClassifier:
    return KeywordIntentClassifier(
        {
            AccountIntent.CHECK_BALANCE: ["balance"],
            AccountIntent.CHECK_LIMITS: ["limit", "transfer"],
            AccountIntent.CHECK_STATUS: ["status"],
            AccountIntent.CHECK_HISTORY: ["history", "transaction"],
        },
        default=AccountIntent.GENERAL_INFO,
    )
