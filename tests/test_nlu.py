"""Tests for keyword intent classification and entity extraction"""

from decimal import Decimal

import pytest

from fxbank.nlu.entity_resolver import EntityResolver
from fxbank.nlu.intent_classifier import (
    AccountIntent,
    Intent,
    KeywordIntentClassifier,
    account_intent_classifier,
    transfer_intent_classifier,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("I want to move some money", Intent.TRANSFER_FUNDS),
        ("Send 200 to my euro account", Intent.TRANSFER_FUNDS),
        ("Check my balance", Intent.CHECK_ACCOUNT),
        ("What is the exchange rate today?", Intent.CHECK_FX_RATE),
        ("Give me a portfolio overview", Intent.PORTFOLIO_OVERVIEW),
        ("hello there", Intent.UNCLEAR),
        ("", Intent.UNCLEAR),
    ],
)
def test_transfer_intents(text, expected):
    """Test transfer-level intents by keyword containment"""
    assert transfer_intent_classifier().classify(text) == expected


def test_first_matching_intent_wins():
    """Test mapping order decides when several intents match"""
    # "transfer" and "balance" both present; transfer_funds is listed first
    assert transfer_intent_classifier().classify("Transfer my balance") == Intent.TRANSFER_FUNDS


@pytest.mark.parametrize(
    "text,expected",
    [
        ("What's my balance?", AccountIntent.CHECK_BALANCE),
        ("How much can I transfer?", AccountIntent.CHECK_LIMITS),
        ("show account status", AccountIntent.CHECK_STATUS),
        ("recent transactions please", AccountIntent.CHECK_HISTORY),
        ("tell me about my account", AccountIntent.GENERAL_INFO),
    ],
)
def test_account_intents(text, expected):
    """Test account-level intents"""
    assert account_intent_classifier().classify(text) == expected


def test_custom_mapping():
    """Test the classifier works with any mapping and default"""
    classifier = KeywordIntentClassifier({"greet": ["hi", "hello"]}, default="other")

    assert classifier.classify("Hello!") == "greet"
    assert classifier.classify("bye") == "other"


def test_extract_amount():
    """Test the first number is taken and non-positive values are ignored"""
    entities = EntityResolver()

    assert entities.extract_amount("move 250.50 then 10") == Decimal("250.50")
    assert entities.extract_amount("send 0 dollars") is None
    assert entities.extract_amount("send some money") is None


def test_extract_account():
    """Test '<currency> account' mentions map to account ids"""
    entities = EntityResolver()

    assert entities.extract_account("from my aud account") == "AUD-account"
    assert entities.extract_account("from EUR-account please") == "EUR-account"
    assert entities.extract_account("from my savings") is None


def test_infer_account_from_bare_currency():
    """Test any currency mention picks an account, checked AUD, USD, EUR"""
    entities = EntityResolver()

    assert entities.infer_account("show my USD limits") == "USD-account"
    assert entities.infer_account("eur and aud") == "AUD-account"
    assert entities.infer_account("gbp please") is None
