"""Tests for ElicitationEngine and RiskRules"""

from decimal import Decimal

import pytest

from fxbank.guards.elicitation import ElicitationEngine, Priority
from fxbank.nlu.intent_classifier import Intent
from fxbank.transfer.schemas import TransferArgs


@pytest.mark.asyncio
async def test_vague_transfer_asks_for_amount_and_source(services):
    """Test missing amount and source become high-priority questions"""
    # Act
    context = await services.elicitation.analyze("I want to move some money")

    # Assert
    assert context.user_intent == Intent.TRANSFER_FUNDS
    assert context.missing_info == ["amount", "fromAccount"]
    assert context.requires_elicitation is True

    high = context.high_priority_prompts()
    assert [p.question for p in high] == [
        "How much would you like to transfer?",
        "Which account would you like to transfer from?",
    ]
    assert high[1].suggested_options == [
        "AUD account (AUD-account)",
        "USD account (USD-account)",
        "EUR account (EUR-account)",
    ]


@pytest.mark.asyncio
async def test_values_are_extracted_from_text(services):
    """Test amount and source in the text satisfy the high-priority checks"""
    # Act
    context = await services.elicitation.analyze("Transfer 500 from my AUD account")

    # Assert
    assert context.missing_info == []
    assert context.extracted_args.amount == Decimal("500")
    assert context.extracted_args.from_account == "AUD-account"
    assert [p.priority for p in context.elicitation_prompts] == [Priority.MEDIUM]
    assert context.risks == []
    assert context.recommendations == ["Consider transferring to EUR account for better diversification"]


@pytest.mark.asyncio
async def test_supplied_args_skip_questions(services):
    """Test supplied arguments are never asked for again"""
    args = TransferArgs(amount=Decimal("50"), from_account="USD-account", to_account="EUR-account")

    context = await services.elicitation.analyze("transfer please", args)

    assert context.missing_info == []
    # currency conversion without a threshold still gets the advisory question
    assert [p.priority for p in context.elicitation_prompts] == [Priority.LOW]
    assert "No FX rate protection set for currency conversion" in context.risks
    assert (
        "Small transfers may have proportionally higher fees. Consider consolidating smaller amounts."
        in context.recommendations
    )


@pytest.mark.asyncio
async def test_large_conversion_risks(services):
    """Test large share of balance and missing FX protection are flagged"""
    args = TransferArgs(preferred_currency="USD")

    context = await services.elicitation.analyze("send 4500 from AUD account", args)

    assert context.risks == [
        "Large transfer amount (>80% of account balance)",
        "No FX rate protection set for currency conversion",
    ]
    assert "Consider monitoring FX rates over the next few days for better conversion rates" in (
        context.recommendations
    )
    assert Priority.MEDIUM not in [p.priority for p in context.elicitation_prompts]


@pytest.mark.asyncio
async def test_limit_warnings(services):
    """Test approaching daily and monthly limits are flagged"""
    # USD: 500 used of 8000 daily; 1800 used of 40000 monthly
    args = TransferArgs(amount=Decimal("7000"), from_account="USD-account", to_account="USD-account")

    risks = await services.risk_rules.assess(args)

    assert "Approaching daily transfer limit" in risks
    assert "Approaching monthly transfer limit" not in risks


@pytest.mark.asyncio
async def test_non_transfer_intent_has_no_prompts(services):
    """Test only transfers trigger elicitation"""
    context = await services.elicitation.analyze("check my balance")

    assert context.user_intent == Intent.CHECK_ACCOUNT
    assert context.elicitation_prompts == []
    assert context.requires_elicitation is False


@pytest.mark.asyncio
async def test_prompts_sorted_by_priority(services):
    """Test prioritized order is high, then medium, then low"""
    args = TransferArgs(from_account="AUD-account", preferred_currency="EUR")

    context = await services.elicitation.analyze("transfer money", args)
    ordered = [p.priority for p in context.prioritized_prompts()]

    assert ordered == [Priority.HIGH, Priority.LOW]


class _FixedClassifier:
    def __init__(self, label):
        self.label = label

    def classify(self, text: str) -> str:
        return self.label


@pytest.mark.asyncio
async def test_pluggable_classifier(services):
    """Test any object with classify() can drive the engine"""
    engine = ElicitationEngine(services.store, _FixedClassifier("transfer_funds"), services.risk_rules)

    context = await engine.analyze("zzz")

    assert context.user_intent == Intent.TRANSFER_FUNDS


@pytest.mark.asyncio
async def test_unknown_classifier_label_is_unclear(services):
    """Test labels outside the intent set fall back to unclear"""
    engine = ElicitationEngine(services.store, _FixedClassifier("buy_stocks"), services.risk_rules)

    context = await engine.analyze("zzz")

    assert context.user_intent == Intent.UNCLEAR
