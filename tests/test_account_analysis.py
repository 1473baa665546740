"""Tests for contextual account analysis"""

from decimal import Decimal

import pytest

from fxbank.account_analysis import (
    build_account_recommendations,
    build_contextual_analysis,
    calculate_account_health,
    compare_to_other_accounts,
)
from fxbank.db.models import AccountStatus
from fxbank.db.seed import default_accounts
from fxbank.nlu.intent_classifier import AccountIntent


@pytest.fixture
def accounts():
    return {a.id: a for a in default_accounts()}


def test_healthy_account_scores_full(accounts):
    """Test a well funded, lightly used account scores 100"""
    assert calculate_account_health(accounts["AUD-account"]) == 100


def test_health_penalties(make_account):
    """Test low balance, heavy monthly use and inactivity reduce the score"""
    low = make_account("a", "AUD", balance=Decimal("400"))
    busy = make_account("b", "AUD", transfers_this_month=Decimal("19000"))
    frozen = make_account("c", "AUD", balance=Decimal("900"), status=AccountStatus.FROZEN)

    assert calculate_account_health(low) == 80
    assert calculate_account_health(busy) == 70
    assert calculate_account_health(frozen) == 40


def test_compare_above_average(accounts):
    """Test the largest balance sits above every other account"""
    comparison = compare_to_other_accounts(accounts["AUD-account"], list(accounts.values()))

    assert comparison["compared_to_average"] == "above"
    assert comparison["difference"] == 2000.0
    assert comparison["percentile"] == 100.0


def test_compare_below_average(accounts):
    """Test the smallest balance has no other account below it"""
    comparison = compare_to_other_accounts(accounts["EUR-account"], list(accounts.values()))

    assert comparison["compared_to_average"] == "below"
    assert comparison["difference"] == 1300.0
    assert comparison["percentile"] == 0.0


def test_compare_alone(accounts):
    """Test a single account has nothing to compare with"""
    aud = accounts["AUD-account"]

    assert compare_to_other_accounts(aud, [aud]) is None


def test_limit_analysis(accounts):
    """Test the limits view shows used and remaining allowance"""
    analysis = build_contextual_analysis(
        accounts["USD-account"], AccountIntent.CHECK_LIMITS, list(accounts.values())
    )

    daily = analysis["limit_analysis"]["daily"]
    assert daily == {"limit": 8000.0, "used": 500.0, "remaining": 7500.0, "utilization_percentage": 6.25}
    assert "balance_analysis" not in analysis


def test_balance_analysis(accounts):
    """Test the balance view includes the comparison block"""
    analysis = build_contextual_analysis(
        accounts["EUR-account"], AccountIntent.CHECK_BALANCE, list(accounts.values())
    )

    assert analysis["balance_analysis"]["current"] == 2800.0
    assert analysis["balance_analysis"]["currency"] == "EUR"
    assert analysis["health_score"] == 100


def test_general_info_has_only_base_analysis(accounts):
    """Test other intents get health and utilization only"""
    analysis = build_contextual_analysis(accounts["AUD-account"], AccountIntent.GENERAL_INFO, [])

    assert set(analysis) == {"health_score", "utilization_analysis"}
    assert analysis["utilization_analysis"]["monthly_transfer_utilization"] == 5.0


def test_recommendations(accounts, make_account):
    """Test AUD diversification and low balance advice"""
    assert build_account_recommendations(accounts["AUD-account"]) == [
        "Consider diversifying into other currencies if you have international exposure"
    ]
    assert build_account_recommendations(accounts["USD-account"]) == []

    small = make_account("x", "EUR", balance=Decimal("50"), transfers_this_month=Decimal("17000"))
    assert build_account_recommendations(small) == [
        "Consider maintaining a higher balance for better account flexibility",
        "Approaching monthly transfer limit - plan upcoming transfers carefully",
    ]
