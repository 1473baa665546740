"""
Contextual account analysis used by intelligentAccountCheck.

Scores account health, limit utilization and how an account compares to the
rest of the portfolio, then turns that into recommendations.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from .db.models import Account, Currency
from .nlu.intent_classifier import AccountIntent


def _pct(used: Decimal, limit: Decimal) -> float:
    return float(used / limit * 100) if limit else 0.0


def calculate_account_health(account: Account) -> int:
    score = 100

    if account.balance < 500:
        score -= 20
    elif account.balance < 1000:
        score -= 10

    monthly = account.transfers_this_month / account.monthly_transfer_limit if account.monthly_transfer_limit else 0
    if monthly > Decimal("0.9"):
        score -= 30
    elif monthly > Decimal("0.7"):
        score -= 15

    if not account.is_active:
        score -= 50

    return max(score, 0)


def calculate_utilization(account: Account) -> Dict[str, Any]:
    return {
        "daily_transfer_utilization": _pct(account.transfers_today, account.daily_transfer_limit),
        "monthly_transfer_utilization": _pct(account.transfers_this_month, account.monthly_transfer_limit),
    }


def compare_to_other_accounts(account: Account, accounts: List[Account]) -> Optional[Dict[str, Any]]:
    """
    Nominal balance comparison against every other account (no FX conversion).
    """
    others = [a.balance for a in accounts if a.id != account.id]
    if not others:
        return None

    average = sum(others, Decimal("0")) / len(others)
    below = sum(1 for b in others if b < account.balance)
    return {
        "compared_to_average": "above" if account.balance > average else "below",
        "difference": float(abs(account.balance - average)),
        "percentile": below / len(others) * 100,
    }


def build_contextual_analysis(account: Account, intent: AccountIntent, accounts: List[Account]) -> Dict[str, Any]:
    analysis: Dict[str, Any] = {
        "health_score": calculate_account_health(account),
        "utilization_analysis": calculate_utilization(account),
    }

    if intent == AccountIntent.CHECK_BALANCE:
        analysis["balance_analysis"] = {
            "current": float(account.balance),
            "currency": account.currency.value,
            "comparative": compare_to_other_accounts(account, accounts),
        }

    elif intent == AccountIntent.CHECK_LIMITS:
        analysis["limit_analysis"] = {
            "daily": {
                "limit": float(account.daily_transfer_limit),
                "used": float(account.transfers_today),
                "remaining": float(account.daily_transfer_limit - account.transfers_today),
                "utilization_percentage": _pct(account.transfers_today, account.daily_transfer_limit),
            },
            "monthly": {
                "limit": float(account.monthly_transfer_limit),
                "used": float(account.transfers_this_month),
                "remaining": float(account.monthly_transfer_limit - account.transfers_this_month),
                "utilization_percentage": _pct(account.transfers_this_month, account.monthly_transfer_limit),
            },
        }

    elif intent == AccountIntent.CHECK_STATUS:
        analysis["status_analysis"] = {
            "status": account.status.value,
            "can_send": account.is_active,
            "can_receive": account.is_active,
        }

    return analysis


def build_account_recommendations(account: Account) -> List[str]:
    recommendations = []

    if account.balance < 1000:
        recommendations.append("Consider maintaining a higher balance for better account flexibility")

    if account.transfers_this_month > account.monthly_transfer_limit * Decimal("0.8"):
        recommendations.append("Approaching monthly transfer limit - plan upcoming transfers carefully")

    if account.currency == Currency.AUD:
        recommendations.append("Consider diversifying into other currencies if you have international exposure")

    if not account.is_active:
        recommendations.append(f"Account is {account.status.value}; contact support before planning transfers")

    return recommendations
