"""
Reasoning guards run before a transfer is executed:
- elicitation.py: missing-field detection + clarifying prompts
- risk_rules.py: risk flags + recommendations
- policy_engine.py: named pre-checks per intent
"""

from .elicitation import ElicitationEngine, ElicitationPrompt, Priority, ReasoningContext  # noqa: F401
from .policy_engine import CRITICAL_CHECKS, PreCheck, PreCheckOrchestrator  # noqa: F401
from .risk_rules import RiskRules  # noqa: F401
