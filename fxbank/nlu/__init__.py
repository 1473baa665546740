"""
Keyword NLU: intent classification + entity extraction from free text.
"""

from .entity_resolver import EntityResolver  # noqa: F401
from .intent_classifier import (  # noqa: F401
    AccountIntent,
    Intent,
    KeywordIntentClassifier,
    TextClassifier,
    account_intent_classifier,
    transfer_intent_classifier,
)
