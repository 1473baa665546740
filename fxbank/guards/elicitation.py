"""
Elicitation engine.

Given free text and whatever transfer arguments the caller already supplied,
work out what is still missing and phrase it as ranked clarifying questions.
Only HIGH priority prompts are meant to block execution; MEDIUM and LOW ones
are advisory.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..db.store import AccountStore
from ..logging_config import get_logger
from ..nlu.entity_resolver import EntityResolver
from ..nlu.intent_classifier import Intent, TextClassifier
from ..transfer.schemas import TransferArgs
from .risk_rules import RiskRules, involves_currency_conversion

logger = get_logger("fxbank.guards.elicitation")


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


class ElicitationPrompt(BaseModel):
    question: str
    context: str
    suggested_options: Optional[List[str]] = None
    priority: Priority


class ReasoningContext(BaseModel):
    user_intent: Intent
    missing_info: List[str] = Field(default_factory=list)
    risks: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    requires_elicitation: bool = False
    elicitation_prompts: List[ElicitationPrompt] = Field(default_factory=list)
    # values recovered from the free text for fields the caller left out
    extracted_args: TransferArgs = Field(default_factory=TransferArgs)

    def high_priority_prompts(self) -> List[ElicitationPrompt]:
        return [p for p in self.elicitation_prompts if p.priority == Priority.HIGH]

    def prioritized_prompts(self) -> List[ElicitationPrompt]:
        return sorted(self.elicitation_prompts, key=lambda p: PRIORITY_RANK[p.priority], reverse=True)


class ElicitationEngine:
    def __init__(
        self,
        store: AccountStore,
        classifier: TextClassifier,
        risk_rules: RiskRules,
        entity_resolver: Optional[EntityResolver] = None,
    ):
        self.store = store
        self.classifier = classifier
        self.risk_rules = risk_rules
        self.entities = entity_resolver or EntityResolver()

    def classify(self, text: str) -> Intent:
        label = self.classifier.classify(text)
        try:
            return Intent(label)
        except ValueError:
            logger.warning("Classifier returned unknown intent %r; treating as unclear", label)
            return Intent.UNCLEAR

    async def analyze(self, text: str, partial_args: Optional[TransferArgs] = None) -> ReasoningContext:
        args = partial_args or TransferArgs()
        context = ReasoningContext(user_intent=self.classify(text))

        if context.user_intent == Intent.TRANSFER_FUNDS:
            await self._check_missing_information(context, text, args)

        effective = args.merged_over(context.extracted_args)
        context.risks = await self.risk_rules.assess(effective)
        context.recommendations = await self.risk_rules.recommend(effective)
        context.requires_elicitation = bool(context.elicitation_prompts)

        logger.info(
            "Analyzed intent=%s missing=%s prompts=%d risks=%d",
            context.user_intent.value,
            context.missing_info,
            len(context.elicitation_prompts),
            len(context.risks),
        )
        return context

    async def _check_missing_information(self, context: ReasoningContext, text: str, args: TransferArgs) -> None:
        extracted: Dict[str, Any] = {}

        if not args.amount:
            amount = self.entities.extract_amount(text)
            if amount:
                extracted["amount"] = amount
            else:
                context.missing_info.append("amount")
                context.elicitation_prompts.append(
                    ElicitationPrompt(
                        question="How much would you like to transfer?",
                        context="I need to know the transfer amount to proceed safely.",
                        priority=Priority.HIGH,
                    )
                )

        if not args.from_account:
            account_id = self.entities.extract_account(text)
            if account_id:
                extracted["from_account"] = account_id
            else:
                accounts = await self.store.list_accounts()
                context.missing_info.append("fromAccount")
                context.elicitation_prompts.append(
                    ElicitationPrompt(
                        question="Which account would you like to transfer from?",
                        context="Please specify the source account for the transfer.",
                        suggested_options=[f"{a.currency.value} account ({a.id})" for a in accounts],
                        priority=Priority.HIGH,
                    )
                )

        if not args.to_account and not args.preferred_currency:
            accounts = await self.store.list_accounts()
            currencies = list(dict.fromkeys(a.currency.value for a in accounts))
            context.elicitation_prompts.append(
                ElicitationPrompt(
                    question="Which currency or account would you prefer for the destination?",
                    context="I can suggest the best target account, but knowing your preference helps.",
                    suggested_options=[f"{c} account" for c in currencies],
                    priority=Priority.MEDIUM,
                )
            )

        context.extracted_args = TransferArgs(**extracted)

        source_id = args.from_account or extracted.get("from_account")
        if source_id and args.fx_threshold is None:
            from_account = await self.store.get_account(source_id)
            if from_account and await involves_currency_conversion(self.store, from_account, args):
                context.elicitation_prompts.append(
                    ElicitationPrompt(
                        question="Do you have a maximum acceptable exchange rate for this transfer?",
                        context=(
                            "This transfer involves currency conversion. "
                            "Setting a threshold can protect you from unfavorable rates."
                        ),
                        priority=Priority.LOW,
                    )
                )
