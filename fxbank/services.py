"""
Wiring for one running bank instance.

create_services() owns the store + rate table and hands the same instances
to every component. Build one per process (or per test).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from .db.models import Account, FXRate
from .db.seed import load_seed
from .db.store import AccountStore, RateTable
from .guards.elicitation import ElicitationEngine
from .guards.policy_engine import PreCheckOrchestrator
from .guards.risk_rules import RiskRules
from .nlu.entity_resolver import EntityResolver
from .nlu.intent_classifier import (
    KeywordIntentClassifier,
    TextClassifier,
    account_intent_classifier,
    transfer_intent_classifier,
)
from .transfer.resolver import TargetResolver
from .transfer.service import TransferExecutor
from .transfer.validator import PreConditionValidator


@dataclass
class BankingServices:
    store: AccountStore
    rates: RateTable
    resolver: TargetResolver
    validator: PreConditionValidator
    executor: TransferExecutor
    entities: EntityResolver
    account_classifier: KeywordIntentClassifier
    risk_rules: RiskRules
    elicitation: ElicitationEngine
    prechecks: PreCheckOrchestrator


def create_services(
    accounts: Optional[Iterable[Account]] = None,
    rates: Optional[Iterable[FXRate]] = None,
    *,
    seed_file: Optional[Union[str, Path]] = None,
    classifier: Optional[TextClassifier] = None,
) -> BankingServices:
    """
    Build a store from explicit records, a seed file, or the demo portfolio.
    """
    if accounts is None or rates is None:
        seed_accounts, seed_rates = load_seed(seed_file)
        accounts = seed_accounts if accounts is None else accounts
        rates = seed_rates if rates is None else rates

    store = AccountStore(accounts)
    rate_table = RateTable(rates)
    resolver = TargetResolver(store)
    validator = PreConditionValidator(store, rate_table, resolver)
    entities = EntityResolver()
    risk_rules = RiskRules(store)

    return BankingServices(
        store=store,
        rates=rate_table,
        resolver=resolver,
        validator=validator,
        executor=TransferExecutor(store, rate_table, validator),
        entities=entities,
        account_classifier=account_intent_classifier(),
        risk_rules=risk_rules,
        elicitation=ElicitationEngine(store, classifier or transfer_intent_classifier(), risk_rules, entities),
        prechecks=PreCheckOrchestrator(store, rate_table),
    )
