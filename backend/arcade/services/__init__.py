from typing import NamedTuple

from flask import current_app

from .accounts import IdentityStore
from .scores import ScoreLedger, StatsAggregator


class Services(NamedTuple):
    identity: IdentityStore
    ledger: ScoreLedger
    aggregator: StatsAggregator


def build_services(engine, recent_limit: int) -> Services:
    return Services(
        identity=IdentityStore(engine),
        ledger=ScoreLedger(engine),
        aggregator=StatsAggregator(engine, recent_limit=recent_limit),
    )


def get_services() -> Services:
    """Services bound to the current app's engine (see ``create_app``)."""
    return current_app.extensions['arcade']
