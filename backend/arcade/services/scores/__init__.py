"""Score services: the append-only ledger and per-user stats.

These modules hold the score domain logic. HTTP routes import them and
stay limited to request parsing and response shaping.
"""

from .ledger import ScoreLedger
from .stats import StatsAggregator, StatsSnapshot

__all__ = ['ScoreLedger', 'StatsAggregator', 'StatsSnapshot']
