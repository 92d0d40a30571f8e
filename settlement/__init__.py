"""
Group Settlement Engine

This package provides:
- Split calculators for even, uneven, percentage and itemized expenses
- Extraction of pairwise obligations from a snapshot of expenses
- Transitive reduction of the obligation graph (cycles, then chains)
- Pairwise and aggregate netting into settlement transfers
- A decimal currency rounding policy shared by all of the above
"""

from .errors import (
    SettlementError,
    InvalidExpenseData,
    SplitMismatch,
    DegenerateSplit,
)
from .models import (
    SplitType,
    StrategyName,
    Participant,
    Split,
    Expense,
    Settlement,
)
from .graph import ObligationGraph
from .extractor import extract
from .reducer import reduce
from .netting import NettingStrategy, PairwiseDirect, AggregateGreedy, net_balances, settle
from .service import SettlementService

__all__ = [
    "SettlementError",
    "InvalidExpenseData",
    "SplitMismatch",
    "DegenerateSplit",
    "SplitType",
    "StrategyName",
    "Participant",
    "Split",
    "Expense",
    "Settlement",
    "ObligationGraph",
    "extract",
    "reduce",
    "NettingStrategy",
    "PairwiseDirect",
    "AggregateGreedy",
    "net_balances",
    "settle",
    "SettlementService",
]
