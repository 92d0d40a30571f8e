import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Optional

from .config import Settings, get_settings
from .errors import SettlementError
from .extractor import extract, validate_expense
from .graph import ObligationGraph
from .models import (
    Expense,
    GroupBalancesResponse,
    ParticipantBalance,
    SettlementReport,
    SettlementRequest,
    SettlementResponse,
    SplitRequest,
    StrategyName,
)
from .money import ZERO, to_amount
from .netting import AggregateGreedy, PairwiseDirect, get_strategy, net_balances, settle
from .reducer import reduce
from .splits import build_expense

logger = logging.getLogger(__name__)


@contextmanager
def _rejections(action: str):
    try:
        yield
    except SettlementError as e:
        logger.warning("Rejected %s: %s: %s", action, type(e).__name__, e)
        raise


class SettlementService:
    """
    Stateless entry point for the settlement engine.

    Every call receives the full snapshot of participants and expenses, and
    all derived data (obligations, balances, transfers) is recomputed from it.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def split_expense(self, request: SplitRequest) -> Expense:
        with _rejections("split"):
            expense = build_expense(request)
            involved = [request.payer_id] + [s.participant_id for s in expense.splits]
            validate_expense(expense, involved)
        return expense

    def obligations(self, request: SettlementRequest) -> ObligationGraph:
        with _rejections(f"batch of {len(request.expenses)} expenses"):
            return extract(request.participants, request.expenses)

    def who_owes_whom(self, request: SettlementRequest) -> GroupBalancesResponse:
        graph = self.obligations(request)
        reduced = reduce(graph)
        settlements = settle(reduced, PairwiseDirect())
        logger.info(
            "Group view: %d participants, %d expenses, %d settlements",
            len(request.participants), len(request.expenses), len(settlements),
        )
        return GroupBalancesResponse(
            obligations={k: to_amount(v) for k, v in graph.to_dict().items()},
            reduced_obligations={k: to_amount(v) for k, v in reduced.to_dict().items()},
            settlements=settlements,
        )

    def settlement_report(self, request: SettlementRequest) -> SettlementReport:
        graph = self.obligations(request)
        paid = {p.id: ZERO for p in request.participants}
        owed = {p.id: ZERO for p in request.participants}
        for debtor, creditor, amount in graph.positive_edges():
            paid[creditor] += amount
            owed[debtor] += amount

        net = net_balances(graph)
        balances = [
            ParticipantBalance(
                participant_id=p.id,
                display_name=p.display_name,
                paid=to_amount(paid[p.id]),
                owed=to_amount(owed[p.id]),
                net=to_amount(net[p.id]),
            )
            for p in request.participants
        ]
        settlements = settle(graph, AggregateGreedy())
        total_spent = sum((e.amount for e in request.expenses), Decimal("0"))
        logger.info(
            "Settlement report: %d expenses totalling %s, %d settlements",
            len(request.expenses), to_amount(total_spent), len(settlements),
        )
        return SettlementReport(
            balances=balances,
            settlements=settlements,
            total_spent=to_amount(total_spent),
            expense_count=len(request.expenses),
        )

    def settle(self, request: SettlementRequest) -> SettlementResponse:
        name = request.strategy or self.settings.default_strategy
        graph = self.obligations(request)
        if name == StrategyName.PAIRWISE:
            graph = reduce(graph)
        return SettlementResponse(strategy=name, settlements=settle(graph, get_strategy(name)))
