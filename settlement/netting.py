import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from .graph import ObligationGraph
from .models import Settlement, StrategyName
from .money import TOLERANCE, ZERO, is_negligible, to_amount

logger = logging.getLogger(__name__)


def net_balances(graph: ObligationGraph) -> dict[str, Decimal]:
    """Owed to each participant minus what they owe, in participant order."""
    balances = {pid: ZERO for pid in graph.participant_ids}
    for debtor, creditor, amount in graph.positive_edges():
        balances[creditor] += amount
        balances[debtor] -= amount
    return balances


class NettingStrategy(ABC):
    name: StrategyName

    @abstractmethod
    def settle(self, graph: ObligationGraph) -> list[Settlement]:
        ...

    def _ordered(self, graph: ObligationGraph, settlements: list[Settlement]) -> list[Settlement]:
        position = {pid: i for i, pid in enumerate(graph.participant_ids)}
        return sorted(settlements, key=lambda s: (position[s.debtor_id], position[s.creditor_id]))


class PairwiseDirect(NettingStrategy):
    """Net each pair of participants against each other, nothing more."""

    name = StrategyName.PAIRWISE

    def settle(self, graph: ObligationGraph) -> list[Settlement]:
        settlements = []
        ids = graph.participant_ids
        for i, a in enumerate(ids):
            for b in ids[i + 1:]:
                net = graph.amount(a, b) - graph.amount(b, a)
                if is_negligible(net):
                    continue
                debtor, creditor = (a, b) if net > 0 else (b, a)
                settlements.append(Settlement(debtor_id=debtor, creditor_id=creditor, amount=to_amount(abs(net))))
        return self._ordered(graph, settlements)


class AggregateGreedy(NettingStrategy):
    """
    Collapse everything into one balance per participant, then repeatedly
    match the largest creditor with the largest debtor.

    Usually needs fewer transfers than pairwise netting once three or more
    people owe each other, but the debtor/creditor pairs can differ from it.

    Stops once no creditor is owed more than a cent, so several one-cent
    balances can be left unsettled and the transfers may fall short of the
    total owed by more than a cent.
    """

    name = StrategyName.AGGREGATE

    def settle(self, graph: ObligationGraph) -> list[Settlement]:
        balances = net_balances(graph)
        settlements = []
        while True:
            # max/min keep the first participant on ties
            creditor = max(balances, key=lambda pid: balances[pid], default=None)
            debtor = min(balances, key=lambda pid: balances[pid], default=None)
            if creditor is None or balances[creditor] <= TOLERANCE or balances[debtor] >= -TOLERANCE:
                break
            amount = min(balances[creditor], -balances[debtor])
            balances[creditor] -= amount
            balances[debtor] += amount
            settlements.append(Settlement(debtor_id=debtor, creditor_id=creditor, amount=to_amount(amount)))
        return self._ordered(graph, settlements)


STRATEGIES: dict[StrategyName, type[NettingStrategy]] = {
    StrategyName.PAIRWISE: PairwiseDirect,
    StrategyName.AGGREGATE: AggregateGreedy,
}


def get_strategy(name: StrategyName) -> NettingStrategy:
    return STRATEGIES[StrategyName(name)]()


def settle(graph: ObligationGraph, strategy: Optional[NettingStrategy] = None) -> list[Settlement]:
    strategy = strategy or PairwiseDirect()
    settlements = strategy.settle(graph)
    logger.debug("%s produced %d settlements", strategy.name.value, len(settlements))
    return settlements
