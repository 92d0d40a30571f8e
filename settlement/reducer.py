"""
Transitive reduction of an obligation graph.

Two passes, both scanning participants in the graph's insertion order so the
result is reproducible (though not unique):

1. Net-zero cycles are removed: for every directed cycle of positive edges
   the smallest edge weight is subtracted from each edge on the cycle.
2. Chains are collapsed: while some p1 owes p2 and p2 owes p3, the smaller
   of the two debts is moved onto p1 -> p3.

Neither pass changes any participant's net balance.
"""

import logging
from typing import Optional

from .graph import ObligationGraph

logger = logging.getLogger(__name__)


def find_cycle(graph: ObligationGraph) -> Optional[list[str]]:
    """Return the first directed cycle of positive edges, or None."""
    on_stack: set[str] = set()
    done: set[str] = set()
    path: list[str] = []

    def visit(node: str) -> Optional[list[str]]:
        on_stack.add(node)
        path.append(node)
        for nxt in graph.successors(node):
            if nxt in on_stack:
                return path[path.index(nxt):]
            if nxt not in done:
                cycle = visit(nxt)
                if cycle:
                    return cycle
        path.pop()
        on_stack.discard(node)
        done.add(node)
        return None

    for start in graph.participant_ids:
        if start not in done:
            cycle = visit(start)
            if cycle:
                return cycle
    return None


def eliminate_cycles(graph: ObligationGraph) -> int:
    """Zero out cycles in place. Returns the number of cycles removed."""
    removed = 0
    while True:
        cycle = find_cycle(graph)
        if cycle is None:
            return removed
        hops = list(zip(cycle, cycle[1:] + cycle[:1]))
        smallest = min(graph.amount(d, c) for d, c in hops)
        for debtor, creditor in hops:
            graph.set(debtor, creditor, graph.amount(debtor, creditor) - smallest)
        removed += 1
        logger.debug("Cancelled cycle %s by %s", " -> ".join(cycle), smallest)


def _first_chain(graph: ObligationGraph) -> Optional[tuple[str, str, str]]:
    for p1 in graph.participant_ids:
        for p2 in graph.successors(p1):
            for p3 in graph.successors(p2):
                if p3 != p1:
                    return p1, p2, p3
    return None


def collapse_chains(graph: ObligationGraph) -> int:
    """Collapse two-hop chains in place. Returns the number of collapses."""
    collapses = 0
    while True:
        chain = _first_chain(graph)
        if chain is None:
            return collapses
        p1, p2, p3 = chain
        w12 = graph.amount(p1, p2)
        w23 = graph.amount(p2, p3)
        moved = min(w12, w23)
        graph.set(p1, p2, w12 - moved)
        graph.set(p2, p3, w23 - moved)
        graph.add(p1, p3, moved)
        collapses += 1


def reduce(graph: ObligationGraph) -> ObligationGraph:
    reduced = graph.copy()
    cycles = eliminate_cycles(reduced)
    collapses = collapse_chains(reduced)
    logger.debug(
        "Reduced graph: %d cycles cancelled, %d chains collapsed, total %s -> %s",
        cycles, collapses, graph.total(), reduced.total(),
    )
    return reduced
