from decimal import Decimal
from typing import Iterable, Iterator, Optional

from .money import ZERO


class ObligationGraph:
    """
    Directed debts between participants, at most one edge per ordered pair.

    ``amount(a, b)`` is what ``a`` owes ``b``. Participant order is the
    insertion order given at construction and drives every scan.
    """

    def __init__(self, participant_ids: Iterable[str], edges: Optional[dict[tuple[str, str], Decimal]] = None):
        self.participant_ids: tuple[str, ...] = tuple(dict.fromkeys(participant_ids))
        self._edges: dict[tuple[str, str], Decimal] = {
            (d, c): ZERO
            for d in self.participant_ids
            for c in self.participant_ids
            if d != c
        }
        for (debtor, creditor), amount in (edges or {}).items():
            self.set(debtor, creditor, amount)

    def __contains__(self, participant_id: str) -> bool:
        return participant_id in self.participant_ids

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObligationGraph):
            return NotImplemented
        return self.participant_ids == other.participant_ids and self._edges == other._edges

    def __repr__(self) -> str:
        return f"ObligationGraph({self.to_dict()!r})"

    def _key(self, debtor: str, creditor: str) -> tuple[str, str]:
        if debtor == creditor:
            raise ValueError(f"Self-obligation for {debtor} is not allowed")
        key = (debtor, creditor)
        if key not in self._edges:
            raise KeyError(f"Unknown participant in edge {debtor}:{creditor}")
        return key

    def amount(self, debtor: str, creditor: str) -> Decimal:
        return self._edges[self._key(debtor, creditor)]

    def set(self, debtor: str, creditor: str, amount: Decimal) -> None:
        if amount < 0:
            raise ValueError(f"Negative obligation {debtor}:{creditor} = {amount}")
        self._edges[self._key(debtor, creditor)] = amount

    def add(self, debtor: str, creditor: str, amount: Decimal) -> None:
        self.set(debtor, creditor, self.amount(debtor, creditor) + amount)

    def copy(self) -> "ObligationGraph":
        return ObligationGraph(self.participant_ids, self._edges)

    def edges(self) -> Iterator[tuple[str, str, Decimal]]:
        for (debtor, creditor), amount in self._edges.items():
            yield debtor, creditor, amount

    def positive_edges(self) -> Iterator[tuple[str, str, Decimal]]:
        return ((d, c, a) for d, c, a in self.edges() if a > 0)

    def successors(self, debtor: str) -> Iterator[str]:
        """Creditors ``debtor`` currently owes, in participant order."""
        for creditor in self.participant_ids:
            if creditor != debtor and self._edges[(debtor, creditor)] > 0:
                yield creditor

    def total(self) -> Decimal:
        return sum(self._edges.values(), ZERO)

    def to_dict(self, include_zero: bool = False) -> dict[str, Decimal]:
        return {
            f"{debtor}:{creditor}": amount
            for debtor, creditor, amount in self.edges()
            if include_zero or amount > 0
        }
