import logging
from typing import Iterable

from .errors import DegenerateSplit, InvalidExpenseData, SplitMismatch
from .graph import ObligationGraph
from .models import Expense, Participant, SplitType
from .money import amounts_equal, format_amount, is_whole_cents

logger = logging.getLogger(__name__)

BALANCED_SPLIT_TYPES = (SplitType.EVEN, SplitType.PERCENTAGE)


def validate_expense(expense: Expense, participant_ids: Iterable[str]) -> None:
    known = set(participant_ids)
    label = expense.description or f"paid by {expense.payer_id}"

    if expense.payer_id not in known:
        raise InvalidExpenseData(f"Expense '{label}' is paid by unknown participant {expense.payer_id}")
    if expense.amount <= 0:
        raise InvalidExpenseData(f"Expense '{label}' must have a positive amount, got {expense.amount}")
    if not is_whole_cents(expense.amount):
        raise InvalidExpenseData(f"Expense '{label}' amount {expense.amount} has more than two decimal places")

    for split in expense.splits:
        if split.participant_id not in known:
            raise InvalidExpenseData(
                f"Expense '{label}' has a split for unknown participant {split.participant_id}"
            )
        if split.amount < 0:
            raise InvalidExpenseData(
                f"Expense '{label}' has a negative split of {split.amount} for {split.participant_id}"
            )
        if not is_whole_cents(split.amount):
            raise InvalidExpenseData(
                f"Expense '{label}' split of {split.amount} for {split.participant_id} "
                f"has more than two decimal places"
            )

    if not any(split.amount > 0 for split in expense.splits):
        raise DegenerateSplit(f"Expense '{label}' is not shared by anyone")

    owed_by_others = expense.owed_by_others()
    if owed_by_others > expense.amount and not amounts_equal(owed_by_others, expense.amount):
        raise SplitMismatch(
            f"Expense '{label}': splits owed to the payer ({format_amount(owed_by_others)}) "
            f"exceed the amount ({format_amount(expense.amount)})"
        )

    if expense.split_type in BALANCED_SPLIT_TYPES and not amounts_equal(expense.split_total(), expense.amount):
        raise SplitMismatch(
            f"Expense '{label}': {expense.split_type.value} splits total "
            f"{format_amount(expense.split_total())} but the amount is {format_amount(expense.amount)}"
        )


def extract(participants: list[Participant], expenses: list[Expense]) -> ObligationGraph:
    """
    Build the pairwise obligation graph for a snapshot of expenses.

    Every split not belonging to the payer becomes a debt from the split's
    participant to the payer. The whole batch is validated before any edge
    is added, so a malformed expense never yields a partial graph.
    """
    participant_ids = [p.id for p in participants]
    for expense in expenses:
        validate_expense(expense, participant_ids)

    graph = ObligationGraph(participant_ids)
    for expense in expenses:
        for split in expense.splits:
            if split.participant_id == expense.payer_id:
                continue
            if split.amount > 0:
                graph.add(split.participant_id, expense.payer_id, split.amount)

    logger.debug(
        "Extracted %d obligations from %d expenses across %d participants",
        sum(1 for _ in graph.positive_edges()), len(expenses), len(participant_ids),
    )
    return graph
