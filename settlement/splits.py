"""
Split calculators used by the expense-entry workflow.

Each calculator turns a total and a description of who shares it into an
ordered tuple of ``Split`` records whose amounts add up to the total to the
cent.
"""

from decimal import Decimal
from typing import Iterable

from .errors import DegenerateSplit, InvalidExpenseData, SplitMismatch
from .models import Dish, Expense, Split, SplitRequest, SplitType
from .money import ZERO, allocate, amounts_equal, format_amount, to_amount, to_decimal

HUNDRED = Decimal("100")


def _unique(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(ids))


def _to_splits(shares: dict[str, Decimal]) -> tuple[Split, ...]:
    return tuple(Split(participant_id=pid, amount=amount) for pid, amount in shares.items())


def split_even(amount, participant_ids: Iterable[str]) -> tuple[Split, ...]:
    ids = _unique(participant_ids)
    if not ids:
        raise DegenerateSplit("An even split needs at least one participant")
    shares = allocate(amount, [Decimal(1)] * len(ids))
    return _to_splits(dict(zip(ids, shares)))


def split_uneven(amount, amounts: dict[str, Decimal]) -> tuple[Split, ...]:
    total = to_amount(amount)
    shares = {}
    for pid, value in amounts.items():
        value = to_amount(value)
        if value < 0:
            raise InvalidExpenseData(f"Amount for {pid} cannot be negative: {value}")
        if value > 0:
            shares[pid] = value

    if not shares:
        raise DegenerateSplit("An uneven split needs at least one non-zero amount")

    entered = sum(shares.values(), ZERO)
    if not amounts_equal(entered, total):
        raise SplitMismatch(
            f"Uneven amounts total {format_amount(entered)}, "
            f"{format_amount(total - entered)} left of {format_amount(total)}"
        )
    return _to_splits(shares)


def split_percentage(amount, percentages: dict[str, Decimal]) -> tuple[Split, ...]:
    weights = {}
    for pid, pct in percentages.items():
        pct = to_decimal(pct)
        if pct < 0:
            raise InvalidExpenseData(f"Percentage for {pid} cannot be negative: {pct}")
        if pct > 0:
            weights[pid] = pct

    if not weights:
        raise DegenerateSplit("A percentage split needs at least one non-zero percentage")

    total_pct = sum(weights.values(), Decimal("0"))
    if not amounts_equal(total_pct, HUNDRED):
        raise SplitMismatch(f"Total percentage must be 100%, got {total_pct}%")

    shares = allocate(amount, list(weights.values()))
    return _to_splits(dict(zip(weights, shares)))


def split_itemized(amount, dishes: list[Dish], spread_remainder: bool = True) -> tuple[Split, ...]:
    """
    Share each dish among the people who had it, then spread whatever is
    left of ``amount`` (tax, tip) in proportion to what each person ate.
    """
    total = to_amount(amount)
    if not dishes:
        raise DegenerateSplit("An itemized split needs at least one dish")

    shares: dict[str, Decimal] = {}
    for number, dish in enumerate(dishes, start=1):
        dish_amount = to_amount(dish.amount)
        if dish_amount <= 0:
            raise InvalidExpenseData(f"Dish {number} must have a positive amount, got {dish_amount}")
        eaters = _unique(dish.shared_by)
        if not eaters:
            raise DegenerateSplit(f"Dish {number} is not shared by anyone")
        for pid, share in zip(eaters, allocate(dish_amount, [Decimal(1)] * len(eaters))):
            shares[pid] = shares.get(pid, ZERO) + share

    itemized = sum(shares.values(), ZERO)
    remainder = total - itemized
    if remainder < 0 and not amounts_equal(itemized, total):
        raise SplitMismatch(
            f"Dishes total {format_amount(itemized)}, more than the bill of {format_amount(total)}"
        )

    if remainder > 0 and not spread_remainder and not amounts_equal(itemized, total):
        raise SplitMismatch(
            f"Dishes total {format_amount(itemized)}, {format_amount(remainder)} "
            f"left of {format_amount(total)}; spread the remainder to cover tax and tip"
        )

    # a stray cent either way is absorbed so the shares always add up to the bill
    if remainder > 0:
        extra = allocate(remainder, list(shares.values()))
        shares = {pid: share + bump for (pid, share), bump in zip(shares.items(), extra)}
    elif remainder < 0:
        cut = allocate(-remainder, list(shares.values()))
        shares = {pid: share - trim for (pid, share), trim in zip(shares.items(), cut)}

    return _to_splits(shares)


def build_expense(request: SplitRequest) -> Expense:
    amount = to_amount(request.amount)
    if amount <= 0:
        raise InvalidExpenseData(f"Expense amount must be positive, got {request.amount}")

    if request.split_type == SplitType.EVEN:
        splits = split_even(amount, request.participant_ids)
    elif request.split_type == SplitType.UNEVEN:
        splits = split_uneven(amount, request.amounts)
    elif request.split_type == SplitType.PERCENTAGE:
        splits = split_percentage(amount, request.percentages)
    else:
        splits = split_itemized(amount, request.dishes, request.spread_remainder)

    return Expense(
        payer_id=request.payer_id,
        amount=amount,
        split_type=request.split_type,
        splits=splits,
        description=request.description,
    )
