"""
Currency rounding policy shared by the split calculator, the extractor and
the netter.

Amounts are ``Decimal`` with two places. Totals round half-up; apportioned
shares round down to the cent and the leftover cents go to the first
participants in iteration order, which therefore receive the ceiling of
their raw share.
"""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
TOLERANCE = Decimal("0.01")

AmountLike = Union[Decimal, int, float, str]


def to_decimal(value: AmountLike) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so 0.1 becomes Decimal("0.1"), not its binary expansion
    return Decimal(str(value))


def to_amount(value: AmountLike) -> Decimal:
    """Quantize a total to cents, rounding half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def amounts_equal(a: AmountLike, b: AmountLike, tolerance: Decimal = TOLERANCE) -> bool:
    return abs(to_decimal(a) - to_decimal(b)) <= tolerance


def is_negligible(value: AmountLike) -> bool:
    """True for amounts at or below one cent in magnitude."""
    return abs(to_decimal(value)) <= TOLERANCE


def allocate(total: AmountLike, weights: list[Decimal]) -> list[Decimal]:
    """
    Split ``total`` proportionally to ``weights`` so the parts sum to it exactly.

    Each share is truncated to the cent and the residual cents are given one
    at a time to the earliest weighted positions. Zero weights get nothing.
    """
    total = to_amount(total)
    weights = [to_decimal(w) for w in weights]
    weight_sum = sum(weights, Decimal("0"))
    if weight_sum <= 0:
        raise ValueError("Cannot allocate against non-positive total weight")

    shares = [
        (total * w / weight_sum).quantize(CENT, rounding=ROUND_DOWN)
        for w in weights
    ]
    residual_cents = int((total - sum(shares, ZERO)) / CENT)

    eligible = [i for i, w in enumerate(weights) if w > 0]
    idx = 0
    while residual_cents > 0:
        shares[eligible[idx % len(eligible)]] += CENT
        residual_cents -= 1
        idx += 1
    return shares


def format_amount(value: AmountLike) -> str:
    return f"{to_amount(value):.2f}"


def is_whole_cents(value: AmountLike) -> bool:
    value = to_decimal(value)
    return value == value.quantize(CENT, rounding=ROUND_DOWN)
