"""
Unit Tests for obligation extraction

Tests cover:
1. Building the pairwise graph from expenses
2. Payer self-shares
3. Rejection of malformed expenses
"""

import pytest
from decimal import Decimal

from settlement.errors import DegenerateSplit, InvalidExpenseData, SplitMismatch
from settlement.extractor import extract, validate_expense
from settlement.models import Expense, Participant, Split, SplitType


PARTICIPANTS = [
    Participant(id="A", display_name="Asha"),
    Participant(id="B", display_name="Bilal"),
    Participant(id="C", display_name="Chen"),
]


def expense(payer, amount, split_type, **splits):
    return Expense(
        payer_id=payer,
        amount=Decimal(amount),
        split_type=split_type,
        splits=tuple(Split(participant_id=p, amount=Decimal(a)) for p, a in splits.items()),
    )


class TestExtract:
    """Tests for the obligation graph built from expenses."""

    def test_even_split_paid_by_one(self):
        """Test 30.00 paid by A split evenly among A, B and C."""
        graph = extract(PARTICIPANTS, [
            expense("A", "30.00", SplitType.EVEN, A="10.00", B="10.00", C="10.00"),
        ])
        assert graph.amount("B", "A") == Decimal("10.00")
        assert graph.amount("C", "A") == Decimal("10.00")
        assert graph.amount("A", "B") == 0
        assert graph.amount("A", "C") == 0

    def test_every_pair_is_represented(self):
        graph = extract(PARTICIPANTS, [])
        assert len(graph.to_dict(include_zero=True)) == 6
        assert graph.to_dict() == {}

    def test_payer_share_is_not_a_self_loop(self):
        graph = extract(PARTICIPANTS, [
            expense("A", "30.00", SplitType.EVEN, A="10.00", B="10.00", C="10.00"),
        ])
        assert all(debtor != creditor for debtor, creditor, _ in graph.edges())
        assert graph.total() == Decimal("20.00")

    def test_obligations_on_the_same_pair_are_summed(self):
        graph = extract(PARTICIPANTS, [
            expense("A", "12.00", SplitType.UNEVEN, B="12.00"),
            expense("A", "8.50", SplitType.UNEVEN, B="8.50"),
        ])
        assert graph.to_dict() == {"B:A": Decimal("20.50")}

    def test_partial_uneven_split_is_allowed(self):
        """Test that an uneven split may leave part of the amount with the payer."""
        graph = extract(PARTICIPANTS, [expense("A", "30.00", SplitType.UNEVEN, B="5.00")])
        assert graph.to_dict() == {"B:A": Decimal("5.00")}

    def test_diagnostic_keys(self):
        graph = extract(PARTICIPANTS, [
            expense("B", "10.00", SplitType.UNEVEN, A="10.00"),
            expense("C", "10.00", SplitType.UNEVEN, B="10.00"),
        ])
        assert graph.to_dict() == {"A:B": Decimal("10.00"), "B:C": Decimal("10.00")}


class TestValidation:
    """Tests for rejection of malformed expenses."""

    def test_unknown_split_participant(self):
        with pytest.raises(InvalidExpenseData, match="unknown participant Z"):
            extract(PARTICIPANTS, [expense("A", "10.00", SplitType.UNEVEN, Z="10.00")])

    def test_unknown_payer(self):
        with pytest.raises(InvalidExpenseData):
            extract(PARTICIPANTS, [expense("Z", "10.00", SplitType.UNEVEN, A="10.00")])

    def test_negative_split(self):
        with pytest.raises(InvalidExpenseData, match="negative"):
            extract(PARTICIPANTS, [expense("A", "10.00", SplitType.UNEVEN, B="-5.00")])

    def test_non_positive_amount(self):
        with pytest.raises(InvalidExpenseData, match="positive"):
            extract(PARTICIPANTS, [expense("A", "0.00", SplitType.UNEVEN, B="0.00")])

    def test_even_split_must_cover_the_amount(self):
        """Test that even splits missing the payer's own share are rejected."""
        with pytest.raises(SplitMismatch):
            extract(PARTICIPANTS, [expense("A", "30.00", SplitType.EVEN, B="10.00", C="10.00")])

    def test_percentage_split_within_a_cent(self):
        validate_expense(
            expense("A", "100.00", SplitType.PERCENTAGE, A="33.33", B="33.33", C="33.33"),
            ["A", "B", "C"],
        )

    def test_splits_exceeding_amount(self):
        with pytest.raises(SplitMismatch, match="exceed"):
            extract(PARTICIPANTS, [expense("A", "10.00", SplitType.UNEVEN, B="8.00", C="8.00")])

    def test_amount_with_fractional_cents(self):
        """Test that amounts are not silently rounded to the cent."""
        with pytest.raises(InvalidExpenseData, match="two decimal places"):
            extract(PARTICIPANTS, [expense("A", "0.012", SplitType.UNEVEN, B="0.01")])

    def test_split_with_fractional_cents(self):
        with pytest.raises(InvalidExpenseData, match="two decimal places"):
            extract(PARTICIPANTS, [expense("A", "10.00", SplitType.UNEVEN, B="5.005")])

    def test_trailing_zeros_are_whole_cents(self):
        validate_expense(expense("A", "10.000", SplitType.UNEVEN, B="5.0"), ["A", "B", "C"])

    def test_even_expense_without_splits_is_degenerate(self):
        """Test that an expense nobody shares is degenerate, not a mismatch."""
        with pytest.raises(DegenerateSplit, match="not shared by anyone"):
            extract(PARTICIPANTS, [expense("A", "30.00", SplitType.EVEN)])

    def test_uneven_expense_with_only_zero_splits_is_degenerate(self):
        with pytest.raises(DegenerateSplit):
            extract(PARTICIPANTS, [expense("A", "30.00", SplitType.UNEVEN, B="0.00", C="0.00")])

    def test_one_bad_expense_aborts_the_batch(self):
        """Test that no graph is produced when any expense is malformed."""
        with pytest.raises(InvalidExpenseData):
            extract(PARTICIPANTS, [
                expense("A", "30.00", SplitType.EVEN, A="10.00", B="10.00", C="10.00"),
                expense("B", "10.00", SplitType.UNEVEN, Z="10.00"),
            ])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
