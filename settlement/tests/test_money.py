"""
Unit Tests for the currency rounding policy

Tests cover:
1. Quantizing totals
2. Tolerance comparisons
3. Apportioning a total so the parts add up exactly
"""

import pytest
from decimal import Decimal

from settlement.money import allocate, amounts_equal, is_negligible, is_whole_cents, to_amount


class TestToAmount:
    """Tests for quantizing totals to cents."""

    def test_rounds_half_up(self):
        """Test that a half cent rounds away from zero."""
        assert to_amount("10.005") == Decimal("10.01")
        assert to_amount("10.004") == Decimal("10.00")

    def test_float_input_does_not_leak_binary_error(self):
        """Test that floats are converted through their string form."""
        assert to_amount(0.1 + 0.2) == Decimal("0.30")
        assert to_amount(33.33) == Decimal("33.33")

    def test_integer_input(self):
        assert to_amount(30) == Decimal("30.00")


class TestTolerance:
    """Tests for equality within one cent."""

    def test_one_cent_apart_is_equal(self):
        assert amounts_equal("10.00", "10.01")

    def test_two_cents_apart_is_not_equal(self):
        assert not amounts_equal("10.00", "10.02")

    def test_whole_cents(self):
        assert is_whole_cents(Decimal("0.01"))
        assert is_whole_cents(Decimal("12.500"))
        assert not is_whole_cents(Decimal("0.012"))

    def test_negligible_amounts(self):
        assert is_negligible(Decimal("0.01"))
        assert is_negligible(Decimal("-0.01"))
        assert not is_negligible(Decimal("0.02"))


class TestAllocate:
    """Tests for apportioning a total across weights."""

    def test_residual_cent_goes_to_first_participant(self):
        """Test that 10.00 split three ways gives the extra cent to the first share."""
        assert allocate(Decimal("10.00"), [Decimal(1)] * 3) == [
            Decimal("3.34"), Decimal("3.33"), Decimal("3.33"),
        ]

    def test_even_split_sums_exactly(self):
        """Test rounding conservation for every group size up to eleven."""
        for n in range(1, 12):
            shares = allocate(Decimal("100.00"), [Decimal(1)] * n)
            assert sum(shares) == Decimal("100.00")
            assert max(shares) - min(shares) <= Decimal("0.01")

    def test_percentage_weights(self):
        shares = allocate(Decimal("100.00"), [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")])
        assert shares == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]

    def test_several_residual_cents_spread_in_order(self):
        """Test that leftover cents are handed out one per participant."""
        shares = allocate(Decimal("0.05"), [Decimal(1)] * 6)
        assert shares == [Decimal("0.01")] * 5 + [Decimal("0.00")]

    def test_zero_weight_gets_nothing(self):
        shares = allocate(Decimal("10.01"), [Decimal(1), Decimal(0), Decimal(1)])
        assert shares == [Decimal("5.01"), Decimal("0.00"), Decimal("5.00")]

    def test_no_weight_fails(self):
        with pytest.raises(ValueError):
            allocate(Decimal("10.00"), [Decimal(0), Decimal(0)])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
