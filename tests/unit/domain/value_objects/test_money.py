"""
Unit tests for the Money value object
"""

from decimal import Decimal

import pytest

from laundry_ops.domain.value_objects import Money


class TestMoneyCreation:
    """Test Money construction"""

    def test_default_currency(self):
        assert Money(100).currency == "XOF"

    def test_amount_converted_to_decimal(self):
        """Test that float and int amounts become exact decimals"""
        assert Money(0.1).amount == Decimal("0.1")
        assert Money(4000).amount == Decimal("4000")

    def test_invalid_currency_raises_error(self):
        with pytest.raises(ValueError, match="Invalid currency code"):
            Money(100, "FCFA")

    def test_currency_upper_cased(self):
        assert Money(100, "xof").currency == "XOF"

    def test_immutable(self):
        money = Money(100)

        with pytest.raises(AttributeError):
            money._amount = Decimal("200")


class TestMoneyArithmetic:
    """Test arithmetic on money values"""

    def test_add_and_subtract(self):
        assert Money(4000) + Money(1000) == Money(5000)
        assert Money(4000) - Money(1000) == Money(3000)

    def test_different_currencies_cannot_be_added(self):
        with pytest.raises(ValueError, match="Cannot add XOF and EUR"):
            Money(100).add(Money(100, "EUR"))

    def test_multiply_keeps_precision(self):
        assert Money(2000).multiply(Decimal("5") / Decimal("6")).amount > Decimal("1666.66")

    @pytest.mark.parametrize(
        "amount,expected",
        [("976.5", "977"), ("976.49", "976"), ("423.5", "424"), ("0.5", "1")],
    )
    def test_round_half_up_to_whole_units(self, amount, expected):
        assert Money(Decimal(amount)).round() == Money(Decimal(expected))

    def test_round_to_decimal_places(self):
        assert Money(Decimal("10.125")).round(2).amount == Decimal("10.13")

    def test_to_int(self):
        assert Money(Decimal("3810.5")).to_int() == 3811

    def test_comparisons(self):
        assert Money(100) < Money(200)
        assert Money(300) >= Money(200)
        assert Money(100) < 101

    def test_predicates(self):
        assert Money(1).is_positive()
        assert Money.zero().is_zero()
        assert not Money(-1).is_positive()


class TestMoneyFormatting:
    """Test display formatting"""

    @pytest.mark.parametrize(
        "amount,expected",
        [(4000, "4 000 FCFA"), (600, "600 FCFA"), (1250000, "1 250 000 FCFA"), (0, "0 FCFA")],
    )
    def test_format_local_currency(self, amount, expected):
        assert Money(amount).format() == expected

    def test_format_without_currency(self):
        assert Money(30750).format(include_currency=False) == "30 750"

    def test_format_other_currency_uses_code(self):
        assert Money(1500, "EUR").format() == "1 500 EUR"

    def test_str_and_repr(self):
        assert str(Money(4000)) == "4 000 FCFA"
        assert repr(Money(4000)) == "Money(4000, 'XOF')"

    def test_hashable(self):
        assert len({Money(100), Money(100), Money(200)}) == 2
