"""Unit tests for Money and Quantity value objects."""

from decimal import Decimal

import pytest

from sms.domain.exceptions import InvalidQuantityError, ValidationError
from sms.domain.model.value_objects import Money, Quantity


class TestMoney:

    def test_create_from_string(self):
        m = Money.of("15.00")
        assert m.amount == Decimal("15.00")

    def test_float_goes_through_str(self):
        assert Money.of(0.1).amount == Decimal("0.1")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money.of("-1.00")

    def test_non_decimal_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10)

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_zero_is_allowed(self):
        assert Money.zero().is_zero

    def test_addition(self):
        assert Money.of("10.00") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction_below_zero_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            Money.of("1.00") - Money.of("2.00")

    def test_multiply_by_int(self):
        assert Money.of("15.00") * 3 == Money.of("45.00")

    def test_multiply_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("15.00") * 1.5

    def test_percent_is_exact(self):
        assert Money.of("33.33").percent(Decimal("0.10")).amount == Decimal("3.3330")

    def test_percent_rate_out_of_range(self):
        with pytest.raises(ValidationError, match="Rate must be between 0 and 1"):
            Money.of("10").percent(Decimal("1.5"))

    def test_currency_mismatch(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("1"), "USD") + Money(Decimal("1"), "EUR")

    def test_comparison(self):
        assert Money.of("10") < Money.of("10.01")
        assert Money.of("10") >= Money.of("10.00")

    def test_str_shows_two_decimals(self):
        assert str(Money.of("3.333")) == "$3.33"
        assert str(Money.of("7")) == "$7.00"


class TestQuantity:

    def test_valid(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(InvalidQuantityError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(InvalidQuantityError):
            Quantity(-3)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.5)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            Quantity(True)
