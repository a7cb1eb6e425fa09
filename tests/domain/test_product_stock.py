"""Unit tests for Product creation rules and stock movements."""

import pytest

from sms.domain.exceptions import InsufficientStockError, InvalidQuantityError, ValidationError
from sms.domain.model.product import Product
from sms.domain.model.value_objects import Money
from tests.fakes import make_product


class TestProductCreate:

    def test_happy_path(self):
        p = Product.create("p1", "Widget", "WID-001", Money.of("9.99"), stock_quantity=5)
        assert p.stock_quantity == 5
        assert p.is_active is True

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError, match="name must be between 3 and 200"):
            Product.create("p1", "ab", "WID-001", Money.of("1"))

    def test_short_sku_rejected(self):
        with pytest.raises(ValidationError, match="SKU must be between 3 and 50"):
            Product.create("p1", "Widget", "W1", Money.of("1"))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="greater than or equal to 0"):
            Product.create("p1", "Widget", "WID-001", Money.of("1"), stock_quantity=-1)


class TestStock:

    def test_decrease(self):
        p = make_product(stock=5)
        p.decrease_stock(3)
        assert p.stock_quantity == 2

    def test_decrease_to_zero(self):
        p = make_product(stock=5)
        p.decrease_stock(5)
        assert p.stock_quantity == 0

    def test_decrease_more_than_available(self):
        p = make_product(stock=2)
        with pytest.raises(InsufficientStockError, match="requested 3, available 2"):
            p.decrease_stock(3)
        assert p.stock_quantity == 2

    def test_decrease_non_positive_rejected(self):
        with pytest.raises(InvalidQuantityError):
            make_product().decrease_stock(0)

    def test_increase(self):
        p = make_product(stock=1)
        p.increase_stock(4)
        assert p.stock_quantity == 5

    def test_increase_non_positive_rejected(self):
        with pytest.raises(InvalidQuantityError):
            make_product().increase_stock(-1)

    def test_update_price_touches_timestamp(self):
        p = make_product()
        p.update_price(Money.of("1.00"))
        assert p.price == Money.of("1.00")
        assert p.updated_at is not None
