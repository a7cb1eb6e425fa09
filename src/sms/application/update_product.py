"""Application services: Update Product price / Restock Product."""

from __future__ import annotations

from sms.application.unit_of_work import UnitOfWork
from sms.domain.exceptions import EntityNotFoundError
from sms.domain.model.product import Product
from sms.domain.model.value_objects import Money


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, new_price: str) -> Product:
        """Update a product's price.

        Existing sales are unaffected; their items captured a price
        snapshot when the sale was made.
        """
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            product.update_price(Money.of(new_price))
            self._uow.products.save(product)
            self._uow.commit()
        return product


class RestockProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, quantity: int) -> Product:
        """Add ``quantity`` units to a product's stock."""
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            product.increase_stock(quantity)
            self._uow.products.save(product)
            self._uow.commit()
        return product
