"""Application service: Add Product use case."""

from __future__ import annotations

from uuid import uuid4

from sms.application.unit_of_work import UnitOfWork
from sms.domain.exceptions import ValidationError
from sms.domain.model.product import Product
from sms.domain.model.value_objects import Money


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        sku: str,
        price: str,
        stock_quantity: int = 0,
        description: str = "",
        category: str = "",
    ) -> Product:
        """Add a new product to the catalog. SKUs are unique."""
        product = Product.create(
            product_id=uuid4().hex,
            name=name,
            sku=sku,
            price=Money.of(price),
            stock_quantity=stock_quantity,
            description=description,
            category=category,
        )

        with self._uow:
            if self._uow.products.get_by_sku(product.sku) is not None:
                raise ValidationError(f"Product with SKU {product.sku} already exists")
            self._uow.products.save(product)
            self._uow.commit()

        return product
