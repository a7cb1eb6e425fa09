"""Domain service: Stock Ledger.

Coordinates the cross-aggregate stock effects of a sale: taking stock
out when an item is sold, putting it back when a sale is cancelled, and
taking it out again when a cancelled sale is reactivated.

Callers run these inside a unit of work; the service itself only talks
to the product repository.
"""

from __future__ import annotations

import logging

from sms.domain.exceptions import (
    EntityNotFoundError,
    InactiveEntityError,
    InsufficientStockError,
)
from sms.domain.model.product import Product
from sms.domain.model.sale import Sale
from sms.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockLedgerService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def get_sellable_product(self, product_id: str) -> Product:
        """Load a product that can appear on a new sale line."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        if not product.is_active:
            raise InactiveEntityError(f"Product {product.name} is not active")
        return product

    def ensure_available(self, product: Product, quantity: int) -> None:
        if not product.has_sufficient_stock(quantity):
            raise InsufficientStockError(
                f"Insufficient stock for product {product.name}. "
                f"Available: {product.stock_quantity}, Requested: {quantity}"
            )

    def withdraw(self, product: Product, quantity: int) -> None:
        product.decrease_stock(quantity)
        self._product_repo.save(product)

    def restore_for_sale(self, sale: Sale) -> list[str]:
        """Put every item's quantity back on its product.

        Items whose product no longer exists are skipped; their product ids
        are returned so the caller can report them.
        """
        skipped: list[str] = []
        for item in sale.items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                logger.warning(
                    "Product %s (%s) no longer exists; %d unit(s) from sale %s not restocked",
                    item.product_id,
                    item.product_name,
                    item.quantity.value,
                    sale.sale_number,
                )
                skipped.append(item.product_id)
                continue
            product.increase_stock(item.quantity.value)
            self._product_repo.save(product)
        return skipped

    def withdraw_for_sale(self, sale: Sale) -> None:
        """Take stock for every item of an existing sale.

        Two phases so nothing is touched unless every product can cover
        its line:
          Phase 1 - load and validate every product.
          Phase 2 - decrement and save.
        """
        products: list[tuple[Product, int]] = []

        for item in sale.items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                raise EntityNotFoundError(
                    f"Product '{item.product_name}' from sale {sale.sale_number} no longer exists"
                )
            qty = item.quantity.value
            self.ensure_available(product, qty)
            products.append((product, qty))

        for product, qty in products:
            self.withdraw(product, qty)
