"""Product aggregate and its stock ledger.

Products live independently of sales. A sale copies the product's name,
SKU and price at the moment it is made, so later catalog edits never
rewrite history. The available quantity is owned here; every change to it
goes through ``increase_stock`` / ``decrease_stock``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from sms.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ValidationError,
)
from sms.domain.model.value_objects import Money


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock_quantity`` is never negative
    - ``price`` is never negative (enforced by Money)
    """

    id: str
    name: str
    sku: str
    price: Money
    stock_quantity: int = 0
    is_active: bool = True
    description: str = ""
    category: str = ""
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None

    # --- Stock ledger ---------------------------------------------------------

    def has_sufficient_stock(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    def decrease_stock(self, quantity: int) -> None:
        """Take ``quantity`` units out of stock.

        The sufficiency check and the decrement happen in one call so a
        caller holding the unit-of-work lock can never oversell.
        """
        if quantity <= 0:
            raise InvalidQuantityError("Stock decrement must be positive")
        if quantity > self.stock_quantity:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(requested {quantity}, available {self.stock_quantity})"
            )
        self.stock_quantity -= quantity
        self._touch()

    def increase_stock(self, quantity: int) -> None:
        """Return ``quantity`` units to stock (restock or sale cancellation)."""
        if quantity <= 0:
            raise InvalidQuantityError("Stock increment must be positive")
        self.stock_quantity += quantity
        self._touch()

    # --- Catalog maintenance --------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the list price. Existing sales keep their snapshot."""
        self.price = new_price
        self._touch()

    def activate(self) -> None:
        self.is_active = True
        self._touch()

    def deactivate(self) -> None:
        self.is_active = False
        self._touch()

    def _touch(self) -> None:
        self.updated_at = _utcnow()

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        product_id: str,
        name: str,
        sku: str,
        price: Money,
        stock_quantity: int = 0,
        description: str = "",
        category: str = "",
    ) -> Product:
        name = (name or "").strip()
        sku = (sku or "").strip()
        if not 3 <= len(name) <= 200:
            raise ValidationError("Product name must be between 3 and 200 characters")
        if not 3 <= len(sku) <= 50:
            raise ValidationError("SKU must be between 3 and 50 characters")
        if len(description) > 1000:
            raise ValidationError("Description cannot exceed 1000 characters")
        if len(category) > 100:
            raise ValidationError("Category cannot exceed 100 characters")
        if not isinstance(stock_quantity, int) or stock_quantity < 0:
            raise ValidationError("Stock quantity must be greater than or equal to 0")
        return Product(
            id=product_id,
            name=name,
            sku=sku,
            price=price,
            stock_quantity=stock_quantity,
            description=description,
            category=category,
        )
