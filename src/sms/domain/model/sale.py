"""Sale aggregate, the core of the domain.

The Sale is an aggregate root that owns its items. All mutations go
through the root so the total and the cancellation rules always hold.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from uuid import uuid4

from sms.domain.exceptions import (
    DuplicateProductError,
    InvalidDiscountError,
    SaleAlreadyCancelledError,
    SaleCancelledError,
    SaleNotCancelledError,
    ValidationError,
)
from sms.domain.model import pricing
from sms.domain.model.value_objects import (
    BranchSnapshot,
    CustomerSnapshot,
    Money,
    Quantity,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Treat a naive ``moment`` as UTC and convert an aware one to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _new_id() -> str:
    return uuid4().hex


@dataclass
class SaleItem:
    """One line of a sale.

    Holds a snapshot of the product (name, SKU, unit price) taken when the
    sale was made. ``total_amount`` is derived and recomputed by
    ``calculate_total()``; it is not an init argument.
    """

    product_id: str
    product_name: str
    product_sku: str
    quantity: Quantity
    unit_price: Money  # locked at sale time
    discount: Money = field(default_factory=Money.zero)
    id: str = field(default_factory=_new_id)
    total_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        self.calculate_total()

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value

    def calculate_total(self) -> None:
        self.total_amount = self.subtotal - self.discount

    def apply_discount(self, discount: Money | Decimal | str) -> None:
        """Manual override of the discount, still bound by the tier rules."""
        if not isinstance(discount, Money):
            try:
                amount = Decimal(str(discount))
            except InvalidOperation as exc:
                raise InvalidDiscountError(f"Invalid discount amount: {discount!r}") from exc
            if not amount.is_finite():
                raise InvalidDiscountError(f"Invalid discount amount: {discount!r}")
            if amount < 0:
                raise InvalidDiscountError("Discount cannot be negative")
            discount = Money(amount, self.unit_price.currency)
        pricing.validate_manual_discount(self.quantity.value, self.unit_price, discount)
        self.discount = discount
        self.calculate_total()

    def apply_automatic_discount(self) -> None:
        self.discount = pricing.tiered_discount(self.quantity.value, self.unit_price)
        self.calculate_total()

    def change_quantity(self, quantity: int) -> None:
        """Set a new quantity and re-derive the tier discount.

        The owning sale's total is stale afterwards; call
        ``Sale.recalculate_totals()``.
        """
        pricing.check_quantity(quantity)
        self.quantity = Quantity(quantity)
        self.apply_automatic_discount()

    @staticmethod
    def create(
        product_id: str,
        product_name: str,
        product_sku: str,
        quantity: int,
        unit_price: Money,
    ) -> SaleItem:
        """Build a new item with the automatic tier discount applied."""
        line = pricing.price_line(quantity, unit_price)
        return SaleItem(
            product_id=product_id,
            product_name=product_name,
            product_sku=product_sku,
            quantity=Quantity(quantity),
            unit_price=unit_price,
            discount=line.discount,
        )


@dataclass
class Sale:
    """Aggregate root for sales.

    Use ``Sale.create()`` for new sales. ``__init__`` stays simple so the
    repository can reconstitute persisted sales without re-validating.
    """

    id: str
    sale_number: str
    customer: CustomerSnapshot
    branch: BranchSnapshot
    sale_date: datetime
    items: list[SaleItem] = field(default_factory=list)
    total_amount: Money = field(default_factory=Money.zero)
    is_cancelled: bool = False
    cancelled_at: datetime | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None

    # --- Factory (used for NEW sales only) ------------------------------------

    @staticmethod
    def create(
        sale_number: str,
        customer: CustomerSnapshot,
        branch: BranchSnapshot,
        now: datetime | None = None,
    ) -> Sale:
        if not sale_number:
            raise ValidationError("Sale number is required")
        now = as_utc(now) if now is not None else _utcnow()
        return Sale(
            id=_new_id(),
            sale_number=sale_number,
            customer=customer,
            branch=branch,
            sale_date=now,
            created_at=now,
        )

    # --- Items ----------------------------------------------------------------

    def add_item(self, item: SaleItem) -> None:
        self._ensure_not_cancelled("add items to")
        if any(existing.product_id == item.product_id for existing in self.items):
            raise DuplicateProductError(
                f"Product {item.product_name} is already in sale {self.sale_number}; "
                f"change its quantity instead"
            )
        self.items.append(item)
        self._calculate_total()
        self._touch()

    def remove_item(self, item_id: str) -> None:
        """Remove an item by id. Unknown ids are ignored."""
        self._ensure_not_cancelled("remove items from")
        for index, item in enumerate(self.items):
            if item.id == item_id:
                del self.items[index]
                self._calculate_total()
                self._touch()
                return

    def find_item(self, item_id: str) -> SaleItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Mark the sale cancelled.

        Stock restitution is the caller's job and must happen in the same
        unit of work.
        """
        if self.is_cancelled:
            raise SaleAlreadyCancelledError(f"Sale {self.sale_number} is already cancelled")
        now = _utcnow()
        self.is_cancelled = True
        self.cancelled_at = now
        self.updated_at = now

    def reactivate(self) -> None:
        if not self.is_cancelled:
            raise SaleNotCancelledError(f"Sale {self.sale_number} is not cancelled")
        self.is_cancelled = False
        self.cancelled_at = None
        self._touch()

    # --- Totals ---------------------------------------------------------------

    def recalculate_totals(self) -> None:
        for item in self.items:
            item.calculate_total()
        self._calculate_total()
        self._touch()

    @property
    def item_count(self) -> int:
        return len(self.items)

    # --- Internal helpers -----------------------------------------------------

    def _calculate_total(self) -> None:
        # Full resummation on every change; item counts are small.
        total = Money.zero()
        for item in self.items:
            total = total + item.total_amount
        self.total_amount = total

    def _ensure_not_cancelled(self, action: str) -> None:
        if self.is_cancelled:
            raise SaleCancelledError(f"Cannot {action} cancelled sale {self.sale_number}")

    def _touch(self) -> None:
        self.updated_at = _utcnow()
