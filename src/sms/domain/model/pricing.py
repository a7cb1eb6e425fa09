"""Sale item pricing: quantity tiers and line totals.

Tier policy:

    quantity   discount
    --------   --------------------
    1 - 3      none (manual discounts rejected too)
    4 - 9      10% of quantity x unit price
    10 - 20    20% of quantity x unit price
    > 20       rejected
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sms.domain.exceptions import (
    InvalidDiscountError,
    InvalidQuantityError,
    QuantityExceedsLimitError,
    ValidationError,
)
from sms.domain.model.value_objects import Money

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MIN_DISCOUNT_QUANTITY = 4
HIGH_TIER_QUANTITY = 10
MAX_ITEM_QUANTITY = 20

STANDARD_DISCOUNT_RATE = Decimal("0.10")
HIGH_DISCOUNT_RATE = Decimal("0.20")


@dataclass(frozen=True)
class LinePricing:
    subtotal: Money
    discount: Money
    total: Money


def check_quantity(quantity: int) -> None:
    """Reject quantities outside ``1..MAX_ITEM_QUANTITY``."""
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError(f"Quantity must be an integer, got {type(quantity).__name__}")
    if quantity <= 0:
        raise InvalidQuantityError(f"Quantity must be positive, got {quantity}")
    if quantity > MAX_ITEM_QUANTITY:
        raise QuantityExceedsLimitError(
            f"Cannot sell more than {MAX_ITEM_QUANTITY} identical items (requested {quantity})"
        )


def discount_rate(quantity: int) -> Decimal:
    check_quantity(quantity)
    if quantity >= HIGH_TIER_QUANTITY:
        return HIGH_DISCOUNT_RATE
    if quantity >= MIN_DISCOUNT_QUANTITY:
        return STANDARD_DISCOUNT_RATE
    return Decimal("0")


def tiered_discount(quantity: int, unit_price: Money) -> Money:
    return (unit_price * quantity).percent(discount_rate(quantity))


def validate_manual_discount(quantity: int, unit_price: Money, discount: Money) -> None:
    """Check an explicitly supplied discount against the tier floor and subtotal.

    Money already refuses negative amounts; ``discount`` may also be passed
    as a raw Decimal, so the sign is checked here as well.
    """
    check_quantity(quantity)
    amount = discount.amount if isinstance(discount, Money) else Decimal(discount)
    if amount < 0:
        raise InvalidDiscountError("Discount cannot be negative")
    if amount > 0 and quantity < MIN_DISCOUNT_QUANTITY:
        raise InvalidDiscountError(
            f"Purchases below {MIN_DISCOUNT_QUANTITY} items cannot have a discount"
        )
    subtotal = unit_price * quantity
    if amount > subtotal.amount:
        raise InvalidDiscountError(
            f"Discount {Money(amount)} cannot be greater than subtotal {subtotal}"
        )


def price_line(quantity: int, unit_price: Money, discount: Money | None = None) -> LinePricing:
    """Price one sale line.

    With ``discount=None`` the tiered discount is applied; otherwise the
    given discount is validated and used as-is.
    """
    if discount is None:
        discount = tiered_discount(quantity, unit_price)
    else:
        validate_manual_discount(quantity, unit_price, discount)
    subtotal = unit_price * quantity
    return LinePricing(subtotal=subtotal, discount=discount, total=subtotal - discount)
