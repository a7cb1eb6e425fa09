"""Domain events.

Events describe something that already happened to a sale. They are
immutable snapshots built after the unit of work commits, and handed to
an ``EventPublisher``. Delivery is fire-and-forget: a failed publish is
logged by the caller and never undoes the sale.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class SaleEventItem:
    product_id: str
    product_name: str
    product_sku: str
    quantity: int
    unit_price: Decimal
    discount: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class Event:
    """Base class for every event about a sale."""

    sale_id: str
    sale_number: str
    customer_id: str
    customer_name: str
    branch_id: str
    branch_name: str
    total_amount: Decimal
    items: tuple[SaleEventItem, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class SaleCreated(Event):
    customer_email: str = ""
    item_count: int = 0
    created_at: datetime | None = None


@dataclass(frozen=True)
class SaleCancelled(Event):
    cancelled_at: datetime | None = None
    original_sale_date: datetime | None = None
    skipped_product_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class SaleReactivated(Event):
    reactivated_at: datetime | None = None


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, event: Event) -> None:
        """Deliver ``event`` to whoever listens. May raise on transport failure."""
