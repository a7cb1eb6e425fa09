"""Data Transfer Objects: plain containers that cross layer boundaries.

Input specs carry only what a caller may decide. Server-owned fields
(ids, sale numbers, prices, discounts, totals, timestamps) only ever
appear on the output DTOs.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SaleItemSpec:
    """Input: which product and how many. The price comes from the catalog."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class PartyDTO:
    """Output: the customer or branch snapshot stored on a sale."""

    id: str
    name: str
    detail: str  # customer e-mail or branch code


@dataclass(frozen=True)
class SaleItemDTO:

    id: str
    product_id: str
    product_name: str
    product_sku: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    discount: str
    total_amount: str


@dataclass(frozen=True)
class SaleDTO:

    id: str
    sale_number: str
    sale_date: str
    customer: PartyDTO
    branch: PartyDTO
    items: list[SaleItemDTO]
    total_amount: str
    is_cancelled: bool
    cancelled_at: str | None
    created_at: str


@dataclass(frozen=True)
class CancelSaleDTO:

    id: str
    sale_number: str
    is_cancelled: bool
    cancelled_at: str | None
    skipped_product_ids: list[str]
