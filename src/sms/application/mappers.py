"""Explicit mapping from the Sale aggregate to DTOs and events.

Each function lists the fields it copies. Nothing is mapped by
reflection, so adding a field to the aggregate never leaks it across a
boundary by accident.
"""

from __future__ import annotations

from datetime import datetime

from sms.application.dto import CancelSaleDTO, PartyDTO, SaleDTO, SaleItemDTO
from sms.domain.events import SaleCancelled, SaleCreated, SaleEventItem, SaleReactivated
from sms.domain.model.sale import Sale, SaleItem

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime(TIMESTAMP_FORMAT)


# --- DTOs ---------------------------------------------------------------------


def sale_item_to_dto(item: SaleItem) -> SaleItemDTO:
    return SaleItemDTO(
        id=item.id,
        product_id=item.product_id,
        product_name=item.product_name,
        product_sku=item.product_sku,
        quantity=item.quantity.value,
        unit_price=str(item.unit_price),
        discount=str(item.discount),
        total_amount=str(item.total_amount),
    )


def sale_to_dto(sale: Sale) -> SaleDTO:
    return SaleDTO(
        id=sale.id,
        sale_number=sale.sale_number,
        sale_date=format_timestamp(sale.sale_date),
        customer=PartyDTO(
            id=sale.customer.id, name=sale.customer.name, detail=sale.customer.email
        ),
        branch=PartyDTO(id=sale.branch.id, name=sale.branch.name, detail=sale.branch.code),
        items=[sale_item_to_dto(item) for item in sale.items],
        total_amount=str(sale.total_amount),
        is_cancelled=sale.is_cancelled,
        cancelled_at=format_timestamp(sale.cancelled_at),
        created_at=format_timestamp(sale.created_at),
    )


def sale_to_cancel_dto(sale: Sale, skipped_product_ids: list[str]) -> CancelSaleDTO:
    return CancelSaleDTO(
        id=sale.id,
        sale_number=sale.sale_number,
        is_cancelled=sale.is_cancelled,
        cancelled_at=format_timestamp(sale.cancelled_at),
        skipped_product_ids=list(skipped_product_ids),
    )


# --- Events -------------------------------------------------------------------


def _event_items(sale: Sale) -> tuple[SaleEventItem, ...]:
    return tuple(
        SaleEventItem(
            product_id=item.product_id,
            product_name=item.product_name,
            product_sku=item.product_sku,
            quantity=item.quantity.value,
            unit_price=item.unit_price.amount,
            discount=item.discount.amount,
            total_amount=item.total_amount.amount,
        )
        for item in sale.items
    )


def sale_created_event(sale: Sale) -> SaleCreated:
    return SaleCreated(
        sale_id=sale.id,
        sale_number=sale.sale_number,
        customer_id=sale.customer.id,
        customer_name=sale.customer.name,
        customer_email=sale.customer.email,
        branch_id=sale.branch.id,
        branch_name=sale.branch.name,
        total_amount=sale.total_amount.amount,
        item_count=sale.item_count,
        items=_event_items(sale),
        created_at=sale.created_at,
    )


def sale_cancelled_event(sale: Sale, skipped_product_ids: list[str]) -> SaleCancelled:
    return SaleCancelled(
        sale_id=sale.id,
        sale_number=sale.sale_number,
        customer_id=sale.customer.id,
        customer_name=sale.customer.name,
        branch_id=sale.branch.id,
        branch_name=sale.branch.name,
        total_amount=sale.total_amount.amount,
        items=_event_items(sale),
        cancelled_at=sale.cancelled_at,
        original_sale_date=sale.sale_date,
        skipped_product_ids=tuple(skipped_product_ids),
    )


def sale_reactivated_event(sale: Sale) -> SaleReactivated:
    return SaleReactivated(
        sale_id=sale.id,
        sale_number=sale.sale_number,
        customer_id=sale.customer.id,
        customer_name=sale.customer.name,
        branch_id=sale.branch.id,
        branch_name=sale.branch.name,
        total_amount=sale.total_amount.amount,
        items=_event_items(sale),
        reactivated_at=sale.updated_at,
    )
