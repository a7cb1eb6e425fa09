"""JSON-file-backed implementations of SaleRepository and SaleSequenceRepository."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sms.domain.exceptions import DuplicateSaleNumberError, EntityNotFoundError
from sms.domain.model.sale import Sale, SaleItem
from sms.domain.model.value_objects import BranchSnapshot, CustomerSnapshot, Money, Quantity
from sms.domain.repository.sale_repository import SaleRepository, SaleSequenceRepository
from sms.infrastructure.persistence.json_product_repository import (
    format_datetime,
    parse_datetime,
)
from sms.infrastructure.persistence.json_store import JsonFile


class JsonSaleRepository(SaleRepository):

    def __init__(self, document: JsonFile) -> None:
        self._document = document

    # --- SaleRepository interface ---------------------------------------------

    def add(self, sale: Sale) -> None:
        records = self._document.read()
        for raw in records:
            if raw["sale_number"] == sale.sale_number:
                raise DuplicateSaleNumberError(
                    f"Sale number {sale.sale_number} is already in use"
                )
            if raw["id"] == sale.id:
                raise DuplicateSaleNumberError(f"Sale {sale.id} already exists")
        records.append(self._to_raw(sale))
        self._document.write(records)

    def get_by_id(self, sale_id: str) -> Sale | None:
        for raw in self._document.read():
            if raw["id"] == sale_id:
                return self._to_domain(raw)
        return None

    def get_by_sale_number(self, sale_number: str) -> Sale | None:
        for raw in self._document.read():
            if raw["sale_number"] == sale_number:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Sale]:
        sales = [self._to_domain(raw) for raw in self._document.read()]
        return sorted(sales, key=lambda s: s.sale_date, reverse=True)

    def count_in_range(self, start: datetime, end: datetime) -> int:
        return sum(
            1
            for raw in self._document.read()
            if start <= datetime.fromisoformat(raw["sale_date"]) < end
        )

    def update(self, sale: Sale) -> None:
        records = self._document.read()
        for i, raw in enumerate(records):
            if raw["id"] == sale.id:
                records[i] = self._to_raw(sale)
                self._document.write(records)
                return
        raise EntityNotFoundError(f"Sale with ID '{sale.id}' not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sale: Sale) -> dict:
        return {
            "id": sale.id,
            "sale_number": sale.sale_number,
            "sale_date": format_datetime(sale.sale_date),
            "customer": {
                "id": sale.customer.id,
                "name": sale.customer.name,
                "email": sale.customer.email,
            },
            "branch": {
                "id": sale.branch.id,
                "name": sale.branch.name,
                "code": sale.branch.code,
            },
            "total_amount": str(sale.total_amount.amount),
            "is_cancelled": sale.is_cancelled,
            "cancelled_at": format_datetime(sale.cancelled_at),
            "created_at": format_datetime(sale.created_at),
            "updated_at": format_datetime(sale.updated_at),
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "product_sku": item.product_sku,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "discount": str(item.discount.amount),
                    "currency": item.unit_price.currency,
                }
                for item in sale.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Sale:
        items = [
            SaleItem(
                id=i["id"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                product_sku=i["product_sku"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                discount=Money(Decimal(i["discount"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        ]
        return Sale(
            id=raw["id"],
            sale_number=raw["sale_number"],
            customer=CustomerSnapshot(**raw["customer"]),
            branch=BranchSnapshot(**raw["branch"]),
            sale_date=datetime.fromisoformat(raw["sale_date"]),
            items=items,
            total_amount=sum((i.total_amount for i in items), Money.zero()),
            is_cancelled=raw["is_cancelled"],
            cancelled_at=parse_datetime(raw.get("cancelled_at")),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=parse_datetime(raw.get("updated_at")),
        )


class JsonSaleSequenceRepository(SaleSequenceRepository):
    """Per-day counters stored as ``[{"day": "2024-05-01", "last": 3}, ...]``."""

    def __init__(self, document: JsonFile) -> None:
        self._document = document

    def reserve_next(self, day: date, floor: int = 0) -> int:
        key = day.isoformat()
        records = self._document.read()
        for i, raw in enumerate(records):
            if raw["day"] == key:
                value = max(raw["last"], floor) + 1
                records[i] = {"day": key, "last": value}
                break
        else:
            value = floor + 1
            records.append({"day": key, "last": value})
        self._document.write(records)
        return value
