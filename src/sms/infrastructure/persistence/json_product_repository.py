"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sms.domain.model.product import Product
from sms.domain.model.value_objects import Money
from sms.domain.repository.product_repository import ProductRepository
from sms.infrastructure.persistence.json_store import JsonFile


def parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class JsonProductRepository(ProductRepository):

    def __init__(self, document: JsonFile) -> None:
        self._document = document

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._document.read():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, sku: str) -> Product | None:
        for raw in self._document.read():
            if raw["sku"].lower() == sku.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        products = [self._to_domain(raw) for raw in self._document.read()]
        return sorted(products, key=lambda p: p.name.lower())

    def save(self, product: Product) -> None:
        records = self._document.read()
        for i, raw in enumerate(records):
            if raw["id"] == product.id:
                records[i] = self._to_raw(product)
                break
        else:
            records.append(self._to_raw(product))
        self._document.write(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "sku": product.sku,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock_quantity": product.stock_quantity,
            "is_active": product.is_active,
            "description": product.description,
            "category": product.category,
            "created_at": format_datetime(product.created_at),
            "updated_at": format_datetime(product.updated_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            sku=raw["sku"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock_quantity=raw["stock_quantity"],
            is_active=raw.get("is_active", True),
            description=raw.get("description", ""),
            category=raw.get("category", ""),
            created_at=parse_datetime(raw["created_at"]),
            updated_at=parse_datetime(raw.get("updated_at")),
        )
