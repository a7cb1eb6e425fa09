"""JSON-file-backed implementations of CustomerRepository and BranchRepository."""

from __future__ import annotations

from sms.domain.model.party import Branch, Customer
from sms.domain.repository.party_repository import BranchRepository, CustomerRepository
from sms.infrastructure.persistence.json_product_repository import (
    format_datetime,
    parse_datetime,
)
from sms.infrastructure.persistence.json_store import JsonFile


def _upsert(document: JsonFile, raw_entity: dict) -> None:
    records = document.read()
    for i, raw in enumerate(records):
        if raw["id"] == raw_entity["id"]:
            records[i] = raw_entity
            break
    else:
        records.append(raw_entity)
    document.write(records)


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, document: JsonFile) -> None:
        self._document = document

    def get_by_id(self, customer_id: str) -> Customer | None:
        for raw in self._document.read():
            if raw["id"] == customer_id:
                return self._to_domain(raw)
        return None

    def get_by_email(self, email: str) -> Customer | None:
        for raw in self._document.read():
            if raw["email"].lower() == email.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Customer]:
        return [self._to_domain(raw) for raw in self._document.read()]

    def save(self, customer: Customer) -> None:
        _upsert(
            self._document,
            {
                "id": customer.id,
                "name": customer.name,
                "email": customer.email,
                "phone": customer.phone,
                "is_active": customer.is_active,
                "created_at": format_datetime(customer.created_at),
                "updated_at": format_datetime(customer.updated_at),
            },
        )

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            name=raw["name"],
            email=raw["email"],
            phone=raw.get("phone", ""),
            is_active=raw.get("is_active", True),
            created_at=parse_datetime(raw["created_at"]),
            updated_at=parse_datetime(raw.get("updated_at")),
        )


class JsonBranchRepository(BranchRepository):

    def __init__(self, document: JsonFile) -> None:
        self._document = document

    def get_by_id(self, branch_id: str) -> Branch | None:
        for raw in self._document.read():
            if raw["id"] == branch_id:
                return self._to_domain(raw)
        return None

    def get_by_code(self, code: str) -> Branch | None:
        for raw in self._document.read():
            if raw["code"].lower() == code.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Branch]:
        return [self._to_domain(raw) for raw in self._document.read()]

    def save(self, branch: Branch) -> None:
        _upsert(
            self._document,
            {
                "id": branch.id,
                "name": branch.name,
                "code": branch.code,
                "city": branch.city,
                "is_active": branch.is_active,
                "created_at": format_datetime(branch.created_at),
                "updated_at": format_datetime(branch.updated_at),
            },
        )

    @staticmethod
    def _to_domain(raw: dict) -> Branch:
        return Branch(
            id=raw["id"],
            name=raw["name"],
            code=raw["code"],
            city=raw.get("city", ""),
            is_active=raw.get("is_active", True),
            created_at=parse_datetime(raw["created_at"]),
            updated_at=parse_datetime(raw.get("updated_at")),
        )
