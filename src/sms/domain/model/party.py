"""Customer and Branch, the reference data a sale points at.

Both are plain mutable dataclasses. A sale never holds on to them; it
keeps a snapshot (see ``CustomerSnapshot`` / ``BranchSnapshot``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sms.domain.exceptions import ValidationError
from sms.domain.model.value_objects import BranchSnapshot, CustomerSnapshot

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Customer:

    id: str
    name: str
    email: str
    phone: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None

    def snapshot(self) -> CustomerSnapshot:
        return CustomerSnapshot(id=self.id, name=self.name, email=self.email)

    def activate(self) -> None:
        self.is_active = True
        self.updated_at = _utcnow()

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = _utcnow()

    @staticmethod
    def create(customer_id: str, name: str, email: str, phone: str = "") -> Customer:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        phone = (phone or "").strip()
        if not 3 <= len(name) <= 200:
            raise ValidationError("Customer name must be between 3 and 200 characters")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email address: {email!r}")
        if phone and not PHONE_PATTERN.match(phone):
            raise ValidationError("Phone must be in valid international format")
        return Customer(id=customer_id, name=name, email=email, phone=phone)


@dataclass
class Branch:

    id: str
    name: str
    code: str
    city: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None

    def snapshot(self) -> BranchSnapshot:
        return BranchSnapshot(id=self.id, name=self.name, code=self.code)

    def activate(self) -> None:
        self.is_active = True
        self.updated_at = _utcnow()

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = _utcnow()

    @staticmethod
    def create(branch_id: str, name: str, code: str, city: str = "") -> Branch:
        name = (name or "").strip()
        code = (code or "").strip().upper()
        if not 3 <= len(name) <= 200:
            raise ValidationError("Branch name must be between 3 and 200 characters")
        if not 2 <= len(code) <= 50:
            raise ValidationError("Branch code must be between 2 and 50 characters")
        if len(city) > 100:
            raise ValidationError("City cannot exceed 100 characters")
        return Branch(id=branch_id, name=name, code=code, city=city.strip())
