"""Application services: Add Customer / Add Branch use cases."""

from __future__ import annotations

from uuid import uuid4

from sms.application.unit_of_work import UnitOfWork
from sms.domain.exceptions import ValidationError
from sms.domain.model.party import Branch, Customer


class AddCustomerHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, email: str, phone: str = "") -> Customer:
        customer = Customer.create(uuid4().hex, name=name, email=email, phone=phone)

        with self._uow:
            if self._uow.customers.get_by_email(customer.email) is not None:
                raise ValidationError(f"Customer with email {customer.email} already exists")
            self._uow.customers.save(customer)
            self._uow.commit()

        return customer


class AddBranchHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, code: str, city: str = "") -> Branch:
        branch = Branch.create(uuid4().hex, name=name, code=code, city=city)

        with self._uow:
            if self._uow.branches.get_by_code(branch.code) is not None:
                raise ValidationError(f"Branch with code {branch.code} already exists")
            self._uow.branches.save(branch)
            self._uow.commit()

        return branch
