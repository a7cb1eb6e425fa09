"""Application services: sale queries."""

from __future__ import annotations

from sms.application import mappers
from sms.application.dto import SaleDTO
from sms.application.unit_of_work import UnitOfWork
from sms.domain.exceptions import EntityNotFoundError, ValidationError


class ShowSaleHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, sale_id: str | None = None, sale_number: str | None = None) -> SaleDTO:
        """Look a sale up by id or by sale number (exactly one of them)."""
        if bool(sale_id) == bool(sale_number):
            raise ValidationError("Provide either a sale ID or a sale number")

        with self._uow:
            if sale_id:
                sale = self._uow.sales.get_by_id(sale_id)
                label = f"ID '{sale_id}'"
            else:
                sale = self._uow.sales.get_by_sale_number(sale_number)
                label = f"number '{sale_number}'"

        if sale is None:
            raise EntityNotFoundError(f"Sale with {label} not found")
        return mappers.sale_to_dto(sale)


class ListSalesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        customer_id: str | None = None,
        branch_id: str | None = None,
        cancelled: bool | None = None,
    ) -> list[SaleDTO]:
        """Return sales newest first, optionally filtered."""
        with self._uow:
            sales = self._uow.sales.list_all()

        if customer_id is not None:
            sales = [s for s in sales if s.customer.id == customer_id]
        if branch_id is not None:
            sales = [s for s in sales if s.branch.id == branch_id]
        if cancelled is not None:
            sales = [s for s in sales if s.is_cancelled == cancelled]
        return [mappers.sale_to_dto(s) for s in sales]
