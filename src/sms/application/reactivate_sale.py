"""Application service: Reactivate Sale use case.

Undoes a cancellation. Cancelling already returned the stock, so
reactivating has to take it out again; otherwise a second cancellation
would restock the same units twice. Stock is withdrawn all-or-nothing
(see ``StockLedgerService.withdraw_for_sale``) and the sale is only
reactivated if every product can cover its line.
"""

from __future__ import annotations

import logging

from sms.application import mappers
from sms.application.dto import SaleDTO
from sms.application.publishing import publish_quietly
from sms.application.unit_of_work import UnitOfWork
from sms.domain.events import EventPublisher
from sms.domain.exceptions import EntityNotFoundError, ValidationError
from sms.domain.service.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)


class ReactivateSaleHandler:

    def __init__(self, uow: UnitOfWork, publisher: EventPublisher) -> None:
        self._uow = uow
        self._publisher = publisher

    def handle(self, sale_id: str) -> SaleDTO:
        if not sale_id or not str(sale_id).strip():
            raise ValidationError("Sale ID is required")

        with self._uow:
            sale = self._uow.sales.get_by_id(sale_id)
            if sale is None:
                raise EntityNotFoundError(f"Sale with ID '{sale_id}' not found")

            # Raises SaleNotCancelledError before any stock moves.
            sale.reactivate()
            StockLedgerService(self._uow.products).withdraw_for_sale(sale)
            self._uow.sales.update(sale)
            self._uow.commit()

        logger.info("Sale %s reactivated", sale.sale_number)
        publish_quietly(self._publisher, mappers.sale_reactivated_event(sale))
        return mappers.sale_to_dto(sale)
