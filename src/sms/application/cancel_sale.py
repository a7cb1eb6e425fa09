"""Application service: Cancel Sale use case.

Returns every item's quantity to stock and marks the sale cancelled, in
one unit of work. The sale itself is kept as a historical record.

Items whose product has since been removed from the catalog cannot be
restocked; they are skipped, logged, and listed in the result and in the
``SaleCancelled`` event.
"""

from __future__ import annotations

import logging

from sms.application import mappers
from sms.application.dto import CancelSaleDTO
from sms.application.publishing import publish_quietly
from sms.application.unit_of_work import UnitOfWork
from sms.domain.events import EventPublisher
from sms.domain.exceptions import (
    EntityNotFoundError,
    SaleAlreadyCancelledError,
    ValidationError,
)
from sms.domain.service.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)


class CancelSaleHandler:

    def __init__(self, uow: UnitOfWork, publisher: EventPublisher) -> None:
        self._uow = uow
        self._publisher = publisher

    def handle(self, sale_id: str) -> CancelSaleDTO:
        if not sale_id or not str(sale_id).strip():
            raise ValidationError("Sale ID is required")

        with self._uow:
            sale = self._uow.sales.get_by_id(sale_id)
            if sale is None:
                raise EntityNotFoundError(f"Sale with ID '{sale_id}' not found")
            if sale.is_cancelled:
                raise SaleAlreadyCancelledError(
                    f"Sale {sale.sale_number} is already cancelled"
                )

            skipped = StockLedgerService(self._uow.products).restore_for_sale(sale)
            sale.cancel()
            self._uow.sales.update(sale)
            self._uow.commit()

        logger.info(
            "Sale %s cancelled; %d item(s) restocked, %d skipped",
            sale.sale_number,
            sale.item_count - len(skipped),
            len(skipped),
        )
        publish_quietly(self._publisher, mappers.sale_cancelled_event(sale, skipped))
        return mappers.sale_to_cancel_dto(sale, skipped)
