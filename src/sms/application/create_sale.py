"""Application service: Create Sale use case.

Resolves the customer, branch and products, assembles the Sale
aggregate, takes stock for every line and persists the sale, all inside
one unit of work. Any failure leaves stock and sales exactly as they
were. The ``SaleCreated`` event goes out only after the commit.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from datetime import datetime, timezone

from sms.application import mappers
from sms.application.dto import SaleDTO, SaleItemSpec
from sms.application.publishing import publish_quietly
from sms.application.unit_of_work import UnitOfWork
from sms.domain.events import EventPublisher
from sms.domain.exceptions import (
    DuplicateProductError,
    EntityNotFoundError,
    InactiveEntityError,
    ValidationError,
)
from sms.domain.model.party import Branch, Customer
from sms.domain.model.sale import Sale, SaleItem
from sms.domain.service.sale_number_generator import SaleNumberGenerator
from sms.domain.service.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)


class CreateSaleHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        publisher: EventPublisher,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._uow = uow
        self._publisher = publisher
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def handle(
        self,
        customer_id: str,
        branch_id: str,
        item_specs: list[SaleItemSpec],
    ) -> SaleDTO:
        """Create a new sale.

        Steps:
        1. Validate the request shape and reject duplicate products.
        2. Resolve customer and branch (must exist and be active).
        3. Reserve a sale number and start an empty sale.
        4. For each line: resolve product, check stock, price the item,
           add it, decrement stock.
        5. Persist, commit, publish.
        """
        self._validate(customer_id, branch_id, item_specs)

        with self._uow:
            customer = self._get_customer(customer_id)
            branch = self._get_branch(branch_id)

            now = self._clock()
            numbers = SaleNumberGenerator(self._uow.sale_sequences, self._uow.sales)
            sale = Sale.create(
                sale_number=numbers.next_number(now),
                customer=customer.snapshot(),
                branch=branch.snapshot(),
                now=now,
            )

            ledger = StockLedgerService(self._uow.products)
            for spec in item_specs:
                product = ledger.get_sellable_product(spec.product_id)
                ledger.ensure_available(product, spec.quantity)
                sale.add_item(
                    SaleItem.create(
                        product_id=product.id,
                        product_name=product.name,
                        product_sku=product.sku,
                        quantity=spec.quantity,
                        unit_price=product.price,  # <-- price snapshot
                    )
                )
                ledger.withdraw(product, spec.quantity)

            self._uow.sales.add(sale)
            self._uow.commit()

        logger.info(
            "Sale %s created for customer %s at branch %s: %d item(s), total %s",
            sale.sale_number,
            sale.customer.id,
            sale.branch.code,
            sale.item_count,
            sale.total_amount,
        )
        publish_quietly(self._publisher, mappers.sale_created_event(sale))
        return mappers.sale_to_dto(sale)

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _validate(customer_id: str, branch_id: str, item_specs: list[SaleItemSpec]) -> None:
        if not customer_id or not str(customer_id).strip():
            raise ValidationError("Customer ID is required")
        if not branch_id or not str(branch_id).strip():
            raise ValidationError("Branch ID is required")
        if not item_specs:
            raise ValidationError("Sale must contain at least one item")

        for spec in item_specs:
            if not spec.product_id or not str(spec.product_id).strip():
                raise ValidationError("Product ID is required")
            if not isinstance(spec.quantity, int) or isinstance(spec.quantity, bool):
                raise ValidationError(
                    f"Quantity for product '{spec.product_id}' must be an integer"
                )

        counts = Counter(spec.product_id for spec in item_specs)
        duplicates = sorted(pid for pid, n in counts.items() if n > 1)
        if duplicates:
            raise DuplicateProductError(
                f"Duplicate products found in sale: {', '.join(duplicates)}. "
                f"Each product may appear only once; use the quantity instead."
            )

    # --- Lookups --------------------------------------------------------------

    def _get_customer(self, customer_id: str) -> Customer:
        customer = self._uow.customers.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer with ID '{customer_id}' not found")
        if not customer.is_active:
            raise InactiveEntityError(f"Customer {customer.name} is not active")
        return customer

    def _get_branch(self, branch_id: str) -> Branch:
        branch = self._uow.branches.get_by_id(branch_id)
        if branch is None:
            raise EntityNotFoundError(f"Branch with ID '{branch_id}' not found")
        if not branch.is_active:
            raise InactiveEntityError(f"Branch {branch.name} is not active")
        return branch
