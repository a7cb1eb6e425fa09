"""Unit of Work: the transaction boundary for one use case.

A handler opens the unit of work with ``with uow:``, reads and writes
through the repositories it exposes, and calls ``commit()`` once the
whole operation succeeded. Leaving the block without committing (normally
because an exception escaped) rolls every staged write back, so partial
stock changes are never observable.

Implementations must also serialize concurrent units of work on the same
store for as long as the block is open.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sms.domain.repository.party_repository import BranchRepository, CustomerRepository
from sms.domain.repository.product_repository import ProductRepository
from sms.domain.repository.sale_repository import SaleRepository, SaleSequenceRepository


class UnitOfWork(ABC):
    products: ProductRepository
    customers: CustomerRepository
    branches: BranchRepository
    sales: SaleRepository
    sale_sequences: SaleSequenceRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, *args) -> None:
        # After a successful commit there is nothing left to roll back.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every staged write durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every write staged since the last commit."""
