"""Abstract repositories for the Sale aggregate and its number sequence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from sms.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def add(self, sale: Sale) -> None:
        """Persist a new sale.

        Raises DuplicateSaleNumberError if another sale already holds
        ``sale.sale_number``.
        """

    @abstractmethod
    def get_by_id(self, sale_id: str) -> Sale | None:
        """Return a sale with all its items, or None if not found."""

    @abstractmethod
    def get_by_sale_number(self, sale_number: str) -> Sale | None:
        """Return a sale by its human-readable number, or None."""

    @abstractmethod
    def list_all(self) -> list[Sale]:
        """Return every sale, newest first."""

    @abstractmethod
    def count_in_range(self, start: datetime, end: datetime) -> int:
        """Count sales whose ``sale_date`` is in ``[start, end)``."""

    @abstractmethod
    def update(self, sale: Sale) -> None:
        """Persist changes to an existing sale."""


class SaleSequenceRepository(ABC):

    @abstractmethod
    def reserve_next(self, day: date, floor: int = 0) -> int:
        """Atomically reserve and return the next sequence number for ``day``.

        The returned value is ``max(last reserved, floor) + 1`` and is
        recorded before returning, so no two callers sharing the same
        store ever get the same value.
        """
