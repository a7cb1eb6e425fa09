"""Abstract repositories for customers and branches."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sms.domain.model.party import Branch, Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by its ID, or None if not found."""

    @abstractmethod
    def get_by_email(self, email: str) -> Customer | None:
        """Return a customer by e-mail (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every customer."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new or updated customer."""


class BranchRepository(ABC):

    @abstractmethod
    def get_by_id(self, branch_id: str) -> Branch | None:
        """Return a branch by its ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Branch | None:
        """Return a branch by code (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Branch]:
        """Return every branch."""

    @abstractmethod
    def save(self, branch: Branch) -> None:
        """Persist a new or updated branch."""
