"""Abstract repository for Order aggregate.

Orders are append-only: there is no delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_for_buyer(self, buyer_id: str) -> list[Order]:
        """Return the buyer's orders, newest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def find_by_idempotency_key(self, buyer_id: str, key: str) -> Order | None:
        """Return the buyer's order placed with ``key``, if any."""

    @abstractmethod
    def references_address(self, address_id: str) -> bool:
        """True if any order was placed against ``address_id``."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""
