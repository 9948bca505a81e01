"""Abstract repository for Address aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.address import Address


class AddressRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique address ID."""

    @abstractmethod
    def get_by_id(self, address_id: str) -> Address | None:
        """Return an address by its ID, or None if not found."""

    @abstractmethod
    def list_for_buyer(self, buyer_id: str) -> list[Address]:
        """Return the buyer's addresses in creation order."""

    @abstractmethod
    def save(self, address: Address) -> None:
        """Persist a new or updated address."""

    @abstractmethod
    def delete(self, address_id: str) -> None:
        """Remove an address from the registry."""
