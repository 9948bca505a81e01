"""Abstract repository for Cart aggregate (one cart per buyer)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_for_buyer(self, buyer_id: str) -> Cart | None:
        """Return the buyer's cart, or None if it was never written."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart."""
