"""Abstract unit of work.

Groups the repositories that one use case touches and commits their writes
together. Leaving the ``with`` block without ``commit()`` discards every
buffered write, so a failed validation or a crash mid-way never leaves half
an operation behind.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.address_repository import AddressRepository
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):
    products: ProductRepository
    carts: CartRepository
    addresses: AddressRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, *args: object) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Apply every buffered write atomically."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard buffered writes; a no-op after ``commit()``."""
