"""Unit of work over the JSON document store.

Each ``with`` block opens a fresh DocumentSession; the repositories share
it, so ``commit()`` writes everything they saved in one file swap.
"""

from __future__ import annotations

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.document_store import (
    DocumentSession,
    DocumentStore,
)
from storefront.infrastructure.persistence.json_address_repository import (
    JsonAddressRepository,
)
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self._open(store.session())

    def __enter__(self) -> JsonUnitOfWork:
        self._open(self._store.session())
        return self

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.discard()

    def _open(self, session: DocumentSession) -> None:
        self._session = session
        self.products = JsonProductRepository(session)
        self.carts = JsonCartRepository(session)
        self.addresses = JsonAddressRepository(session)
        self.orders = JsonOrderRepository(session)
