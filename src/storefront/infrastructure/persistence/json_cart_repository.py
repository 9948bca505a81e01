"""JSON-document-backed implementation of CartRepository.

Carts are keyed by buyer id: a buyer has at most one cart document.
"""

from __future__ import annotations

from datetime import datetime

from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.document_store import DocumentSession

COLLECTION = "carts"


class JsonCartRepository(CartRepository):

    def __init__(self, session: DocumentSession) -> None:
        self._session = session

    def get_for_buyer(self, buyer_id: str) -> Cart | None:
        raw = self._session.get(COLLECTION, buyer_id)
        return self._to_domain(raw) if raw is not None else None

    def save(self, cart: Cart) -> None:
        self._session.put(COLLECTION, cart.buyer_id, self._to_raw(cart))

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "buyer_id": cart.buyer_id,
            "items": dict(cart.items),
            "updated_at": cart.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            buyer_id=raw["buyer_id"],
            items={pid: int(qty) for pid, qty in raw.get("items", {}).items()},
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
