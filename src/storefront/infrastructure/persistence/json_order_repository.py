"""JSON-document-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from storefront.domain.model.address import AddressSnapshot
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentType,
)
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.document_store import DocumentSession

COLLECTION = "orders"


class JsonOrderRepository(OrderRepository):

    def __init__(self, session: DocumentSession) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._session.get(COLLECTION, order_id)
        return self._to_domain(raw) if raw is not None else None

    def list_for_buyer(self, buyer_id: str) -> list[Order]:
        return [o for o in self.list_all() if o.buyer_id == buyer_id]

    def list_all(self) -> list[Order]:
        # Documents come back in insertion order; reversing first keeps
        # equal timestamps newest-first through the stable sort.
        orders = [self._to_domain(raw) for raw in reversed(self._session.all(COLLECTION))]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def find_by_idempotency_key(self, buyer_id: str, key: str) -> Order | None:
        for raw in self._session.all(COLLECTION):
            if raw["buyer_id"] == buyer_id and raw.get("idempotency_key") == key:
                return self._to_domain(raw)
        return None

    def references_address(self, address_id: str) -> bool:
        return any(
            raw.get("address_id") == address_id
            for raw in self._session.all(COLLECTION)
        )

    def save(self, order: Order) -> None:
        self._session.put(COLLECTION, order.id, self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "buyer_id": order.buyer_id,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
            "amount": str(order.amount.amount),
            "currency": order.amount.currency,
            "address_id": order.address_id,
            "address": order.address.to_dict(),
            "payment_type": order.payment_type.value,
            "status": order.status.value,
            "is_paid": order.is_paid,
            "created_at": order.created_at.isoformat(),
            "idempotency_key": order.idempotency_key,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            buyer_id=raw["buyer_id"],
            items=items,
            amount=Money(Decimal(raw["amount"]), currency),
            address_id=raw["address_id"],
            address=AddressSnapshot(**raw["address"]),
            payment_type=PaymentType(raw.get("payment_type", PaymentType.COD.value)),
            status=OrderStatus(raw["status"]),
            is_paid=raw.get("is_paid", False),
            created_at=datetime.fromisoformat(raw["created_at"]),
            idempotency_key=raw.get("idempotency_key"),
        )
