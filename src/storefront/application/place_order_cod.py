"""Application service: Place Order (cash on delivery) use case.

Turns the buyer's cart into an order. This is the only use case that
writes two aggregates: the new Order and the emptied Cart. Both writes go
through one unit-of-work commit, under the same per-buyer lock that cart
updates take, so nobody can observe an order next to the cart it came from.

The flow is validate-then-mutate: every check runs before anything is
written, so a failure leaves the cart and the order list untouched.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.locking import KeyedLock
from storefront.domain.exceptions import (
    EmptyCartError,
    EntityNotFoundError,
    OutOfStockError,
)
from storefront.domain.model.actor import Actor, Role
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class PlaceOrderCODHandler:

    def __init__(self, uow: UnitOfWork, cart_locks: KeyedLock) -> None:
        self._uow = uow
        self._cart_locks = cart_locks

    def handle(
        self,
        actor: Actor,
        address_id: str,
        idempotency_key: str | None = None,
    ) -> OrderDTO:
        """Place a COD order from the buyer's cart.

        Steps:
        1. Replay: an order already placed with ``idempotency_key`` is
           returned as-is.
        2. Load the cart (EmptyCartError if it has no entries).
        3. Load the address (EntityNotFoundError unless the buyer owns it).
        4. Load each product (EntityNotFoundError / OutOfStockError) and
           capture its selling price.
        5. Save the order and the cleared cart, commit once.
        """
        actor.require_role(Role.BUYER)

        with self._cart_locks.hold(actor.id), self._uow:
            if idempotency_key:
                existing = self._uow.orders.find_by_idempotency_key(
                    actor.id, idempotency_key
                )
                if existing is not None:
                    logger.info(
                        "order_replayed", buyer_id=actor.id, order_id=existing.id
                    )
                    return order_to_dto(existing)

            cart = self._uow.carts.get_for_buyer(actor.id)
            if cart is None or cart.is_empty:
                raise EmptyCartError("Cart is empty")

            address = self._uow.addresses.get_by_id(address_id)
            if address is None or not address.belongs_to(actor.id):
                raise EntityNotFoundError(f"Address '{address_id}' not found")

            line_items: list[OrderLineItem] = []
            for product_id, qty in cart.items.items():
                product = self._uow.products.get_by_id(product_id)
                if product is None:
                    raise EntityNotFoundError(f"Product '{product_id}' not found")
                if not product.in_stock:
                    raise OutOfStockError(product.id, product.name)
                line_items.append(
                    OrderLineItem(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=Quantity(qty),
                        unit_price=product.selling_price,  # <-- price snapshot
                    )
                )

            order = Order.place_cod(
                id=self._uow.orders.next_id(),
                buyer_id=actor.id,
                items=line_items,
                address_id=address.id,
                address=address.snapshot(),
                idempotency_key=idempotency_key,
            )
            cart.clear()
            self._uow.orders.save(order)
            self._uow.carts.save(cart)
            self._uow.commit()

        logger.info(
            "order_placed",
            buyer_id=actor.id,
            order_id=order.id,
            amount=str(order.amount.amount),
            lines=len(order.items),
        )
        return order_to_dto(order)
