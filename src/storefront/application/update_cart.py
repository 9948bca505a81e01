"""Application service: Update Cart use case.

The request carries the buyer's whole desired cart. It replaces the stored
cart; it is never merged into it.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.locking import KeyedLock
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.actor import Actor, Role
from storefront.domain.model.cart import Cart
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateCartHandler:

    def __init__(self, uow: UnitOfWork, cart_locks: KeyedLock) -> None:
        self._uow = uow
        self._cart_locks = cart_locks

    def handle(self, actor: Actor, items: dict[str, int]) -> CartDTO:
        """Replace the buyer's cart with ``items``.

        Entries with a quantity <= 0 are dropped. Every remaining product
        must exist in the catalog; stock is not checked here.
        """
        actor.require_role(Role.BUYER)
        wanted = Cart.normalize(items)

        with self._cart_locks.hold(actor.id), self._uow:
            for product_id in wanted:
                if self._uow.products.get_by_id(product_id) is None:
                    raise EntityNotFoundError(f"Product '{product_id}' not found")

            cart = self._uow.carts.get_for_buyer(actor.id) or Cart.empty(actor.id)
            cart.replace(wanted)
            self._uow.carts.save(cart)
            self._uow.commit()

        logger.info("cart_updated", buyer_id=actor.id, lines=len(cart.items))
        return cart_to_dto(cart)
