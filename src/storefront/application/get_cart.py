"""Application service: Get Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.model.actor import Actor, Role
from storefront.domain.model.cart import Cart
from storefront.domain.repository.unit_of_work import UnitOfWork


class GetCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor) -> CartDTO:
        """Return the buyer's cart; a buyer who never wrote one gets it empty."""
        actor.require_role(Role.BUYER)
        with self._uow:
            cart = self._uow.carts.get_for_buyer(actor.id)
        return cart_to_dto(cart or Cart.empty(actor.id))
