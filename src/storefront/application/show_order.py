"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.actor import Actor, Role
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor, order_id: str) -> OrderDTO:
        """Return one order.

        Sellers see any order; a buyer only sees their own, and someone
        else's order is reported as not found.
        """
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")
        if actor.role is Role.BUYER and order.buyer_id != actor.id:
            raise EntityNotFoundError(f"Order '{order_id}' not found")
        return order_to_dto(order)
