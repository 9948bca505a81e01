"""Application services: order listing queries."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.model.actor import Actor, Role
from storefront.domain.repository.unit_of_work import UnitOfWork


class GetUserOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor) -> list[OrderDTO]:
        """The calling buyer's orders, newest first."""
        actor.require_role(Role.BUYER)
        with self._uow:
            orders = self._uow.orders.list_for_buyer(actor.id)
        return [order_to_dto(o) for o in orders]


class GetAllOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor) -> list[OrderDTO]:
        """Every order across all buyers, newest first (seller triage)."""
        actor.require_role(Role.SELLER)
        with self._uow:
            orders = self._uow.orders.list_all()
        return [order_to_dto(o) for o in orders]
