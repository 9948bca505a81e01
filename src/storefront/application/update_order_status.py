"""Application service: Update Order Status use case (seller fulfillment).

Only status and the paid flag of a placed order ever change; the Order
aggregate decides which transitions are legal. Changes to one order are
serialized on its lock, so a terminal status is never overwritten.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.locking import KeyedLock
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.actor import Actor, Role
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


def parse_status(raw: str) -> OrderStatus:
    """Accept either the stored value ("Order Placed") or the name ("PLACED")."""
    for status in OrderStatus:
        if raw == status.value or raw.upper() == status.name:
            return status
    choices = ", ".join(s.value for s in OrderStatus)
    raise ValidationError(f"Unknown order status '{raw}'. Expected one of: {choices}")


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork, order_locks: KeyedLock) -> None:
        self._uow = uow
        self._order_locks = order_locks

    def handle(self, actor: Actor, order_id: str, status: str) -> OrderDTO:
        actor.require_role(Role.SELLER)
        new_status = parse_status(status)

        with self._order_locks.hold(order_id), self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")
            previous = order.status
            order.transition_to(new_status)
            self._uow.orders.save(order)
            self._uow.commit()

        logger.info(
            "order_status_changed",
            order_id=order.id,
            seller_id=actor.id,
            previous=previous.value,
            status=order.status.value,
            is_paid=order.is_paid,
        )
        return order_to_dto(order)
