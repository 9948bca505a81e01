"""Application service: Delete Address use case.

An address that any order was placed against stays in the registry.
The order keeps its own snapshot either way, but removing the entry would
orphan the ``address_id`` the order records. The delete takes the buyer
lock that order placement holds, so it cannot slip in between placement
reading the address and committing the order.
"""

from __future__ import annotations

import structlog

from storefront.application.locking import KeyedLock
from storefront.domain.exceptions import ConflictError, EntityNotFoundError
from storefront.domain.model.actor import Actor, Role
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeleteAddressHandler:

    def __init__(self, uow: UnitOfWork, cart_locks: KeyedLock) -> None:
        self._uow = uow
        self._cart_locks = cart_locks

    def handle(self, actor: Actor, address_id: str) -> None:
        actor.require_role(Role.BUYER)
        with self._cart_locks.hold(actor.id), self._uow:
            address = self._uow.addresses.get_by_id(address_id)
            if address is None or not address.belongs_to(actor.id):
                raise EntityNotFoundError(f"Address '{address_id}' not found")
            if self._uow.orders.references_address(address_id):
                raise ConflictError(
                    f"Address '{address_id}' is used by an existing order"
                )
            self._uow.addresses.delete(address_id)
            self._uow.commit()

        logger.info("address_deleted", buyer_id=actor.id, address_id=address_id)
