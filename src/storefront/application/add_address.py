"""Application service: Add Address use case."""

from __future__ import annotations

import structlog

from storefront.application.dto import AddressDTO, address_to_dto
from storefront.domain.model.actor import Actor, Role
from storefront.domain.model.address import Address
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddAddressHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor, **fields: str | None) -> AddressDTO:
        actor.require_role(Role.BUYER)
        with self._uow:
            address = Address.create(
                id=self._uow.addresses.next_id(), buyer_id=actor.id, **fields
            )
            self._uow.addresses.save(address)
            self._uow.commit()

        logger.info("address_added", buyer_id=actor.id, address_id=address.id)
        return address_to_dto(address)
