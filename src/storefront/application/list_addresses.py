"""Application service: List Addresses use case (query)."""

from __future__ import annotations

from storefront.application.dto import AddressDTO, address_to_dto
from storefront.domain.model.actor import Actor, Role
from storefront.domain.repository.unit_of_work import UnitOfWork


class ListAddressesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: Actor) -> list[AddressDTO]:
        actor.require_role(Role.BUYER)
        with self._uow:
            addresses = self._uow.addresses.list_for_buyer(actor.id)
        return [address_to_dto(a) for a in addresses]
