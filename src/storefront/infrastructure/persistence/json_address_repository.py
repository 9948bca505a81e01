"""JSON-document-backed implementation of AddressRepository."""

from __future__ import annotations

import uuid

from storefront.domain.model.address import Address
from storefront.domain.repository.address_repository import AddressRepository
from storefront.infrastructure.persistence.document_store import DocumentSession

COLLECTION = "addresses"


class JsonAddressRepository(AddressRepository):

    def __init__(self, session: DocumentSession) -> None:
        self._session = session

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def get_by_id(self, address_id: str) -> Address | None:
        raw = self._session.get(COLLECTION, address_id)
        return Address(**raw) if raw is not None else None

    def list_for_buyer(self, buyer_id: str) -> list[Address]:
        return [
            Address(**raw)
            for raw in self._session.all(COLLECTION)
            if raw["buyer_id"] == buyer_id
        ]

    def save(self, address: Address) -> None:
        self._session.put(
            COLLECTION,
            address.id,
            {
                "id": address.id,
                "buyer_id": address.buyer_id,
                "recipient": address.recipient,
                "street": address.street,
                "city": address.city,
                "state": address.state,
                "postal_code": address.postal_code,
                "phone": address.phone,
                "country": address.country,
            },
        )

    def delete(self, address_id: str) -> None:
        self._session.delete(COLLECTION, address_id)
